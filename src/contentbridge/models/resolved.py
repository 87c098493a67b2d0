"""Resolver result models."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from contentbridge.models.enums import ContentFormat

T = TypeVar("T")


class FormatMeta(BaseModel):
    """How a resolved result was obtained.

    Attributes:
        is_native: The provider produced the requested format directly.
        source_format: Format the result was converted from (None if native
            or if nothing was found).
        is_lossy: The conversion dropped structure or file detail.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    is_native: bool = False
    source_format: ContentFormat | None = None
    is_lossy: bool = False

    @property
    def label(self) -> str:
        """Short description for display."""
        if self.is_native:
            return "native"
        if self.source_format is None:
            return "unavailable"
        kind = "lossy" if self.is_lossy else "lossless"
        return f"converted from {self.source_format.label} ({kind})"


class ResolvedFormat(BaseModel, Generic[T]):
    """A resolved representation together with its provenance.

    ``data`` is None when every candidate was exhausted.
    """

    model_config = ConfigDict(frozen=True)

    data: T | None = None
    meta: FormatMeta = FormatMeta()

    @property
    def found(self) -> bool:
        """True if any candidate produced data."""
        return self.data is not None
