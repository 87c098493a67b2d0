"""Content hierarchy models.

These are the four representations a provider can expose (playlist,
presentations, instructions, expanded instructions) plus the folder
handle used to browse a provider. All models are immutable and
serialize to camelCase JSON (``mediaType``, ``embedUrl``, ``allFiles``).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from contentbridge.models.enums import ActionType, MediaType


class ContentModel(BaseModel):
    """Base model for the content hierarchy."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ContentFolder(ContentModel):
    """A navigable node in a provider's browsing tree.

    The resolver treats folders as opaque handles and passes them to
    provider calls unchanged.
    """

    type: Literal["folder"] = "folder"
    id: str
    title: str
    image: str | None = None
    path: str | None = None
    is_leaf: bool | None = None
    provider_data: dict[str, Any] | None = None


class ContentFile(ContentModel):
    """A playable media file (video or image)."""

    type: Literal["file"] = "file"
    id: str
    title: str
    media_type: MediaType
    url: str
    embed_url: str | None = None
    image: str | None = None
    seconds: int | float | None = None
    mux_playback_id: str | None = None
    media_id: str | None = None
    pingback_url: str | None = None
    provider_data: dict[str, Any] | None = None


class PlanPresentation(ContentModel):
    """A presentation within a plan section (a song, video, or activity)."""

    id: str
    name: str
    action_type: ActionType = ActionType.OTHER
    files: list[ContentFile] = Field(default_factory=list)


class PlanSection(ContentModel):
    """A named, ordered group of presentations."""

    id: str
    name: str
    presentations: list[PlanPresentation] = Field(default_factory=list)


class Plan(ContentModel):
    """A complete plan: sections of presentations of files.

    ``all_files`` is the authoritative flat list of every file in the plan.
    When both it and the section tree carry files, they must agree.
    """

    id: str
    name: str
    description: str | None = None
    image: str | None = None
    sections: list[PlanSection] = Field(default_factory=list)
    all_files: list[ContentFile] = Field(default_factory=list)

    def iter_section_files(self) -> Iterator[ContentFile]:
        """Yield files reachable through sections, in traversal order."""
        for section in self.sections:
            for presentation in section.presentations:
                yield from presentation.files

    @model_validator(mode="after")
    def _all_files_match_sections(self) -> Plan:
        if not self.all_files:
            return self
        section_files = list(self.iter_section_files())
        if section_files and section_files != self.all_files:
            raise ValueError("allFiles does not match the files in sections")
        return self


class InstructionItem(ContentModel):
    """An item in an instruction tree.

    ``item_type`` is whatever string the provider uses; classification onto
    a closed set of kinds happens in ItemKindMap.
    """

    id: str | None = None
    item_type: str | None = None
    related_id: str | None = None
    label: str | None = None
    description: str | None = None
    seconds: int | float | None = None
    children: list[InstructionItem] | None = None
    embed_url: str | None = None

    @property
    def is_leaf(self) -> bool:
        """True if the item has no children."""
        return not self.children


class Instructions(ContentModel):
    """A run sheet: a name and a top-level list of instruction items."""

    name: str | None = Field(
        default=None, validation_alias=AliasChoices("name", "venueName")
    )
    items: list[InstructionItem] = Field(default_factory=list)


Playlist = list[ContentFile]
