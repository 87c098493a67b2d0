"""Provider description models.

Capabilities, display metadata and the opaque auth payload that is
handed through to provider calls.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from contentbridge.models.enums import ContentFormat


class ProviderModel(BaseModel):
    """Base model for provider metadata."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ProviderCapabilities(ProviderModel):
    """Which representations a provider can produce natively.

    ``browse`` and ``media_licensing`` describe other provider features and
    play no part in format resolution.
    """

    browse: bool = False
    presentations: bool = False
    playlist: bool = False
    instructions: bool = False
    expanded_instructions: bool = False
    media_licensing: bool = False

    def supports(self, fmt: ContentFormat) -> bool:
        """Check whether the provider declares native support for a format."""
        match fmt:
            case ContentFormat.PLAYLIST:
                return self.playlist
            case ContentFormat.PRESENTATIONS:
                return self.presentations
            case ContentFormat.INSTRUCTIONS:
                return self.instructions
            case ContentFormat.EXPANDED_INSTRUCTIONS:
                return self.expanded_instructions

    @property
    def formats(self) -> list[ContentFormat]:
        """Natively supported formats, in declaration order."""
        return [fmt for fmt in ContentFormat if self.supports(fmt)]


class AuthData(BaseModel):
    """OAuth token data for an authenticated provider.

    Field names follow the OAuth token response. The resolver never
    inspects this; it is passed to provider calls unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    access_token: str
    refresh_token: str | None = None
    token_type: str = "Bearer"
    created_at: int | None = None
    expires_in: int | None = None
    scope: str | None = None


class ProviderLogos(ProviderModel):
    """Logo URLs for light and dark backgrounds."""

    light: str = ""
    dark: str = ""


class ProviderInfo(ProviderModel):
    """Information about a content provider for listings."""

    id: str
    name: str
    logos: ProviderLogos = Field(default_factory=ProviderLogos)
    implemented: bool = True
    requires_auth: bool = False
    capabilities: ProviderCapabilities = Field(default_factory=ProviderCapabilities)
