"""Provider seam for the format resolver.

A provider is described by a capability record and up to four optional
async fetch operations, one per format. The resolver branches on the
capability record; it never inspects the provider's runtime type.

Fetch operations return None (or an empty playlist) when a format is not
available for a folder. Anything they raise is a transport fault and
reaches the caller unchanged.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from contentbridge.models.content import ContentFile, ContentFolder, Instructions, Plan
from contentbridge.models.enums import ContentFormat
from contentbridge.models.provider import (
    AuthData,
    ProviderCapabilities,
    ProviderInfo,
    ProviderLogos,
)

logger = logging.getLogger(__name__)

PlaylistFetcher = Callable[
    [ContentFolder, AuthData | None], Awaitable[list[ContentFile] | None]
]
PresentationsFetcher = Callable[[ContentFolder, AuthData | None], Awaitable[Plan | None]]
InstructionsFetcher = Callable[
    [ContentFolder, AuthData | None], Awaitable[Instructions | None]
]
Fetcher = Callable[[ContentFolder, AuthData | None], Awaitable[Any]]

_FETCH_METHODS: dict[ContentFormat, str] = {
    ContentFormat.PLAYLIST: "fetch_playlist",
    ContentFormat.PRESENTATIONS: "fetch_presentations",
    ContentFormat.INSTRUCTIONS: "fetch_instructions",
    ContentFormat.EXPANDED_INSTRUCTIONS: "fetch_expanded_instructions",
}


class ContentClient(Protocol):
    """Protocol for provider client objects.

    Clients describe themselves with ``id``, ``name`` and ``capabilities``
    and may define any of ``fetch_playlist``, ``fetch_presentations``,
    ``fetch_instructions`` and ``fetch_expanded_instructions`` as coroutine
    methods taking ``(folder, auth)``. Bind one with
    ContentProvider.from_client().
    """

    @property
    def id(self) -> str:
        """Provider ID."""
        ...

    @property
    def name(self) -> str:
        """Display name."""
        ...

    @property
    def capabilities(self) -> ProviderCapabilities:
        """Natively supported formats."""
        ...


@dataclass(frozen=True)
class ContentProvider:
    """A provider as seen by the resolver.

    Attributes:
        id: Unique provider ID.
        name: Display name.
        capabilities: Formats the provider produces natively.
        fetch_playlist: Fetches a flat file list for a folder.
        fetch_presentations: Fetches a plan for a folder.
        fetch_instructions: Fetches plain instructions for a folder.
        fetch_expanded_instructions: Fetches instructions with file leaves.
        requires_auth: Whether fetches need auth data.
        logos: Logo URLs for listings.
    """

    id: str
    name: str
    capabilities: ProviderCapabilities
    fetch_playlist: PlaylistFetcher | None = None
    fetch_presentations: PresentationsFetcher | None = None
    fetch_instructions: InstructionsFetcher | None = None
    fetch_expanded_instructions: InstructionsFetcher | None = None
    requires_auth: bool = False
    logos: ProviderLogos = field(default_factory=ProviderLogos)

    @classmethod
    def from_client(
        cls,
        client: ContentClient,
        *,
        capabilities: ProviderCapabilities | None = None,
        requires_auth: bool | None = None,
    ) -> "ContentProvider":
        """Bind a client object's fetch methods into a provider record.

        Args:
            client: Object following the ContentClient protocol.
            capabilities: Override for the client's declared capabilities.
            requires_auth: Override for the client's ``requires_auth``
                attribute (False when absent).

        Returns:
            A provider whose fetchers are the client's bound methods.
        """
        fetchers = {
            attr: getattr(client, attr, None) for attr in _FETCH_METHODS.values()
        }
        caps = capabilities or client.capabilities
        for fmt in caps.formats:
            if fetchers[_FETCH_METHODS[fmt]] is None:
                logger.warning(
                    "Provider %s declares %s but has no %s method",
                    client.id,
                    fmt.label,
                    _FETCH_METHODS[fmt],
                )
        if requires_auth is None:
            requires_auth = bool(getattr(client, "requires_auth", False))
        return cls(
            id=client.id,
            name=client.name,
            capabilities=caps,
            requires_auth=requires_auth,
            logos=getattr(client, "logos", None) or ProviderLogos(),
            **fetchers,
        )

    def fetcher(self, fmt: ContentFormat) -> Fetcher | None:
        """Fetch operation for a format, if declared and available."""
        if not self.capabilities.supports(fmt):
            return None
        return getattr(self, _FETCH_METHODS[fmt])

    @property
    def info(self) -> ProviderInfo:
        """Listing information for this provider."""
        return ProviderInfo(
            id=self.id,
            name=self.name,
            logos=self.logos,
            implemented=bool(self.capabilities.formats),
            requires_auth=self.requires_auth,
            capabilities=self.capabilities,
        )
