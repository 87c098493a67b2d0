"""Format resolution service."""

import logging
from typing import Any

from contentbridge.config import ResolverConfig
from contentbridge.lib.converters import CONVERSIONS, ConversionContext
from contentbridge.lib.item_kinds import DEFAULT_ITEM_KINDS, ItemKindMap
from contentbridge.models.content import ContentFile, ContentFolder, Instructions, Plan
from contentbridge.models.enums import ContentFormat
from contentbridge.models.provider import AuthData
from contentbridge.models.resolved import FormatMeta, ResolvedFormat
from contentbridge.provider import ContentProvider
from contentbridge.utils.ids import IdFactory, generate_id

logger = logging.getLogger(__name__)

# Formats tried after the native one, in priority order
FALLBACK_ORDER: dict[ContentFormat, tuple[ContentFormat, ...]] = {
    ContentFormat.PLAYLIST: (
        ContentFormat.PRESENTATIONS,
        ContentFormat.EXPANDED_INSTRUCTIONS,
        ContentFormat.INSTRUCTIONS,
    ),
    ContentFormat.PRESENTATIONS: (
        ContentFormat.EXPANDED_INSTRUCTIONS,
        ContentFormat.INSTRUCTIONS,
        ContentFormat.PLAYLIST,
    ),
    ContentFormat.INSTRUCTIONS: (
        ContentFormat.EXPANDED_INSTRUCTIONS,
        ContentFormat.PRESENTATIONS,
        ContentFormat.PLAYLIST,
    ),
    ContentFormat.EXPANDED_INSTRUCTIONS: (
        ContentFormat.PRESENTATIONS,
        ContentFormat.INSTRUCTIONS,
        ContentFormat.PLAYLIST,
    ),
}

# Fallbacks refused when allow_lossy is False. Other lossy fallbacks are
# still tried and reported with is_lossy=True.
LOSSY_GATED: frozenset[tuple[ContentFormat, ContentFormat]] = frozenset(
    {
        (ContentFormat.INSTRUCTIONS, ContentFormat.PLAYLIST),
        (ContentFormat.PLAYLIST, ContentFormat.PRESENTATIONS),
        (ContentFormat.PLAYLIST, ContentFormat.INSTRUCTIONS),
        (ContentFormat.PLAYLIST, ContentFormat.EXPANDED_INSTRUCTIONS),
    }
)

_NOT_FOUND = FormatMeta(is_native=False, is_lossy=False)


def _has_content(data: Any) -> bool:
    """None and empty playlists both mean "not available for this folder"."""
    if data is None:
        return False
    if isinstance(data, list):
        return len(data) > 0
    return True


class FormatResolver:
    """Produces any of the four formats from whatever a provider offers.

    Resolution Order:
    =================
    1. The provider's native fetch for the requested format, if declared.
    2. Each fallback format from FALLBACK_ORDER the provider declares,
       converted to the requested format. Fallbacks in LOSSY_GATED are
       skipped when ``allow_lossy`` is False.
    3. Nothing found: ``data`` is None.

    Candidates are fetched one at a time, and the walk stops at the first
    one with content. Every provider call is made at most once per
    resolution. Provider exceptions are not caught.

    The resolver holds only immutable configuration, so one instance can
    serve concurrent requests as long as the provider can.
    """

    def __init__(
        self,
        provider: ContentProvider,
        config: ResolverConfig | None = None,
        *,
        id_factory: IdFactory | None = None,
        item_kinds: ItemKindMap | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            provider: Provider to fetch from.
            config: Resolver configuration. Uses defaults if not provided.
            id_factory: Supplies synthetic IDs during conversion.
            item_kinds: Item-type synonym table for this provider.
        """
        self._provider = provider
        self._config = config or ResolverConfig()
        self._id_factory = id_factory or generate_id
        self._item_kinds = item_kinds or DEFAULT_ITEM_KINDS

    @property
    def provider(self) -> ContentProvider:
        """The provider this resolver fetches from."""
        return self._provider

    @property
    def config(self) -> ResolverConfig:
        """Resolver configuration."""
        return self._config

    # ============================================================================
    # PUBLIC API
    # ============================================================================

    async def resolve(
        self,
        target: ContentFormat,
        folder: ContentFolder,
        auth: AuthData | None = None,
    ) -> ResolvedFormat[Any]:
        """Resolve a folder into the requested format.

        Args:
            target: Format to produce.
            folder: Folder handle, passed to provider calls unchanged.
            auth: Optional auth data, passed to provider calls unchanged.

        Returns:
            The data (None if every candidate was exhausted) and how it was
            obtained.
        """
        native = self._provider.fetcher(target)
        if native is not None:
            logger.debug("Fetching native %s for %s", target.label, folder.id)
            data = await native(folder, auth)
            if _has_content(data):
                return ResolvedFormat(
                    data=data, meta=FormatMeta(is_native=True, is_lossy=False)
                )
            logger.debug("No native %s for %s", target.label, folder.id)

        context = ConversionContext(
            id_factory=self._id_factory,
            item_kinds=self._item_kinds,
            folder=folder,
        )
        for source in FALLBACK_ORDER[target]:
            conversion = CONVERSIONS[(source, target)]
            if (source, target) in LOSSY_GATED and not self._config.allow_lossy:
                logger.debug(
                    "Skipping lossy %s -> %s", source.label, target.label
                )
                continue
            fetch = self._provider.fetcher(source)
            if fetch is None:
                continue

            logger.debug(
                "Fetching %s for %s to derive %s",
                source.label,
                folder.id,
                target.label,
            )
            data = await fetch(folder, auth)
            if not _has_content(data):
                continue

            return ResolvedFormat(
                data=conversion(data, context),
                meta=FormatMeta(
                    is_native=False,
                    source_format=source,
                    is_lossy=conversion.lossy,
                ),
            )

        logger.info(
            "No %s available for %s from %s",
            target.label,
            folder.id,
            self._provider.id,
        )
        return ResolvedFormat(data=None, meta=_NOT_FOUND)

    async def get_playlist_with_meta(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> ResolvedFormat[list[ContentFile]]:
        """Resolve a playlist with provenance."""
        return await self.resolve(ContentFormat.PLAYLIST, folder, auth)

    async def get_presentations_with_meta(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> ResolvedFormat[Plan]:
        """Resolve a plan with provenance."""
        return await self.resolve(ContentFormat.PRESENTATIONS, folder, auth)

    async def get_instructions_with_meta(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> ResolvedFormat[Instructions]:
        """Resolve plain instructions with provenance."""
        return await self.resolve(ContentFormat.INSTRUCTIONS, folder, auth)

    async def get_expanded_instructions_with_meta(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> ResolvedFormat[Instructions]:
        """Resolve expanded instructions with provenance."""
        return await self.resolve(ContentFormat.EXPANDED_INSTRUCTIONS, folder, auth)

    async def get_playlist(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> list[ContentFile] | None:
        """Resolve a playlist, or None if no candidate produced one."""
        return (await self.get_playlist_with_meta(folder, auth)).data

    async def get_presentations(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Plan | None:
        """Resolve a plan, or None if no candidate produced one."""
        return (await self.get_presentations_with_meta(folder, auth)).data

    async def get_instructions(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Instructions | None:
        """Resolve plain instructions, or None if no candidate produced them."""
        return (await self.get_instructions_with_meta(folder, auth)).data

    async def get_expanded_instructions(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Instructions | None:
        """Resolve expanded instructions, or None if no candidate produced them."""
        return (await self.get_expanded_instructions_with_meta(folder, auth)).data
