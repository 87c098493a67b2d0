"""contentbridge - Resolve lesson and service-plan content across formats.

Content providers expose what they will show in one or more of four
representations: a flat playlist of files, a plan of sections and
presentations, plain instructions, or expanded instructions with file
leaves. This library converts between them and resolves any of the four
from whatever a provider natively offers, recording how each result was
obtained.

Examples:
    Resolve a playlist from a provider that only serves plans:
    ```python
    from contentbridge import ContentProvider, ProviderCapabilities, create_resolver

    provider = ContentProvider(
        id="lessons",
        name="Lessons",
        capabilities=ProviderCapabilities(presentations=True),
        fetch_presentations=client.fetch_plan,
    )
    resolver = create_resolver(provider)
    result = await resolver.get_playlist_with_meta(folder)
    print(result.meta.source_format)  # presentations
    ```

    Convert between formats directly:
    ```python
    from contentbridge import presentations_to_playlist

    files = presentations_to_playlist(plan)
    ```
"""

from contentbridge.config import DurationConfig, ResolverConfig
from contentbridge.exceptions import (
    ContentBridgeError,
    InvalidFormatError,
    ProviderDataError,
    ProviderNotFoundError,
    UnsupportedConversionError,
)
from contentbridge.lib.converters import (
    collapse_instructions,
    convert_format,
    expanded_instructions_to_playlist,
    expanded_instructions_to_presentations,
    instructions_to_playlist,
    instructions_to_presentations,
    playlist_to_expanded_instructions,
    playlist_to_instructions,
    playlist_to_presentations,
    presentations_to_expanded_instructions,
    presentations_to_instructions,
    presentations_to_playlist,
)
from contentbridge.lib.item_kinds import DEFAULT_ITEM_KINDS, ItemKindMap
from contentbridge.models import (
    ActionType,
    AuthData,
    ContentFile,
    ContentFolder,
    ContentFormat,
    FormatMeta,
    InstructionItem,
    Instructions,
    ItemKind,
    MediaType,
    Plan,
    PlanPresentation,
    PlanSection,
    ProviderCapabilities,
    ProviderInfo,
    ProviderLogos,
    ResolvedFormat,
)
from contentbridge.provider import ContentClient, ContentProvider
from contentbridge.registry import ProviderRegistry
from contentbridge.services import FormatResolver
from contentbridge.utils.ids import IdFactory, SequentialIdFactory


def create_resolver(
    provider: ContentProvider | ContentClient,
    config: ResolverConfig | None = None,
    *,
    id_factory: IdFactory | None = None,
    item_kinds: ItemKindMap | None = None,
) -> FormatResolver:
    """Create a format resolver for a provider.

    This is the recommended way to create a resolver for library usage.
    Client objects are bound into a provider record automatically.

    Args:
        provider: A ContentProvider record, or any object following the
            ContentClient protocol.
        config: Optional resolver configuration. Uses defaults if not provided.
        id_factory: Optional synthetic ID supplier (e.g. SequentialIdFactory
            for reproducible output).
        item_kinds: Optional item-type synonym table for this provider.

    Returns:
        A configured FormatResolver instance.

    Examples:
        Strict resolution (never returns lossy results):
        ```python
        resolver = create_resolver(provider, ResolverConfig(allow_lossy=False))
        ```

        Provider-specific item types:
        ```python
        kinds = DEFAULT_ITEM_KINDS.extend({"video": ItemKind.FILE})
        resolver = create_resolver(provider, item_kinds=kinds)
        ```
    """
    if not isinstance(provider, ContentProvider):
        provider = ContentProvider.from_client(provider)
    return FormatResolver(
        provider, config, id_factory=id_factory, item_kinds=item_kinds
    )


__all__ = [
    "DEFAULT_ITEM_KINDS",
    "ActionType",
    "AuthData",
    "ContentBridgeError",
    "ContentClient",
    "ContentFile",
    "ContentFolder",
    "ContentFormat",
    "ContentProvider",
    "DurationConfig",
    "FormatMeta",
    "FormatResolver",
    "IdFactory",
    "InstructionItem",
    "Instructions",
    "InvalidFormatError",
    "ItemKind",
    "ItemKindMap",
    "MediaType",
    "Plan",
    "PlanPresentation",
    "PlanSection",
    "ProviderCapabilities",
    "ProviderDataError",
    "ProviderInfo",
    "ProviderLogos",
    "ProviderNotFoundError",
    "ProviderRegistry",
    "ResolvedFormat",
    "ResolverConfig",
    "SequentialIdFactory",
    "UnsupportedConversionError",
    "collapse_instructions",
    "convert_format",
    "create_resolver",
    "expanded_instructions_to_playlist",
    "expanded_instructions_to_presentations",
    "instructions_to_playlist",
    "instructions_to_presentations",
    "playlist_to_expanded_instructions",
    "playlist_to_instructions",
    "playlist_to_presentations",
    "presentations_to_expanded_instructions",
    "presentations_to_instructions",
    "presentations_to_playlist",
]
