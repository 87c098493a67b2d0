"""Conversions between the four content formats.

Every converter is a pure function: it never raises, never mutates its
input, and builds new models for its output. The only non-determinism is
the synthetic ID supplied by ``id_factory`` when a source item has
neither an ``id`` nor a ``related_id``.

Fidelity of each edge is recorded once in CONVERSIONS:

    presentations         -> playlist               lossless
    presentations         -> expandedInstructions   lossless
    presentations         -> instructions           lossy (file leaves dropped)
    expandedInstructions  -> playlist               lossless
    expandedInstructions  -> presentations          lossless
    expandedInstructions  -> instructions           lossy (file leaves dropped)
    instructions          -> playlist               lossy
    instructions          -> presentations          lossy
    instructions          -> expandedInstructions   lossy (returned as-is)
    playlist              -> presentations          lossy (no structure)
    playlist              -> instructions           lossy (no structure)
    playlist              -> expandedInstructions   lossy (no structure)
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from contentbridge.exceptions import UnsupportedConversionError
from contentbridge.lib.item_kinds import (
    DEFAULT_ITEM_KINDS,
    ItemKindMap,
    item_type_for_action,
)
from contentbridge.models.content import (
    ContentFile,
    ContentFolder,
    InstructionItem,
    Instructions,
    Plan,
    PlanPresentation,
    PlanSection,
)
from contentbridge.models.enums import ActionType, ContentFormat
from contentbridge.utils.ids import IdFactory, generate_id
from contentbridge.utils.media import detect_media_type

MAIN_SECTION_ID = "main-section"

_UNTITLED = "Untitled"


def _resolve_id(item: InstructionItem, id_factory: IdFactory) -> str:
    """Item ID, then related entity ID, then a generated one."""
    return item.id or item.related_id or id_factory()


def _item_to_file(item: InstructionItem, id_factory: IdFactory) -> ContentFile:
    # Callers guarantee embed_url is set
    url = item.embed_url or ""
    return ContentFile(
        id=_resolve_id(item, id_factory),
        title=item.label or _UNTITLED,
        media_type=detect_media_type(url),
        url=url,
        embed_url=url,
        seconds=item.seconds,
    )


# ============================================================================
# FROM PRESENTATIONS
# ============================================================================


def presentations_to_playlist(plan: Plan) -> list[ContentFile]:
    """Flatten a plan into its files.

    ``all_files`` is used when populated; otherwise files are collected
    section by section, presentation by presentation.
    """
    if plan.all_files:
        return list(plan.all_files)
    return list(plan.iter_section_files())


def _file_to_item(file: ContentFile) -> InstructionItem:
    return InstructionItem(
        id=file.id,
        item_type="file",
        label=file.title,
        seconds=file.seconds,
        embed_url=file.embed_url or file.url,
    )


def _presentation_to_item(
    presentation: PlanPresentation, *, with_files: bool
) -> InstructionItem:
    # Summed file durations; omitted when nothing adds up
    seconds = sum(f.seconds or 0 for f in presentation.files) or None
    children = [_file_to_item(f) for f in presentation.files] if with_files else []
    return InstructionItem(
        id=presentation.id,
        item_type=item_type_for_action(presentation.action_type),
        label=presentation.name,
        description=(
            presentation.action_type.value
            if presentation.action_type is not ActionType.OTHER
            else None
        ),
        seconds=seconds,
        children=children or None,
    )


def _plan_to_instructions(plan: Plan, *, with_files: bool) -> Instructions:
    return Instructions(
        name=plan.name,
        items=[
            InstructionItem(
                id=section.id,
                item_type="section",
                label=section.name,
                children=[
                    _presentation_to_item(p, with_files=with_files)
                    for p in section.presentations
                ]
                or None,
            )
            for section in plan.sections
        ],
    )


def presentations_to_expanded_instructions(plan: Plan) -> Instructions:
    """Reshape a plan into section -> presentation -> file instruction items.

    File leaves carry the file's embed URL (or its URL when it has none),
    so a file with both comes back with the embed URL as its URL. Playable
    presentations record their action type in ``description``.
    """
    return _plan_to_instructions(plan, with_files=True)


def presentations_to_instructions(plan: Plan) -> Instructions:
    """Reshape a plan into section -> presentation items, without file leaves."""
    return _plan_to_instructions(plan, with_files=False)


# ============================================================================
# FROM INSTRUCTIONS / EXPANDED INSTRUCTIONS
# ============================================================================


def instructions_to_playlist(
    instructions: Instructions,
    *,
    id_factory: IdFactory = generate_id,
    item_kinds: ItemKindMap = DEFAULT_ITEM_KINDS,
) -> list[ContentFile]:
    """Extract playable leaves from an instruction tree, in pre-order.

    An item becomes a file when it has an embed URL and is either declared
    a file or has no children. Items with children are always descended
    into, whether or not they produced a file themselves.

    Args:
        instructions: Instruction tree to walk.
        id_factory: Supplies IDs for items with no ``id``/``related_id``.
        item_kinds: Synonym table used to recognize file items.

    Returns:
        Files in document order.
    """
    files: list[ContentFile] = []

    def visit(items: Sequence[InstructionItem]) -> None:
        for item in items:
            if item.embed_url and (item_kinds.is_file(item.item_type) or item.is_leaf):
                files.append(_item_to_file(item, id_factory))
            if item.children:
                visit(item.children)

    visit(instructions.items)
    return files


expanded_instructions_to_playlist = instructions_to_playlist


def _presentation_action_type(
    item: InstructionItem, item_kinds: ItemKindMap
) -> ActionType:
    # A playable item's description may carry the exact action type
    action_type = item_kinds.action_type(item.item_type)
    if action_type is ActionType.PLAY and item.description == ActionType.ADD_ON:
        return ActionType.ADD_ON
    return action_type


def instructions_to_presentations(
    instructions: Instructions,
    plan_id: str | None = None,
    *,
    id_factory: IdFactory = generate_id,
    item_kinds: ItemKindMap = DEFAULT_ITEM_KINDS,
) -> Plan:
    """Reshape a two-level instruction tree into a plan.

    Top-level items with children become sections and their children
    become presentations. A presentation's files are its children that
    have an embed URL; if there are none, the presentation item's own embed
    URL is used. Top-level items without children are dropped. A playable
    item described as "add-on" keeps that action type.

    Args:
        instructions: Instruction tree, ideally section -> action -> file.
        plan_id: ID for the plan. Generated when not given.
        id_factory: Supplies IDs for items with no ``id``/``related_id``.
        item_kinds: Synonym table used to derive action types.

    Returns:
        A plan whose ``all_files`` matches its section tree.
    """
    all_files: list[ContentFile] = []
    sections: list[PlanSection] = []

    for section_item in instructions.items:
        if not section_item.children:
            continue

        presentations: list[PlanPresentation] = []
        for presentation_item in section_item.children:
            files = [
                _item_to_file(child, id_factory)
                for child in presentation_item.children or []
                if child.embed_url
            ]
            if not files and presentation_item.embed_url:
                files.append(_item_to_file(presentation_item, id_factory))
            all_files.extend(files)

            presentations.append(
                PlanPresentation(
                    id=_resolve_id(presentation_item, id_factory),
                    name=presentation_item.label or "Presentation",
                    action_type=_presentation_action_type(presentation_item, item_kinds),
                    files=files,
                )
            )

        sections.append(
            PlanSection(
                id=_resolve_id(section_item, id_factory),
                name=section_item.label or "Section",
                presentations=presentations,
            )
        )

    return Plan(
        id=plan_id or id_factory(),
        name=instructions.name or "Plan",
        sections=sections,
        all_files=all_files,
    )


expanded_instructions_to_presentations = instructions_to_presentations


def collapse_instructions(
    instructions: Instructions,
    *,
    item_kinds: ItemKindMap = DEFAULT_ITEM_KINDS,
) -> Instructions:
    """Drop file-level leaves from an expanded instruction tree.

    Leaf items whose type is a file kind are removed at every depth; every
    other item is kept with its own fields intact.
    """

    def collapse(items: Sequence[InstructionItem]) -> list[InstructionItem]:
        kept: list[InstructionItem] = []
        for item in items:
            if item.is_leaf and item_kinds.is_file(item.item_type):
                continue
            children = collapse(item.children) if item.children else []
            kept.append(item.model_copy(update={"children": children or None}))
        return kept

    return Instructions(name=instructions.name, items=collapse(instructions.items))


# ============================================================================
# FROM PLAYLIST
# ============================================================================


def playlist_to_presentations(
    files: Sequence[ContentFile],
    plan_name: str = "Playlist",
    section_name: str = "Content",
    *,
    id_factory: IdFactory = generate_id,
) -> Plan:
    """Wrap a playlist in a single-section plan, one presentation per file."""
    presentations = [
        PlanPresentation(
            id=f"pres-{index}-{file.id}",
            name=file.title,
            action_type=ActionType.PLAY,
            files=[file],
        )
        for index, file in enumerate(files)
    ]
    return Plan(
        id=id_factory(),
        name=plan_name,
        sections=[
            PlanSection(
                id=MAIN_SECTION_ID, name=section_name, presentations=presentations
            )
        ],
        all_files=list(files),
    )


def playlist_to_instructions(
    files: Sequence[ContentFile], name: str = "Playlist"
) -> Instructions:
    """Wrap a playlist in a single section of file items."""
    return Instructions(
        name=name,
        items=[
            InstructionItem(
                id=MAIN_SECTION_ID,
                item_type="section",
                label="Content",
                children=[
                    InstructionItem(
                        id=file.id or f"item-{index}",
                        item_type="file",
                        label=file.title,
                        seconds=file.seconds,
                        embed_url=file.embed_url or file.url,
                    )
                    for index, file in enumerate(files)
                ],
            )
        ],
    )


playlist_to_expanded_instructions = playlist_to_instructions


# ============================================================================
# CONVERSION TABLE
# ============================================================================


@dataclass(frozen=True)
class ConversionContext:
    """Inputs a conversion may need besides the source data.

    Attributes:
        id_factory: Supplies synthetic IDs.
        item_kinds: Item-type synonym table.
        folder: Folder the data was fetched for. Its ID names plans built
            from instructions; its title names plans and run sheets built
            from playlists.
    """

    id_factory: IdFactory = generate_id
    item_kinds: ItemKindMap = DEFAULT_ITEM_KINDS
    folder: ContentFolder | None = None

    @property
    def folder_id(self) -> str | None:
        return self.folder.id if self.folder else None

    @property
    def folder_title(self) -> str:
        return self.folder.title if self.folder else "Playlist"


@dataclass(frozen=True)
class Conversion:
    """A directed edge between two formats with its fidelity."""

    source: ContentFormat
    target: ContentFormat
    lossy: bool
    convert: Callable[[Any, ConversionContext], Any]

    def __call__(self, data: Any, context: ConversionContext | None = None) -> Any:
        return self.convert(data, context or ConversionContext())


def _from_instructions_to_playlist(
    data: Instructions, ctx: ConversionContext
) -> list[ContentFile]:
    return instructions_to_playlist(
        data, id_factory=ctx.id_factory, item_kinds=ctx.item_kinds
    )


def _from_instructions_to_presentations(
    data: Instructions, ctx: ConversionContext
) -> Plan:
    return instructions_to_presentations(
        data, ctx.folder_id, id_factory=ctx.id_factory, item_kinds=ctx.item_kinds
    )


def _from_playlist_to_presentations(
    data: list[ContentFile], ctx: ConversionContext
) -> Plan:
    return playlist_to_presentations(
        data, ctx.folder_title, id_factory=ctx.id_factory
    )


def _from_playlist_to_instructions(
    data: list[ContentFile], ctx: ConversionContext
) -> Instructions:
    return playlist_to_instructions(data, ctx.folder_title)


_P = ContentFormat.PLAYLIST
_PR = ContentFormat.PRESENTATIONS
_I = ContentFormat.INSTRUCTIONS
_X = ContentFormat.EXPANDED_INSTRUCTIONS

_EDGES = (
    Conversion(_PR, _P, False, lambda d, _: presentations_to_playlist(d)),
    Conversion(_PR, _X, False, lambda d, _: presentations_to_expanded_instructions(d)),
    Conversion(_PR, _I, True, lambda d, _: presentations_to_instructions(d)),
    Conversion(_X, _P, False, _from_instructions_to_playlist),
    Conversion(_X, _PR, False, _from_instructions_to_presentations),
    Conversion(
        _X, _I, True, lambda d, ctx: collapse_instructions(d, item_kinds=ctx.item_kinds)
    ),
    Conversion(_I, _P, True, _from_instructions_to_playlist),
    Conversion(_I, _PR, True, _from_instructions_to_presentations),
    # Plain instructions stand in for expanded ones unchanged
    Conversion(_I, _X, True, lambda d, _: d),
    Conversion(_P, _PR, True, _from_playlist_to_presentations),
    Conversion(_P, _I, True, _from_playlist_to_instructions),
    Conversion(_P, _X, True, _from_playlist_to_instructions),
)

CONVERSIONS: Mapping[tuple[ContentFormat, ContentFormat], Conversion] = (
    MappingProxyType({(edge.source, edge.target): edge for edge in _EDGES})
)


def get_conversion(source: ContentFormat, target: ContentFormat) -> Conversion:
    """Look up the conversion edge between two formats.

    Raises:
        UnsupportedConversionError: If no edge exists (including source == target).
    """
    try:
        return CONVERSIONS[(source, target)]
    except KeyError:
        raise UnsupportedConversionError(
            f"No conversion from {source.label} to {target.label}"
        ) from None


def convert_format(
    data: Any,
    source: ContentFormat,
    target: ContentFormat,
    context: ConversionContext | None = None,
) -> Any:
    """Convert data between formats. Data in the target format is returned as-is.

    Raises:
        UnsupportedConversionError: If there is no conversion between the formats.
    """
    if source == target:
        return data
    return get_conversion(source, target)(data, context)
