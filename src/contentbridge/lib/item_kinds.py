"""Mapping of provider item-type strings onto a closed set of kinds.

Providers label instruction items with their own vocabulary
("lessonAction", "providerPresentation", "addon", ...). Converters only
ever branch on ItemKind; the synonym table is data and can be extended
per provider.
"""

from collections.abc import Mapping
from types import MappingProxyType

from contentbridge.models.enums import ActionType, ItemKind

_DEFAULT_SYNONYMS: dict[str, ItemKind] = {
    "section": ItemKind.SECTION,
    "lessonSection": ItemKind.SECTION,
    "action": ItemKind.ACTION,
    "lessonAction": ItemKind.ACTION,
    "providerPresentation": ItemKind.ACTION,
    "providerFile": ItemKind.ACTION,
    "play": ItemKind.ACTION,
    "addon": ItemKind.ADD_ON,
    "add-on": ItemKind.ADD_ON,
    "lessonAddOn": ItemKind.ADD_ON,
    "file": ItemKind.FILE,
}

# Item type written when turning a presentation back into an instruction item
_ACTION_TYPE_ITEM_TYPES: dict[ActionType, str] = {
    ActionType.PLAY: "action",
    ActionType.ADD_ON: "addon",
    ActionType.OTHER: "item",
}

_PLAYABLE_KINDS = frozenset({ItemKind.ACTION, ItemKind.ADD_ON})


class ItemKindMap:
    """Classifies raw item-type strings.

    Example:
        >>> kinds = DEFAULT_ITEM_KINDS.extend({"song": ItemKind.OTHER})
        >>> kinds.classify("lessonAction")
        <ItemKind.ACTION: 'action'>
    """

    __slots__ = ("_synonyms",)

    def __init__(self, synonyms: Mapping[str, ItemKind]) -> None:
        self._synonyms = MappingProxyType(dict(synonyms))

    @property
    def synonyms(self) -> Mapping[str, ItemKind]:
        """Read-only view of the synonym table."""
        return self._synonyms

    def classify(self, item_type: str | None) -> ItemKind:
        """Map a raw item type to its kind, OTHER if unrecognized."""
        if item_type is None:
            return ItemKind.OTHER
        return self._synonyms.get(item_type, ItemKind.OTHER)

    def extend(self, synonyms: Mapping[str, ItemKind]) -> "ItemKindMap":
        """Return a new map with extra or overriding synonyms."""
        return ItemKindMap({**self._synonyms, **synonyms})

    def is_file(self, item_type: str | None) -> bool:
        """True if the item type declares a file leaf."""
        return self.classify(item_type) is ItemKind.FILE

    def action_type(self, item_type: str | None) -> ActionType:
        """Presentation action type for an instruction item type."""
        if self.classify(item_type) in _PLAYABLE_KINDS:
            return ActionType.PLAY
        return ActionType.OTHER


def item_type_for_action(action_type: ActionType) -> str:
    """Instruction item type used for a presentation's action type."""
    return _ACTION_TYPE_ITEM_TYPES[action_type]


DEFAULT_ITEM_KINDS = ItemKindMap(_DEFAULT_SYNONYMS)
