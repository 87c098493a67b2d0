"""Pure algorithms: format conversion and item-kind classification."""

from contentbridge.lib.converters import (
    CONVERSIONS,
    Conversion,
    ConversionContext,
    collapse_instructions,
    convert_format,
    expanded_instructions_to_playlist,
    expanded_instructions_to_presentations,
    get_conversion,
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

__all__ = [
    "CONVERSIONS",
    "DEFAULT_ITEM_KINDS",
    "Conversion",
    "ConversionContext",
    "ItemKindMap",
    "collapse_instructions",
    "convert_format",
    "expanded_instructions_to_playlist",
    "expanded_instructions_to_presentations",
    "get_conversion",
    "instructions_to_playlist",
    "instructions_to_presentations",
    "playlist_to_expanded_instructions",
    "playlist_to_instructions",
    "playlist_to_presentations",
    "presentations_to_expanded_instructions",
    "presentations_to_instructions",
    "presentations_to_playlist",
]
