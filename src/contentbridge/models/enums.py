"""Enumerations for contentbridge domain models."""

from enum import StrEnum

from contentbridge.exceptions import InvalidFormatError


class MediaType(StrEnum):
    """Kind of playable media a file holds."""

    VIDEO = "video"
    IMAGE = "image"


class ActionType(StrEnum):
    """Role of a presentation within a plan.

    - PLAY: Main playable content
    - ADD_ON: Supplementary content
    - OTHER: Non-playable item (song lyrics, notes, etc.)
    """

    PLAY = "play"
    ADD_ON = "add-on"
    OTHER = "other"


class ContentFormat(StrEnum):
    """The four representations a provider can expose."""

    PLAYLIST = "playlist"
    PRESENTATIONS = "presentations"
    INSTRUCTIONS = "instructions"
    EXPANDED_INSTRUCTIONS = "expandedInstructions"

    @classmethod
    def parse(cls, value: str) -> "ContentFormat":
        """Parse a format name, accepting snake_case and kebab-case spellings.

        Raises:
            InvalidFormatError: If the name matches no format.
        """
        normalized = value.strip().replace("-", "_").lower()
        for fmt in cls:
            if normalized in (fmt.value.lower(), fmt.name.lower()):
                return fmt
        raise InvalidFormatError(f"Unknown content format: {value}")

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        match self:
            case ContentFormat.PLAYLIST:
                return "playlist"
            case ContentFormat.PRESENTATIONS:
                return "presentations"
            case ContentFormat.INSTRUCTIONS:
                return "instructions"
            case ContentFormat.EXPANDED_INSTRUCTIONS:
                return "expanded instructions"


class ItemKind(StrEnum):
    """Closed set of instruction item kinds.

    Provider-specific ``itemType`` strings are mapped onto these through an
    ItemKindMap. Anything unrecognized becomes OTHER.
    """

    SECTION = "section"
    ACTION = "action"
    ADD_ON = "add-on"
    FILE = "file"
    OTHER = "other"
