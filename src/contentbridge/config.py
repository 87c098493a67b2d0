"""Configuration for contentbridge."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolverConfig:
    """Format resolver configuration.

    Attributes:
        allow_lossy: Whether the resolver may use the last-resort fallbacks
            (playlist from plain instructions, anything from a playlist).
            Other fallbacks are tried either way and report ``is_lossy``
            when they drop detail.
    """

    allow_lossy: bool = True


@dataclass(frozen=True)
class DurationConfig:
    """Duration estimation settings.

    Attributes:
        seconds_per_image: Display time assumed for a still image.
        words_per_minute: Reading speed used for text content.
    """

    seconds_per_image: int = 15
    words_per_minute: int = 150
