"""Duration estimation for content without an explicit length."""

import math
from collections.abc import Iterable
from typing import Literal

from contentbridge.config import DurationConfig
from contentbridge.models.content import ContentFile
from contentbridge.models.enums import MediaType

_DEFAULT_CONFIG = DurationConfig()


def count_words(text: str | None) -> int:
    """Count whitespace-separated words."""
    if not text or not text.strip():
        return 0
    return len(text.split())


def estimate_image_duration(config: DurationConfig = _DEFAULT_CONFIG) -> int:
    """Display time for a still image, in seconds."""
    return config.seconds_per_image


def _reading_seconds(words: int, config: DurationConfig) -> int:
    return math.ceil(words / config.words_per_minute * 60)


def estimate_text_duration(
    text: str | None, config: DurationConfig = _DEFAULT_CONFIG
) -> int:
    """Reading time for text at the configured words per minute, in seconds."""
    return _reading_seconds(count_words(text), config)


def estimate_duration(
    kind: Literal["video", "image", "text"] | MediaType,
    *,
    text: str | None = None,
    word_count: int | None = None,
    config: DurationConfig = _DEFAULT_CONFIG,
) -> int:
    """Estimate duration from the kind of content.

    Videos cannot be estimated and return 0. Text uses ``word_count`` when
    given, otherwise counts the words in ``text``.
    """
    match kind:
        case "image":
            return estimate_image_duration(config)
        case "text":
            if word_count:
                return _reading_seconds(word_count, config)
            if text:
                return estimate_text_duration(text, config)
            return 0
        case _:
            return 0


def playlist_duration(
    files: Iterable[ContentFile], config: DurationConfig = _DEFAULT_CONFIG
) -> int:
    """Total running time of a playlist in whole seconds.

    Known durations are summed as-is. Images without a duration are
    counted at the configured image time; videos without one add nothing.
    """
    total = 0.0
    for file in files:
        if file.seconds:
            total += file.seconds
        else:
            total += estimate_duration(file.media_type, config=config)
    return math.ceil(total)


def format_duration(seconds: int | float | None) -> str:
    """Format seconds as ``M:SS`` or ``H:MM:SS``."""
    if not seconds:
        return "0:00"
    minutes, secs = divmod(int(round(seconds)), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
