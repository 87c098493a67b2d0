"""Utility functions for contentbridge.

Available via `from contentbridge.utils import ...` for power users.
Only IdFactory and SequentialIdFactory are re-exported at the top level.
"""

from contentbridge.utils.duration import (
    count_words,
    estimate_duration,
    estimate_image_duration,
    estimate_text_duration,
    format_duration,
    playlist_duration,
)
from contentbridge.utils.ids import (
    IdFactory,
    SequentialIdFactory,
    generate_id,
    is_generated_id,
)
from contentbridge.utils.instruction_path import (
    generate_path,
    iter_items_with_paths,
    navigate_to_path,
)
from contentbridge.utils.media import create_file, create_folder, detect_media_type

__all__ = [
    "IdFactory",
    "SequentialIdFactory",
    "count_words",
    "create_file",
    "create_folder",
    "detect_media_type",
    "estimate_duration",
    "estimate_image_duration",
    "estimate_text_duration",
    "format_duration",
    "generate_id",
    "generate_path",
    "is_generated_id",
    "iter_items_with_paths",
    "navigate_to_path",
    "playlist_duration",
]
