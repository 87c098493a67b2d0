"""Provider collaborators.

Public API:
    JsonDirectoryProvider - Serves formats from JSON documents on disk
"""

from contentbridge.providers.json_directory import (
    JsonDirectoryProvider,
    parse_document,
    read_json,
)

__all__ = [
    "JsonDirectoryProvider",
    "parse_document",
    "read_json",
]
