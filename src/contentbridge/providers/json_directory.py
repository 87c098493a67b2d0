"""Provider backed by JSON documents on disk.

Layout::

    root/
      provider.json                 # optional: {"id", "name", "capabilities"}
      <folder-id>/
        playlist.json               # [ContentFile, ...]
        presentations.json          # Plan
        instructions.json           # Instructions
        expandedInstructions.json   # Instructions

Without ``provider.json`` the capabilities are inferred from which
documents exist in any folder. A missing document means "not available
for this folder" and yields None.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from contentbridge.exceptions import ProviderDataError
from contentbridge.models.content import ContentFile, ContentFolder, Instructions, Plan
from contentbridge.models.enums import ContentFormat
from contentbridge.models.provider import AuthData, ProviderCapabilities
from contentbridge.provider import ContentProvider

logger = logging.getLogger(__name__)

PROVIDER_MANIFEST = "provider.json"

_PLAYLIST_ADAPTER = TypeAdapter(list[ContentFile])


def document_name(fmt: ContentFormat) -> str:
    """File name holding a format inside a folder directory."""
    return f"{fmt.value}.json"


class JsonDirectoryProvider:
    """Serves content formats from a directory tree of JSON documents.

    Implements the ContentClient protocol; bind it with
    ``ContentProvider.from_client(JsonDirectoryProvider(path))`` or use
    ``as_provider()``.
    """

    def __init__(self, root: Path) -> None:
        """Initialize the provider.

        Args:
            root: Directory containing ``provider.json`` and one
                subdirectory per folder.

        Raises:
            ProviderDataError: If root is not a directory or the manifest is
                invalid.
        """
        if not root.is_dir():
            raise ProviderDataError(f"Not a directory: {root}")
        self._root = root
        manifest = self._read_manifest()
        self._id: str = manifest.get("id") or root.name
        self._name: str = manifest.get("name") or self._id
        if "capabilities" in manifest:
            try:
                self._capabilities = ProviderCapabilities.model_validate(
                    manifest["capabilities"]
                )
            except ValidationError as e:
                raise ProviderDataError(
                    f"Invalid capabilities in {root / PROVIDER_MANIFEST}: {e}"
                ) from e
        else:
            self._capabilities = self._infer_capabilities()
        logger.debug(
            "Loaded JSON provider %s with %s",
            self._id,
            [fmt.value for fmt in self._capabilities.formats],
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def capabilities(self) -> ProviderCapabilities:
        return self._capabilities

    def as_provider(self) -> ContentProvider:
        """Bind this client into a provider record for the resolver."""
        return ContentProvider.from_client(self)

    # ============================================================================
    # BROWSING
    # ============================================================================

    def list_folders(self) -> list[ContentFolder]:
        """Folders available in this provider, sorted by ID."""
        return [
            ContentFolder(id=path.name, title=path.name, path=f"/{path.name}")
            for path in sorted(self._root.iterdir())
            if path.is_dir()
        ]

    def get_folder(self, folder_id: str) -> ContentFolder:
        """Folder handle for an ID.

        Raises:
            ProviderDataError: If no such folder exists.
        """
        path = self._root / folder_id
        if not path.is_dir():
            raise ProviderDataError(f"Folder not found: {folder_id}")
        return ContentFolder(id=folder_id, title=folder_id, path=f"/{folder_id}")

    # ============================================================================
    # FETCH OPERATIONS
    # ============================================================================

    async def fetch_playlist(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> list[ContentFile] | None:
        return await self._load(folder, ContentFormat.PLAYLIST)

    async def fetch_presentations(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Plan | None:
        return await self._load(folder, ContentFormat.PRESENTATIONS)

    async def fetch_instructions(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Instructions | None:
        return await self._load(folder, ContentFormat.INSTRUCTIONS)

    async def fetch_expanded_instructions(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Instructions | None:
        return await self._load(folder, ContentFormat.EXPANDED_INSTRUCTIONS)

    # ============================================================================
    # INTERNAL
    # ============================================================================

    async def _load(self, folder: ContentFolder, fmt: ContentFormat) -> Any:
        path = self._root / folder.id / document_name(fmt)
        if not path.is_file():
            logger.debug("No %s document for %s", fmt.label, folder.id)
            return None
        raw = await asyncio.to_thread(read_json, path)
        return parse_document(fmt, raw, source=str(path))

    def _read_manifest(self) -> dict[str, Any]:
        path = self._root / PROVIDER_MANIFEST
        if not path.is_file():
            return {}
        manifest = read_json(path)
        if not isinstance(manifest, dict):
            raise ProviderDataError(f"Provider manifest must be an object: {path}")
        return manifest

    def _infer_capabilities(self) -> ProviderCapabilities:
        present = {
            fmt
            for fmt in ContentFormat
            if any(self._root.glob(f"*/{document_name(fmt)}"))
        }
        return ProviderCapabilities(
            browse=True,
            playlist=ContentFormat.PLAYLIST in present,
            presentations=ContentFormat.PRESENTATIONS in present,
            instructions=ContentFormat.INSTRUCTIONS in present,
            expanded_instructions=ContentFormat.EXPANDED_INSTRUCTIONS in present,
        )


def parse_document(
    fmt: ContentFormat, raw: Any, source: str = "<document>"
) -> list[ContentFile] | Plan | Instructions:
    """Validate a JSON-decoded document as the given format.

    Args:
        fmt: Format the document is in.
        raw: Decoded JSON (list for playlists, object otherwise).
        source: Where the document came from, for error messages.

    Raises:
        ProviderDataError: If the document does not match the format.
    """
    try:
        match fmt:
            case ContentFormat.PLAYLIST:
                return _PLAYLIST_ADAPTER.validate_python(raw)
            case ContentFormat.PRESENTATIONS:
                return Plan.model_validate(raw)
            case _:
                return Instructions.model_validate(raw)
    except ValidationError as e:
        raise ProviderDataError(f"Invalid {fmt.label} document {source}: {e}") from e


def read_json(path: Path) -> Any:
    """Read a JSON document.

    Raises:
        ProviderDataError: If the file cannot be read or is not valid JSON.
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ProviderDataError(f"Could not read {path}: {e}") from e
