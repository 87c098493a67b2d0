"""Media helpers: type detection and content constructors."""

from typing import Any

from contentbridge.models.content import ContentFile, ContentFolder
from contentbridge.models.enums import MediaType

# URL fragments that mark a file as video (extensions and streaming hosts)
VIDEO_URL_MARKERS = (".mp4", ".webm", ".m3u8", ".mov", "stream.mux.com")


def detect_media_type(url: str, explicit: str | None = None) -> MediaType:
    """Infer whether a URL points at a video or an image.

    An explicit hint wins. Otherwise the URL is checked for known video
    extensions and streaming hosts; anything else is treated as an image.

    Args:
        url: Media URL to inspect.
        explicit: Optional provider hint ("video" or "image").

    Returns:
        The detected media type.
    """
    if explicit in (MediaType.VIDEO, MediaType.IMAGE):
        return MediaType(explicit)
    lowered = url.lower()
    if any(marker in lowered for marker in VIDEO_URL_MARKERS):
        return MediaType.VIDEO
    return MediaType.IMAGE


def create_file(
    id: str,
    title: str,
    url: str,
    *,
    media_type: MediaType | str | None = None,
    embed_url: str | None = None,
    image: str | None = None,
    seconds: int | float | None = None,
    mux_playback_id: str | None = None,
    provider_data: dict[str, Any] | None = None,
) -> ContentFile:
    """Build a ContentFile, inferring media type from the URL when not given."""
    return ContentFile(
        id=id,
        title=title,
        url=url,
        media_type=detect_media_type(url, media_type),
        embed_url=embed_url,
        image=image,
        seconds=seconds,
        mux_playback_id=mux_playback_id,
        provider_data=provider_data,
    )


def create_folder(
    id: str,
    title: str,
    path: str | None = None,
    image: str | None = None,
    is_leaf: bool | None = None,
) -> ContentFolder:
    """Build a ContentFolder."""
    return ContentFolder(id=id, title=title, path=path, image=image, is_leaf=is_leaf)
