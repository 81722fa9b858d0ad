"""Extension to media-type resolution."""

from __future__ import annotations

from urllib.parse import urlsplit

from resourcekit.api.media import MediaType

_EXTENSION_TYPES: dict[str, MediaType] = {
    "mp3": MediaType.MPEG,
    "mp2": MediaType.MPEG,
    "mpeg": MediaType.MPEG,
    "ogg": MediaType.OGGVORBIS,
    "wav": MediaType.WAV,
    "aiff": MediaType.AIFF,
    "xma": MediaType.XMA,
    "xm": MediaType.XM,
    "it": MediaType.IT,
    "mod": MediaType.MOD,
    "alac": MediaType.AUDIOQUEUE,
    "aac": MediaType.AUDIOQUEUE,
    "s3m": MediaType.S3M,
    "vag": MediaType.VAG,
}


def resolve_media_type(filename: str) -> MediaType:
    """Map the text after the last `.` (lowercased) to a media type."""
    if "." not in filename:
        return MediaType.UNKNOWN
    extension = filename[filename.rfind(".") + 1 :].lower()
    return _EXTENSION_TYPES.get(extension, MediaType.UNKNOWN)


def resolve_media_type_for_location(location: str, *, is_remote: bool) -> MediaType:
    """Resolve a path or URL; URL query strings and fragments are ignored."""
    if is_remote:
        return resolve_media_type(urlsplit(location).path)
    return resolve_media_type(location)
