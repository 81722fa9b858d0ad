"""Audio asset loading."""

from resourcekit.media.decoder import WaveAudioDecoder
from resourcekit.media.format_resolver import resolve_media_type, resolve_media_type_for_location
from resourcekit.media.loader import MediaResource
from resourcekit.media.transport import RequestsTransport

__all__ = [
    "MediaResource",
    "RequestsTransport",
    "WaveAudioDecoder",
    "resolve_media_type",
    "resolve_media_type_for_location",
]
