from __future__ import annotations

import pytest

from resourcekit.api.media import MediaType
from resourcekit.media.format_resolver import resolve_media_type, resolve_media_type_for_location


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("a.MP3", MediaType.MPEG),
        ("a.mp2", MediaType.MPEG),
        ("a.mpeg", MediaType.MPEG),
        ("a.ogg", MediaType.OGGVORBIS),
        ("a.Wav", MediaType.WAV),
        ("a.aiff", MediaType.AIFF),
        ("a.xma", MediaType.XMA),
        ("a.xm", MediaType.XM),
        ("a.it", MediaType.IT),
        ("a.mod", MediaType.MOD),
        ("a.alac", MediaType.AUDIOQUEUE),
        ("a.AAC", MediaType.AUDIOQUEUE),
        ("a.s3m", MediaType.S3M),
        ("a.vag", MediaType.VAG),
        ("a.txt", MediaType.UNKNOWN),
        ("noext", MediaType.UNKNOWN),
        ("mp3", MediaType.UNKNOWN),
        ("trailing.", MediaType.UNKNOWN),
        ("", MediaType.UNKNOWN),
    ],
)
def test_resolve_media_type(filename: str, expected: MediaType) -> None:
    assert resolve_media_type(filename) is expected


def test_resolve_media_type_uses_last_extension_only() -> None:
    assert resolve_media_type("archive.mp3.txt") is MediaType.UNKNOWN
    assert resolve_media_type("song.backup.ogg") is MediaType.OGGVORBIS
    assert resolve_media_type("/music.d/track") is MediaType.UNKNOWN


def test_resolve_media_type_for_remote_location_ignores_query() -> None:
    url = "https://cdn.example.com/audio/theme.ogg?sig=abc.def#t=3"
    assert resolve_media_type_for_location(url, is_remote=True) is MediaType.OGGVORBIS
    assert resolve_media_type_for_location("/tmp/theme.wav", is_remote=False) is MediaType.WAV
