from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
import orjson
import pytest

from resourcekit.documents.codec import JsonDocumentCodec
from resourcekit.media.loader import MediaResource
from resourcekit.runtime.errors import DocumentDecodeError, DocumentEncodeError


class Difficulty(Enum):
    EASY = "easy"
    HARD = "hard"


@dataclass
class Track:
    title: str
    volume: float = 1.0


@dataclass
class Playlist:
    name: str = "default"
    difficulty: Difficulty = Difficulty.EASY
    tracks: list[Track] = field(default_factory=list)
    tags: dict[str, int] = field(default_factory=dict)
    cursor: tuple[int, int] = (0, 0)
    note: str | None = None
    music: MediaResource | None = None


def test_encode_wraps_value_in_content_field_pretty_printed() -> None:
    text = JsonDocumentCodec().encode([1, 2])

    assert orjson.loads(text) == {"content": [1, 2]}
    assert "\n  " in text


def test_primitives_round_trip() -> None:
    codec = JsonDocumentCodec()
    assert codec.decode(codec.encode(42), int) == 42
    assert codec.decode(codec.encode("hi"), str) == "hi"
    assert codec.decode(codec.encode(3), float) == 3.0
    assert codec.decode(codec.encode([1.5, 2.5]), list[float]) == [1.5, 2.5]


def test_nested_dataclass_round_trip() -> None:
    codec = JsonDocumentCodec()
    playlist = Playlist(
        name="boss",
        difficulty=Difficulty.HARD,
        tracks=[Track("intro"), Track("loop", volume=0.5)],
        tags={"bpm": 140},
        cursor=(2, 3),
        note=None,
        music=MediaResource("https://example.com/boss.ogg", is_remote=True),
    )

    restored = codec.decode(codec.encode(playlist), Playlist)

    assert restored == playlist
    assert isinstance(restored.tracks[1], Track)
    assert restored.music is not None and restored.music.handle is None


def test_numpy_arrays_encode_as_lists() -> None:
    text = JsonDocumentCodec().encode(np.arange(3, dtype=np.int64))
    assert orjson.loads(text) == {"content": [0, 1, 2]}


def test_missing_dataclass_keys_use_defaults_and_unknown_keys_are_ignored() -> None:
    text = '{"content": {"name": "x", "extra": true}}'
    assert JsonDocumentCodec().decode(text, Playlist) == Playlist(name="x")


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2]",
        '{"other": 1}',
        '{"content": "abc"}',
        '{"content": {"tracks": [{"volume": 1}]}}',
    ],
)
def test_decode_failures_raise_document_decode_error(text: str) -> None:
    with pytest.raises(DocumentDecodeError):
        JsonDocumentCodec().decode(text, Playlist)


def test_decode_rejects_bool_for_int() -> None:
    with pytest.raises(DocumentDecodeError):
        JsonDocumentCodec().decode('{"content": true}', int)


def test_encode_failure_raises_document_encode_error() -> None:
    with pytest.raises(DocumentEncodeError):
        JsonDocumentCodec().encode(object())
