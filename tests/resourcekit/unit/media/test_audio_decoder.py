from __future__ import annotations

import io
import wave

import numpy as np
import pytest

from resourcekit.api.media import MediaType
from resourcekit.media.decoder import WaveAudioDecoder
from resourcekit.runtime.errors import MediaDecodeError
from tests.resourcekit.conftest import wav_bytes


def test_decoder_reads_pcm16_wav_into_float_samples() -> None:
    source = np.array([[0.0, 0.5], [-0.5, 0.25], [0.75, -1.0]], dtype=np.float32)
    payload = wav_bytes(source, sample_rate=4)

    handle = WaveAudioDecoder().decode(payload, MediaType.WAV, "tone.wav")

    assert handle.decoded
    assert handle.channels == 2
    assert handle.sample_rate == 4
    assert handle.samples is not None
    assert handle.samples.shape == (3, 2)
    assert handle.samples.dtype == np.float32
    np.testing.assert_allclose(handle.samples, source, atol=1e-3)
    assert handle.duration_seconds == pytest.approx(0.75)
    assert handle.encoded == payload


def test_decoder_reads_24_bit_wav() -> None:
    # -1.0 and +0.5 in 24-bit little endian PCM.
    frames = (-(1 << 23)).to_bytes(3, "little", signed=True) + (1 << 22).to_bytes(
        3, "little", signed=True
    )
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as writer:
        writer.setnchannels(1)
        writer.setsampwidth(3)
        writer.setframerate(8000)
        writer.writeframes(frames)

    handle = WaveAudioDecoder().decode(buffer.getvalue(), MediaType.WAV, "deep.wav")

    assert handle.samples is not None
    np.testing.assert_allclose(handle.samples[:, 0], [-1.0, 0.5])


def test_decoder_keeps_compressed_formats_encoded() -> None:
    handle = WaveAudioDecoder().decode(b"ID3fake", MediaType.MPEG, "song.mp3")

    assert not handle.decoded
    assert handle.encoded == b"ID3fake"
    assert handle.duration_seconds is None
    assert handle.media_type is MediaType.MPEG


def test_decoder_rejects_empty_and_malformed_payloads() -> None:
    decoder = WaveAudioDecoder()
    with pytest.raises(MediaDecodeError):
        decoder.decode(b"", MediaType.OGGVORBIS, "empty.ogg")
    with pytest.raises(MediaDecodeError):
        decoder.decode(b"not a riff file", MediaType.WAV, "broken.wav")
