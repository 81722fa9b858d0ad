"""Default audio decoder: PCM WAV to numpy samples, other formats kept encoded."""

from __future__ import annotations

import io
import wave

import numpy as np

from resourcekit.api.media import MediaHandle, MediaType
from resourcekit.runtime.errors import MediaDecodeError

_PCM_DTYPES: dict[int, str] = {1: "u1", 2: "<i2", 4: "<i4"}


class WaveAudioDecoder:
    """Decodes WAV payloads into float32 `(frames, channels)` arrays."""

    def decode(self, payload: bytes, media_type: MediaType, location: str) -> MediaHandle:
        if not payload:
            raise MediaDecodeError(f"empty payload for {location}")
        if media_type is not MediaType.WAV:
            return MediaHandle(media_type=media_type, location=location, encoded=payload)
        try:
            with wave.open(io.BytesIO(payload), "rb") as reader:
                channels = reader.getnchannels()
                sample_width = reader.getsampwidth()
                sample_rate = reader.getframerate()
                frames = reader.readframes(reader.getnframes())
        except (wave.Error, EOFError) as exc:
            raise MediaDecodeError(f"invalid WAV data in {location}: {exc}") from exc
        samples = _pcm_to_float(frames, sample_width, channels)
        return MediaHandle(
            media_type=media_type,
            location=location,
            encoded=payload,
            samples=samples,
            sample_rate=sample_rate,
            channels=channels,
        )


def _pcm_to_float(frames: bytes, sample_width: int, channels: int) -> np.ndarray:
    if sample_width == 3:
        raw = np.frombuffer(frames, dtype=np.uint8).reshape(-1, 3)
        # Sign-extend little-endian 24-bit samples into int32.
        widened = (
            raw[:, 0].astype(np.int32)
            | (raw[:, 1].astype(np.int32) << 8)
            | (raw[:, 2].astype(np.int32) << 16)
        )
        ints = np.where(widened & 0x800000, widened - 0x1000000, widened)
        data = ints.astype(np.float32) / float(1 << 23)
    else:
        dtype = _PCM_DTYPES.get(sample_width)
        if dtype is None:
            raise MediaDecodeError(f"unsupported sample width: {sample_width} bytes")
        ints = np.frombuffer(frames, dtype=dtype)
        if sample_width == 1:
            data = (ints.astype(np.float32) - 128.0) / 128.0
        else:
            data = ints.astype(np.float32) / float(1 << (8 * sample_width - 1))
    return data.reshape(-1, channels)
