# audio_helper/audio/mp3.py
"""
PCM -> MP3 pipeline.

The encoder is driven through an explicit lifecycle:

    UNBUILT --build()--> BUILT --encode_*()--> ENCODING --flush()--> FLUSHED --close()--> DONE

Encoding goes through pydub, which hands the buffered samples to ffmpeg's
libmp3lame on flush. Encode calls therefore usually emit nothing and the
flush returns the whole bitstream; callers must not rely on either split and
simply append outputs in call order.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple
import io
import logging

import numpy as np
from pydub import AudioSegment
from pydub.exceptions import CouldntEncodeError
from pydub.utils import which

from .formats import Mp3EncodeConfig, Mp3Bitrate, AudioQuality, standard_mp3_config
from .pcm_io import read_pcm, write_output
from ..config import MP3_SAMPLE_RATES, MP3_QUALITY_LEVELS
from ..errors import EncoderBuildFailure, EncodeFailure, FlushFailure

logger = logging.getLogger(__name__)

SAMPLE_WIDTH = 2  # input is always read as signed 16-bit little-endian


class EncoderState(Enum):
    UNBUILT = "unbuilt"
    BUILT = "built"
    ENCODING = "encoding"
    FLUSHED = "flushed"
    DONE = "done"


# ---------------------------
# Sample preparation
# ---------------------------

def pcm_samples(payload: bytes) -> np.ndarray:
    """Reinterpret raw bytes as int16 samples. A trailing odd byte is dropped."""
    usable = len(payload) - len(payload) % SAMPLE_WIDTH
    return np.frombuffer(payload[:usable], dtype="<i2")


def split_channels(samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """De-interleave: sample 2i goes left, 2i+1 goes right. An unpaired last sample is dropped."""
    frames = len(samples) // 2
    return samples[0:2 * frames:2], samples[1:2 * frames:2]


def encoder_available() -> bool:
    return which(AudioSegment.converter) is not None


# ---------------------------
# Encoder
# ---------------------------

class Mp3Encoder:
    def __init__(self, config: Mp3EncodeConfig):
        self.config = config
        self.state = EncoderState.UNBUILT
        self._segments: List[AudioSegment] = []
        self._bitrate: Optional[Mp3Bitrate] = None
        self._quality_level: Optional[int] = None

    def build(self) -> "Mp3Encoder":
        if self.state is not EncoderState.UNBUILT:
            raise EncoderBuildFailure(f"Encoder already built (state={self.state.value})")

        cfg = self.config
        if cfg.channels not in (1, 2):
            raise EncoderBuildFailure(f"Unsupported channel count: {cfg.channels}")
        if cfg.sample_rate not in MP3_SAMPLE_RATES:
            raise EncoderBuildFailure(f"Unsupported sample rate for MP3: {cfg.sample_rate}")
        try:
            self._bitrate = Mp3Bitrate(cfg.bitrate)
        except ValueError:
            raise EncoderBuildFailure(f"Unsupported bitrate: {cfg.bitrate}") from None
        try:
            self._quality_level = MP3_QUALITY_LEVELS[AudioQuality(cfg.quality).value]
        except ValueError:
            raise EncoderBuildFailure(f"Unsupported quality: {cfg.quality}") from None
        if not encoder_available():
            raise EncoderBuildFailure(
                f"MP3 encoder not available ('{AudioSegment.converter}' not found on PATH)"
            )

        self.state = EncoderState.BUILT
        return self

    def _check_can_encode(self):
        if self.state not in (EncoderState.BUILT, EncoderState.ENCODING):
            raise EncodeFailure(f"Cannot encode in state '{self.state.value}'")

    def _segment(self, samples: np.ndarray, channels: int) -> AudioSegment:
        return AudioSegment(
            data=np.asarray(samples, dtype="<i2").tobytes(),
            sample_width=SAMPLE_WIDTH,
            frame_rate=self.config.sample_rate,
            channels=channels,
        )

    def encode_interleaved(self, samples: np.ndarray) -> bytes:
        """Feed one interleaved stream (the whole signal for mono)."""
        self._check_can_encode()
        channels = self.config.channels
        usable = len(samples) - len(samples) % channels
        try:
            if usable:
                self._segments.append(self._segment(samples[:usable], channels))
        except (ValueError, TypeError) as e:
            self._abort()
            raise EncodeFailure(f"Failed to encode interleaved audio: {e}") from e
        self.state = EncoderState.ENCODING
        return b""

    def encode_dual(self, left: np.ndarray, right: np.ndarray) -> bytes:
        """Feed separate left/right buffers."""
        self._check_can_encode()
        if self.config.channels != 2:
            self._abort()
            raise EncodeFailure("Split-channel input needs a stereo encoder")
        if len(left) != len(right):
            self._abort()
            raise EncodeFailure(f"Channel length mismatch: left={len(left)}, right={len(right)}")
        try:
            if len(left):
                self._segments.append(
                    AudioSegment.from_mono_audiosegments(self._segment(left, 1), self._segment(right, 1))
                )
        except (ValueError, TypeError) as e:
            self._abort()
            raise EncodeFailure(f"Failed to encode stereo audio: {e}") from e
        self.state = EncoderState.ENCODING
        return b""

    def flush(self) -> bytes:
        """Drain everything buffered and close the stream without padding silence."""
        if self.state not in (EncoderState.BUILT, EncoderState.ENCODING):
            raise FlushFailure(f"Cannot flush in state '{self.state.value}'")
        if not self._segments:
            self.state = EncoderState.FLUSHED
            return b""

        buf = io.BytesIO()
        try:
            sum(self._segments).export(
                buf,
                format="mp3",
                bitrate=self._bitrate.ffmpeg_value,
                parameters=["-compression_level", str(self._quality_level)],
            )
        except (CouldntEncodeError, OSError) as e:
            self._abort()
            raise FlushFailure(f"Failed to flush encoder: {e}") from e

        self._segments.clear()
        self.state = EncoderState.FLUSHED
        return buf.getvalue()

    def close(self):
        self._segments.clear()
        self.state = EncoderState.DONE

    def _abort(self):
        self._segments.clear()
        self.state = EncoderState.DONE


# ---------------------------
# Pipeline
# ---------------------------

def encode_mp3(payload: bytes, config: Mp3EncodeConfig) -> bytes:
    encoder = Mp3Encoder(config).build()
    samples = pcm_samples(payload)

    output = bytearray()
    try:
        if config.channels == 1:
            output += encoder.encode_interleaved(samples)
        else:
            left, right = split_channels(samples)
            output += encoder.encode_dual(left, right)
        output += encoder.flush()
    finally:
        encoder.close()
    return bytes(output)


def pcm_to_mp3(input_path, output_path, config: Optional[Mp3EncodeConfig] = None) -> Path:
    """Encode a raw PCM file to MP3. ``config=None`` uses 44100 Hz / stereo / 192 kbps / high."""
    config = config or standard_mp3_config()
    payload = read_pcm(input_path)
    out = write_output(output_path, encode_mp3(payload, config))
    logger.info(
        "Converted PCM %s to MP3 %s (%d kbps, %d ch)",
        input_path, out, int(config.bitrate), config.channels,
    )
    return out
