# audio_helper/audio/wav.py
"""
Canonical 44-byte RIFF/WAVE writer for raw PCM.

Only a single ``fmt `` + ``data`` chunk pair with the PCM format tag is ever
written. The payload goes out verbatim: no resampling, no bit-depth
conversion.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import struct

from .formats import RawAudioConfig, default_pcm_config
from .pcm_io import read_pcm, write_output
from ..config import WAV_HEADER_SIZE
from ..errors import InvalidAudioConfig

logger = logging.getLogger(__name__)

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")
_PCM_FORMAT_TAG = 1
_FMT_CHUNK_SIZE = 16
_U32 = 0xFFFFFFFF
_U16 = 0xFFFF


@dataclass(frozen=True)
class WavHeader:
    config: RawAudioConfig
    riff_size: int
    byte_rate: int
    block_align: int
    data_size: int


def check_wav_config(config: RawAudioConfig):
    """Raise InvalidAudioConfig unless every header field fits its u16/u32 slot."""
    limits = [
        ("channels", config.channels, _U16),
        ("bits_per_sample", config.bits_per_sample, _U16),
        ("block_align", config.block_align, _U16),
        ("sample_rate", config.sample_rate, _U32),
        ("byte_rate", config.byte_rate, _U32),
    ]
    for name, value, upper in limits:
        if not 1 <= value <= upper:
            raise InvalidAudioConfig(f"{name}={value} does not fit a WAV header (1..{upper})")


def build_wav_header(data_size: int, config: RawAudioConfig) -> bytes:
    check_wav_config(config)
    # Size fields are 32-bit; payloads of 4 GiB or more wrap around
    data_size &= _U32
    return _HEADER.pack(
        b"RIFF",
        (36 + data_size) & _U32,
        b"WAVE",
        b"fmt ",
        _FMT_CHUNK_SIZE,
        _PCM_FORMAT_TAG,
        config.channels,
        config.sample_rate,
        config.byte_rate,
        config.block_align,
        config.bits_per_sample,
        b"data",
        data_size,
    )


def encode_wav(payload: bytes, config: RawAudioConfig) -> bytes:
    return build_wav_header(len(payload), config) + payload


def read_wav_header(data: bytes) -> WavHeader:
    """Parse a header written by :func:`build_wav_header`."""
    if len(data) < WAV_HEADER_SIZE:
        raise ValueError(f"WAV header needs {WAV_HEADER_SIZE} bytes, got {len(data)}")
    (riff, riff_size, wave, fmt, fmt_size, tag, channels, sample_rate,
     byte_rate, block_align, bits, data_id, data_size) = _HEADER.unpack_from(data)
    if riff != b"RIFF" or wave != b"WAVE" or fmt != b"fmt " or data_id != b"data":
        raise ValueError("Not a canonical RIFF/WAVE header")
    if fmt_size != _FMT_CHUNK_SIZE or tag != _PCM_FORMAT_TAG:
        raise ValueError(f"Unsupported fmt chunk (size={fmt_size}, tag={tag})")
    return WavHeader(
        config=RawAudioConfig(sample_rate=sample_rate, channels=channels, bits_per_sample=bits),
        riff_size=riff_size,
        byte_rate=byte_rate,
        block_align=block_align,
        data_size=data_size,
    )


def pcm_to_wav(input_path, output_path, config: Optional[RawAudioConfig] = None) -> Path:
    """Wrap a raw PCM file in a WAV header. ``config=None`` uses 44100 Hz / stereo / 16-bit."""
    config = config or default_pcm_config()
    payload = read_pcm(input_path)
    out = write_output(output_path, encode_wav(payload, config))
    logger.info(
        "Converted PCM %s to WAV %s (%d Hz, %d ch, %d bit)",
        input_path, out, config.sample_rate, config.channels, config.bits_per_sample,
    )
    return out
