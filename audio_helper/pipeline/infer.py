from pathlib import Path

from ..audio.formats import RawAudioConfig
from ..config import (
    DEFAULT_SAMPLE_RATE,
    DEFAULT_CHANNELS,
    DEFAULT_BITS_PER_SAMPLE,
    SAMPLE_RATE_TOKENS,
    CHANNEL_TOKENS,
    BIT_DEPTH_TOKENS,
)


def _match(name: str, table, default: int) -> int:
    # Plain substring tests; the table order is what keeps "8k" out of "48k"
    for tokens, value in table:
        if any(token in name for token in tokens):
            return value
    return default


def infer_audio_config(filename: str) -> RawAudioConfig:
    """Guess sample rate, channels and bit depth from tokens in a filename.

    Never fails: anything not found falls back to 44100 Hz, stereo, 16-bit.
    """
    name = filename.lower()
    return RawAudioConfig(
        sample_rate=_match(name, SAMPLE_RATE_TOKENS, DEFAULT_SAMPLE_RATE),
        channels=_match(name, CHANNEL_TOKENS, DEFAULT_CHANNELS),
        bits_per_sample=_match(name, BIT_DEPTH_TOKENS, DEFAULT_BITS_PER_SAMPLE),
    )


def infer_from_path(path) -> RawAudioConfig:
    return infer_audio_config(Path(path).name)
