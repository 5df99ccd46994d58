# audio_helper/audio/formats.py

from dataclasses import dataclass
from enum import Enum

from ..config import (
    DEFAULT_SAMPLE_RATE,
    DEFAULT_CHANNELS,
    DEFAULT_BITS_PER_SAMPLE,
    DEFAULT_MP3_BITRATE,
    DEFAULT_MP3_QUALITY,
)


class AudioFormat(str, Enum):
    WAV = "wav"
    MP3 = "mp3"


class AudioQuality(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    BEST = "best"


class Mp3Bitrate(int, Enum):
    KBPS_64 = 64
    KBPS_128 = 128
    KBPS_192 = 192
    KBPS_256 = 256
    KBPS_320 = 320

    @property
    def ffmpeg_value(self) -> str:
        return f"{self.value}k"


# ---------------------------
# Raw PCM interpretation
# ---------------------------

@dataclass(frozen=True)
class RawAudioConfig:
    """
    How an otherwise opaque PCM byte stream should be read.
    The stream never describes itself, so this is always supplied by the
    caller or guessed from the filename.
    """
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = DEFAULT_CHANNELS
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    @property
    def block_align(self) -> int:
        return self.channels * self.bytes_per_sample

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.channels * self.bytes_per_sample

    def to_mp3_config(self, bitrate=DEFAULT_MP3_BITRATE, quality=DEFAULT_MP3_QUALITY) -> "Mp3EncodeConfig":
        return Mp3EncodeConfig(
            sample_rate=self.sample_rate,
            channels=self.channels,
            bitrate=bitrate,
            quality=quality,
        )


@dataclass(frozen=True)
class Mp3EncodeConfig:
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = DEFAULT_CHANNELS
    bitrate: Mp3Bitrate = Mp3Bitrate(DEFAULT_MP3_BITRATE)
    quality: AudioQuality = AudioQuality(DEFAULT_MP3_QUALITY)


# ---------------------------
# Presets
# ---------------------------

def default_pcm_config() -> RawAudioConfig:
    return RawAudioConfig()


def phone_quality_config() -> RawAudioConfig:
    return RawAudioConfig(sample_rate=8000, channels=1, bits_per_sample=16)


def cd_quality_config() -> RawAudioConfig:
    return RawAudioConfig(sample_rate=44100, channels=2, bits_per_sample=16)


def high_quality_mp3_config() -> Mp3EncodeConfig:
    return Mp3EncodeConfig(44100, 2, Mp3Bitrate.KBPS_320, AudioQuality.BEST)


def standard_mp3_config() -> Mp3EncodeConfig:
    return Mp3EncodeConfig(44100, 2, Mp3Bitrate.KBPS_192, AudioQuality.HIGH)


def compressed_mp3_config() -> Mp3EncodeConfig:
    return Mp3EncodeConfig(22050, 1, Mp3Bitrate.KBPS_128, AudioQuality.MEDIUM)
