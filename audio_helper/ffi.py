"""
Fixed-layout adapter for embedding callers.

Configuration travels as ``ctypes`` records with the same layout as the C
header shipped to mobile clients (``CPcmConfig``, ``CMp3Config``). Every
entry point returns ``0`` on success and ``-1`` on failure; the exception
kind is logged and otherwise lost at this boundary. Callers that want the
reason should use :func:`convert_status`, which returns it per call.

Strings passed in and returned are ordinary Python ``str`` objects owned by
the caller; nothing here has to be freed explicitly.
"""

from enum import IntEnum
import ctypes
import logging

from .audio.formats import AudioFormat, AudioQuality, Mp3Bitrate, Mp3EncodeConfig, RawAudioConfig
from .audio.mp3 import pcm_to_mp3 as _pcm_to_mp3
from .audio.wav import pcm_to_wav as _pcm_to_wav
from .config import VERSION
from .errors import AudioHelperError
from .pipeline.convert import auto_convert_pcm
from .pipeline.infer import infer_audio_config

logger = logging.getLogger(__name__)

OK = 0
FAILED = -1

_QUALITY_CODES = [AudioQuality.LOW, AudioQuality.MEDIUM, AudioQuality.HIGH, AudioQuality.BEST]


class CPcmConfig(ctypes.Structure):
    _fields_ = [
        ("sample_rate", ctypes.c_uint32),
        ("channels", ctypes.c_uint16),
        ("bits_per_sample", ctypes.c_uint16),
    ]


class CMp3Config(ctypes.Structure):
    _fields_ = [
        ("sample_rate", ctypes.c_uint32),
        ("channels", ctypes.c_uint8),
        ("bitrate", ctypes.c_uint32),  # 64, 128, 192, 256, 320
        ("quality", ctypes.c_uint8),   # 0=low, 1=medium, 2=high, 3=best
    ]


class CAudioFormat(IntEnum):
    WAV = 0
    MP3 = 1

    def to_format(self) -> AudioFormat:
        return AudioFormat.WAV if self is CAudioFormat.WAV else AudioFormat.MP3


def pcm_config_from_c(c_config: CPcmConfig) -> RawAudioConfig:
    return RawAudioConfig(
        sample_rate=c_config.sample_rate,
        channels=c_config.channels,
        bits_per_sample=c_config.bits_per_sample,
    )


def mp3_config_from_c(c_config: CMp3Config) -> Mp3EncodeConfig:
    try:
        bitrate = Mp3Bitrate(c_config.bitrate)
    except ValueError:
        raise ValueError(f"Unsupported bitrate: {c_config.bitrate}") from None
    if c_config.quality >= len(_QUALITY_CODES):
        raise ValueError(f"Unsupported quality: {c_config.quality}")
    return Mp3EncodeConfig(
        sample_rate=c_config.sample_rate,
        channels=c_config.channels,
        bitrate=bitrate,
        quality=_QUALITY_CODES[c_config.quality],
    )


def convert_status(fn, *args, **kwargs):
    """Run ``fn`` and return ``(status, error)``; ``error`` is ``None`` on success."""
    try:
        fn(*args, **kwargs)
    except (AudioHelperError, ValueError) as e:
        logger.error("%s failed: %s", getattr(fn, "__name__", fn), e)
        return FAILED, e
    return OK, None


def _c_pcm_to_mp3(input_path, output_path, config):
    _pcm_to_mp3(input_path, output_path, mp3_config_from_c(config) if config is not None else None)


def _c_auto_convert(input_path, output_path, fmt):
    auto_convert_pcm(input_path, output_path, CAudioFormat(fmt).to_format())


def _status(fn, *args) -> int:
    if any(arg is None for arg in args[:2]):
        logger.error("%s failed: null path", fn.__name__)
        return FAILED
    return convert_status(fn, *args)[0]


def pcm_to_wav(input_path: str, output_path: str, config: CPcmConfig = None) -> int:
    return _status(_pcm_to_wav, input_path, output_path, pcm_config_from_c(config) if config is not None else None)


def pcm_to_mp3(input_path: str, output_path: str, config: CMp3Config = None) -> int:
    return _status(_c_pcm_to_mp3, input_path, output_path, config)


def auto_convert_audio(input_path: str, output_path: str, fmt: int) -> int:
    return _status(_c_auto_convert, input_path, output_path, fmt)


def infer_config_from_filename(filename: str, config: CPcmConfig) -> int:
    if filename is None or config is None:
        return FAILED
    inferred = infer_audio_config(filename)
    config.sample_rate = inferred.sample_rate
    config.channels = inferred.channels
    config.bits_per_sample = inferred.bits_per_sample
    return OK


def get_version() -> str:
    return VERSION
