from pathlib import Path
from typing import Optional
import logging

from .infer import infer_from_path
from ..audio.formats import AudioFormat, RawAudioConfig
from ..audio.mp3 import encode_mp3
from ..audio.pcm_io import read_pcm, write_output
from ..audio.wav import encode_wav
from ..config import DEFAULT_MP3_BITRATE, DEFAULT_MP3_QUALITY

logger = logging.getLogger(__name__)


def resolve_config(input_path, config: Optional[RawAudioConfig] = None) -> RawAudioConfig:
    """Explicit configuration wins; otherwise guess from the input filename."""
    if config is not None:
        return config
    inferred = infer_from_path(input_path)
    logger.info(
        "Inferred %d Hz, %d ch, %d bit from %s",
        inferred.sample_rate, inferred.channels, inferred.bits_per_sample, Path(input_path).name,
    )
    return inferred


def convert_pcm(
    input_path,
    output_path,
    fmt=AudioFormat.WAV,
    config: Optional[RawAudioConfig] = None,
    bitrate=DEFAULT_MP3_BITRATE,
    quality=DEFAULT_MP3_QUALITY,
) -> RawAudioConfig:
    """
    Convert one raw PCM file to WAV or MP3 and return the configuration used.

    Only the output format is branched on; the input is always raw PCM.
    ``bitrate`` and ``quality`` are ignored for WAV.
    """
    fmt = AudioFormat(fmt)
    resolved = resolve_config(input_path, config)
    payload = read_pcm(input_path)

    if fmt is AudioFormat.WAV:
        data = encode_wav(payload, resolved)
    else:
        data = encode_mp3(payload, resolved.to_mp3_config(bitrate, quality))

    out = write_output(output_path, data)
    logger.info("Converted %s to %s (%s, %d bytes)", input_path, out, fmt.value, len(data))
    return resolved


def auto_convert_pcm(input_path, output_path, fmt=AudioFormat.WAV) -> RawAudioConfig:
    return convert_pcm(input_path, output_path, fmt)


def auto_pcm_to_wav(input_path, output_path) -> RawAudioConfig:
    return convert_pcm(input_path, output_path, AudioFormat.WAV)
