import struct

import numpy as np
import pytest
import soundfile as sf

from audio_helper.audio.formats import RawAudioConfig
from audio_helper.audio.wav import build_wav_header, encode_wav, read_wav_header, pcm_to_wav
from audio_helper.errors import NotAPcmFile, InputNotFound, InvalidAudioConfig
from conftest import sine_pcm


def test_header_is_44_bytes_and_little_endian():
    cfg = RawAudioConfig(sample_rate=16000, channels=1, bits_per_sample=16)
    header = build_wav_header(320, cfg)
    assert len(header) == 44
    assert header[0:4] == b"RIFF"
    assert header[8:16] == b"WAVEfmt "
    assert struct.unpack_from("<I", header, 4)[0] == 36 + 320
    assert struct.unpack_from("<IH", header, 16) == (16, 1)
    assert header[36:40] == b"data"
    assert struct.unpack_from("<I", header, 40)[0] == 320


@pytest.mark.parametrize("sample_rate", [8000, 22050, 44100, 96000])
@pytest.mark.parametrize("channels", [1, 2])
@pytest.mark.parametrize("bits", [8, 16, 24, 32])
def test_header_fields_at_fixed_offsets(sample_rate, channels, bits):
    cfg = RawAudioConfig(sample_rate, channels, bits)
    payload = bytes(37)
    out = encode_wav(payload, cfg)
    assert len(out) == 44 + len(payload)
    assert struct.unpack_from("<H", out, 22)[0] == channels
    assert struct.unpack_from("<I", out, 24)[0] == sample_rate
    assert struct.unpack_from("<I", out, 28)[0] == sample_rate * channels * (bits // 8)
    assert struct.unpack_from("<H", out, 32)[0] == channels * (bits // 8)
    assert struct.unpack_from("<H", out, 34)[0] == bits
    assert out[44:] == payload


def test_2000_stereo_samples(write_pcm, tmp_path):
    samples = (np.arange(2000) * 100).astype("<i2").tobytes()
    src = write_pcm("input.pcm", samples)
    dst = tmp_path / "output.wav"

    pcm_to_wav(src, dst, RawAudioConfig(44100, 2, 16))

    data = dst.read_bytes()
    assert len(data) == 4044
    assert struct.unpack_from("<I", data, 4)[0] == 4036
    assert struct.unpack_from("<I", data, 40)[0] == 4000


def test_sine_round_trip(write_pcm, tmp_path):
    cfg = RawAudioConfig(sample_rate=22050, channels=2, bits_per_sample=16)
    payload = sine_pcm(2205, channels=2, sample_rate=22050)
    dst = tmp_path / "sine.wav"
    pcm_to_wav(write_pcm("sine.pcm", payload), dst, cfg)

    header = read_wav_header(dst.read_bytes())
    assert header.config == cfg
    assert header.data_size == len(payload)

    info = sf.info(str(dst))
    assert info.samplerate == 22050
    assert info.channels == 2
    assert info.frames == 2205
    assert info.subtype == "PCM_16"


def test_default_config_when_none(write_pcm, tmp_path):
    dst = tmp_path / "out.wav"
    pcm_to_wav(write_pcm("voice_8k_mono.pcm", bytes(16)), dst)
    # pcm_to_wav never infers; that is the dispatcher's job
    assert read_wav_header(dst.read_bytes()).config == RawAudioConfig(44100, 2, 16)


def test_payload_is_copied_verbatim_even_if_odd_length():
    payload = b"\x01\x02\x03"
    assert encode_wav(payload, RawAudioConfig())[44:] == payload


def test_rejects_non_pcm_extension(tmp_path):
    src = tmp_path / "test.wav"
    src.write_bytes(bytes(4))
    with pytest.raises(NotAPcmFile):
        pcm_to_wav(src, tmp_path / "out.wav")


def test_rejects_missing_input(tmp_path):
    with pytest.raises(InputNotFound):
        pcm_to_wav(tmp_path / "nonexistent.pcm", tmp_path / "out.wav")
    assert not (tmp_path / "out.wav").exists()


def test_read_wav_header_rejects_garbage():
    with pytest.raises(ValueError):
        read_wav_header(b"RIFF")
    with pytest.raises(ValueError):
        read_wav_header(b"X" * 44)


@pytest.mark.parametrize("cfg", [
    RawAudioConfig(sample_rate=44100, channels=70000, bits_per_sample=16),
    RawAudioConfig(sample_rate=-1, channels=2, bits_per_sample=16),
    RawAudioConfig(sample_rate=44100, channels=0, bits_per_sample=16),
    RawAudioConfig(sample_rate=44100, channels=1, bits_per_sample=4),
    RawAudioConfig(sample_rate=2**32, channels=1, bits_per_sample=16),
])
def test_header_rejects_fields_that_do_not_fit(cfg):
    with pytest.raises(InvalidAudioConfig):
        encode_wav(bytes(4), cfg)


def test_invalid_config_leaves_no_output(write_pcm, tmp_path):
    src = write_pcm("clip.pcm", bytes(8))
    dst = tmp_path / "out.wav"
    with pytest.raises(InvalidAudioConfig):
        pcm_to_wav(src, dst, RawAudioConfig(sample_rate=44100, channels=70000, bits_per_sample=16))
    assert not dst.exists()
