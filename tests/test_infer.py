import pytest

from audio_helper.pipeline.infer import infer_audio_config, infer_from_path


@pytest.mark.parametrize("filename, expected", [
    ("浪花一朵朵片段8k16bit单声道.pcm", (8000, 1, 16)),
    ("浪花一朵朵片段32k16bit单声道.pcm", (32000, 1, 16)),
    ("浪花一朵朵片段48k16bit单声道.pcm", (48000, 1, 16)),
    ("北京北京8k16bits单声道.pcm", (8000, 1, 16)),
    ("test_44k_stereo_16bit.pcm", (44100, 2, 16)),
    ("music_22k_mono_8bit.pcm", (22050, 1, 8)),
    ("voice_16k_1ch_16bit.pcm", (16000, 1, 16)),
    ("audio_96k_2ch_24bit.pcm", (96000, 2, 24)),
    ("concert_44.1k_立体声_32bit.pcm", (44100, 2, 32)),
    ("sample.pcm", (44100, 2, 16)),
])
def test_infer_known_filenames(filename, expected):
    cfg = infer_audio_config(filename)
    assert (cfg.sample_rate, cfg.channels, cfg.bits_per_sample) == expected


def test_defaults_when_nothing_matches():
    cfg = infer_audio_config("")
    assert (cfg.sample_rate, cfg.channels, cfg.bits_per_sample) == (44100, 2, 16)


def test_48k_wins_over_8k():
    assert infer_audio_config("片段48k.pcm").sample_rate == 48000


def test_44_1k_is_not_mistaken_for_shorter_tokens():
    assert infer_audio_config("take_44.1k.pcm").sample_rate == 44100
    assert infer_audio_config("take_44k.pcm").sample_rate == 44100


def test_case_insensitive():
    cfg = infer_audio_config("VOICE_16K_MONO_8BIT.PCM")
    assert (cfg.sample_rate, cfg.channels, cfg.bits_per_sample) == (16000, 1, 8)


def test_word_tokens_checked_before_channel_counts():
    assert infer_audio_config("mono_2ch.pcm").channels == 1
    assert infer_audio_config("stereo_1ch.pcm").channels == 2
    assert infer_audio_config("双声道.pcm").channels == 2


def test_no_cross_field_validation():
    cfg = infer_audio_config("odd_8k_24bit_mono.pcm")
    assert (cfg.sample_rate, cfg.channels, cfg.bits_per_sample) == (8000, 1, 24)


def test_infer_from_path_ignores_directories(tmp_path):
    path = tmp_path / "48k_mono" / "clip.pcm"
    assert infer_from_path(path) == infer_audio_config("clip.pcm")
