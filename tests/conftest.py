"""
Shared fixtures: synthetic PCM payloads and files.
"""
import shutil

import numpy as np
import pytest


def sine_pcm(n_frames: int, channels: int = 1, sample_rate: int = 44100, freq: float = 440.0) -> bytes:
    t = np.arange(n_frames) / sample_rate
    tone = (0.5 * np.sin(2 * np.pi * freq * t) * 32767).astype("<i2")
    return np.repeat(tone, channels).tobytes()


requires_ffmpeg = pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")


@pytest.fixture
def write_pcm(tmp_path):
    """Write bytes to tmp_path/<name> and return the path."""
    def _write(name: str, data: bytes):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write


@pytest.fixture
def fake_mp3_backend(monkeypatch):
    """Stand in for ffmpeg: "encoded" output is a marker plus the raw interleaved samples."""
    from pydub import AudioSegment
    from audio_helper.audio import mp3

    calls = []

    def fake_export(self, out_f=None, format="mp3", **kwargs):
        calls.append({"format": format, "channels": self.channels,
                      "frame_rate": self.frame_rate, **kwargs})
        out_f.write(b"MP3:" + self.raw_data)
        return out_f

    monkeypatch.setattr(mp3, "encoder_available", lambda: True)
    monkeypatch.setattr(AudioSegment, "export", fake_export)
    return calls
