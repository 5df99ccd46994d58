from pathlib import Path

VERSION = "0.1.0"

# Relative to the working directory, never to the installed package
ASSETS_DIR = Path("assets")
OUTPUT_DIR = ASSETS_DIR / "output"

# Raw PCM input
PCM_EXTENSION = ".pcm"

# Applied when nothing is supplied and nothing is inferred
DEFAULT_SAMPLE_RATE = 44100
DEFAULT_CHANNELS = 2
DEFAULT_BITS_PER_SAMPLE = 16

WAV_HEADER_SIZE = 44

# MP3 encoder defaults
DEFAULT_MP3_BITRATE = 192
DEFAULT_MP3_QUALITY = "high"

# MPEG-1, MPEG-2 and MPEG-2.5 layer III sample rates
MP3_SAMPLE_RATES = (8000, 11025, 12000, 16000, 22050, 24000, 32000, 44100, 48000)

# LAME algorithm quality (0 = best, 9 = worst), passed to ffmpeg as -compression_level
MP3_QUALITY_LEVELS = {
    "low": 9,
    "medium": 5,
    "high": 0,
    "best": 0,
}

# Filename tokens, checked in order; first match wins.
# Longer rates come first so "8k" never matches inside "48k".
SAMPLE_RATE_TOKENS = [
    (("96k",), 96000),
    (("48k",), 48000),
    (("44.1k", "44k"), 44100),
    (("32k",), 32000),
    (("22k",), 22050),
    (("16k",), 16000),
    (("8k",), 8000),
]

CHANNEL_TOKENS = [
    (("单声道", "mono"), 1),
    (("立体声", "stereo", "双声道"), 2),
    (("1ch",), 1),
    (("2ch",), 2),
]

BIT_DEPTH_TOKENS = [
    (("8bit",), 8),
    (("16bit",), 16),
    (("24bit",), 24),
    (("32bit",), 32),
]
