# audio_helper/audio/pcm_io.py
from pathlib import Path
import logging

from ..config import PCM_EXTENSION
from ..errors import NotAPcmFile, InputNotFound, IoFailure

logger = logging.getLogger(__name__)


def is_pcm_file(path) -> bool:
    return str(path).endswith(PCM_EXTENSION)


def read_pcm(path) -> bytes:
    """Read a whole raw PCM file into memory after checking extension and existence."""
    if not is_pcm_file(path):
        raise NotAPcmFile(path)
    path = Path(path)
    if not path.exists():
        raise InputNotFound(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise IoFailure("read", path, str(e)) from e
    logger.debug("Read %d bytes of PCM from %s", len(data), path)
    return data


def write_output(path, data: bytes) -> Path:
    # Creates or truncates the file; a failed write may leave it partial
    path = Path(path)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise IoFailure("write", path, str(e)) from e
    return path


def ensure_parent_dir(path) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IoFailure("create the directory for", path, str(e)) from e
    return path
