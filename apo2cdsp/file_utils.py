import logging
import math
import os
from pathlib import Path

from apo2cdsp.errors import FileAccessError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 10 * 1024 * 1024
STREAM_THRESHOLD = 1024 * 1024
CHUNK_SIZE = 64 * 1024


def validate_file_access(path):
    path = Path(path)
    if not path.exists():
        raise FileAccessError(f"File does not exist: {path}")
    if not path.is_file():
        raise FileAccessError(f"Path is not a file: {path}")
    if not os.access(path, os.R_OK):
        raise FileAccessError(f"File is not readable: {path}")


def read_file(path, max_size=DEFAULT_MAX_SIZE):
    """
    Read a text file as UTF-8, replacing undecodable bytes with U+FFFD.

    Files above max_size and empty files are rejected. Files below
    STREAM_THRESHOLD are read in one go, larger ones chunk by chunk.
    """
    path = Path(path)
    size = path.stat().st_size

    if size > max_size:
        raise FileAccessError(
            f"File is too large: {math.floor(size / 1024 / 1024 + 0.5)}MB. "
            f"Maximum size is {max_size / 1024 / 1024:g}MB."
        )
    if size == 0:
        raise FileAccessError("File is empty")

    if size < STREAM_THRESHOLD:
        return path.read_text(encoding='utf-8', errors='replace')

    logger.debug("streaming %s (%d bytes)", path, size)
    chunks = []
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), ''):
            chunks.append(chunk)
    return ''.join(chunks)


def write_file(path, content):
    path = Path(path)
    encoded_size = len(content.encode('utf-8'))

    if encoded_size < STREAM_THRESHOLD:
        path.write_text(content, encoding='utf-8')
        return

    logger.debug("streaming %d bytes to %s", encoded_size, path)
    with open(path, 'w', encoding='utf-8') as f:
        for start in range(0, len(content), CHUNK_SIZE):
            f.write(content[start:start + CHUNK_SIZE])
