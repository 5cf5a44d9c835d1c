# -*- encoding: utf-8 -*-
# @File   : fileio.py
# @Time   : 2024/11/02 21:40:37
# @Author : Kariko Lin

"""Whole-file read and write.

Writes are NOT atomic: if writing fails halfway, what is left in the target
file is undefined. Write to a temporary path and `os.replace()` it yourself
if you need that.
"""

import codecs
import logging
import os
from os import PathLike

from chardet import detect as guess_codec

__all__ = ['read_text', 'write_text']

logger = logging.getLogger(__name__)

# below that, chardet is mostly guessing.
MIN_CONFIDENCE = 0.8
FALLBACK_ENCODING = 'latin-1'  # never fails to decode


def _strip_bom(encoding: str) -> str:
    # plain utf-8 keeps a leading BOM as "\ufeff".
    if codecs.lookup(encoding).name == 'utf-8':
        return 'utf-8-sig'
    return encoding


def decode(raw: bytes, encoding: str | None = None) -> str:
    """Decode `raw` with `encoding`, or with what `chardet` guesses.

    UTF-8 input may start with a BOM, which is dropped.
    """
    if encoding is not None:
        return raw.decode(_strip_bom(encoding))

    codec = guess_codec(raw)
    if codec['encoding'] is None or codec['confidence'] < MIN_CONFIDENCE:
        codec = {'encoding': 'utf-8', 'confidence': 0.0}
    logger.debug('Decoding as %s (confidence %.2f)',
                 codec['encoding'], codec['confidence'])
    try:
        return raw.decode(_strip_bom(codec['encoding']))
    except UnicodeDecodeError:
        logger.debug('%s failed, falling back to %s',
                     codec['encoding'], FALLBACK_ENCODING)
        return raw.decode(FALLBACK_ENCODING)


def read_text(path: str | PathLike, encoding: str | None = None) -> str:
    """Read the whole file at `path`.

    If `encoding` is None, it is detected. `OSError` propagates.
    """
    with open(path, 'rb') as fp:
        raw = fp.read()
    logger.debug('Read %d bytes from %s', len(raw), path)
    return decode(raw, encoding)


def write_text(
    path: str | PathLike, text: str,
    encoding: str = 'utf-8', mode: int = 0o666
) -> None:
    """Overwrite the file at `path` with `text`.

    A new file gets the permission bits `mode` (umask applies);
    an existing one keeps its own.
    """
    data = text.encode(encoding)
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, 'O_BINARY', 0)
    fd = os.open(path, flags, mode)
    with open(fd, 'wb') as fp:
        fp.write(data)
    logger.debug('Wrote %d bytes to %s', len(data), path)
