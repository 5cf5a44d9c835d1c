# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/11/03 00:12:48
# @Author : Kariko Lin

"""File front-end of `Document`.

A `VConfigParser` is bound to one path and remembers the format options
(encoding, comment marker, delimiter), so the same options are used
to read the file and to write it back.
"""

from io import TextIOBase
from os import PathLike
from os.path import exists
from warnings import warn

from .model import Document
from ..abstract import FileHandler
from ..fileio import read_text, write_text


class VConfigParser(FileHandler[Document]):
    def __init__(
        self, filename: str | PathLike, encoding: str | None = None, *,
        comment: str = '#', delimiter: str = '='
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._comment = comment
        self._delimiter = delimiter

    def readstream(self, buf: TextIOBase) -> Document:
        """Parse an already decoded text stream.

        If no special need, just call `self.read()`.
        """
        return Document.from_string(
            buf.read(), comment=self._comment, delimiter=self._delimiter)

    def read(self) -> Document:
        """Read the file bound to this parser.

        When no encoding was given, `chardet` guesses it.
        """
        return self._read_path(self.filename)

    def _read_path(self, path: str | PathLike) -> Document:
        return Document.from_string(
            read_text(path, self._codec),
            comment=self._comment, delimiter=self._delimiter)

    def readfiles(
        self, *splited: str | PathLike,
        instance: Document | None = None
    ) -> Document:
        """Besides the bound file, read every file in `splited`, in order,
        and merge them all into one document.

        With `instance` given, merge into it instead of reading the
        bound file. Missing files get a warning and are skipped;
        a malformed one stops everything with `ParseError`.
        """
        if instance is None:
            instance = self.read()
        for i in splited:
            if not exists(i):
                warn(f'While reading `{self.filename}`, `{i}` was not found.')
                continue
            instance.merge(self._read_path(i))
        return instance

    def write(
        self, instance: Document, *,
        blank_lines: int = 1,
        file_mode: int = 0o666
    ) -> None:
        """Save to the bound file, overwriting it.

        Note:
        1. Comments read from the file are NOT written back.
        2. NOT atomic. If it fails halfway the file content is undefined.
        3. Content this parser could not read back raises `SerializeError`
           before the file is touched.
        """
        text = instance.to_string(
            delimiter=self._delimiter, blank_lines=blank_lines,
            comment=self._comment)
        write_text(
            self.filename, text,
            self._codec or 'utf-8', file_mode)

    def __str__(self) -> str:
        return "VConfig file: " + super().__str__() + f"({self._codec})"
