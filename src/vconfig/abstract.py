# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath


class FileHandler[T](metaclass=ABCMeta):
    """Reads and writes one `T` from / to a file bound at init."""

    def __init__(self, filename: str | PathLike) -> None:
        self._fn = fspath(filename)

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
