# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/11 23:12:40
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Reads one file into a `T`. Read only: there is no `write()`."""

    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = fspath(filename)

    @property
    def filename(self) -> str:
        return self._fn

    def _readall(self) -> bytes:
        """Whole file at once. `OSError` is left to the caller."""
        with open(self._fn, 'rb') as fp:
            return fp.read()

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
