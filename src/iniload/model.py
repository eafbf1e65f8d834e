# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/11 22:31:06
# @Author : Kariko Lin

"""
Basically INI Structure, typed and read only.

Unlike a `dict`-based model, duplicates are kept as they are:
- `[x]` appearing twice gives two separate sections;
- `k` appearing twice in a section gives two keys.

Every lookup by name resolves against the *first* match in file order.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple

from .consts import IniKeyType


@dataclass(frozen=True, slots=True)
class IniKey:
    """A key with exactly one typed value. `type` tells which one."""
    name: str
    type: IniKeyType
    value: int | float | str

    def __str__(self) -> str:
        return f'{self.name}={self.value}'


class LookupStatus(Enum):
    FOUND = 'found'
    NO_SECTION = 'no such section'
    NO_KEY = 'no such key'
    TYPE_MISMATCH = 'type mismatch'


class IniLookup(NamedTuple):
    """Result of `IniDocument.lookup()`.

    `key` is set for both `FOUND` and `TYPE_MISMATCH`,
    so callers can still see what was actually stored.
    """
    status: LookupStatus
    key: IniKey | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


class IniSection(Sequence[IniKey]):
    """INI 小节。按文件顺序保存所有键（允许重名，不做去重）。

    按名查找时总是取*第一个*同名键。
    类型不符或找不到时，`get_*()` 一律返回调用方给的默认值，不抛异常。
    """

    def __init__(self, section_name: str, keys: Iterable[IniKey] = ()) -> None:
        self._name = section_name
        self.__keys: tuple[IniKey, ...] = tuple(keys)

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, index: int | slice) -> IniKey | Sequence[IniKey]:
        return self.__keys[index]

    def __len__(self) -> int:
        return len(self.__keys)

    def __iter__(self) -> Iterator[IniKey]:
        return iter(self.__keys)

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self.__keys))

    def find(self, key: str) -> IniKey | None:
        for i in self.__keys:
            if i.name == key:
                return i
        return None

    def has_key(self, key: str) -> bool:
        return self.find(key) is not None

    def _typed(self, key: str, expected: IniKeyType, default):
        found = self.find(key)
        if found is None or found.type is not expected:
            return default
        return found.value

    def get_int(self, key: str, default: int) -> int:
        return self._typed(key, IniKeyType.INT, default)

    def get_float(self, key: str, default: float) -> float:
        return self._typed(key, IniKeyType.FLOAT, default)

    def get_string(self, key: str, default: str) -> str:
        return self._typed(key, IniKeyType.STRING, default)

    def to_dict(self) -> dict[str, int | float | str]:
        """获取该小节的键值对快照。重名键只保留第一个。"""
        ret: dict[str, int | float | str] = {}
        for i in self.__keys:
            ret.setdefault(i.name, i.value)
        return ret

    def _release(self) -> None:
        self.__keys = ()


class IniDocument(Sequence[IniSection]):
    """INI 文件表示。由`IniParser`一次性构建，此后只读。

        ```ini
        key = 1     ; 不属于任何小节的键，归入名为 "" 的匿名小节。

        [section]
        name = "42"  ; 带引号：永远是字符串。
        ratio = 3.5
        [section]   ; 另起一个新小节，不与上面的合并。
        ```

    按名查找时只看第一个同名小节；要取全部同名小节请用`self.sections_named()`。
    """

    def __init__(self, sections: Iterable[IniSection] = ()) -> None:
        self.__sections: tuple[IniSection, ...] = tuple(sections)

    def __getitem__(
        self, index: int | slice
    ) -> IniSection | Sequence[IniSection]:
        return self.__sections[index]

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[IniSection]:
        return iter(self.__sections)

    def __repr__(self) -> str:
        return '<IniDocument { .sections = %d }>' % len(self.__sections)

    def section(self, name: str) -> IniSection | None:
        """First section called `name`, or `None`."""
        for i in self.__sections:
            if i.name == name:
                return i
        return None

    def sections_named(self, name: str) -> list[IniSection]:
        return [i for i in self.__sections if i.name == name]

    def num_sections(self) -> int:
        return len(self.__sections)

    def has_section(self, name: str) -> bool:
        return self.section(name) is not None

    def num_keys(self, section: str) -> int:
        found = self.section(section)
        return 0 if found is None else len(found)

    def has_key(self, section: str, key: str) -> bool:
        found = self.section(section)
        return found is not None and found.has_key(key)

    def get_int(self, section: str, key: str, default: int) -> int:
        found = self.section(section)
        return default if found is None else found.get_int(key, default)

    def get_float(self, section: str, key: str, default: float) -> float:
        found = self.section(section)
        return default if found is None else found.get_float(key, default)

    def get_string(self, section: str, key: str, default: str) -> str:
        found = self.section(section)
        return default if found is None else found.get_string(key, default)

    def lookup(
        self, section: str, key: str,
        expected: IniKeyType | None = None
    ) -> IniLookup:
        """Like `get_*()`, but tells a missing key from a mistyped one.

        Without `expected` any stored type counts as `FOUND`.
        """
        found = self.section(section)
        if found is None:
            return IniLookup(LookupStatus.NO_SECTION)
        item = found.find(key)
        if item is None:
            return IniLookup(LookupStatus.NO_KEY)
        if expected is not None and item.type is not expected:
            return IniLookup(LookupStatus.TYPE_MISMATCH, item)
        return IniLookup(LookupStatus.FOUND, item)

    def free(self) -> None:
        """Drop every section and key at once.

        The document reads as empty afterwards; it is not meant to be reused.
        """
        for i in self.__sections:
            i._release()
        self.__sections = ()
