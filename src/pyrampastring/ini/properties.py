# -*- encoding: utf-8 -*-
# @File   : properties.py
# @Time   : 2024/10/13 15:20:55
# @Author : Kariko Lin

"""Typed INI values that remember their default.

```python
width = IntProperty(800)
width.parse_value(ini, 'Resolution', 'Width')
width.get()  # parsed value, or 800
```
"""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from .model import IniFile

T = TypeVar('T')
E = TypeVar('E', bound=Enum)


@dataclass
class IniProperty(Generic[T], metaclass=ABCMeta):
    default: T
    value: T = field(init=False)

    def __post_init__(self) -> None:
        self.value = self.default

    @abstractmethod
    def parse_value(self, ini: IniFile, section: str, key: str) -> None:
        raise NotImplementedError

    def get(self) -> T:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class StringProperty(IniProperty[str]):
    default: str = ''

    def parse_value(self, ini: IniFile, section: str, key: str) -> None:
        self.value = ini.get_string(section, key, self.default)


@dataclass
class IntProperty(IniProperty[int]):
    default: int = 0

    def parse_value(self, ini: IniFile, section: str, key: str) -> None:
        self.value = ini.get_int(section, key, self.default)


@dataclass
class DoubleProperty(IniProperty[float]):
    default: float = 0.0

    def parse_value(self, ini: IniFile, section: str, key: str) -> None:
        self.value = ini.get_double(section, key, self.default)


@dataclass
class BoolProperty(IniProperty[bool]):
    default: bool = False

    def parse_value(self, ini: IniFile, section: str, key: str) -> None:
        self.value = ini.get_bool(section, key, self.default)


@dataclass
class EnumProperty(IniProperty[E]):
    """Matched by member name, ignoring case.
    Unknown names keep the default."""

    def parse_value(self, ini: IniFile, section: str, key: str) -> None:
        enum_type = type(self.default)
        name = ini.get_string(section, key, self.default.name).strip()
        for member in enum_type:
            if member.name.casefold() == name.casefold():
                self.value = member
                return
        self.value = self.default
