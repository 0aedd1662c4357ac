# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .consts import IniMark
from .formats import IniJsonParser, IniYamlParser
from .model import (
    IniFile,
    IniKeyExistsError,
    IniSection,
    IniSectionExistsError
)
from .parser import IniParseError, IniParser
from .properties import (
    BoolProperty,
    DoubleProperty,
    EnumProperty,
    IniProperty,
    IntProperty,
    StringProperty
)

__all__ = [
    'IniMark',
    'IniFile', 'IniSection',
    'IniKeyExistsError', 'IniSectionExistsError',
    'IniParser', 'IniParseError',
    'IniJsonParser', 'IniYamlParser',
    'IniProperty', 'StringProperty', 'IntProperty',
    'DoubleProperty', 'BoolProperty', 'EnumProperty',
]
