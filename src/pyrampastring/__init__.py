# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : Kariko Lin

from .conversions import BooleanStringStyle
from .ini import (
    IniFile,
    IniKeyExistsError,
    IniParseError,
    IniParser,
    IniSection,
    IniSectionExistsError
)
from .logger import Logger

__all__ = [
    'BooleanStringStyle',
    'IniFile', 'IniSection', 'IniParser',
    'IniParseError', 'IniKeyExistsError', 'IniSectionExistsError',
    'Logger'
]

__version__ = '0.1.0'
