# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/10 01:15:56
# @Author : Kariko Lin

from enum import Enum


class IniMark(str, Enum):
    COMMENT = ';'
    SECTION_BEGIN = '['
    SECTION_END = ']'
    PAIRING = '='
    TEXT_BLOCK_BEGIN = '$$$TextBlockBegin$$$'
    TEXT_BLOCK_END = '$$$TextBlockEnd$$$'


# `[INISystem]` -> `BasedOn=base.ini`, relative to the INI's own folder.
INI_SYSTEM_SECTION = 'INISystem'
BASED_ON_KEY = 'BasedOn'

# always CRLF, whatever the platform is.
NEWLINE = '\r\n'
