# -*- encoding: utf-8 -*-
# @File   : formats.py
# @Time   : 2024/10/13 16:42:08
# @Author : Kariko Lin

"""Exchange an INI document with JSON or YAML.

Only sections and their pairs (in order), plus the leading comment,
get carried. `BasedOn` is NOT resolved when reading these.
"""

import json
from typing import Any, TypedDict

import yaml

from .model import IniFile
from ..abstract import FileHandler


def _to_text(value: Any) -> str:
    # may there be some pure digits or yes/no considered as int/bool.
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'True' if value else 'False'
    return str(value)


def _fill(ins: IniFile, data: Any) -> IniFile:
    if not isinstance(data, dict | None):
        raise ValueError(
            f'Sections of "{ins.file_name}" should be a mapping, '
            f'got {type(data).__name__}.')
    for section, pairs in (data or {}).items():
        if not isinstance(pairs, dict | None):
            raise ValueError(
                f'[{section}] of "{ins.file_name}" should be a mapping '
                f'of keys, got {type(pairs).__name__}.')
        sect = ins.get_section(str(section))
        if sect is None:
            sect = ins.add_section(str(section))
        for k, v in (pairs or {}).items():
            sect[str(k)] = _to_text(v)
    return ins


def _dump(ins: IniFile) -> dict[str, dict[str, str]]:
    return {i.name: dict(i.items()) for i in ins.sections()}


class _IniJson(TypedDict, total=False):
    protocol: int
    comment: str | None
    sections: dict[str, dict[str, str]]


class IniJsonParser(FileHandler[IniFile]):
    JSON_TEMPLATE = _IniJson(protocol=1)

    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename, encoding)

    def read(self) -> IniFile:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            src: _IniJson = json.load(fp)
        if not isinstance(src, dict):
            raise ValueError(
                f'"{self._fn}" should hold a JSON object, '
                f'got {type(src).__name__}.')
        ret = IniFile(self._fn, comment=src.get('comment'))
        return _fill(ret, src.get('sections'))

    def write(self, instance: IniFile, indent: int = 2) -> None:
        ret = self.JSON_TEMPLATE.copy()
        ret['comment'] = instance.comment
        ret['sections'] = _dump(instance)
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(ret, fp, ensure_ascii=False, indent=indent)


class IniYamlParser(FileHandler[IniFile]):
    """Sections as top level mappings, pairs below.

    ```yaml
    # the leading comment
    Section:
      Key: Value
    ```
    """

    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename, encoding)

    def read(self) -> IniFile:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            text = fp.read()
        comment = None
        if (first := text.split('\n', 1)[0]).startswith('# '):
            comment = first[2:].rstrip('\r')
        return _fill(
            IniFile(self._fn, comment=comment), yaml.safe_load(text))

    def write(self, instance: IniFile, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            if instance.comment:
                fp.write(f'# {instance.comment}\n')
            yaml.safe_dump(
                _dump(instance), fp,
                allow_unicode=True, sort_keys=False, indent=indent)
