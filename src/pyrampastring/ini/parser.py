# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Reading and writing the INI text format.

```ini
; comments run from `;` to the end of line, no escaping.
[Section]
Key = Value
BareFlag            ; a key with empty value
Msg = $$$TextBlockBegin$$$
raw lines ; not a comment here
$$$TextBlockEnd$$$

[INISystem]
BasedOn = base.ini  ; merged underneath this file
```

Output is always CRLF terminated, whatever the platform is.
"""

import logging
from io import BufferedIOBase, RawIOBase, StringIO, TextIOBase
from os import PathLike, getcwd, sep
from os.path import abspath, dirname, exists, join, normpath
from typing import IO
from warnings import warn

import chardet

from .consts import BASED_ON_KEY, INI_SYSTEM_SECTION, NEWLINE, IniMark
from .model import IniFile, IniSection
from ..abstract import FileHandler

_log = logging.getLogger(__name__)


class IniParseError(ValueError):
    """To record fatal errors when parsing INI texts."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f'{message} (line {line_number})'
        super().__init__(message)
        self.line_number = line_number


class IniParser(FileHandler[IniFile]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        super().__init__(filename, encoding)

    @staticmethod
    def _decode(raw: bytes) -> tuple[str, str]:
        """Guess the codec of raw bytes. Returns the text and its codec."""
        codec = chardet.detect(raw)
        encoding = codec['encoding']
        if encoding is None or codec['confidence'] < 0.8:
            encoding = 'utf-8'

        # fallbacks
        try:
            buf = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            encoding = 'latin-1'
            buf = raw.decode(encoding)
        # ascii would break on the first non-ascii value written back.
        if encoding.lower() == 'ascii':
            encoding = 'utf-8'
        return buf, encoding

    @staticmethod
    def _read_text_block(buf: IO[str], line_number: int) -> tuple[str, int]:
        lines: list[str] = []
        while i := buf.readline():
            line_number += 1
            i = i.rstrip('\r\n')
            if i == IniMark.TEXT_BLOCK_END:
                return NEWLINE.join(lines), line_number
            lines.append(i)
        raise IniParseError('unterminated text block', line_number)

    @classmethod
    def _parse(
        cls, buf: IO[str], ins: IniFile,
        encoding: str | None, chain: frozenset[str]
    ) -> IniFile:
        this_sect: IniSection | None = None
        line_number = 0
        while i := buf.readline():
            line_number += 1
            i = i.rstrip('\r\n')
            if (comment := i.find(IniMark.COMMENT)) > -1:
                i = i[:comment]
            i = i.strip()
            if not i:
                continue

            if i[0] == IniMark.SECTION_BEGIN:
                if (end := i.find(IniMark.SECTION_END)) == -1:
                    raise IniParseError('invalid section header', line_number)
                name = i[1:end]
                this_sect = ins.get_section(name)
                if this_sect is None and ins.allow_new_sections:
                    this_sect = ins.add_section(name)
                # else: not registered, skip its pairs.
                continue

            if this_sect is None:
                continue

            key, _, val = i.partition(IniMark.PAIRING)
            key, val = key.strip(), val.strip()
            if val == IniMark.TEXT_BLOCK_BEGIN:
                val, line_number = cls._read_text_block(buf, line_number)
            this_sect.add_or_replace_key(key, val)

        cls._apply_base(ins, encoding, chain)
        return ins

    @classmethod
    def _apply_base(
        cls, ins: IniFile, encoding: str | None, chain: frozenset[str]
    ) -> None:
        """Merge this doc on top of the one `[INISystem]BasedOn` names."""
        based_on = ins.get_string(INI_SYSTEM_SECTION, BASED_ON_KEY, '')
        if not based_on:
            return
        root = dirname(ins.file_name) if ins.file_name else getcwd()
        path = normpath(join(
            root, based_on.replace('/', sep).replace('\\', sep)))
        if abspath(path) in chain:
            warn(
                f'INI "{ins.file_name}" is based on "{path}", '
                'which is already being read. Inheritance loop ignored.')
            return

        base = cls(path, encoding)._read(IniFile(path), chain)
        IniFile.consolidate(base, ins)
        ins._replace_sections(base.sections())

    @classmethod
    def readstream(
        cls, buf: TextIOBase | IO[str] | IO[bytes],
        ins: IniFile | None = None
    ) -> IniFile:
        """Read from a stream, in text or bytes.

        Pass a prepared `ins` to parse into it, e.g. with
        `allow_new_sections=False` and sections registered beforehand.
        `BasedOn` resolves against `ins.file_name` if set,
        otherwise the current working directory.
        """
        if ins is None:
            ins = IniFile()
        if isinstance(buf, (RawIOBase, BufferedIOBase)):
            text, ins.encoding = cls._decode(buf.read())
            buf = StringIO(text, newline=None)
        chain = frozenset([abspath(ins.file_name)] if ins.file_name else [])
        return cls._parse(buf, ins, ins.encoding, chain)

    def _load_text(self) -> tuple[str, str]:
        if self._codec is not None:
            # when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            try:
                with open(self._fn, 'r', encoding=self._codec) as fp:
                    return fp.read().removeprefix('\ufeff'), self._codec
            except UnicodeDecodeError:
                _log.debug(
                    'Failed to decode "%s" as %s, detecting instead.',
                    self._fn, self._codec)
        with open(self._fn, 'rb') as fp:
            return self._decode(fp.read())

    def _read(self, ins: IniFile, chain: frozenset[str]) -> IniFile:
        chain = chain | {abspath(self._fn)}
        if not exists(self._fn):
            _log.debug('INI "%s" not found, left empty.', self._fn)
            return ins
        text, ins.encoding = self._load_text()
        return self._parse(
            StringIO(text, newline=None), ins, self._codec, chain)

    def read(self, instance: IniFile | None = None) -> IniFile:
        """Read the file this parser is bound to.

        A missing file is not an error, just an empty document.
        """
        if instance is None:
            instance = IniFile()
        instance.file_name = self._fn
        return self._read(instance, frozenset())

    def reload(self, instance: IniFile) -> IniFile:
        """Drop everything in `instance` and parse the file again."""
        instance.clear()
        return self.read(instance)

    @staticmethod
    def _section_to_str(section: IniSection) -> str:
        ret = f'[{section.name}]{NEWLINE}'
        for k, v in section.items():
            ret += f'{k}{IniMark.PAIRING.value}{v}{NEWLINE}'
        return ret + NEWLINE

    @classmethod
    def dumps(cls, instance: IniFile) -> str:
        ret = ''
        if instance.comment:
            ret += f'{IniMark.COMMENT.value} {instance.comment}{NEWLINE * 2}'
        for i in instance.sections():
            ret += cls._section_to_str(i)
        return ret + NEWLINE

    @classmethod
    def writestream(
        cls, instance: IniFile, buf: TextIOBase | IO[str] | IO[bytes]
    ) -> None:
        """Write to a stream. Text streams should not translate newlines."""
        text = cls.dumps(instance)
        if isinstance(buf, (RawIOBase, BufferedIOBase)):
            buf.write(text.encode(instance.encoding or 'utf-8'))
        else:
            buf.write(text)

    def write(self, instance: IniFile) -> None:
        """Save to the bound file, truncating it.

        Multi-line values are NOT wrapped back into text blocks.
        If some value doesn't fit the codec, `UnicodeEncodeError` is raised
        and the file is left untouched.
        """
        codec = self._codec or instance.encoding or 'utf-8'
        raw = self.dumps(instance).encode(codec)
        with open(self._fn, 'wb') as fp:
            fp.write(raw)

    def __str__(self) -> str:
        return 'INI file: ' + super().__str__() + f' ({self._codec})'
