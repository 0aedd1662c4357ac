# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI structure: an ordered list of sections,
each one an ordered `key: value` dict of strings.

Typed values are NOT stored. They're converted on demand,
see `pyrampastring.conversions`.
As for reading, writing and `[INISystem]` inheritance, just see `ini.parser`.
"""

from collections.abc import Iterable, Mapping, MutableMapping
from os import sep
from typing import Callable, Iterator, TypeVar

from ..conversions import (
    BooleanStringStyle,
    bool_from_string,
    bool_to_string,
    double_from_string,
    float_from_string,
    format_fixed,
    format_number,
    format_single,
    int_from_string,
)

T = TypeVar('T')

_NULL_PAIR = 'INI keys cannot have None key names or values.'


class IniKeyExistsError(KeyError):
    """Raised by the strict `IniSection.add_key()`."""
    pass


class IniSectionExistsError(KeyError):
    """Raised when a section name is already taken in the document."""
    pass


class IniSection(MutableMapping[str, str]):
    """A `[section]`, which is simply an ordered dict of strings.

    Setting an item replaces the old value in place (keeps its position),
    or appends the pair if the key is new.
    Use `add_key()` if duplicated keys should be an error instead.
    """

    def __init__(
        self, section_name: str, /,
        pairs: Mapping[str, str] | Iterable[tuple[str, str]] | None = None
    ) -> None:
        if section_name is None:
            raise ValueError('INI sections cannot have a None name.')
        self._name = section_name
        self._data: dict[str, str] = {}
        if pairs:
            self.update(pairs)

    @property
    def name(self) -> str:
        """Read only. Rename via `IniFile.rename_section()`."""
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.add_or_replace_key(key, value)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniSection):
            return NotImplemented
        return (self._name == other._name
                and list(self._data.items()) == list(other._data.items()))

    def clear(self) -> None:
        self._data.clear()

    def copy(self) -> 'IniSection':
        return IniSection(self._name, self._data)

    def add_key(self, key: str, value: str) -> None:
        """Strictly add a pair. Raises `IniKeyExistsError` on conflict."""
        if key is None or value is None:
            raise ValueError(_NULL_PAIR)
        if key in self._data:
            raise IniKeyExistsError(
                f'The key "{key}" already exists in {self}.')
        self._data[key] = value

    def add_or_replace_key(self, key: str, value: str) -> None:
        if key is None or value is None:
            raise ValueError(_NULL_PAIR)
        self._data[key] = value

    def remove_key(self, key: str) -> None:
        """Unlike `del`, silently ignores missing keys."""
        self._data.pop(key, None)

    def key_exists(self, key: str) -> bool:
        return key in self._data

    # getters, never raise on bad values.
    def get_string(self, key: str, default: str) -> str:
        return self._data.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        return int_from_string(self._data.get(key), default)

    def get_double(self, key: str, default: float) -> float:
        return double_from_string(self._data.get(key), default)

    def get_float(self, key: str, default: float) -> float:
        return float_from_string(self._data.get(key), default)

    def get_bool(self, key: str, default: bool) -> bool:
        return bool_from_string(self._data.get(key), default)

    def get_list(
        self, key: str,
        separator: str = ',',
        converter: Callable[[str], T] = str,  # type: ignore[assignment]
    ) -> list[T]:
        """Split the value, dropping empty parts.

        A missing key gives an empty list, never `None`.
        """
        value = self._data.get(key, '')
        return [converter(i) for i in value.split(separator) if i]

    def get_path_string(self, key: str, default: str) -> str:
        """Value with both `/` and `\\` turned into `os.sep`."""
        return self.get_string(key, default).replace(
            '/', sep).replace('\\', sep)

    # setters, upsert.
    def set_string(self, key: str, value: str) -> None:
        self.add_or_replace_key(key, value)

    def set_int(self, key: str, value: int) -> None:
        self.add_or_replace_key(key, format_number(int(value)))

    def set_double(self, key: str, value: float) -> None:
        self.add_or_replace_key(key, format_number(float(value)))

    def set_float(
        self, key: str, value: float, decimals: int | None = None
    ) -> None:
        """Written at single precision, or in fixed point
        of `decimals` digits when given."""
        self.add_or_replace_key(
            key,
            format_single(float(value)) if decimals is None
            else format_fixed(value, decimals))

    def set_bool(
        self, key: str, value: bool,
        style: BooleanStringStyle = BooleanStringStyle.TRUEFALSE
    ) -> None:
        self.add_or_replace_key(key, bool_to_string(value, style))

    def set_list(
        self, key: str, values: Iterable[object], separator: str = ','
    ) -> None:
        self.add_or_replace_key(key, separator.join(str(i) for i in values))


class IniFile(MutableMapping[str, IniSection]):
    """INI document: sections in order, no two with the same name.

    Section-scoped getters are also available here, with a leading
    `section` argument. They give back the default when the section
    is missing, while setters create (append) it.
    """

    def __init__(
        self,
        file_name: str | None = None, *,
        allow_new_sections: bool = True,
        comment: str | None = None,
        encoding: str | None = None
    ) -> None:
        self.file_name = file_name
        # False: the parser only fills sections added beforehand.
        self.allow_new_sections = allow_new_sections
        self.comment = comment
        self.encoding = encoding
        self.__sections: list[IniSection] = []
        self.__last_index = 0

    def __find(self, name: str) -> int:
        for i, sect in enumerate(self.__sections):
            if sect.name == name:
                return i
        return -1

    def __getitem__(self, key: str) -> IniSection:
        if (ret := self.get_section(key)) is None:
            raise KeyError(key)
        return ret

    def __setitem__(
        self, key: str, value: IniSection | Mapping[str, str]
    ) -> None:
        # shouldn't keep ptr to external dict in key setting operation.
        section = IniSection(key, value)
        if (index := self.__find(key)) > -1:
            self.__sections[index] = section
        else:
            self.__sections.append(section)

    def __delitem__(self, key: str) -> None:
        if (index := self.__find(key)) == -1:
            raise KeyError(key)
        del self.__sections[index]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.__find(key) > -1

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter([i.name for i in self.__sections])

    def __repr__(self) -> str:
        return '<IniFile %s { .sections = %d }>' % (
            self.file_name or '(stream)', len(self.__sections))

    def clear(self) -> None:
        self.__sections.clear()
        self.__last_index = 0

    def sections(self) -> list[IniSection]:
        """The section objects themselves, in order."""
        return list(self.__sections)

    def _replace_sections(self, sections: Iterable[IniSection]) -> None:
        """for IniParser inheritance: take over another doc's sections."""
        self.__sections = list(sections)
        self.__last_index = 0

    @staticmethod
    def consolidate(first: 'IniFile', second: 'IniFile') -> None:
        """Merge `second` into `first`, with `second` winning conflicts."""
        for section in second.sections():
            target = first.get_section(section.name)
            if target is None:
                target = first.add_section(section.name)
            for key, value in section.items():
                target.add_or_replace_key(key, value)

    # sections
    def get_section(self, name: str) -> IniSection | None:
        # mostly accessed in order, so start from the last hit.
        for i in range(self.__last_index, len(self.__sections)):
            if self.__sections[i].name == name:
                self.__last_index = i
                return self.__sections[i]
        if (index := self.__find(name)) == -1:
            self.__last_index = 0
            return None
        self.__last_index = index
        return self.__sections[index]

    def section_exists(self, name: str) -> bool:
        return self.__find(name) > -1

    def add_section(self, section: str | IniSection) -> IniSection:
        """Append a section (by name or object) and return it."""
        if not isinstance(section, IniSection):
            section = IniSection(section)
        if self.__find(section.name) > -1:
            raise IniSectionExistsError(
                f'The section {section} already exists.')
        self.__sections.append(section)
        return section

    def remove_section(self, name: str) -> bool:
        """Remove the first section matching `name`, ignoring case."""
        folded = name.casefold()
        for i, sect in enumerate(self.__sections):
            if sect.name.casefold() == folded:
                del self.__sections[i]
                self.__last_index = 0
                return True
        return False

    def rename_section(self, old: str, new: str) -> bool:
        """Rename a section in place.

        Returns:
            `True` if succeed, otherwise `False`.
            May not success if `old` is not found or `new` already exists.
        """
        if (index := self.__find(old)) == -1 or self.__find(new) > -1:
            return False
        self.__sections[index]._name = new
        return True

    def erase_section_keys(self, name: str) -> None:
        """Clear all pairs but keep the (now empty) section."""
        if (section := self.get_section(name)) is not None:
            section.clear()

    def move_section_to_first(self, name: str) -> None:
        if (index := self.__find(name)) == -1:
            return
        self.__sections.insert(0, self.__sections.pop(index))
        self.__last_index = 0

    def combine_sections(self, first: str, second: str) -> None:
        """Overlay `second` on a copy of `first`, and the result then
        takes the place of `second`. `first` itself is untouched."""
        if (first_index := self.__find(first)) == -1:
            return
        if (second_index := self.__find(second)) == -1:
            return
        second_section = self.__sections[second_index]
        combined = IniSection(
            second_section.name, self.__sections[first_index])
        combined.update(second_section)
        self.__sections[second_index] = combined

    def get_sections(self) -> list[str]:
        return [i.name for i in self.__sections]

    def get_section_keys(self, name: str) -> list[str] | None:
        """Key names of a section, `None` if the section doesn't exist.

        Note that an existing but empty section gives `[]` instead.
        """
        if (section := self.get_section(name)) is None:
            return None
        return list(section.keys())

    def __ensure(self, name: str) -> IniSection:
        if (section := self.get_section(name)) is None:
            section = self.add_section(name)
        return section

    # keys
    def key_exists(self, section: str, key: str) -> bool:
        return (sect := self.get_section(section)) is not None \
            and sect.key_exists(key)

    def remove_key(self, section: str, key: str) -> None:
        if (sect := self.get_section(section)) is not None:
            sect.remove_key(key)

    def get_string(self, section: str, key: str, default: str) -> str:
        if (sect := self.get_section(section)) is None:
            return default
        return sect.get_string(key, default)

    def try_get_string(
        self, section: str, key: str, default: str
    ) -> tuple[str, bool]:
        """Like `get_string()`, but also tells whether the key was found."""
        if (sect := self.get_section(section)) is None or key not in sect:
            return default, False
        return sect[key], True

    def get_int(self, section: str, key: str, default: int) -> int:
        if (sect := self.get_section(section)) is None:
            return default
        return sect.get_int(key, default)

    def get_double(self, section: str, key: str, default: float) -> float:
        if (sect := self.get_section(section)) is None:
            return default
        return sect.get_double(key, default)

    def get_float(self, section: str, key: str, default: float) -> float:
        if (sect := self.get_section(section)) is None:
            return default
        return sect.get_float(key, default)

    def get_bool(self, section: str, key: str, default: bool) -> bool:
        if (sect := self.get_section(section)) is None:
            return default
        return sect.get_bool(key, default)

    def get_list(
        self, section: str, key: str,
        separator: str = ',',
        converter: Callable[[str], T] = str,  # type: ignore[assignment]
    ) -> list[T]:
        if (sect := self.get_section(section)) is None:
            return []
        return sect.get_list(key, separator, converter)

    def get_path_string(self, section: str, key: str, default: str) -> str:
        if (sect := self.get_section(section)) is None:
            return default
        return sect.get_path_string(key, default)

    def set_string(self, section: str, key: str, value: str) -> None:
        self.__ensure(section).set_string(key, value)

    def set_int(self, section: str, key: str, value: int) -> None:
        self.__ensure(section).set_int(key, value)

    def set_double(self, section: str, key: str, value: float) -> None:
        self.__ensure(section).set_double(key, value)

    def set_float(
        self, section: str, key: str, value: float,
        decimals: int | None = None
    ) -> None:
        self.__ensure(section).set_float(key, value, decimals)

    def set_bool(
        self, section: str, key: str, value: bool,
        style: BooleanStringStyle = BooleanStringStyle.TRUEFALSE
    ) -> None:
        self.__ensure(section).set_bool(key, value, style)

    def set_list(
        self, section: str, key: str,
        values: Iterable[object], separator: str = ','
    ) -> None:
        self.__ensure(section).set_list(key, values, separator)
