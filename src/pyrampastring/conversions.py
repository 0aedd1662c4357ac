# -*- encoding: utf-8 -*-
# @File   : conversions.py
# @Time   : 2024/10/12 21:03:41
# @Author : Kariko Lin

"""String <-> primitive conversions shared by the INI model.

Every `*_from_string` here is total: bad input gives back the default,
nothing is raised. Numbers always use the invariant format,
i.e. `.` as decimal point and no thousands separator.
"""

from decimal import Decimal
from enum import Enum
from math import isinf, isnan
from re import compile as regex
from struct import pack, unpack
from typing import Iterable, Sequence

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

_INT_PATTERN = regex(r'\s*[+-]?\d+\s*')
_REAL_PATTERN = regex(r'\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*')
_REAL_SYMBOLS = {
    'nan': float('nan'),
    'infinity': float('inf'),
    '+infinity': float('inf'),
    '-infinity': float('-inf'),
}


class BooleanStringStyle(int, Enum):
    """How a boolean gets written back into an INI value."""
    TRUEFALSE = 0
    YESNO = 1
    TRUEFALSE_LOWERCASE = 2
    YESNO_LOWERCASE = 3
    ONEZERO = 4


_BOOL_STRINGS: dict[BooleanStringStyle, tuple[str, str]] = {
    BooleanStringStyle.TRUEFALSE: ('True', 'False'),
    BooleanStringStyle.YESNO: ('Yes', 'No'),
    BooleanStringStyle.TRUEFALSE_LOWERCASE: ('true', 'false'),
    BooleanStringStyle.YESNO_LOWERCASE: ('yes', 'no'),
    BooleanStringStyle.ONEZERO: ('1', '0'),
}


def bool_from_string(value: str | None, default: bool) -> bool:
    """Only the first character matters:

    - `t`, `y`, `1`, `a`, `e` (True, Yes, 1, Approved, Enabled) -> `True`
    - `n`, `f`, `0` (No, False, 0) -> `False`
    - others, or empty -> `default`
    """
    if not value:
        return default
    match value[0].lower():
        case 't' | 'y' | '1' | 'a' | 'e':
            return True
        case 'n' | 'f' | '0':
            return False
        case _:
            return default


def bool_to_string(
    value: bool,
    style: BooleanStringStyle = BooleanStringStyle.TRUEFALSE
) -> str:
    yes, no = _BOOL_STRINGS[BooleanStringStyle(style)]
    return yes if value else no


def int_from_string(value: str | None, default: int) -> int:
    """Parse a 32-bit integer, like `Int32.Parse` with invariant culture."""
    if not value or not _INT_PATTERN.fullmatch(value):
        return default
    ret = int(value)
    if not INT32_MIN <= ret <= INT32_MAX:
        return default
    return ret


def double_from_string(value: str | None, default: float) -> float:
    if not value:
        return default
    if _REAL_PATTERN.fullmatch(value):
        try:
            return float(value)
        except ValueError:
            return default
    return _REAL_SYMBOLS.get(value.strip().lower(), default)


def float_from_string(value: str | None, default: float) -> float:
    """Same as `double_from_string()`, but rounded to single precision."""
    ret = double_from_string(value, default)
    try:
        return unpack('<f', pack('<f', ret))[0]
    except OverflowError:
        return default


def format_number(value: int | float) -> str:
    """Invariant, shortest round-trip text of a number.

    Integral floats lose their `.0` (`1.0` -> `1`),
    exponents are written uppercase (`1E+20`).
    """
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    if isnan(value):
        return 'NaN'
    if isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    ret = repr(value)
    if 'e' not in ret and abs(value) >= 1e15:
        # exponent form from 1E+15 on
        return format(Decimal(ret).normalize(), 'E')
    return ret.replace('e', 'E')


def format_single(value: float) -> str:
    """Shortest text that reads back as the same single precision value.

    `1 / 3` -> `0.33333334`, where `format_number()` gives 16 digits.
    """
    try:
        single = unpack('<f', pack('<f', value))[0]
    except OverflowError:
        single = float('inf') if value > 0 else float('-inf')
    if isnan(single) or isinf(single):
        return format_number(single)
    for digits in range(1, 10):
        ret = '%.*g' % (digits, single)
        if unpack('<f', pack('<f', float(ret)))[0] == single:
            break
    return ret.replace('e', 'E')


def format_fixed(value: float, decimals: int) -> str:
    """Fixed-point text with exactly `decimals` digits after the point."""
    if decimals < 0:
        raise ValueError(f'decimals must not be negative, got {decimals}')
    return f'{value:.{decimals}f}'


def int_array_from_strings(array: Sequence[str]) -> list[int]:
    """Strict counterpart of `int_from_string()`: raises on bad items."""
    return [int(i) for i in array]


def bool_array_to_bytes(array: Sequence[bool]) -> bytes:
    """Pack 8 booleans per byte, least significant bit first."""
    ret = bytearray((len(array) + 7) >> 3)
    for i, flag in enumerate(array):
        if flag:
            ret[i >> 3] |= 1 << (i & 7)
    return bytes(ret)


def byte_to_bool_array(b: int) -> list[bool]:
    return [(b >> i) & 1 == 1 for i in range(8)]


def bytes_to_bool_array(data: Iterable[int]) -> list[bool]:
    ret: list[bool] = []
    for b in data:
        ret.extend(byte_to_bool_array(b))
    return ret
