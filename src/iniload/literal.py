# -*- encoding: utf-8 -*-
# @File   : literal.py
# @Time   : 2026/10/11 22:03:57
# @Author : Kariko Lin

"""Typing of unquoted INI values.

Rules follow what a C `strtol(s, &end, 0)` / `strtod()` pair would accept
when the *whole* text has to be consumed:

    ```ini
    a = 42       ; int
    b = 0x2A     ; int, hex
    c = 052      ; int, octal (so `08` is a float instead)
    d = 3.5      ; float
    e = 0x1.8p1  ; float, hex
    f = 42 apples  ; str, leftover characters
    ```
"""

import math
from re import IGNORECASE
from re import compile as regex
from struct import pack, unpack

from .consts import IniKeyType

_INT = regex(r'[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)')
_DEC_FLOAT = regex(
    r'[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
    r'|inf(?:inity)?|nan)',
    IGNORECASE)
_HEX_FLOAT = regex(
    r'[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)'
    r'(?:[pP][+-]?[0-9]+)?')


def parse_int(text: str) -> int | None:
    """`None` unless the whole `text` is a C-style integer literal."""
    if _INT.fullmatch(text) is None:
        return None
    sign, digits = (-1, text[1:]) if text[0] == '-' else (1, text.lstrip('+'))
    if digits[:2] in ('0x', '0X'):
        return sign * int(digits[2:], 16)
    if len(digits) > 1 and digits[0] == '0':
        return sign * int(digits[1:], 8)
    return sign * int(digits)


def narrow_float(value: float) -> float:
    """Round a double to the nearest single-precision value."""
    try:
        return unpack('f', pack('f', value))[0]
    except OverflowError:
        # finite but beyond FLT_MAX.
        return math.copysign(math.inf, value)


def parse_float(text: str) -> float | None:
    """`None` unless the whole `text` is a C-style float literal."""
    if _DEC_FLOAT.fullmatch(text) is not None:
        return narrow_float(float(text))
    if _HEX_FLOAT.fullmatch(text) is not None:
        # huge binary exponents overflow inside `fromhex` already.
        try:
            return narrow_float(float.fromhex(text))
        except OverflowError:
            return -math.inf if text[0] == '-' else math.inf
    return None


def infer_value(text: str) -> tuple[IniKeyType, int | float | str]:
    if (i := parse_int(text)) is not None:
        return IniKeyType.INT, i
    if (f := parse_float(text)) is not None:
        return IniKeyType.FLOAT, f
    return IniKeyType.STRING, text
