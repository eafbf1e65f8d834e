# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/11 21:40:12
# @Author : Kariko Lin

from enum import Enum


class IniKeyType(int, Enum):
    INT = 0
    FLOAT = 1  # single precision, see `literal.narrow_float()`
    STRING = 2


# both section and key names, counted in characters.
NAME_MAXLEN = 128

# chardet results below this are not trusted.
DETECT_CONFIDENCE = 0.8
# maps every byte to a code point, so decoding can never fail.
FALLBACK_CODEC = 'latin-1'

# NUL is treated like a line end, as the synthetic terminator is.
EOL = frozenset('\n\r\0')
BLANK = frozenset(' \t')
COMMENT_MARKS = frozenset(';#')
QUOTE = '"'
# only legal inside quoted values.
DELIMITERS = frozenset('[]=')
