# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 00:48:19
# @Author : Kariko Lin

import logging

from .consts import NAME_MAXLEN, IniKeyType
from .model import IniDocument, IniKey, IniLookup, IniSection, LookupStatus
from .parser import (
    IniIOError,
    IniLoadError,
    IniParser,
    IniResourceError,
    IniSyntaxError,
    free,
    load
)

__all__ = [
    'NAME_MAXLEN', 'IniKeyType',
    'IniDocument', 'IniKey', 'IniLookup', 'IniSection', 'LookupStatus',
    'IniLoadError', 'IniIOError', 'IniSyntaxError', 'IniResourceError',
    'IniParser', 'load', 'free'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
