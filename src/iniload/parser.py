# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/12 00:05:31
# @Author : Kariko Lin

"""Single pass INI reader.

The text is scanned once, left to right, by a small state machine.
End of input is handled as one more line break, so the last line
needs no trailing newline. Supported lines (besides blank ones):

    ```ini
    ; comment
    # comment too
    key = 42           ; typed by its look, see `literal`
    [section]
    key = "quoted, [=] allowed"   ; always a string
    ```

Anything else is an `IniSyntaxError`, and nothing of the half read
document survives it.
"""

import logging
from enum import Enum, auto
from io import TextIOBase
from os import PathLike
from warnings import warn

import chardet

from .abstract import FileHandler
from .consts import (
    BLANK, COMMENT_MARKS, DELIMITERS, DETECT_CONFIDENCE, EOL,
    FALLBACK_CODEC, NAME_MAXLEN, QUOTE, IniKeyType
)
from .literal import infer_value
from .model import IniDocument, IniKey, IniSection

__all__ = [
    'IniLoadError', 'IniIOError', 'IniSyntaxError', 'IniResourceError',
    'IniParser', 'load', 'free'
]


class IniLoadError(Exception):
    """Loading failed, and no document was produced."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class IniIOError(IniLoadError):
    """The file could not be opened or read."""
    pass


class IniSyntaxError(IniLoadError):
    """The text breaks the INI grammar.

    `offset` is a 0-based index into the decoded text (`len(text)` means
    end of input); `line` and `column` are 1-based.
    """

    def __init__(
        self, reason: str, text: str, offset: int,
        path: str | None = None
    ) -> None:
        self.reason = reason
        self.offset = offset
        head = text[:offset]
        # CRLF, bare LF and bare CR each end one line.
        self.line = (head.count('\n') + head.count('\r')
                     - head.count('\r\n') + 1)
        self.column = offset - max(head.rfind('\n'), head.rfind('\r'))
        super().__init__(
            f'{path or "<string>"}:{self.line}:{self.column}: {reason}',
            path)


class IniResourceError(IniLoadError):
    """Ran out of memory while building the document."""
    pass


class _State(Enum):
    IDLE = auto()
    COMMENT = auto()
    SECTION_NAME = auto()
    AFTER_SECTION_NAME = auto()
    KEY_NAME = auto()
    AFTER_KEY_NAME = auto()
    BEFORE_KEY_VALUE = auto()
    KEY_VALUE = auto()
    AFTER_QUOTED_VALUE = auto()


def _scan(
    text: str, max_name_len: int, path: str | None
) -> list[tuple[str, list[IniKey]]]:
    # sections stay plain lists until the whole text is accepted.
    sections: list[tuple[str, list[IniKey]]] = []
    seen: set[str] = set()
    keys: list[IniKey] | None = None
    state = _State.IDLE
    start, key, quoted = 0, '', False

    def add_section(name: str) -> list[IniKey]:
        if name in seen:
            warn(
                f'Section "[{name}]" appears more than once. '
                'Lookups by name only ever reach the first one.')
        seen.add(name)
        sections.append((name, []))
        return sections[-1][1]

    def add_key(value: str, quoted: bool) -> None:
        nonlocal keys
        if keys is None:
            keys = add_section('')
        if quoted:
            keys.append(IniKey(key, IniKeyType.STRING, value))
        else:
            keys.append(IniKey(key, *infer_value(value)))

    def bad(reason: str, offset: int) -> IniSyntaxError:
        return IniSyntaxError(reason, text, offset, path)

    # the trailing NUL is the synthetic end-of-input line break.
    for pos, ch in enumerate(text + '\0'):
        match state:
            case _State.IDLE:
                if ch in EOL or ch in BLANK:
                    continue
                if ch in COMMENT_MARKS:
                    state = _State.COMMENT
                elif ch == '[':
                    state, start = _State.SECTION_NAME, pos + 1
                else:
                    state, start = _State.KEY_NAME, pos

            case _State.COMMENT:
                if ch in EOL:
                    state = _State.IDLE

            case _State.SECTION_NAME:
                if ch == ']':
                    if pos - start > max_name_len:
                        raise bad(
                            f'section name longer than {max_name_len}',
                            start)
                    keys = add_section(text[start:pos])
                    state = _State.AFTER_SECTION_NAME
                elif ch in EOL:
                    raise bad('section name is not closed by "]"', pos)
                elif ch in '[=' or ch in COMMENT_MARKS:
                    raise bad(f'unexpected "{ch}" in section name', pos)

            case _State.AFTER_SECTION_NAME:
                if ch in EOL:
                    state = _State.IDLE
                elif ch not in BLANK:
                    raise bad(
                        f'unexpected "{ch}" after section header', pos)

            case _State.KEY_NAME:
                if ch in BLANK or ch == '=':
                    if pos - start > max_name_len:
                        raise bad(f'key name longer than {max_name_len}', start)
                    key = text[start:pos]
                    state = (_State.BEFORE_KEY_VALUE if ch == '='
                             else _State.AFTER_KEY_NAME)
                elif ch in EOL:
                    raise bad(f'key "{text[start:pos]}" has no value', pos)
                elif ch in '[]':
                    raise bad(f'unexpected "{ch}" in key name', pos)
                elif pos - start + 1 > max_name_len:
                    raise bad(f'key name longer than {max_name_len}', start)

            case _State.AFTER_KEY_NAME:
                if ch == '=':
                    state = _State.BEFORE_KEY_VALUE
                elif ch not in BLANK:
                    raise bad(f'"=" expected after key "{key}"', pos)

            case _State.BEFORE_KEY_VALUE:
                if ch in BLANK:
                    continue
                if ch == QUOTE:
                    state, start, quoted = _State.KEY_VALUE, pos + 1, True
                elif ch in EOL:
                    raise bad(f'key "{key}" has no value', pos)
                elif ch in DELIMITERS:
                    raise bad(f'unexpected "{ch}" before value', pos)
                else:
                    state, start, quoted = _State.KEY_VALUE, pos, False

            case _State.KEY_VALUE if quoted:
                if ch == QUOTE:
                    add_key(text[start:pos], True)
                    state = _State.AFTER_QUOTED_VALUE
                elif ch in EOL:
                    raise bad('quoted value is not closed', start - 1)

            case _State.KEY_VALUE:
                if ch in EOL:
                    add_key(text[start:pos], False)
                    state = _State.IDLE
                elif ch in DELIMITERS:
                    raise bad(
                        f'"{ch}" in a value is only allowed within quotes',
                        pos)

            case _State.AFTER_QUOTED_VALUE:
                if ch in EOL:
                    state = _State.IDLE
                elif ch not in BLANK:
                    raise bad(
                        f'unexpected "{ch}" after closing quote', pos)
    return sections


class IniParser(FileHandler[IniDocument]):
    """Reads one INI file into an `IniDocument`.

    `encoding` is tried first; if it is unknown or does not fit the bytes,
    the codec is guessed instead. `max_name_len` limits section and key
    names, counted in decoded characters, not bytes.
    """

    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None, *,
        max_name_len: int = NAME_MAXLEN
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._maxlen = max_name_len

    @staticmethod
    def readstream(
        buf: str | TextIOBase, *,
        max_name_len: int = NAME_MAXLEN,
        path: str | None = None
    ) -> IniDocument:
        """读取解码好的字符串（或字符串流）。

        如没有特殊需求，直接调用`self.read()`便是。
        `max_name_len`按解码后的*字符*计数，而非字节。
        失败时抛出`IniSyntaxError`或`IniResourceError`，不会返回残缺的文档。
        """
        text = buf if isinstance(buf, str) else buf.read()
        try:
            sections = _scan(text, max_name_len, path)
            return IniDocument(IniSection(n, k) for n, k in sections)
        except MemoryError as e:
            raise IniResourceError(
                'out of memory while building the document', path) from e

    @staticmethod
    def _decode(raw: bytes, encoding: str | None = None) -> str:
        if encoding is not None:
            try:
                return raw.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logging.debug(
                    f'Cannot decode as {encoding}, guessing the codec instead.')

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < DETECT_CONFIDENCE:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            return raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            return raw.decode(FALLBACK_CODEC)

    def read(self) -> IniDocument:
        """读取`IniParser`实例指定的文件。

        整个文件只读一次。打不开或读不全时抛出`IniIOError`，
        其余错误见`self.readstream()`。
        """
        try:
            raw = self._readall()
            text = self._decode(raw, self._codec)
        except OSError as e:
            raise IniIOError(f'{self._fn}: {e.strerror or e}', self._fn) from e
        except MemoryError as e:
            raise IniResourceError(
                f'{self._fn}: out of memory while reading', self._fn) from e
        ret = self.readstream(text, max_name_len=self._maxlen, path=self._fn)
        logging.debug(f'{self._fn}: {len(ret)} section(s) loaded.')
        return ret

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def load(
    path: str | PathLike[str],
    encoding: str | None = None, *,
    max_name_len: int = NAME_MAXLEN
) -> IniDocument | None:
    """Read a single INI file, all or nothing.

    Hint:
        On any failure a warning is logged and `None` is returned.
        Use `IniParser(path).read()` instead if you'd like to
        handle the `IniLoadError` yourself.
    """
    try:
        return IniParser(path, encoding, max_name_len=max_name_len).read()
    except IniLoadError as e:
        logging.warning(f'INI not loaded: {e}')
        return None


def free(doc: IniDocument) -> None:
    """Release everything `doc` holds. Don't touch it afterwards."""
    doc.free()
