"""Escape sequence stripping and visual width measurement.

Terminal escape sequences (colors, cursor movement, hyperlinks) occupy no
columns on screen, so they are removed before measuring. The remaining
text is measured per character with ``wcwidth``: East Asian wide glyphs
count as 2, combining and zero-width marks as 0.
"""

from __future__ import annotations

import re

import wcwidth

ESC = '\u001b'

_ESCAPE_RE = re.compile(r'''
    \x1b\[ [0-?]* [ -/]* [@-~]            # CSI, e.g. SGR colors
  | \x1b\] [^\x07\x1b]* (?:\x07|\x1b\\)   # OSC, terminated by BEL or ST
  | \x1b[PX^_] [^\x1b]* \x1b\\            # DCS, SOS, PM, APC
  | \x1b [ -/]* [0-OQ-WYZ\\`-~]           # two-character and nF escapes
''', re.VERBOSE)


class TableError(Exception):
    pass


class MalformedEscapeSequenceError(TableError):
    def __init__(self, text, position):
        self.text = text
        self.position = position
        super().__init__(f'Malformed escape sequence at index {position} in {text!r}')


def strip_escapes(text: str) -> str:
    """Return ``text`` with every escape sequence removed.

    Raises :class:`MalformedEscapeSequenceError` if an ESC character does
    not start a complete sequence.
    """
    if ESC not in text:
        return text
    parts = []
    pos = 0
    for match in _ESCAPE_RE.finditer(text):
        _check_plain(text, pos, match.start())
        parts.append(text[pos:match.start()])
        pos = match.end()
    _check_plain(text, pos, len(text))
    parts.append(text[pos:])
    return ''.join(parts)


def _check_plain(text, start, end):
    # Any ESC between two matches did not begin a recognized sequence.
    index = text.find(ESC, start, end)
    if index != -1:
        raise MalformedEscapeSequenceError(text, index)


def width(text: str) -> int:
    """Visual column width of ``text``, ignoring escape sequences."""
    total = 0
    for char in strip_escapes(text):
        char_width = wcwidth.wcwidth(char)
        # wcwidth returns -1 for non-printable characters, treat as 0
        if char_width > 0:
            total += char_width
    return total
