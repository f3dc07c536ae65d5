"""Inline style tokenizer: split a text run into plain/strong/italic/code segments"""

import re
from enum import Enum
from typing import Optional

from mdtree.core.models import TextBody, TextStyle


class Marker(str, Enum):
    """Style markers, declared in the precedence order they are checked in."""
    strong = "**"
    asterisk_italic = "*"
    underscore_italic = "_"
    code = "`"


MARKER_STYLE: dict[Marker, TextStyle] = {
    Marker.strong:            TextStyle.strong,
    Marker.asterisk_italic:   TextStyle.italic,
    Marker.underscore_italic: TextStyle.italic,
    Marker.code:              TextStyle.code,
}

# Marker, non-empty literal content, same marker. A '*' followed by another
# '*' is a strong marker, so it neither closes italic nor opens strong content.
CLOSED_PATTERNS: dict[Marker, re.Pattern] = {
    Marker.strong:            re.compile(r"\*\*([^*].*?)\*\*", re.DOTALL),
    Marker.asterisk_italic:   re.compile(r"\*([^*]+)\*(?!\*)"),
    Marker.underscore_italic: re.compile(r"_([^_]+)_"),
    Marker.code:              re.compile(r"`([^`]+)`"),
}

MARKER_CHAR_RE = re.compile(r"[*_`]")


def head_marker(text: str, pos: int = 0) -> Optional[Marker]:
    """Return the marker opening at pos, or None when the text there is plain."""
    for marker in Marker:
        if text.startswith(marker.value, pos):
            return marker
    return None


def _next_marker_char(text: str, pos: int) -> int:
    """Index of the next marker character at or after pos, else len(text)."""
    m = MARKER_CHAR_RE.search(text, pos)
    return m.start() if m else len(text)


def _unclosed_end(text: str, pos: int, marker: Marker) -> int:
    """End of an unclosed span: the next marker of a different kind, or end of input."""
    i = pos + len(marker.value)
    while i < len(text):
        i = _next_marker_char(text, i)
        if i == len(text):
            break
        found = head_marker(text, i)
        if found is not marker:
            return i
        i += len(found.value)
    return len(text)


def tokenize(text: str) -> list[TextBody]:
    """Split text into style-tagged runs; unclosed markers degrade to plain text.

    Runs are emitted in document order and partition the input, except that
    the markers of closed spans are dropped. Adjacent plain runs are left
    unmerged; see mdtree.core.inline.body.merge_same_style.
    """
    result: list[TextBody] = []
    pos = 0
    while pos < len(text):
        marker = head_marker(text, pos)
        if marker is None:
            stop = _next_marker_char(text, pos)
            result.append(TextBody(style=TextStyle.plain, value=text[pos:stop]))
            pos = stop
            continue

        closed = CLOSED_PATTERNS[marker].match(text, pos)
        if closed:
            result.append(TextBody(style=MARKER_STYLE[marker], value=closed.group(1)))
            pos = closed.end()
            continue

        stop = _unclosed_end(text, pos, marker)
        result.append(TextBody(style=TextStyle.plain, value=text[pos:stop]))
        pos = stop
    return result
