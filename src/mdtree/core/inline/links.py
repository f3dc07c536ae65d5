"""Link extraction: split [label](url) spans out of a text run"""

import re
from typing import Union

from mdtree.core.errors import InvalidInlineError
from mdtree.core.inline.styles import tokenize
from mdtree.core.models import Link


# Shortest non-empty label and url on one line; whitespace-only parts do not count.
LINK_RE = re.compile(r"\[(?!\s*\])([^\]\n]+)\]\((?!\s*\))([^)\n]+)\)")


def _to_link(m: re.Match) -> Link:
    """Build a Link from a LINK_RE match; the label is style-tokenized, the url kept verbatim."""
    return Link(url=m.group(2), body=tokenize(m.group(1)))


def parse_link(span: str) -> Link:
    """Convert exactly one [label](url) span into a Link."""
    m = LINK_RE.fullmatch(span)
    if not m:
        raise InvalidInlineError("link", span)
    return _to_link(m)


def split_links(text: str) -> list[Union[str, Link]]:
    """Return text as an ordered list of raw string fragments and Link nodes.

    Empty fragments are dropped. Malformed or empty spans such as `[]()`,
    `[text]()` and `[](url)` are not links and stay inside the raw fragments.
    """
    parts: list[Union[str, Link]] = []
    pos = 0
    for m in LINK_RE.finditer(text):
        if m.start() > pos:
            parts.append(text[pos:m.start()])
        parts.append(_to_link(m))
        pos = m.end()
    if pos < len(text):
        parts.append(text[pos:])
    return parts
