"""Frontmatter header split and flat key/value extraction"""

import re
from dataclasses import dataclass


DELIMITER = "---"
LINE_RE = re.compile(r"(.+?):\s(.+)")
QUOTED_RE = re.compile(r"""(["'])(.*)\1""")


@dataclass(frozen=True)
class SplitMarkdown:
    head: str       # '---' delimited header including both delimiters; '' when absent
    body: str


def split_frontmatter(text: str) -> SplitMarkdown:
    """Separate a leading '---' header from the body.

    A header without a closing '---' line is not a header: head is empty and
    body is the whole (stripped) input.
    """
    text = text.strip()
    lines = text.split("\n")
    if lines[0].strip() != DELIMITER:
        return SplitMarkdown(head="", body=text)

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].strip() == DELIMITER:
            end_idx = i
            break
    if end_idx is None:
        return SplitMarkdown(head="", body=text)

    head = "\n".join(lines[:end_idx + 1])
    body = "\n".join(lines[end_idx + 1:]).strip()
    return SplitMarkdown(head=head, body=body)


def _unquote(value: str) -> str:
    m = QUOTED_RE.fullmatch(value)
    return m.group(2) if m else value


def parse_frontmatter(head: str) -> dict[str, str]:
    """Return the 'key: value' pairs of a delimited header; other lines are skipped."""
    lines = head.strip().split("\n")
    if len(lines) < 2 or lines[0].strip() != DELIMITER or lines[-1].strip() != DELIMITER:
        return {}

    fm: dict[str, str] = {}
    for line in lines[1:-1]:
        m = LINE_RE.match(line)
        if not m:
            continue
        key, value = m.group(1).strip(), _unquote(m.group(2).strip())
        if key and value:
            fm[key] = value
    return fm
