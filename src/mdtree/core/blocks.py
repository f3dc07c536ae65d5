"""Built-in block recognizers: one (pattern, extractor) pair per block kind

Patterns are matched at the head of the remaining input. Each extractor
receives the stripped matched span and raises InvalidBlockError when called
directly on text that is not its block kind.
"""

import re

from mdtree.core.errors import InvalidBlockError
from mdtree.core.inline.body import parse_text_body
from mdtree.core.models import (
    CodeBlock,
    HeadingBlock,
    ImageBlock,
    ListBlock,
    ListItem,
    ParagraphBlock,
    QuoteBlock,
    ThematicBreakBlock,
)
from mdtree.core.registry import Recognizer


HEADING_RE        = re.compile(r"(#{1,6})[ \t]+(\S[^\n]*)(?:\n|\Z)")
QUOTE_RE          = re.compile(r"(?:>[^\n]*(?:\n|\Z))+")
QUOTE_PREFIX_RE   = re.compile(r"^>[ ]?")
LIST_RE           = re.compile(r"(?:(?:-|\d+\.)[ \t]+\S[^\n]*(?:\n|\Z))+")
LIST_ITEM_RE      = re.compile(r"(-|\d+\.)[ \t]+(\S[^\n]*)")
IMAGE_RE          = re.compile(r"!\[([^\]\n]*)\]\(([^)\n]+)\)(?:\(([^)\n]*)\))?[ \t]*(?:\n|\Z)")
CODE_RE           = re.compile(r"```([^\s`]*)[ \t]*\n(?:(.*?)\n)?```[ \t]*(?:\n|\Z)", re.DOTALL)
THEMATIC_BREAK_RE = re.compile(r"-{3,}[ \t]*(?:\n|\Z)")
PARAGRAPH_RE      = re.compile(r"[ \t]*\S[^\n]*(?:\n|\Z)")


def parse_heading_block(text: str) -> HeadingBlock:
    """'## Title' -> HeadingBlock(level=2, body=...)."""
    m = HEADING_RE.match(text)
    if not m:
        raise InvalidBlockError("heading", text)
    return HeadingBlock(level=len(m.group(1)), body=parse_text_body(m.group(2).rstrip()))


def parse_quote_block(text: str) -> QuoteBlock:
    """Strip the '>' prefix from each quoted line and parse the rejoined text."""
    m = QUOTE_RE.match(text)
    if not m:
        raise InvalidBlockError("quote", text)
    lines = m.group(0).rstrip("\n").split("\n")
    joined = "\n".join(QUOTE_PREFIX_RE.sub("", line) for line in lines)
    return QuoteBlock(body=parse_text_body(joined))


def parse_list_block(text: str) -> ListBlock:
    """One ListItem per line; ordered only when every line uses a 'N.' marker."""
    m = LIST_RE.match(text)
    if not m:
        raise InvalidBlockError("list", text)
    items = []
    ordered = True
    for line in m.group(0).split("\n"):
        item = LIST_ITEM_RE.match(line)
        if not item:
            continue
        ordered = ordered and item.group(1) != "-"
        items.append(ListItem(body=parse_text_body(item.group(2).rstrip())))
    return ListBlock(ordered=ordered, items=items)


def parse_image_block(text: str) -> ImageBlock:
    """'![alt](url)(caption)'; alt text and caption are optional."""
    m = IMAGE_RE.match(text)
    if not m:
        raise InvalidBlockError("image", text)
    alt_text, url, caption = m.groups()
    return ImageBlock(url=url, alt_text=alt_text, caption=caption or "")


def parse_code_block(text: str) -> CodeBlock:
    """Fenced code; the body is kept verbatim and never style-tokenized."""
    m = CODE_RE.match(text)
    if not m:
        raise InvalidBlockError("code", text)
    lang, body = m.groups()
    return CodeBlock(lang=lang or None, body=body or "")


def parse_thematic_break_block(text: str) -> ThematicBreakBlock:
    if not THEMATIC_BREAK_RE.match(text):
        raise InvalidBlockError("thematicBreak", text)
    return ThematicBreakBlock()


def parse_paragraph_block(text: str) -> ParagraphBlock:
    """Fallback block: the first line of text, inline-parsed."""
    m = PARAGRAPH_RE.match(text)
    if not m:
        raise InvalidBlockError("paragraph", text)
    return ParagraphBlock(body=parse_text_body(m.group(0).strip()))


# Priority order; the paragraph fallback must stay last.
BUILTIN_RECOGNIZERS: tuple[Recognizer, ...] = (
    Recognizer("heading",       HEADING_RE,        parse_heading_block),
    Recognizer("quote",         QUOTE_RE,          parse_quote_block),
    Recognizer("list",          LIST_RE,           parse_list_block),
    Recognizer("image",         IMAGE_RE,          parse_image_block),
    Recognizer("code",          CODE_RE,           parse_code_block),
    Recognizer("thematicBreak", THEMATIC_BREAK_RE, parse_thematic_break_block),
    Recognizer("paragraph",     PARAGRAPH_RE,      parse_paragraph_block),
)
