"""Unit tests for core/parse.py"""

import pytest

from mdtree.core.blocks import BUILTIN_RECOGNIZERS, parse_paragraph_block
from mdtree.core.errors import DispatchError, ExtensionError
from mdtree.core.export import to_markdown
from mdtree.core.models import (
    CodeBlock,
    CustomBlock,
    Document,
    HeadingBlock,
    ListBlock,
    ListItem,
    ParagraphBlock,
    TextBody,
    ThematicBreakBlock,
)
from mdtree.core.parse import DEFAULT_REGISTRY, Parser, parse, parse_blocks
from mdtree.core.registry import RecognizerRegistry


COMPLEX_MD = """\
---
title: Test Document
author: Test Author
---

# Main Heading

This is an introductory paragraph with **bold** and *italic* text.

## Features Section

~~This feature is deprecated~~

> This is a quote block with some important information.
> It spans multiple lines.

### List of Items

- First item
- Second item
- Third item

==This is highlighted text==

1. Numbered item one
2. Numbered item two
3. Numbered item three

#### Code Example

```javascript
const x = 5;
console.log(x);
```

~~Another deprecated feature~~

![Alt text](image.jpg)(This is a caption)

---

##### Final Notes

This is the final paragraph before we end.

==Important note at the end=="""


def _plain(value: str) -> TextBody:
    return TextBody(style="plain", value=value)


def _types(doc: Document) -> list[str]:
    return [b.custom_type if isinstance(b, CustomBlock) else b.type for b in doc.blocks]


# --- parse_blocks ---

def test_empty_body():
    """Empty or whitespace-only input yields no blocks."""
    assert parse_blocks("") == []
    assert parse_blocks("  \n\n \t\n") == []


def test_single_heading():
    """A lone heading line gives one heading block."""
    assert parse_blocks("# Heading 1") == [HeadingBlock(level=1, body=[_plain("Heading 1")])]


def test_single_list():
    """Consecutive list lines form one list block."""
    assert parse_blocks("- a\n- b") == [
        ListBlock(ordered=False, items=[ListItem(body=[_plain("a")]), ListItem(body=[_plain("b")])]),
    ]


def test_consecutive_paragraph_lines():
    """Each non-blank line outside other blocks is its own paragraph."""
    assert parse_blocks("one\ntwo") == [
        ParagraphBlock(body=[_plain("one")]),
        ParagraphBlock(body=[_plain("two")]),
    ]


def test_heading_then_paragraph_without_blank_line():
    """Blocks end at the end of their match even without a blank line."""
    blocks = parse_blocks("# Title\ntext")
    assert [b.type for b in blocks] == ["heading", "paragraph"]


def test_list_interrupted_by_paragraph():
    """A non-list line ends the list."""
    blocks = parse_blocks("- a\n- b\nafter\n- c")
    assert [b.type for b in blocks] == ["list", "paragraph", "list"]
    assert len(blocks[0].items) == 2


def test_code_fence_keeps_inner_blank_lines():
    """A fenced block is matched as one unit, blank lines included."""
    blocks = parse_blocks("```\na\n\n# not a heading\n```\nafter")
    assert blocks == [
        CodeBlock(body="a\n\n# not a heading"),
        ParagraphBlock(body=[_plain("after")]),
    ]


def test_unclosed_fence_is_paragraph():
    """An unterminated fence falls through to the paragraph fallback."""
    blocks = parse_blocks("```js\nconst x = 1;")
    assert [b.type for b in blocks] == ["paragraph", "paragraph"]


def test_thematic_break_between_paragraphs():
    blocks = parse_blocks("above\n\n---\n\nbelow")
    assert blocks[1] == ThematicBreakBlock()


def test_dispatch_error_without_fallback():
    """A registry without the paragraph fallback raises on unmatched text."""
    registry = RecognizerRegistry(builtins=BUILTIN_RECOGNIZERS[:-1])
    with pytest.raises(DispatchError, match="No matching block found") as exc:
        parse_blocks("# ok\n\nplain text", registry)
    assert exc.value.remaining == "plain text"


def test_extension_error_for_non_block_result():
    """An extractor returning something other than a block is rejected."""
    registry = DEFAULT_REGISTRY.extend(r"~~(.+?)~~", lambda text: {"type": "strikeThrough"}, name="broken")
    with pytest.raises(ExtensionError, match="'broken' returned dict"):
        parse_blocks("~~x~~", registry)


def test_extractor_receives_stripped_match():
    """Custom extractors see the matched text without surrounding whitespace."""
    seen = []

    def extract(text):
        seen.append(text)
        return parse_paragraph_block(text)

    registry = DEFAULT_REGISTRY.extend(r"!!.*", extract)
    parse_blocks("!! shout   \nrest", registry)
    assert seen == ["!! shout"]


# --- Parser / parse ---

def test_parse_returns_document(sample_doc):
    """The sample document yields every block kind in order."""
    assert isinstance(sample_doc, Document)
    assert sample_doc.frontmatter == {}
    assert [b.type for b in sample_doc.blocks] == [
        "heading", "paragraph", "heading", "list", "code", "thematicBreak", "paragraph",
    ]
    assert sample_doc.blocks[4] == CodeBlock(lang="python", body='print("hello")')


def test_parse_with_frontmatter(sample_fm_md):
    """Frontmatter is split off and the body is parsed after it."""
    doc = parse(sample_fm_md)
    assert doc.frontmatter == {"title": "Test Doc", "slug": "test-doc", "tags": "a, b"}
    assert doc.blocks == [
        HeadingBlock(level=1, body=[_plain("Title")]),
        ParagraphBlock(body=[_plain("Body content.")]),
    ]


def test_parse_crlf_input(sample_md):
    """Windows line endings parse the same as Unix ones."""
    assert parse(sample_md.replace("\n", "\r\n")) == parse(sample_md)


def test_parse_empty():
    assert parse("") == Document()


def test_parse_with_registry(strike_through):
    """parse() accepts an explicit registry."""
    registry = DEFAULT_REGISTRY.extend(r"~~(.+?)~~", strike_through)
    doc = parse("~~gone~~", registry)
    assert doc.blocks == [CustomBlock(custom_type="strikeThrough", body="gone")]


def test_parser_default_registry(parser):
    assert parser.registry is DEFAULT_REGISTRY


def test_extend_does_not_mutate(parser, strike_through):
    """Extending a parser leaves the receiving parser's behavior unchanged."""
    extended = parser.extend(r"~~(.+?)~~", strike_through)
    assert parser.parse("~~x~~").blocks[0].type == "paragraph"
    assert extended.parse("~~x~~").blocks[0] == CustomBlock(custom_type="strikeThrough", body="x")


def test_extend_with_renderer(parser, strike_through):
    """A renderer passed to extend() is exposed for the block name it handles."""
    extended = parser.extend(r"~~(.+?)~~", strike_through, name="strikeThrough", render=lambda b: f"~~{b.body}~~")
    doc = extended.parse("~~x~~")
    assert to_markdown(doc, extended.registry.renderers) == "~~x~~\n"


def test_custom_block_payload(custom_parser):
    """Custom block fields are kept as given by the extractor."""
    [block] = custom_parser.parse("~~strikethrough text~~").blocks
    assert block.custom_type == "strikeThrough"
    assert block.body == "strikethrough text"


def test_custom_blocks_alongside_builtins(custom_parser):
    doc = custom_parser.parse("# Heading\n\n~~strikethrough text~~\n\nThis is a paragraph")
    assert _types(doc) == ["heading", "strikeThrough", "paragraph"]


def test_newest_extension_wins(parser):
    """With overlapping patterns, the later extension is used."""
    extended = (
        parser
        .extend(r"~~(.+?)~~", lambda t: CustomBlock(custom_type="older"))
        .extend(r"~~(.+?)~~", lambda t: CustomBlock(custom_type="newer"))
    )
    assert _types(extended.parse("~~x~~")) == ["newer"]


def test_complex_document(custom_parser):
    """Custom and built-in blocks interleave through a full document."""
    doc = custom_parser.parse(COMPLEX_MD)
    assert doc.frontmatter == {"title": "Test Document", "author": "Test Author"}
    assert _types(doc) == [
        "heading", "paragraph", "heading", "strikeThrough", "quote", "heading", "list",
        "highlight", "list", "heading", "code", "strikeThrough", "image", "thematicBreak",
        "heading", "paragraph", "highlight",
    ]

    strikes = [b.body for b in doc.blocks if getattr(b, "custom_type", None) == "strikeThrough"]
    assert strikes == ["This feature is deprecated", "Another deprecated feature"]

    highlights = [b.body for b in doc.blocks if getattr(b, "custom_type", None) == "highlight"]
    assert highlights == ["This is highlighted text", "Important note at the end"]

    headings = [b for b in doc.blocks if b.type == "heading"]
    assert [h.level for h in headings] == [1, 2, 3, 4, 5]
    assert headings[0].body == [_plain("Main Heading")]

    quote = next(b for b in doc.blocks if b.type == "quote")
    assert quote.body == [_plain(
        "This is a quote block with some important information.\nIt spans multiple lines."
    )]

    unordered, ordered = [b for b in doc.blocks if b.type == "list"]
    assert not unordered.ordered and ordered.ordered
    assert [i.body for i in ordered.items] == [
        [_plain("Numbered item one")], [_plain("Numbered item two")], [_plain("Numbered item three")],
    ]

    code = next(b for b in doc.blocks if b.type == "code")
    assert code == CodeBlock(lang="javascript", body="const x = 5;\nconsole.log(x);")

    image = next(b for b in doc.blocks if b.type == "image")
    assert (image.url, image.alt_text, image.caption) == ("image.jpg", "Alt text", "This is a caption")


def test_paragraph_body_styles(sample_doc):
    assert sample_doc.blocks[1].body == [
        _plain("A paragraph with "),
        TextBody(style="strong", value="bold"),
        _plain(" text."),
    ]


BLOCK_SOURCES = [
    "# Heading with *style*",
    "> quoted [link](https://example.com)\n> second line",
    "- one\n- **two**",
    "1. first\n2. second",
    "![Alt](/img.png)(Caption)",
    "```py\nx = 1\n\ny = 2\n```",
    "---",
    "Plain `code` paragraph",
]


def test_block_reparses_in_isolation():
    """Each block's source span parses on its own to the same block."""
    doc = parse("\n\n".join(BLOCK_SOURCES))
    assert len(doc.blocks) == len(BLOCK_SOURCES)
    for source, block in zip(BLOCK_SOURCES, doc.blocks):
        assert parse_blocks(source) == [block]
