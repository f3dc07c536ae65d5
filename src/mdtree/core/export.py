"""Export: JSON serialization and standardized markup re-emission of a Document"""

from typing import Any, Callable, Mapping, Optional

import yaml

from mdtree.core.errors import ExtensionError
from mdtree.core.models import (
    CodeBlock,
    CustomBlock,
    Document,
    HeadingBlock,
    ImageBlock,
    Inline,
    Link,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
    TextStyle,
    ThematicBreakBlock,
)


CustomRenderer = Callable[[CustomBlock], str]


def to_dict(doc: Document, by_alias: bool = True) -> dict[str, Any]:
    """Plain JSON-compatible dict; camelCase keys when by_alias, absent code langs omitted."""
    return doc.model_dump(mode="json", by_alias=by_alias, exclude_none=True)


def to_json(doc: Document, indent: Optional[int] = 2, by_alias: bool = True) -> str:
    return doc.model_dump_json(indent=indent, by_alias=by_alias, exclude_none=True)


def from_json(text: str) -> Document:
    """Validate serialized JSON (either key style) back into a Document."""
    return Document.model_validate_json(text)


def _render_text(style: TextStyle, value: str, following: str = "") -> str:
    """following is the text rendered right after this run; an italic '*' closer may not touch another '*'."""
    if style == TextStyle.strong:
        return f"**{value}**"
    if style == TextStyle.italic:
        return f"_{value}_" if "*" in value or following.startswith("*") else f"*{value}*"
    if style == TextStyle.code:
        return f"`{value}`"
    return value


def render_inline(nodes: list[Inline]) -> str:
    """Inverse of parse_text_body for one body."""
    parts: list[str] = []
    for node in reversed(nodes):
        following = parts[-1] if parts else ""
        if isinstance(node, Link):
            parts.append(f"[{render_inline(node.body)}]({node.url})")
        else:
            parts.append(_render_text(node.style, node.value, following))
    return "".join(reversed(parts))


def render_block(block, renderers: Optional[Mapping[str, CustomRenderer]] = None) -> str:
    """Render a single block back to its source syntax."""
    if isinstance(block, HeadingBlock):
        return f"{'#' * block.level} {render_inline(block.body)}"
    if isinstance(block, QuoteBlock):
        lines = render_inline(block.body).split("\n")
        return "\n".join(f"> {line}" if line else ">" for line in lines)
    if isinstance(block, ListBlock):
        return "\n".join(
            f"{i}. {render_inline(item.body)}" if block.ordered else f"- {render_inline(item.body)}"
            for i, item in enumerate(block.items, start=1)
        )
    if isinstance(block, ImageBlock):
        caption = f"({block.caption})" if block.caption else ""
        return f"![{block.alt_text}]({block.url}){caption}"
    if isinstance(block, CodeBlock):
        return f"```{block.lang or ''}\n{block.body}\n```"
    if isinstance(block, ThematicBreakBlock):
        return "---"
    if isinstance(block, ParagraphBlock):
        return render_inline(block.body)
    if isinstance(block, CustomBlock):
        render = (renderers or {}).get(block.custom_type)
        if render is None:
            raise ExtensionError(f"No renderer registered for custom block {block.custom_type!r}")
        return render(block)
    raise ExtensionError(f"Cannot render {type(block).__name__}")


def build_frontmatter(frontmatter: dict[str, str]) -> str:
    """'---' delimited header, or '' when there is nothing to emit."""
    if not frontmatter:
        return ""
    header = yaml.safe_dump(frontmatter, default_flow_style=False, allow_unicode=True,
                            sort_keys=False, width=float("inf"))
    return f"---\n{header}---\n\n"


def to_markdown(doc: Document, renderers: Optional[Mapping[str, CustomRenderer]] = None) -> str:
    """Standardized markup: frontmatter header, then blocks separated by blank lines."""
    body = "\n\n".join(render_block(b, renderers) for b in doc.blocks)
    return f"{build_frontmatter(doc.frontmatter)}{body}\n"
