"""Text body assembly: links plus styled runs, merged into a clean inline sequence"""

from typing import Union

from mdtree.core.inline.links import split_links
from mdtree.core.inline.styles import tokenize
from mdtree.core.models import Link, TextBody


def merge_same_style(nodes: list[Union[TextBody, Link]]) -> list[Union[TextBody, Link]]:
    """Merge adjacent TextBody nodes of equal style, never across a Link.

    Link bodies are merged by the same rule. Idempotent.
    """
    merged: list[Union[TextBody, Link]] = []
    for node in nodes:
        if isinstance(node, Link):
            merged.append(Link(url=node.url, body=merge_same_style(node.body)))
            continue
        prev = merged[-1] if merged else None
        if isinstance(prev, TextBody) and prev.style == node.style:
            merged[-1] = TextBody(style=node.style, value=prev.value + node.value)
        else:
            merged.append(node)
    return merged


def parse_text_body(text: str) -> list[Union[TextBody, Link]]:
    """Parse a block's inline text into its final ordered TextBody/Link sequence."""
    nodes: list[Union[TextBody, Link]] = []
    for part in split_links(text):
        if isinstance(part, Link):
            nodes.append(part)
        else:
            nodes.extend(tokenize(part))
    return merge_same_style(nodes)
