"""Block dispatch: frontmatter split, then recognizer matching until the body is consumed"""

import logging
import re
from typing import Optional, Union

from mdtree.core.blocks import BUILTIN_RECOGNIZERS
from mdtree.core.errors import DispatchError, ExtensionError
from mdtree.core.frontmatter import parse_frontmatter, split_frontmatter
from mdtree.core.models import BLOCK_TYPES, Block, Document
from mdtree.core.registry import Extractor, RecognizerRegistry, Renderer


logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = RecognizerRegistry(builtins=BUILTIN_RECOGNIZERS)


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_blocks(body: str, registry: RecognizerRegistry = DEFAULT_REGISTRY) -> list[Block]:
    """Consume body left to right, one block per first-matching recognizer."""
    blocks: list[Block] = []
    remaining = body.strip()
    while remaining:
        found = registry.match(remaining)
        if found is None:
            logger.error("No recognizer matched; registry order: %s", registry.names)
            raise DispatchError(remaining)

        rec, m = found
        block = rec.extract(m.group(0).strip())
        if not isinstance(block, BLOCK_TYPES):
            raise ExtensionError(
                f"Recognizer {rec.name!r} returned {type(block).__name__}, expected a block model"
            )
        logger.debug("Matched %s block (%d chars)", rec.name, m.end())
        blocks.append(block)
        remaining = remaining[m.end():].strip()
    return blocks


class Parser:
    """A reusable parser bound to a recognizer registry.

    extend() returns a new Parser, so extensions compose by chaining:

        >>> parser = Parser().extend(r"~~(.+?)~~", strike).extend(r"==(.+?)==", mark)
        >>> doc = parser.parse("~~gone~~")
    """

    def __init__(self, registry: Optional[RecognizerRegistry] = None):
        self.registry = registry if registry is not None else DEFAULT_REGISTRY

    def extend(
        self,
        pattern: Union[str, re.Pattern],
        extract: Extractor,
        name: Optional[str] = None,
        render: Optional[Renderer] = None,
        ) -> "Parser":
        """Return a parser whose newest recognizer outranks every existing one."""
        return Parser(self.registry.extend(pattern, extract, name, render))

    def parse(self, text: str) -> Document:
        """Parse a whole document into frontmatter and blocks."""
        split = split_frontmatter(_normalize_newlines(text))
        return Document(
            frontmatter=parse_frontmatter(split.head),
            blocks=parse_blocks(split.body, self.registry),
        )


def parse(text: str, registry: Optional[RecognizerRegistry] = None) -> Document:
    """Parse text with the built-in recognizers, or with the given registry."""
    return Parser(registry).parse(text)
