"""Ordered recognizer registry: (pattern, extractor) pairs tried in priority order

Custom recognizers always outrank built-ins, and the most recently added
custom recognizer outranks the earlier ones. Registries are immutable values:
extend() returns a new registry and leaves the receiver untouched, so one
registry can be shared by any number of parsers.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Callable, Iterator, Optional, Union

from mdtree.core.models import Block, CustomBlock


logger = logging.getLogger(__name__)

Extractor = Callable[[str], Block]
Renderer = Callable[[CustomBlock], str]


@dataclass(frozen=True)
class Recognizer:
    """Detects one block kind at the head of the input and extracts it.

    render, when set, turns the custom blocks whose custom_type equals name
    back into markup.
    """
    name:    str
    pattern: re.Pattern
    extract: Extractor
    render:  Optional[Renderer] = None

    def match(self, text: str) -> Optional[re.Match]:
        """Match at the head of text; zero-width matches do not count."""
        m = self.pattern.match(text)
        return m if m and m.end() > 0 else None


def recognizer(
    pattern: Union[str, re.Pattern],
    extract: Extractor,
    name: Optional[str] = None,
    render: Optional[Renderer] = None,
    ) -> Recognizer:
    """Build a Recognizer, compiling string patterns and naming it after its extractor."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return Recognizer(
        name=name or getattr(extract, "__name__", "custom"),
        pattern=compiled,
        extract=extract,
        render=render,
    )


@dataclass(frozen=True)
class RecognizerRegistry:
    custom:   tuple[Recognizer, ...] = field(default_factory=tuple)
    builtins: tuple[Recognizer, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Recognizer]:
        """Yield recognizers in priority order."""
        yield from self.custom
        yield from self.builtins

    def __len__(self) -> int:
        return len(self.custom) + len(self.builtins)

    @property
    def names(self) -> list[str]:
        return [r.name for r in self]

    @property
    def renderers(self) -> dict[str, Renderer]:
        """custom_type -> renderer for every custom recognizer that has one; newest wins."""
        return {r.name: r.render for r in reversed(self.custom) if r.render is not None}

    def register(self, rec: Recognizer) -> "RecognizerRegistry":
        """Return a new registry with rec ahead of every existing recognizer."""
        logger.debug("Registering recognizer %r ahead of %d others", rec.name, len(self))
        return replace(self, custom=(rec, *self.custom))

    def extend(
        self,
        pattern: Union[str, re.Pattern],
        extract: Extractor,
        name: Optional[str] = None,
        render: Optional[Renderer] = None,
        ) -> "RecognizerRegistry":
        """Return a new registry where (pattern, extract) has the highest priority."""
        return self.register(recognizer(pattern, extract, name, render))

    def match(self, text: str) -> Optional[tuple[Recognizer, re.Match]]:
        """Return the first recognizer matching a non-empty prefix of text, with its match."""
        for rec in self:
            m = rec.match(text)
            if m:
                return rec, m
        return None
