"""Pipeline step functions: file discovery, extension loading, parse and export orchestration"""

import importlib
import logging
import re
from pathlib import Path
from typing import Optional

from mdtree.core.errors import ExtensionError
from mdtree.core.export import CustomRenderer, to_json, to_markdown
from mdtree.core.models import Document
from mdtree.core.parse import DEFAULT_REGISTRY, Parser
from mdtree.core.registry import Recognizer


logger = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.mdx'}
SLUG_RE = re.compile(r"[^a-z0-9]+")


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def load_extensions(references: list[str]) -> list[Recognizer]:
    """Resolve 'package.module:attr' references to Recognizers.

    The attribute may be a single Recognizer or a sequence of them; sequences
    keep their order, so the last entry ends up with the highest priority.
    """
    loaded: list[Recognizer] = []
    for ref in references:
        module_name, _, attr = ref.partition(":")
        if not module_name or not attr:
            raise ExtensionError(f"Invalid extension reference {ref!r}; expected 'module:attr'")
        try:
            target = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError) as e:
            raise ExtensionError(f"Cannot load extension {ref!r}: {e}") from e

        if isinstance(target, Recognizer):
            items = [target]
        else:
            try:
                items = list(target)
            except TypeError as e:
                raise ExtensionError(f"Extension {ref!r} is neither a Recognizer nor a sequence of them") from e
        for item in items:
            if not isinstance(item, Recognizer):
                raise ExtensionError(f"Extension {ref!r} provides {type(item).__name__}, expected Recognizer")
            loaded.append(item)
        logger.info("Loaded %d recognizer(s) from %s", len(items), ref)
    return loaded


def build_parser(references: Optional[list[str]] = None) -> Parser:
    """Parser with the built-in recognizers plus any configured extensions."""
    registry = DEFAULT_REGISTRY
    for rec in load_extensions(references or []):
        registry = registry.register(rec)
    return Parser(registry)


def parse_file(path: Path, parser: Optional[Parser] = None) -> Document:
    """Parse a single markdown file."""
    return (parser or Parser()).parse(path.read_text(encoding='utf-8'))


def output_stem(path: Path, doc: Document) -> str:
    """Frontmatter slug when present, else the slugified filename stem."""
    return doc.frontmatter.get('slug') or SLUG_RE.sub("-", path.stem.lower()).strip("-") or "doc"


def render(
    doc: Document,
    fmt: str,
    indent: int = 2,
    by_alias: bool = True,
    renderers: Optional[dict[str, CustomRenderer]] = None,
    ) -> str:
    """Serialize doc as 'json' or standardized 'md'; renderers map custom_type to markup for custom blocks."""
    if fmt == "md":
        return to_markdown(doc, renderers)
    return to_json(doc, indent=indent or None, by_alias=by_alias) + "\n"


def run_export(
    path: str,
    output_dir: Path,
    fmt: str,
    parser: Optional[Parser] = None,
    indent: int = 2,
    by_alias: bool = True,
    ) -> list[tuple[Path, Path]]:
    """Parse path (file or directory) and write one output per document. Returns (source, output) pairs."""
    output_dir.mkdir(parents=True, exist_ok=True)
    parser = parser or Parser()
    renderers = parser.registry.renderers
    results = []
    for p in discover_files(Path(path)):
        try:
            doc = parse_file(p, parser)
            out_file = output_dir / f"{output_stem(p, doc)}.{fmt}"
            out_file.write_text(render(doc, fmt, indent, by_alias, renderers), encoding='utf-8')
            results.append((p, out_file))
        except Exception as e:
            raise RuntimeError(f"Failed to export {p}: {e}") from e
    return results
