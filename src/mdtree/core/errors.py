"""Exception hierarchy for the parsing engine, extensions, and configuration"""


class MdtreeError(Exception):
    """Base class for every error raised by mdtree."""


class InvalidBlockError(MdtreeError, ValueError):
    """A single-block extractor was called on text that is not that block."""

    def __init__(self, block_type: str, text: str):
        self.block_type = block_type
        self.text = text
        super().__init__(f"Invalid {block_type} block: {_preview(text)!r}")


class InvalidInlineError(MdtreeError, ValueError):
    """An inline converter was called on text that is not its inline kind."""

    def __init__(self, inline_type: str, text: str):
        self.inline_type = inline_type
        self.text = text
        super().__init__(f"Invalid {inline_type}: {_preview(text)!r}")


class DispatchError(MdtreeError, RuntimeError):
    """No recognizer matched non-empty input; the recognizer set has a gap.

    The paragraph fallback matches any non-empty text, so this indicates a
    registry built without it or a custom pattern that matched nothing usable.
    """

    def __init__(self, remaining: str):
        self.remaining = remaining
        super().__init__(f"No matching block found for input: {_preview(remaining)!r}")


class ExtensionError(MdtreeError, TypeError):
    """A custom recognizer or renderer is misconfigured or misbehaved."""


class ConfigError(MdtreeError, ValueError):
    """Settings could not be loaded."""


def _preview(text: str, limit: int = 60) -> str:
    """Truncate text for error messages."""
    return text if len(text) <= limit else text[:limit] + "..."
