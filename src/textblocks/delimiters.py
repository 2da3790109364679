"""Block delimiter strategies and their resolution.

A ``DelimiterSpec`` describes how a document is cut into blocks:

    - AutoDoubleNewline: a blank line, ``"\\r\\n\\r\\n"`` or ``"\\n\\n"``
      depending on whether the document contains a carriage return
    - ExplicitDelimiter: an exact literal separator
    - Pattern: reserved for pattern-based separators, not implemented

The line delimiter is never configured. It is always derived from the
whole document.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .errors import ConfigurationError, DelimiterNotImplementedError

logger = logging.getLogger(__name__)

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\"}
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


@dataclass(frozen=True, slots=True)
class AutoDoubleNewline:
    """Split on a blank line matching the document's line endings."""


@dataclass(frozen=True, slots=True)
class ExplicitDelimiter:
    """Split on an exact literal substring."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ConfigurationError("explicit delimiter must not be empty")


@dataclass(frozen=True, slots=True)
class Pattern:
    """Split on a pattern. Reserved; selecting it always fails."""

    value: str


DelimiterSpec = AutoDoubleNewline | ExplicitDelimiter | Pattern


def line_delimiter_for(text: str) -> str:
    """Return ``"\\r\\n"`` if *text* contains a carriage return, else ``"\\n"``."""
    return "\r\n" if "\r" in text else "\n"


def resolve_delimiters(
    text: str,
    spec: DelimiterSpec | None = None,
) -> tuple[str, str]:
    """Resolve the concrete ``(line_delimiter, block_delimiter)`` pair.

    Args:
        text: The document. Only the presence of ``"\\r"`` is inspected.
        spec: Delimiter strategy. ``None`` means ``AutoDoubleNewline()``.

    Returns:
        Tuple of the line delimiter and the block delimiter.

    Raises:
        DelimiterNotImplementedError: If *spec* is a ``Pattern``.
        ConfigurationError: If *spec* is not a known delimiter strategy.

    Example:
        >>> resolve_delimiters("a\\r\\nb")
        ('\\r\\n', '\\r\\n\\r\\n')
        >>> resolve_delimiters("a\\nb", ExplicitDelimiter("***"))
        ('\\n', '***')
    """
    if spec is None:
        spec = AutoDoubleNewline()

    if isinstance(spec, Pattern):
        raise DelimiterNotImplementedError(
            f"pattern delimiters are not implemented (got {spec.value!r})"
        )

    line_delimiter = line_delimiter_for(text)
    if isinstance(spec, AutoDoubleNewline):
        block_delimiter = line_delimiter * 2
    elif isinstance(spec, ExplicitDelimiter):
        block_delimiter = spec.value
    else:
        raise ConfigurationError(f"unknown delimiter spec: {spec!r}")

    logger.debug(
        "resolved delimiters line=%r block=%r", line_delimiter, block_delimiter
    )
    return line_delimiter, block_delimiter


def _unescape(value: str) -> str:
    return _ESCAPE_RE.sub(
        lambda m: _ESCAPES.get(m.group(1), m.group(0)),
        value,
    )


def parse_delimiter_spec(value: str | None) -> DelimiterSpec:
    """Build a ``DelimiterSpec`` from its textual form.

    Used for environment variables and command-line options.

    Args:
        value: ``None``, ``""`` or ``"auto"`` for the blank-line default,
            ``"pattern:<p>"`` for a pattern, ``"literal:<d>"`` or any other
            text for a literal delimiter. ``\\n``, ``\\r``, ``\\t`` and
            ``\\\\`` escapes are decoded.

    Raises:
        ConfigurationError: If a literal delimiter decodes to the empty string.

    Example:
        >>> parse_delimiter_spec("***")
        ExplicitDelimiter(value='***')
        >>> parse_delimiter_spec("literal:\\\\n---\\\\n")
        ExplicitDelimiter(value='\\n---\\n')
    """
    if value is None:
        return AutoDoubleNewline()

    text = value.strip()
    if not text or text.lower() == "auto":
        return AutoDoubleNewline()
    if text.startswith("pattern:"):
        return Pattern(text[len("pattern:") :])
    if text.startswith("literal:"):
        # the literal form keeps surrounding whitespace
        return ExplicitDelimiter(_unescape(value.split("literal:", 1)[1]))
    return ExplicitDelimiter(_unescape(text))
