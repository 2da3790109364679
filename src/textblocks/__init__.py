"""Split block-structured text into blocks of lines.

Parses text made of blocks separated by blank lines (or another
delimiter), such as puzzle inputs and simple record files. Works with
``\\n`` and ``\\r\\n`` line endings.

Key components:
    - as_blocks: split a document into blocks of lines
    - block_parse_lines: parse every line of every block
    - block_parse: parse lines, then reduce each block to one value
    - TextBlocks: ``str`` subclass exposing the three operations as methods
    - AutoDoubleNewline, ExplicitDelimiter, Pattern: delimiter strategies

Example:
    >>> from textblocks import block_parse
    >>> block_parse("100\\n200\\n\\n300\\n400\\n\\n500\\n600", int, sum)
    [300, 700, 1100]
"""

__version__ = "0.1.0"

from .blocks import (
    TextBlocks,
    as_blocks,
    block_parse,
    block_parse_lines,
)
from .config import SplitterConfig, load_config_from_env
from .delimiters import (
    AutoDoubleNewline,
    DelimiterSpec,
    ExplicitDelimiter,
    Pattern,
    line_delimiter_for,
    parse_delimiter_spec,
    resolve_delimiters,
)
from .errors import (
    ConfigurationError,
    DelimiterNotImplementedError,
    TextBlocksError,
)
from .logging import configure_logging

__all__ = [
    "__version__",
    "as_blocks",
    "block_parse_lines",
    "block_parse",
    "TextBlocks",
    "DelimiterSpec",
    "AutoDoubleNewline",
    "ExplicitDelimiter",
    "Pattern",
    "resolve_delimiters",
    "line_delimiter_for",
    "parse_delimiter_spec",
    "SplitterConfig",
    "load_config_from_env",
    "configure_logging",
    "TextBlocksError",
    "ConfigurationError",
    "DelimiterNotImplementedError",
]
