"""Split text into blocks of lines and parse them.

A block is a run of lines separated from its neighbours by the block
delimiter (a blank line by default). Works with ``\\n`` and ``\\r\\n``
line endings.

Operations:
    - as_blocks: blocks as lists of line strings
    - block_parse_lines: blocks as lists of parsed lines
    - block_parse: one parsed value per block

``TextBlocks`` is a ``str`` carrying the same three operations as methods.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from .delimiters import DelimiterSpec, resolve_delimiters

logger = logging.getLogger(__name__)

T = TypeVar("T")
B = TypeVar("B")


def as_blocks(text: str, delimiter: DelimiterSpec | None = None) -> list[list[str]]:
    """Split text into blocks, where a block is a list of lines.

    The document is trimmed, split on the block delimiter, and every block
    is trimmed and split on the line delimiter. Whitespace inside a line is
    never touched.

    Args:
        text: The document to split.
        delimiter: Block delimiter strategy. Default: a blank line.

    Returns:
        List of blocks in document order. Empty list if the document is
        empty or whitespace only.

    Raises:
        DelimiterNotImplementedError: If a ``Pattern`` delimiter is given.

    Example:
        >>> as_blocks("100\\n200\\n\\n300\\n400\\n\\n500\\n600")
        [['100', '200'], ['300', '400'], ['500', '600']]
    """
    line_delimiter, block_delimiter = resolve_delimiters(text, delimiter)

    trimmed = text.strip()
    if not trimmed:
        return []

    blocks = [
        segment.strip().split(line_delimiter)
        for segment in trimmed.split(block_delimiter)
    ]
    logger.debug("split document into %d blocks", len(blocks))
    return blocks


def _parse_block(
    block: list[str],
    index: int,
    line_parser: Callable[[str], T],
) -> list[T]:
    parsed: list[T] = []
    for line_no, line in enumerate(block):
        try:
            parsed.append(line_parser(line))
        except Exception as exc:
            logger.debug(
                "line parser failed at block %d line %d: %r", index, line_no, line
            )
            exc.add_note(f"while parsing block {index}, line {line_no}: {line!r}")
            raise
    return parsed


def block_parse_lines(
    text: str,
    line_parser: Callable[[str], T],
    delimiter: DelimiterSpec | None = None,
) -> list[list[T]]:
    """Split text into blocks and parse every line with *line_parser*.

    The parser is called exactly once per line, in document order. If some
    lines cannot be parsed, return ``None`` (or another marker) from the
    parser and filter afterwards; an exception aborts the whole call.

    Args:
        text: The document to split.
        line_parser: Function mapping one line to a value.
        delimiter: Block delimiter strategy. Default: a blank line.

    Returns:
        List of blocks, each a list of parsed lines.

    Example:
        >>> block_parse_lines("100\\n200\\n\\n300\\n400", int)
        [[100, 200], [300, 400]]
    """
    return [
        _parse_block(block, index, line_parser)
        for index, block in enumerate(as_blocks(text, delimiter))
    ]


def block_parse(
    text: str,
    line_parser: Callable[[str], T],
    block_parser: Callable[[list[T]], B],
    delimiter: DelimiterSpec | None = None,
) -> list[B]:
    """Split text into blocks and reduce each block to one value.

    Every line of a block goes through *line_parser* first; the resulting
    list is then passed once to *block_parser*. The block parser may reduce
    the list (sum, max) or return a new collection.

    Args:
        text: The document to split.
        line_parser: Function mapping one line to a value.
        block_parser: Function mapping a block's parsed lines to a value.
        delimiter: Block delimiter strategy. Default: a blank line.

    Returns:
        One value per block, in document order.

    Example:
        >>> block_parse("100\\n200\\n\\n300\\n400", int, sum)
        [300, 700]
    """
    results: list[B] = []
    for index, block in enumerate(as_blocks(text, delimiter)):
        parsed = _parse_block(block, index, line_parser)
        try:
            results.append(block_parser(parsed))
        except Exception as exc:
            logger.debug("block parser failed at block %d", index)
            exc.add_note(f"while parsing block {index}")
            raise
    return results


class TextBlocks(str):
    """A string that can split and parse itself into blocks.

    Example:
        >>> TextBlocks("abcde\\nwow\\n\\n11111\\n22222").block_parse(
        ...     lambda line: line[0], "".join
        ... )
        ['aw', '12']
    """

    __slots__ = ()

    def as_blocks(self, delimiter: DelimiterSpec | None = None) -> list[list[str]]:
        return as_blocks(self, delimiter)

    def block_parse_lines(
        self,
        line_parser: Callable[[str], T],
        delimiter: DelimiterSpec | None = None,
    ) -> list[list[T]]:
        return block_parse_lines(self, line_parser, delimiter)

    def block_parse(
        self,
        line_parser: Callable[[str], T],
        block_parser: Callable[[list[T]], B],
        delimiter: DelimiterSpec | None = None,
    ) -> list[B]:
        return block_parse(self, line_parser, block_parser, delimiter)
