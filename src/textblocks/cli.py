"""Command-line interface for textblocks.

Commands:
    - split: print the blocks of a document
    - reduce: parse every line as an integer and reduce each block

Usage:
    $ textblocks split input.txt
    $ textblocks split records.txt --delimiter "***" --json
    $ textblocks reduce input.txt --op sum
"""

from __future__ import annotations

import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any

import typer

from .blocks import as_blocks, block_parse
from .config import SplitterConfig, load_config_from_env
from .delimiters import DelimiterSpec, parse_delimiter_spec
from .logging import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer(help="Split block-structured text files into blocks of lines.")


class ReduceOp(str, Enum):
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    RANGE = "range"
    COUNT = "count"


_REDUCERS = {
    ReduceOp.SUM: sum,
    ReduceOp.MIN: min,
    ReduceOp.MAX: max,
    ReduceOp.RANGE: lambda values: max(values) - min(values),
    ReduceOp.COUNT: len,
}


def _handle_error(exc: Exception) -> None:
    """Print an error message, including any notes, and exit with code 1.

    Raises:
        typer.Exit: Always.
    """
    if isinstance(exc, typer.Exit):
        raise exc
    typer.echo(f"Error: {exc}", err=True)
    for note in getattr(exc, "__notes__", ()):
        typer.echo(f"  {note}", err=True)
    raise typer.Exit(code=1) from exc


def _read_document(path: Path) -> str:
    """Read a document without translating line endings.

    ``-`` reads from stdin.

    Raises:
        FileNotFoundError: If the specified path does not exist.
    """
    if str(path) == "-":
        return sys.stdin.buffer.read().decode("utf-8")
    if not path.exists():
        raise FileNotFoundError(f"Input path does not exist: {path}")
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def _delimiter(ctx: typer.Context, value: str | None) -> DelimiterSpec:
    if value is not None:
        return parse_delimiter_spec(value)
    config: SplitterConfig = ctx.obj
    return config.delimiter_spec()


def _print_json(value: Any) -> None:
    typer.echo(json.dumps(value, ensure_ascii=False))


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None, help="Logging level (overrides TEXTBLOCKS_LOG_LEVEL)"
    ),
    json_logs: bool | None = typer.Option(
        None, "--json-logs/--console-logs", help="Log as JSON lines"
    ),
    env_file: Path | None = typer.Option(
        None, help="Path to a .env file with TEXTBLOCKS_* settings"
    ),
) -> None:
    """Load settings and configure logging for every command."""
    try:
        config = load_config_from_env(env_file=env_file)
        updates: dict[str, Any] = {}
        if log_level is not None:
            updates["log_level"] = log_level
        if json_logs is not None:
            updates["json_logs"] = json_logs
        if updates:
            config = SplitterConfig(**{**config.model_dump(), **updates})
    except Exception as exc:
        _handle_error(exc)

    configure_logging(level=config.log_level, json_format=config.json_logs)
    logger.debug("loaded settings %s", config.model_dump())
    ctx.obj = config


@app.command("split")
def split(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Input file, or - for stdin"),
    delimiter: str | None = typer.Option(
        None,
        "--delimiter",
        "-d",
        help='Block delimiter ("auto", a literal such as "***", escapes like \\n allowed)',
    ),
    as_json: bool = typer.Option(False, "--json", help="Print blocks as JSON"),
) -> None:
    """Print the blocks of a document.

    Example:
        $ textblocks split input.txt --json
        [["100", "200"], ["300", "400"]]
    """
    try:
        blocks = as_blocks(_read_document(path), _delimiter(ctx, delimiter))
    except Exception as exc:
        _handle_error(exc)

    if as_json:
        _print_json(blocks)
        return
    typer.echo("\n\n".join("\n".join(block) for block in blocks))


@app.command("reduce")
def reduce(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Input file, or - for stdin"),
    op: ReduceOp = typer.Option(ReduceOp.SUM, "--op", help="Reduction per block"),
    delimiter: str | None = typer.Option(
        None, "--delimiter", "-d", help="Block delimiter, as for split"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Parse every line as an integer and print one reduced value per block.

    Example:
        $ textblocks reduce input.txt --op range
        2000
        0
    """
    try:
        results = block_parse(
            _read_document(path),
            int,
            _REDUCERS[op],
            _delimiter(ctx, delimiter),
        )
    except Exception as exc:
        _handle_error(exc)

    if as_json:
        _print_json(results)
        return
    for value in results:
        typer.echo(str(value))


if __name__ == "__main__":
    app()
