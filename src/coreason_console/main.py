# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_console

import sys
from pathlib import Path
from typing import Annotated, Iterable, Optional, Tuple

import typer

from coreason_console import __version__
from coreason_console.exceptions import RecordDecodeError, SinkOpenError
from coreason_console.schemas import SinkConfig
from coreason_console.sink import build_sink, supports_color
from coreason_console.utils.logger import configure_logging, logger
from coreason_console.writer import ConsoleWriter

app = typer.Typer(
    name="coreason-console",
    help="CLI for coreason-console: human-readable rendering of JSON log records.",
    add_completion=False,
)


@app.callback()
def options(
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help="Level for diagnostics on stderr (DEBUG, INFO, WARNING, ...)")
    ] = None,
) -> None:
    """
    Render JSON log records as human-readable console lines.
    """
    if log_level is not None:
        try:
            configure_logging(log_level)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--log-level") from e


def _records(lines: Iterable[bytes]) -> Iterable[Tuple[int, bytes]]:
    """Yields (line number, raw line) for every non-blank input line."""
    for number, line in enumerate(lines, start=1):
        if line.strip():
            yield number, line


def _render_lines(writer: ConsoleWriter, lines: Iterable[bytes]) -> None:
    for number, line in _records(lines):
        try:
            writer.write(line)
        except RecordDecodeError as e:
            # Pass non-JSON lines through untouched
            logger.warning(f"Line {number} is not a JSON record: {e}")
            text = line.decode("utf-8", errors="replace")
            writer.out.write(text if text.endswith("\n") else text + "\n")


@app.command()
def render(
    path: Annotated[
        Optional[Path],
        typer.Argument(help="JSON lines file to render (defaults to stdin)", exists=True, dir_okay=False),
    ] = None,
    no_color: Annotated[
        Optional[bool], typer.Option("--no-color/--color", help="Disable or force ANSI colors")
    ] = None,
) -> None:
    """
    Render JSON log records as human-readable lines.
    """
    out = sys.stdout
    if no_color is None:
        no_color = not supports_color(out)
    writer = ConsoleWriter(out=out, no_color=no_color)

    try:
        if path is None:
            _render_lines(writer, sys.stdin.buffer)
        else:
            with path.open("rb") as handle:
                _render_lines(writer, handle)
    except Exception:
        logger.exception("Rendering Failed")
        sys.exit(1)


@app.command()
def tee(
    log_file: Annotated[Optional[Path], typer.Option("--log-file", "-l", help="Path to the log file")] = None,
    write_file: Annotated[
        Optional[bool],
        typer.Option("--write-file/--no-write-file", help="Also append the raw records to the log file"),
    ] = None,
    no_color: Annotated[
        Optional[bool], typer.Option("--no-color/--color", help="Disable or force ANSI colors")
    ] = None,
) -> None:
    """
    Render JSON log records from stdin to the console and optionally keep them in a log file.
    """
    try:
        config = SinkConfig.from_env()
        if log_file is not None:
            config.log_file = log_file
        if write_file is not None:
            config.write_file = write_file
        if no_color is not None:
            config.no_color = no_color

        try:
            sink = build_sink(config)
        except SinkOpenError:
            logger.error(f"Cannot start sink for {config.log_file}")
            sys.exit(1)

        with sink:
            for number, line in _records(sys.stdin.buffer):
                try:
                    sink.write(line)
                except RecordDecodeError as e:
                    logger.warning(f"Line {number} is not a JSON record: {e}")
    except Exception:
        logger.exception("Tee Failed")
        sys.exit(1)


@app.command()
def version() -> None:
    """Print the version of coreason-console."""
    typer.echo(f"coreason-console v{__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()  # pragma: no cover
