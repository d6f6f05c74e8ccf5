# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_console

import os
import sys
from pathlib import Path
from typing import Any, BinaryIO, List, Optional, TextIO, Union

import colorama
from loguru import logger

from coreason_console.exceptions import ShortWriteError, SinkOpenError
from coreason_console.schemas import SinkConfig
from coreason_console.writer import ConsoleWriter


class MultiWriter:
    """
    Fans every write out to each destination, in order.

    `str` data is UTF-8 encoded once so every destination sees the same bytes.
    The first failing destination aborts the write and its error propagates.
    Destinations written before the failure keep what they received: there is
    no rollback across destinations.
    """

    def __init__(self, *writers: Any):
        self.writers: List[Any] = list(writers)

    def write(self, data: Union[bytes, bytearray, str]) -> int:
        payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        for writer in self.writers:
            written = writer.write(payload)
            if written != len(payload):
                raise ShortWriteError(f"short write to {writer!r}: {written} of {len(payload)} bytes")
        return len(data)

    def flush(self) -> None:
        for writer in self.writers:
            flush = getattr(writer, "flush", None)
            if flush is not None:
                flush()

    def close(self) -> None:
        for writer in self.writers:
            close = getattr(writer, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> "MultiWriter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def open_log_file(path: Union[str, Path]) -> BinaryIO:
    """
    Opens `path` for appending, creating it and its parent directories if needed.

    Writes are unbuffered so each record reaches the file as one append.
    Raises SinkOpenError if the file cannot be opened.
    """
    log_path = Path(path)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(log_path, "a+b", buffering=0)
    except OSError as e:
        logger.error(f"open file error={e}")
        raise SinkOpenError(f"Cannot open log file {log_path}: {e}") from e

    logger.debug(f"Opened log file {log_path}")
    return handle  # type: ignore[return-value]


def supports_color(stream: Any) -> bool:
    """
    True when `stream` is a terminal and NO_COLOR is not set.
    """
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


def get_writer(
    log_filename: Union[str, Path],
    write_file: bool,
    out: Optional[TextIO] = None,
    no_color: Optional[bool] = None,
) -> MultiWriter:
    """
    Builds the console destination and, when `write_file` is set, pairs it
    with the log file.

    The console receives rendered lines, the file receives the raw JSON
    records. The log file is opened either way, so a bad path fails here
    at startup rather than on the first write.
    """
    log_file = open_log_file(log_filename)

    console_out = out if out is not None else sys.stdout
    if no_color is None:
        no_color = not supports_color(console_out)
    if not no_color:
        colorama.just_fix_windows_console()

    writers: List[Any] = [ConsoleWriter(out=console_out, no_color=no_color)]
    if write_file:
        writers.append(log_file)
    else:
        log_file.close()

    logger.debug(f"Assembled sink: console (color={not no_color}), file={'on' if write_file else 'off'}")
    return MultiWriter(*writers)


def build_sink(config: SinkConfig, out: Optional[TextIO] = None) -> MultiWriter:
    """Same as get_writer, driven by a SinkConfig."""
    return get_writer(config.log_file, config.write_file, out=out, no_color=config.no_color)
