# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_console

import io
import re
from typing import List

import pytest

from coreason_console.writer import ConsoleWriter

ANSI_ESCAPE = re.compile(r"\x1b\[\d+m")

ERROR_RECORD = b'{"level":"error","time":1700000000,"message":"boom","code":42}'
CALLER_RECORD = b'{"level":"info","time":"2024-01-01T00:00:00Z","caller":"main.go:10","message":"started","port":8080}'


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


class CollectingStream:
    """
    Text stream stand-in that records every write call separately.
    """

    def __init__(self) -> None:
        self.writes: List[str] = []
        self.flushes = 0

    def write(self, text: str) -> int:
        self.writes.append(text)
        return len(text)

    def flush(self) -> None:
        self.flushes += 1


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def plain_writer(out: io.StringIO) -> ConsoleWriter:
    return ConsoleWriter(out=out, no_color=True)


@pytest.fixture
def color_writer(out: io.StringIO) -> ConsoleWriter:
    return ConsoleWriter(out=out, no_color=False)
