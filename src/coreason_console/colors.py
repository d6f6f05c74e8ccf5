# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_console

from typing import Any

CRESET = 0
CBOLD = 1
CRED = 31
CGREEN = 32
CYELLOW = 33
CBLUE = 34
CMAGENTA = 35
CCYAN = 36
CGRAY = 37
CDARKGRAY = 90

_LEVEL_COLORS = {
    "debug": CMAGENTA,
    "info": CGREEN,
    "warn": CYELLOW,
    "error": CRED,
    "fatal": CRED,
    "panic": CRED,
}


def colorize(text: Any, color: int, enabled: bool) -> str:
    """
    Wraps text in an ANSI color sequence when enabled, otherwise returns it plain.
    """
    if not enabled:
        return f"{text}"
    return f"\x1b[{color}m{text}\x1b[0m"


def level_color(level: str) -> int:
    # Lookup is case-sensitive, "INFO" gets no color.
    return _LEVEL_COLORS.get(level, CRESET)
