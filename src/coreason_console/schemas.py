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
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, TypeAdapter

DEFAULT_LOG_FILE = "logs/app.log"

_FLAG = TypeAdapter(bool)


def _env_flag(name: str, default: bool = False) -> bool:
    """Reads a boolean flag such as 1/true/yes/on from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return _FLAG.validate_python(raw)


class SinkConfig(BaseModel):
    """
    Settings for the combined console + file sink.

    `no_color` left as None means "decide from the terminal".
    """

    log_file: Path = Path(DEFAULT_LOG_FILE)
    write_file: bool = False
    no_color: Optional[bool] = None

    @classmethod
    def from_env(cls) -> "SinkConfig":
        """
        Builds a config from COREASON_CONSOLE_LOG_FILE, COREASON_CONSOLE_WRITE_FILE
        and NO_COLOR.
        """
        return cls(
            log_file=Path(os.getenv("COREASON_CONSOLE_LOG_FILE", DEFAULT_LOG_FILE)),
            write_file=_env_flag("COREASON_CONSOLE_WRITE_FILE"),
            no_color=True if os.getenv("NO_COLOR") else None,
        )
