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
from typing import Any, Optional

from loguru import logger as _logger

__all__ = ["logger", "configure_logging", "LOG_FORMAT"]

LOG_FORMAT = (
    "<dim>{time:HH:mm:ss}</dim> <level>{level: <8}</level> "
    "<cyan>coreason-console</cyan>[<cyan>{function}</cyan>] {message}"
)

_handler_id: Optional[int] = None


def configure_logging(level: Optional[str] = None) -> int:
    """
    Points the package's own diagnostics at stderr.

    Rendered records own stdout, so diagnostics never share it. The level comes
    from `level`, then COREASON_CONSOLE_LOG_LEVEL, then INFO. Calling this again
    replaces the previous handler instead of stacking a second one.
    """
    global _handler_id

    resolved = (level or os.getenv("COREASON_CONSOLE_LOG_LEVEL") or "INFO").upper()
    # Raises ValueError for unknown levels before the current handler is touched
    _logger.level(resolved)

    if _handler_id is None:
        # First call: drop loguru's default handler
        _logger.remove()
    else:
        try:
            _logger.remove(_handler_id)
        except ValueError:
            # already removed through logger.remove()
            pass

    _handler_id = _logger.add(sys.stderr, level=resolved, format=LOG_FORMAT)
    return _handler_id


configure_logging()

logger: Any = _logger
