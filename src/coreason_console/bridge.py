# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_console

import json
import math
from typing import Any, Dict

from loguru import logger

# loguru level names mapped onto the severities the console renderer colors
_LEVEL_NAMES = {
    "TRACE": "trace",
    "DEBUG": "debug",
    "INFO": "info",
    "SUCCESS": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}


def _finite(value: Any) -> Any:
    # NaN and infinities become "NaN", "+Inf" and "-Inf" strings, JSON has no literal for them
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "+Inf" if value > 0 else "-Inf"
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(v) for v in value]
    return value


def serialize_record(record: Dict[str, Any], include_caller: bool = True, unix_time: bool = False) -> str:
    """
    Flattens a loguru record into a single JSON object.

    Reserved keys (level, time, caller, message) take precedence over `extra`
    values of the same name. Values JSON cannot represent, including NaN and
    infinite floats, are stringified.
    """
    level_name = record["level"].name
    event: Dict[str, Any] = dict(record["extra"])

    exception = record["exception"]
    if exception is not None and exception.value is not None:
        event["error"] = str(exception.value)

    event["level"] = _LEVEL_NAMES.get(level_name, level_name.lower())
    if unix_time:
        event["time"] = int(record["time"].timestamp())
    else:
        event["time"] = record["time"].isoformat(timespec="seconds")
    if include_caller:
        event["caller"] = f"{record['file'].name}:{record['line']}"
    event["message"] = record["message"]

    return json.dumps(_finite(event), default=str, ensure_ascii=False, allow_nan=False)


class JsonRecordSink:
    """
    loguru sink that hands each record to `writer` as one JSON line.
    """

    def __init__(self, writer: Any, include_caller: bool = True, unix_time: bool = False):
        self.writer = writer
        self.include_caller = include_caller
        self.unix_time = unix_time

    def __call__(self, message: Any) -> None:
        line = serialize_record(message.record, include_caller=self.include_caller, unix_time=self.unix_time)
        self.writer.write(line + "\n")


def add_console_sink(
    writer: Any,
    level: str = "DEBUG",
    include_caller: bool = True,
    unix_time: bool = False,
) -> int:
    """
    Registers a JsonRecordSink on the loguru logger and returns its handler id.
    """
    sink = JsonRecordSink(writer, include_caller=include_caller, unix_time=unix_time)
    return logger.add(sink, level=level, format="{message}")
