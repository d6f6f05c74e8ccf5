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
import queue
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, TextIO, Union

from coreason_console.colors import CCYAN, CDARKGRAY, CRESET, colorize, level_color
from coreason_console.record import (
    JsonNumber,
    decode_record,
    is_text,
    marshal_value,
    needs_quote,
    quote,
    replace_invalid,
)

LEVEL_FIELD = "level"
TIME_FIELD = "time"
MESSAGE_FIELD = "message"
CALLER_FIELD = "caller"

RESERVED_FIELDS = frozenset({LEVEL_FIELD, TIME_FIELD, MESSAGE_FIELD, CALLER_FIELD})

MISSING_LEVEL = "????"
NIL = "<nil>"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class BufferPool:
    """
    Lends reusable StringIO buffers to concurrent renderers.

    A borrowed buffer is private to the borrower until it is given back.
    """

    def __init__(self) -> None:
        self._buffers: "queue.SimpleQueue[io.StringIO]" = queue.SimpleQueue()

    @contextmanager
    def borrow(self) -> Iterator[io.StringIO]:
        try:
            buf = self._buffers.get_nowait()
        except queue.Empty:
            buf = io.StringIO()
        buf.seek(0)
        buf.truncate()
        try:
            yield buf
        finally:
            self._buffers.put(buf)


_BUFFER_POOL = BufferPool()


def format_time(value: Any) -> str:
    """
    Renders the `time` field.

    Text is shown verbatim, an integer is read as Unix seconds and shown as
    UTC RFC3339. Anything else is shown as <nil>.
    """
    if isinstance(value, JsonNumber):
        try:
            seconds = int(value)
        except ValueError:
            return NIL
        if not _INT64_MIN <= seconds <= _INT64_MAX:
            return NIL
        try:
            moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return NIL
        return moment.replace(tzinfo=None).isoformat() + "Z"
    if isinstance(value, str):
        return value
    return NIL


def _format_header_value(value: Any) -> str:
    if value is None:
        return NIL
    if isinstance(value, str):
        return value
    try:
        return marshal_value(value)
    except (TypeError, ValueError) as e:
        return f"[error: {e}]"


def format_field_value(value: Any) -> str:
    if isinstance(value, JsonNumber):
        return str(value)
    if isinstance(value, str):
        return quote(value) if needs_quote(value) else value
    try:
        return marshal_value(value)
    except (TypeError, ValueError) as e:
        return f"[error: {e}]"


class ConsoleWriter:
    """
    Reads one JSON object per write and writes an optionally colored,
    human-readable line to `out`.

    Line layout:
        <time> |<LEVL>| <message> key=value ...
        <time> |<LEVL>| <caller> |<message>  key=value ...
    """

    def __init__(self, out: Optional[TextIO] = None, no_color: bool = False):
        self.out = out if out is not None else sys.stdout
        self.no_color = no_color

    def write(self, data: Union[bytes, bytearray, str]) -> int:
        """
        Renders one record and writes it to `out` in a single call.

        Raises RecordDecodeError, without writing anything, when `data` is not
        a JSON object. Returns len(data) on success.
        """
        event = decode_record(data)
        with _BUFFER_POOL.borrow() as buf:
            self._render_into(buf, event)
            self.out.write(replace_invalid(buf.getvalue()))
        self.flush()
        return len(data)

    def render(self, data: Union[bytes, bytearray, str]) -> str:
        """Returns the rendered line for `data` without writing it."""
        return self.render_record(decode_record(data))

    def render_record(self, event: Dict[str, Any]) -> str:
        with _BUFFER_POOL.borrow() as buf:
            self._render_into(buf, event)
            return replace_invalid(buf.getvalue())

    def flush(self) -> None:
        flush = getattr(self.out, "flush", None)
        if flush is not None:
            flush()

    def _render_into(self, buf: io.StringIO, event: Dict[str, Any]) -> None:
        color = not self.no_color

        lvl_color = CRESET
        level = MISSING_LEVEL
        raw_level = event.get(LEVEL_FIELD)
        if is_text(raw_level):
            if color:
                lvl_color = level_color(raw_level)
            level = raw_level.upper()[:4]

        timestamp = colorize(format_time(event.get(TIME_FIELD)), CDARKGRAY, color)
        level = colorize(level, lvl_color, color)
        message = colorize(_format_header_value(event.get(MESSAGE_FIELD)), CRESET, color)

        if CALLER_FIELD in event:
            caller = colorize(_format_header_value(event[CALLER_FIELD]), CRESET, color)
            buf.write(f"{timestamp} |{level}| {caller} |{message} ")
        else:
            buf.write(f"{timestamp} |{level}| {message}")

        for field in sorted(name for name in event if name not in RESERVED_FIELDS):
            buf.write(f" {colorize(field, CCYAN, color)}=")
            buf.write(format_field_value(event[field]))
        buf.write("\n")
