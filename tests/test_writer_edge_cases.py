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
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List
from unittest.mock import patch

import pytest

from coreason_console.record import JsonNumber
from coreason_console.writer import BufferPool, ConsoleWriter, format_field_value, format_time


@pytest.mark.parametrize(
    "value, expected",
    [
        (JsonNumber("1700000000"), "2023-11-14T22:13:20Z"),
        (JsonNumber("0"), "1970-01-01T00:00:00Z"),
        (JsonNumber("-1"), "1969-12-31T23:59:59Z"),
        ("yesterday", "yesterday"),
        ("2024-01-01T00:00:00+02:00", "2024-01-01T00:00:00+02:00"),
        (JsonNumber("1.5"), "<nil>"),
        (JsonNumber("1e3"), "<nil>"),
        (JsonNumber("99999999999999999999"), "<nil>"),
        (JsonNumber("253402300800"), "<nil>"),
        (None, "<nil>"),
        (True, "<nil>"),
        ({"a": 1}, "<nil>"),
    ],
)
def test_format_time(value: object, expected: str) -> None:
    assert format_time(value) == expected


@pytest.mark.parametrize(
    "record, expected",
    [
        (b'{"message":42}', "<nil> |????| 42\n"),
        (b'{"message":null}', "<nil> |????| <nil>\n"),
        (b'{"message":true}', "<nil> |????| true\n"),
        (b'{"message":{"b":1,"a":2}}', '<nil> |????| {"a":2,"b":1}\n'),
        (b'{"message":"has space"}', "<nil> |????| has space\n"),
        (b'{"caller":null,"message":"m"}', "<nil> |????| <nil> |m \n"),
        (b'{"caller":"c.go:3"}', "<nil> |????| c.go:3 |<nil> \n"),
        (b'{"caller":12,"message":"m"}', "<nil> |????| 12 |m \n"),
    ],
)
def test_header_values(record: bytes, expected: str) -> None:
    out = io.StringIO()
    ConsoleWriter(out=out, no_color=True).write(record)

    assert out.getvalue() == expected


def test_serialization_failure_is_inlined() -> None:
    out = io.StringIO()
    writer = ConsoleWriter(out=out, no_color=True)

    with patch("coreason_console.writer.marshal_value", side_effect=ValueError("unsupported value")):
        writer.write(b'{"message":"m","a":true,"b":"text","c":1}')

    assert out.getvalue() == "<nil> |????| m a=[error: unsupported value] b=text c=1\n"


def test_format_field_value_error_placeholder() -> None:
    assert format_field_value(float("nan")).startswith("[error: ")
    assert format_field_value(object()) == "[error: json: unsupported type: object]"


def test_lone_surrogates_are_replaced() -> None:
    out = io.StringIO()
    ConsoleWriter(out=out, no_color=True).write(b'{"message":"a\\ud800b","s":"\\udc00"}')

    assert out.getvalue() == '<nil> |????| a\ufffdb s="\ufffd"\n'
    out.getvalue().encode("utf-8")


def test_invalid_utf8_input_is_replaced() -> None:
    out = io.StringIO()
    ConsoleWriter(out=out, no_color=True).write(b'{"message":"\xff","s":"\xfe"}')

    assert out.getvalue() == '<nil> |????| \ufffd s="\ufffd"\n'


def test_non_ascii_field_names_sort_by_codepoint() -> None:
    out = io.StringIO()
    ConsoleWriter(out=out, no_color=True).write('{"é":"1","z":"2","A":"3"}')

    assert out.getvalue() == "<nil> |????| <nil> A=3 z=2 é=1\n"


def test_buffer_pool_reuses_and_clears_buffers() -> None:
    pool = BufferPool()

    with pool.borrow() as first:
        first.write("stale content")
    with pool.borrow() as second:
        assert second is first
        assert second.getvalue() == ""


def test_buffer_pool_lends_distinct_buffers_while_checked_out() -> None:
    pool = BufferPool()

    with pool.borrow() as outer:
        with pool.borrow() as inner:
            assert inner is not outer


def test_buffer_is_returned_when_rendering_fails() -> None:
    pool = BufferPool()

    with pytest.raises(RuntimeError):
        with pool.borrow() as buf:
            raise RuntimeError("boom")

    with pool.borrow() as again:
        assert again is buf


class LockedStream:
    def __init__(self) -> None:
        self.writes: List[str] = []
        self._lock = threading.Lock()

    def write(self, text: str) -> int:
        with self._lock:
            self.writes.append(text)
        return len(text)


def test_concurrent_writes_produce_whole_lines() -> None:
    stream = LockedStream()
    writer = ConsoleWriter(out=stream, no_color=True)  # type: ignore[arg-type]
    records = [f'{{"level":"info","time":"t","message":"m{i}","i":{i},"pad":"{"x" * (i % 50)}"}}' for i in range(400)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(writer.write, records))

    expected = {f"t |INFO| m{i} i={i} pad={'x' * (i % 50)}\n" for i in range(400)}
    assert len(stream.writes) == 400
    assert set(stream.writes) == expected
