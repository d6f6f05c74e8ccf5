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
import re
from typing import Any, Dict, Union

from coreason_console.exceptions import RecordDecodeError

_JSON_WHITESPACE = " \t\n\r"
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

_QUOTE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

_HTML_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


class JsonNumber(str):
    """
    A JSON number held as the exact text it was written with.

    Keeping the source text means 12345678901234 or 0.1000 are re-emitted
    unchanged instead of going through float.
    """

    def __repr__(self) -> str:
        return f"JsonNumber({str.__repr__(self)})"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name}")


_DECODER = json.JSONDecoder(
    parse_int=JsonNumber,
    parse_float=JsonNumber,
    parse_constant=_reject_constant,
)


def is_text(value: Any) -> bool:
    """True for JSON strings, False for numbers and everything else."""
    return isinstance(value, str) and not isinstance(value, JsonNumber)


def decode_record(data: Union[bytes, bytearray, memoryview, str]) -> Dict[str, Any]:
    """
    Decodes the first JSON value in `data` into a log record.

    Leading whitespace is skipped and anything after the first complete value
    is ignored. A JSON null decodes to an empty record.
    """
    if isinstance(data, str):
        text = data
    else:
        text = bytes(data).decode("utf-8", errors="replace")

    start = len(text) - len(text.lstrip(_JSON_WHITESPACE))
    try:
        value, _ = _DECODER.raw_decode(text, start)
    except (ValueError, RecursionError) as e:
        raise RecordDecodeError(f"invalid JSON record: {e}") from e

    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RecordDecodeError(f"cannot decode JSON {type(value).__name__} into a log record")
    return value


def needs_quote(s: str) -> bool:
    return any(c < " " or c > "~" or c in ' \\"' for c in s)


def quote(s: str) -> str:
    """
    Returns a double-quoted literal for `s`.

    Printable characters, including non-ASCII ones, are kept as they are.
    C0 controls and DEL become \\xNN, other non-printable characters become
    \\uNNNN or \\UNNNNNNNN.
    """
    parts = ['"']
    for ch in s:
        cp = ord(ch)
        escape = _QUOTE_ESCAPES.get(ch)
        if escape is not None:
            parts.append(escape)
        elif 0xD800 <= cp <= 0xDFFF:
            parts.append("\ufffd")
        elif ch.isprintable():
            parts.append(ch)
        elif cp < 0x20 or cp == 0x7F:
            parts.append(f"\\x{cp:02x}")
        elif cp < 0x10000:
            parts.append(f"\\u{cp:04x}")
        else:
            parts.append(f"\\U{cp:08x}")
    parts.append('"')
    return "".join(parts)


def _marshal_string(s: str) -> str:
    return json.dumps(s, ensure_ascii=False).translate(_HTML_ESCAPES)


def marshal_value(value: Any) -> str:
    """
    Serializes a decoded value as compact JSON.

    Object keys are sorted, JsonNumber values are written as their source
    text and HTML-sensitive characters in strings are escaped.
    Raises TypeError or ValueError for values JSON cannot represent.
    """
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, JsonNumber):
        return str(value)
    if isinstance(value, str):
        return _marshal_string(value)
    if isinstance(value, (int, float)):
        return json.dumps(value, allow_nan=False)
    if isinstance(value, dict):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"json: unsupported map key type: {type(key).__name__}")
        members = (f"{_marshal_string(k)}:{marshal_value(value[k])}" for k in sorted(value))
        return "{" + ",".join(members) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(marshal_value(v) for v in value) + "]"
    raise TypeError(f"json: unsupported type: {type(value).__name__}")


def replace_invalid(s: str) -> str:
    """Replaces lone surrogates, which cannot be encoded, with U+FFFD."""
    return _LONE_SURROGATE.sub("\ufffd", s)
