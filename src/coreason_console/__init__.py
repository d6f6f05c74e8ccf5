# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_console

"""
coreason-console
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .bridge import JsonRecordSink, add_console_sink, serialize_record
from .exceptions import ConsoleError, RecordDecodeError, ShortWriteError, SinkOpenError
from .record import JsonNumber, decode_record
from .schemas import SinkConfig
from .sink import MultiWriter, build_sink, get_writer, open_log_file, supports_color
from .writer import ConsoleWriter

__all__ = [
    "ConsoleWriter",
    "MultiWriter",
    "SinkConfig",
    "JsonNumber",
    "JsonRecordSink",
    "decode_record",
    "get_writer",
    "build_sink",
    "open_log_file",
    "supports_color",
    "serialize_record",
    "add_console_sink",
    "ConsoleError",
    "RecordDecodeError",
    "SinkOpenError",
    "ShortWriteError",
]
