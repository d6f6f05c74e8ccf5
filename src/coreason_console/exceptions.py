# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_console

class ConsoleError(Exception):
    """
    Base class for coreason-console errors.
    """


class RecordDecodeError(ConsoleError, ValueError):
    """
    Raised when a write does not carry a decodable JSON object.
    """


class SinkOpenError(ConsoleError, OSError):
    """
    Raised when the log file backing a sink cannot be opened.
    """


class ShortWriteError(ConsoleError, OSError):
    """
    Raised when a fan-out destination accepts fewer bytes than it was given.
    """
