"""Shared error codes and exceptions for the counting pipeline."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    CONFIG_ERROR = "CONFIG_ERROR"
    FILE_OPEN_ERROR = "FILE_OPEN_ERROR"
    LINE_READ_ERROR = "LINE_READ_ERROR"
    STATE_ERROR = "STATE_ERROR"


class WordCountError(RuntimeError):
    """Exception carrying a structured error code for the CLI."""

    def __init__(self, code: ErrorCode, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        base = super().__str__()
        return f"[{self.code.value}] {base}" if base else self.code.value


class FileOpenError(WordCountError):
    """The input path is missing, unreadable, or not a regular file."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(ErrorCode.FILE_OPEN_ERROR, message, context=context)


class LineReadError(WordCountError):
    """A line could not be read or decoded."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(ErrorCode.LINE_READ_ERROR, message, context=context)
