# Error taxonomy for the progress engine.
from __future__ import annotations
from enum import Enum, auto
from typing import Optional

class ErrorCategory(Enum):
    PROTOCOL = auto()
    CONFIG = auto()
    INTERNAL = auto()

class TasklineException(Exception):
    category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(self, message: str, *, category: ErrorCategory | None = None):
        super().__init__(message)
        if category:
            self.category = category

class ProtocolViolation(TasklineException):
    """A resolve targeted something other than the innermost open task."""
    category = ErrorCategory.PROTOCOL

    def __init__(self, message: str, *, expected_id: Optional[int] = None, actual_id: Optional[int] = None):
        super().__init__(message)
        self.expected_id = expected_id
        self.actual_id = actual_id

class ConfigError(TasklineException):
    category = ErrorCategory.CONFIG

__all__ = [
    'ErrorCategory', 'TasklineException', 'ProtocolViolation', 'ConfigError'
]
