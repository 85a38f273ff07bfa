"""
Error types for weavedoc.

Malformed comments are never errors; they are left out of the document
model. What remains are problems that stop a run:

    WeaveDocError
      ├── ConfigError          (CONFIG)  nothing to parse, bad settings
      ├── SourceNotFoundError  (SOURCE)  an explicitly listed file is missing
      ├── SourceReadError      (SOURCE)  a file could not be read or decoded
      └── RenderError          (RENDER)  the template failed
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """Error categories used for reporting."""

    CONFIG = "CONFIG"
    SOURCE = "SOURCE"
    RENDER = "RENDER"
    INTERNAL = "INTERNAL"


class WeaveDocError(Exception):
    """Base class for weavedoc errors."""

    default_category = ErrorCategory.INTERNAL

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.category = self.default_category
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message


class ConfigError(WeaveDocError):
    default_category = ErrorCategory.CONFIG


class SourceNotFoundError(WeaveDocError):
    default_category = ErrorCategory.SOURCE

    def __init__(self, path: str, *, cause: BaseException | None = None):
        super().__init__(f"Source file '{path}' doesn't exist.", cause=cause)
        self.path = path


class SourceReadError(WeaveDocError):
    default_category = ErrorCategory.SOURCE

    def __init__(self, path: str, *, cause: BaseException | None = None):
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Unable to read '{path}'{reason}", cause=cause)
        self.path = path


class RenderError(WeaveDocError):
    default_category = ErrorCategory.RENDER
