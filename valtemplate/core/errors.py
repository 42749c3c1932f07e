"""Error types raised while building a context or rendering a template."""

from __future__ import annotations

from pathlib import Path


class ValtemplateError(Exception):
    """Base class for every failure reported to the user."""


class SourceReadError(ValtemplateError):
    """Raised when a value file or template file cannot be opened."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class SourceParseError(ValtemplateError):
    """Raised when a value file is not a valid YAML mapping."""

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.line = line
        self.column = column


class OverrideSyntaxError(ValtemplateError, ValueError):
    """Raised when a --set specification cannot be parsed."""

    def __init__(self, message: str, *, spec: str) -> None:
        super().__init__(message)
        self.spec = spec


class TemplateSyntaxError(ValtemplateError):
    """Raised when the template source cannot be compiled."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class TemplateExecutionError(ValtemplateError):
    """Raised when rendering fails after output may already be written."""


class MissingKeyError(TemplateExecutionError):
    """Raised when the template references a key absent from the context."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class UsageError(ValtemplateError):
    """Raised for an invalid combination of command-line arguments."""


class InputUnavailableError(ValtemplateError):
    """Raised when stdin mode is requested but no pipe is attached."""
