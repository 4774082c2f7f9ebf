"""Custom exception hierarchy for nvkeydoc.

Exception Hierarchy:
    KeydocError (base)
    ├── ParseError - structural problems in init.vim (fatal)
    │   ├── InvalidBlockOpenerError
    │   ├── UnmatchedTerminatorError
    │   └── UnterminatedBlockError
    ├── FileOperationError - File I/O
    │   └── FileReadError
    └── ConfigurationError - Settings/configuration issues

Documentation lookups never raise: a broken definition file only degrades
the bindings of its own root.

Usage:
    from nvkeydoc.exceptions import ParseError

    try:
        bindings = scan_file(path)
    except ParseError as e:
        console.print(f"[red]{e}[/red]")
"""

from typing import Any, Optional


class KeydocError(Exception):
    """Base exception for all nvkeydoc errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., line numbers, paths)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Parse Errors
# =============================================================================


class ParseError(KeydocError):
    """Base exception for structural errors in the vim configuration."""

    def __init__(self, message: str, *, line_number: int, **context: Any) -> None:
        self.line_number = line_number
        super().__init__(f"Error in line {line_number}, {message}", **context)


class InvalidBlockOpenerError(ParseError):
    """A line starts with ``lua`` but is not ``lua <<EOF``."""

    def __init__(self, line_number: int, **context: Any) -> None:
        super().__init__(
            "line starting with lua but is not 'lua <<EOF'",
            line_number=line_number,
            **context,
        )


class UnmatchedTerminatorError(ParseError):
    """An ``EOF`` line was found outside of a lua block."""

    def __init__(self, line_number: int, **context: Any) -> None:
        super().__init__(
            "EOF without matching 'lua <<EOF' before",
            line_number=line_number,
            **context,
        )


class UnterminatedBlockError(ParseError):
    """The input ended while a lua block was still open."""

    def __init__(self, line_number: int, **context: Any) -> None:
        super().__init__(
            "'lua <<EOF' is never closed by EOF",
            line_number=line_number,
            **context,
        )


# =============================================================================
# File Operation Errors
# =============================================================================


class FileOperationError(KeydocError):
    """Base exception for file operations."""

    pass


class FileReadError(FileOperationError):
    """Failed to read a file."""

    def __init__(
        self,
        message: str = "Failed to read file",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(KeydocError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
