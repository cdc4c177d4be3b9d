"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from GocmtUserError.

Programming errors and bugs should NOT inherit from GocmtUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class GocmtUserError(Exception):
    """
    Base class for all user-facing errors in gocmt.

    These errors indicate problems that the user can fix:
    malformed sources, bad templates, invalid configuration files.
    """
    pass


class ParseFailure(GocmtUserError):
    """Go source could not be parsed into a syntax tree."""

    def __init__(self, message: str, *, path: Optional[Path] = None, line: Optional[int] = None):
        self.path = path
        self.line = line
        location = str(path) if path else "<source>"
        if line is not None:
            location = f"{location}:{line}"
        super().__init__(f"{location}: {message}")


class TemplateFormatError(GocmtUserError, ValueError):
    """Comment template does not take exactly one name argument."""
    pass


class ConfigError(GocmtUserError):
    """Invalid configuration file or option value."""
    pass


__all__ = ["GocmtUserError", "ParseFailure", "TemplateFormatError", "ConfigError"]
