"""Error taxonomy for source control operations."""

from __future__ import annotations

from typing import Optional


class SourceControlError(Exception):
    """Base class for all source control failures."""


class ConfigurationError(SourceControlError):
    """A required configuration field is missing or invalid for the attempted operation."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class BadLogDataError(SourceControlError):
    """Backend history output could not be parsed."""

    def __init__(self, parser_message: str, log_data: str = "") -> None:
        super().__init__(f"Bad log data: {parser_message}")
        self.parser_message = parser_message
        self.log_data = log_data


class ProcessFailedError(SourceControlError):
    """External process exited non-zero or could not be launched."""

    def __init__(
        self,
        message: str,
        command: str = "",
        exit_code: Optional[int] = None,
        standard_output: str = "",
        standard_error: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.standard_output = standard_output
        self.standard_error = standard_error


class ProcessTimeoutError(ProcessFailedError):
    """External process exceeded its timeout."""
