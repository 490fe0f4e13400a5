"""Source control integration for continuous-integration builds."""

from .errors import (
    BadLogDataError,
    ConfigurationError,
    ProcessFailedError,
    ProcessTimeoutError,
    SourceControlError,
)
from .integration import BuildProgressInformation, IntegrationResult
from .modification import ChangeType, Modification, last_change_number

__all__ = [
    "BadLogDataError",
    "BuildProgressInformation",
    "ChangeType",
    "ConfigurationError",
    "IntegrationResult",
    "Modification",
    "ProcessFailedError",
    "ProcessTimeoutError",
    "SourceControlError",
    "last_change_number",
]
