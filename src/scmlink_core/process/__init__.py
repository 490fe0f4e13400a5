from .arguments import ProcessArgumentBuilder
from .executor import DEFAULT_TIMEOUT_SECONDS, ProcessExecutor, ProcessInfo, ProcessResult

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "ProcessArgumentBuilder",
    "ProcessExecutor",
    "ProcessInfo",
    "ProcessResult",
]
