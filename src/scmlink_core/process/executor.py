"""Process invocation facade."""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 600.0

_PASSWORD_PATTERN = re.compile(r'(--password\s+)("[^"]*"|\S+)')


@dataclass
class ProcessInfo:
    """Executable, argument string and working directory for one invocation."""
    filename: str
    arguments: str
    working_directory: Optional[str] = None
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS
    stream_encoding: str = "utf-8"
    argv: Optional[List[str]] = field(default=None, repr=False)

    def command_argv(self) -> List[str]:
        args = self.argv if self.argv is not None else shlex.split(self.arguments)
        return [self.filename, *args]

    def masked_arguments(self) -> str:
        return _PASSWORD_PATTERN.sub(r"\1******", self.arguments)

    def __str__(self) -> str:
        return f"{self.filename} {self.masked_arguments()}".strip()

    def __repr__(self) -> str:
        return (
            f"ProcessInfo(filename={self.filename!r}, arguments={self.masked_arguments()!r}, "
            f"working_directory={self.working_directory!r}, timeout={self.timeout!r}, "
            f"stream_encoding={self.stream_encoding!r})"
        )


@dataclass
class ProcessResult:
    exit_code: int
    standard_output: str = ""
    standard_error: str = ""
    timed_out: bool = False

    @property
    def failed(self) -> bool:
        return self.timed_out or self.exit_code != 0


def _as_text(value, encoding: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(encoding, errors="replace")
    return value


class ProcessExecutor:
    """Run an external executable and capture its output.

    Failures are reported in the returned ``ProcessResult``; interpretation is
    left to the caller.
    """

    def execute(self, info: ProcessInfo) -> ProcessResult:
        logger.debug(f"Executing: {info} (cwd={info.working_directory})")
        try:
            completed = subprocess.run(
                info.command_argv(),
                cwd=info.working_directory or None,
                capture_output=True,
                text=True,
                encoding=info.stream_encoding,
                errors="replace",
                timeout=info.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning(f"Process timed out after {info.timeout}s: {info}")
            return ProcessResult(
                exit_code=-1,
                standard_output=_as_text(exc.stdout, info.stream_encoding),
                standard_error=_as_text(exc.stderr, info.stream_encoding),
                timed_out=True,
            )
        except OSError as exc:
            return ProcessResult(exit_code=-1, standard_error=f"Unable to launch {info.filename}: {exc}")

        return ProcessResult(
            exit_code=completed.returncode,
            standard_output=completed.stdout or "",
            standard_error=completed.stderr or "",
        )
