from __future__ import annotations

import os
from typing import List, Optional

import pytest
from hypothesis import settings

from scmlink_core.process import ProcessInfo, ProcessResult

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("scmlink-tests", database=None)
settings.load_profile("scmlink-tests")


class RecordingExecutor:
    """Captures ProcessInfo objects and replays canned results in order."""

    def __init__(self, results: Optional[List[ProcessResult]] = None) -> None:
        self.calls: List[ProcessInfo] = []
        self._results = list(results or [])

    def queue(self, stdout: str = "", exit_code: int = 0, stderr: str = "", timed_out: bool = False) -> None:
        self._results.append(ProcessResult(exit_code, stdout, stderr, timed_out))

    def execute(self, info: ProcessInfo) -> ProcessResult:
        self.calls.append(info)
        if self._results:
            return self._results.pop(0)
        return ProcessResult(exit_code=0)

    @property
    def commands(self) -> List[List[str]]:
        return [info.argv for info in self.calls]


class FakeFileSystem:
    """In-memory FileSystem; directories are normalized absolute paths."""

    def __init__(self, directories=()) -> None:
        self.directories = {os.path.normpath(d) for d in directories}
        self.created: List[str] = []

    def directory_exists(self, path: str) -> bool:
        return os.path.normpath(path) in self.directories

    def create_directory(self, path: str) -> None:
        self.created.append(path)
        self.directories.add(os.path.normpath(path))


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def filesystem() -> FakeFileSystem:
    return FakeFileSystem()
