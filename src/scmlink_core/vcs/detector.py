"""Working-copy detection."""

from __future__ import annotations

import os
from typing import Protocol, Sequence

from ..filesystem import FileSystem


class WorkingCopyDetector(Protocol):
    """Decide whether a directory already holds a working copy."""

    def is_working_copy(self, path: str) -> bool:
        ...


class MetadataDirectoryDetector:
    """A working copy exists when any backend metadata folder is present."""

    def __init__(self, filesystem: FileSystem, names: Sequence[str]) -> None:
        if not names:
            raise ValueError("names must not be empty")
        self._filesystem = filesystem
        self._names = tuple(names)

    @property
    def names(self) -> tuple:
        return self._names

    def is_working_copy(self, path: str) -> bool:
        return any(self._filesystem.directory_exists(os.path.join(path, name)) for name in self._names)
