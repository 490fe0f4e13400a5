"""Filesystem abstraction used for working-copy checks."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Filesystem operations needed by providers."""

    def directory_exists(self, path: str) -> bool:
        ...

    def create_directory(self, path: str) -> None:
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def directory_exists(self, path: str) -> bool:
        return Path(path).is_dir()

    def create_directory(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)
