"""Backend-agnostic representation of an upstream change."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional


class ChangeType(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    REPLACED = "replaced"
    UNKNOWN = "unknown"


@dataclass
class Modification:
    """One changed path in one upstream revision.

    ``url`` and ``issue_url`` stay ``None`` until an enrichment builder fills them.
    """
    change_number: int
    user_name: str
    modified_time: datetime
    comment: str = ""
    folder_name: str = ""
    file_name: str = ""
    type: ChangeType = ChangeType.UNKNOWN
    url: Optional[str] = None
    issue_url: Optional[str] = None
    email_address: Optional[str] = None

    def __post_init__(self) -> None:
        if self.change_number < 0:
            raise ValueError("change_number must be >= 0")

    @property
    def path(self) -> str:
        if not self.folder_name:
            return self.file_name
        if not self.file_name:
            return self.folder_name
        return f"{self.folder_name}/{self.file_name}"

    @classmethod
    def from_path(cls, path: str, **kwargs) -> "Modification":
        """Build a modification, splitting ``path`` into folder and file name."""
        folder, _, name = path.rpartition("/")
        return cls(folder_name=folder, file_name=name, **kwargs)

    def to_dict(self) -> dict:
        return {
            "change_number": self.change_number,
            "user_name": self.user_name,
            "modified_time": self.modified_time.isoformat(),
            "comment": self.comment,
            "path": self.path,
            "type": self.type.value,
            "url": self.url,
            "issue_url": self.issue_url,
        }


def last_change_number(mods: Iterable[Modification]) -> int:
    """Highest change number in ``mods``; 0 when empty."""
    return max((mod.change_number for mod in mods), default=0)
