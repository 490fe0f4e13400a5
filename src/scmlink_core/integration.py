"""Per-build context handed to source control providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class BuildProgressInformation:
    """Sink for human-readable build phase descriptions."""

    def __init__(self, project_name: str = "") -> None:
        self._project_name = project_name
        self._history: List[str] = []

    @property
    def current_phase(self) -> Optional[str]:
        return self._history[-1] if self._history else None

    @property
    def history(self) -> List[str]:
        return list(self._history)

    def signal_start_run_task(self, description: str) -> None:
        self._history.append(description)
        if self._project_name:
            logger.info(f"[{self._project_name}] {description}")
        else:
            logger.info(description)


@dataclass
class IntegrationResult:
    """Build context: label, start time, working directory, outcome and progress sink."""
    label: str = ""
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    working_directory: str = ""
    succeeded: bool = False
    project_name: str = ""
    build_progress: BuildProgressInformation = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.build_progress is None:
            self.build_progress = BuildProgressInformation(self.project_name)

    def base_from_working_directory(self, path: Optional[str]) -> str:
        """Resolve ``path`` against this result's working directory.

        Blank paths resolve to the working directory itself; absolute paths are kept.
        """
        if not path or not path.strip():
            return self.working_directory
        if Path(path).is_absolute():
            return path
        return str(Path(self.working_directory) / path)
