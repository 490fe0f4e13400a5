from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape

from scmlink_core.errors import SourceControlError
from scmlink_core.integration import IntegrationResult
from scmlink_core.vcs import SourceControl
from scmlink_ops.config import ProjectConfig, load_project_config

console = Console()
err_console = Console(stderr=True)


def fail(exc: Exception) -> NoReturn:
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    raise typer.Exit(1)


def parse_when(value: Optional[str], option: str) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"{option} must be an ISO-8601 timestamp: {exc}")


def load_provider(config_path: Optional[Path]) -> Tuple[ProjectConfig, SourceControl]:
    try:
        project = load_project_config(config_path)
        return project, project.create_source_control()
    except SourceControlError as exc:
        fail(exc)


def new_result(project: ProjectConfig, start_time: datetime, label: str = "", succeeded: bool = False) -> IntegrationResult:
    return IntegrationResult(
        label=label,
        start_time=start_time,
        working_directory=project.project.working_directory,
        succeeded=succeeded,
        project_name=project.project.name,
    )
