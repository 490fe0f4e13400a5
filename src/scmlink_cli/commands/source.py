"""Source control commands: poll, fetch, label and full cycle."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from scmlink_core.errors import SourceControlError
from scmlink_core.modification import Modification, last_change_number
from scmlink_ops.cycle import BuildCycle, run_cycle

from ..util import console, fail, load_provider, new_result, parse_when

_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Project config file (default: scmlink.toml)")


def _render(mods: List[Modification], output_format: str) -> None:
    if output_format == "json":
        typer.echo(json.dumps([mod.to_dict() for mod in mods], ensure_ascii=True, indent=2))
        return
    if not mods:
        console.print("No modifications.")
        return
    table = Table(title=f"{len(mods)} modifications")
    table.add_column("Rev", justify="right")
    table.add_column("Author")
    table.add_column("When (UTC)")
    table.add_column("Type")
    table.add_column("Path")
    table.add_column("Comment")
    for mod in mods:
        table.add_row(
            str(mod.change_number),
            escape(mod.user_name),
            mod.modified_time.strftime("%Y-%m-%d %H:%M:%S"),
            mod.type.value,
            escape(mod.path),
            escape(mod.comment.strip().splitlines()[0]) if mod.comment.strip() else "",
        )
    console.print(table)


def modifications(
    config: Optional[Path] = _CONFIG_OPTION,
    since: str = typer.Option(..., "--since", help="Start of the window (ISO-8601)"),
    until: Optional[str] = typer.Option(None, "--until", help="End of the window (ISO-8601, default now)"),
    output_format: str = typer.Option("table", "--format", help="Output format: table|json"),
):
    """List upstream modifications in a time window."""
    project, provider = load_provider(config)
    from_result = new_result(project, parse_when(since, "--since"))
    to_result = new_result(project, parse_when(until, "--until"))
    try:
        mods = provider.get_modifications(from_result, to_result)
    except SourceControlError as exc:
        fail(exc)
    _render(mods, output_format)


def get_source(
    config: Optional[Path] = _CONFIG_OPTION,
    revision: int = typer.Option(0, "--revision", min=0, help="Update to this revision (0 = latest)"),
):
    """Check out or update the working copy."""
    project, provider = load_provider(config)
    result = new_result(project, parse_when(None, "--since"))
    mods = [Modification(revision, "", result.start_time)] if revision else []
    try:
        provider.get_source(result, mods)
    except SourceControlError as exc:
        fail(exc)
    console.print(f"✓ Source ready in {result.working_directory}")


def label(
    config: Optional[Path] = _CONFIG_OPTION,
    build_label: str = typer.Option(..., "--label", help="Build label used as the tag name"),
    revision: int = typer.Option(0, "--revision", min=0, help="Tag this revision (0 = tag the working copy)"),
):
    """Tag a successful build upstream."""
    project, provider = load_provider(config)
    result = new_result(project, parse_when(None, "--since"), label=build_label, succeeded=True)
    mods = [Modification(revision, "", result.start_time)] if revision else []
    if not provider.tags_on_success:
        console.print("Tagging is disabled for this project (tag_on_success = false).")
        return
    try:
        provider.label_source_control(result, mods)
    except SourceControlError as exc:
        fail(exc)
    console.print(f"✓ Labelled build {build_label}")


def cycle(
    config: Optional[Path] = _CONFIG_OPTION,
    since: str = typer.Option(..., "--since", help="Start time of the previous build (ISO-8601)"),
    build_label: str = typer.Option("", "--label", help="Build label (default: last change number)"),
    force: bool = typer.Option(False, "--force", help="Fetch and label even without modifications"),
):
    """Poll, fetch and label in one pass; the build step itself always succeeds."""
    project, provider = load_provider(config)
    from_result = new_result(project, parse_when(since, "--since"))
    to_result = new_result(project, parse_when(None, "--until"), label=build_label)
    build_cycle = BuildCycle(provider)

    def _build(result) -> bool:
        if not result.label:
            result.label = str(last_change_number(build_cycle.modifications))
        return True

    try:
        report = run_cycle(provider, from_result, to_result, _build, force=force, cycle=build_cycle)
    except SourceControlError as exc:
        fail(exc)
    console.print(
        f"state={report.state.value} modifications={len(report.modifications)} "
        f"built={report.built} label={report.label or '-'}"
    )
