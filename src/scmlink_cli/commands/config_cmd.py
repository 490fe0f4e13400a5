from __future__ import annotations

from pathlib import Path
from typing import Optional

import tomli_w
import typer
from rich.markup import escape

from scmlink_core.errors import ConfigurationError
from scmlink_core.vcs import get_default_registry
from scmlink_ops.config import TEMPLATE_CONFIG, read_config_data, resolve_config_path, validate_project_config

from ..util import console, fail

app = typer.Typer(help="Configuration inspection and validation")

_SECRET_SUFFIXES = ("password", "_token", "_key")


def _plaintext_secrets(data: dict, prefix: str = "") -> list[str]:
    warnings: list[str] = []
    for key, value in data.items():
        if isinstance(value, dict):
            warnings.extend(_plaintext_secrets(value, f"{prefix}{key}."))
        elif isinstance(key, str) and key.lower().endswith(_SECRET_SUFFIXES):
            if isinstance(value, str) and value and not value.startswith("env:"):
                warnings.append(f"{prefix}{key} is stored in plain text; prefer an env: reference")
    return warnings


@app.command("validate")
def config_validate(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Project config file"),
):
    """Validate a project config file."""
    path = resolve_config_path(config)
    try:
        data = read_config_data(path)
    except ConfigurationError as exc:
        fail(exc)

    errors = validate_project_config(data)
    for warning in _plaintext_secrets(data):
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    if errors:
        console.print(f"❌ {path}: {len(errors)} problem(s)")
        for err in errors:
            console.print(f"  - {escape(err)}")
        raise typer.Exit(1)
    console.print(f"✓ Config is valid: {path}")


@app.command("init")
def config_init(
    output: Path = typer.Option(Path("scmlink.toml"), "--output", "-o", help="Where to write the template"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Write a template project config."""
    if output.exists() and not force:
        console.print(f"Refusing to overwrite {output} (use --force)")
        raise typer.Exit(1)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(tomli_w.dumps(TEMPLATE_CONFIG), encoding="utf-8")
    console.print(f"✓ Wrote {output}")


@app.command("types")
def config_types():
    """List registered source control types."""
    for name in get_default_registry().list_types():
        typer.echo(name)
