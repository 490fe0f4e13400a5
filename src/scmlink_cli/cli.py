from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

app = typer.Typer(help="scmlink: source control integration for CI builds")


@app.callback()
def _init(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level"),
    debug: bool = typer.Option(False, "--debug", help="Log commands at DEBUG level"),
):
    if verbose or debug:
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


# Subcommands are registered in commands/*.py
from .commands import config_cmd  # noqa: E402
from .commands.source import cycle, get_source, label, modifications  # noqa: E402

app.add_typer(config_cmd.app, name="config", help="Configuration inspection and validation")
app.command(name="modifications")(modifications)
app.command(name="get-source")(get_source)
app.command(name="label")(label)
app.command(name="cycle")(cycle)


def main():
    app()
