"""Root Typer application with subcommand registration."""

from __future__ import annotations

from typing import Optional

import typer

from linkdeploy import DeployContext, __version__

app = typer.Typer(
    name="linkdeploy",
    help="linkdeploy — deploy light client contracts and their libraries",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Shared state across commands
_ctx = DeployContext()


def get_context() -> DeployContext:
    return _ctx


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"linkdeploy {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Optional[str] = typer.Option(None, "--config", "-C", help="Path to linkdeploy.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True
    ),
) -> None:
    """linkdeploy — deploy light client contracts and their libraries."""
    from linkdeploy.config.loader import load_config
    from linkdeploy.utils.logging import setup_logging

    _ctx.config = load_config(config)
    _ctx.backend = None
    logging_cfg = _ctx.config.logging
    setup_logging(
        level="DEBUG" if verbose else logging_cfg.level,
        json_output=json_logs or logging_cfg.json_output,
    )


# -- Subcommand registration --
from linkdeploy.cli.deploy import deploy_cmd  # noqa: E402
from linkdeploy.cli.inspect_cmd import contracts_cmd, link_cmd  # noqa: E402

app.command(name="deploy")(deploy_cmd)
app.command(name="contracts")(contracts_cmd)
app.command(name="link")(link_cmd)
