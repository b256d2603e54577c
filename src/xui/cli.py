"""CLI for running x-ui and inspecting its configuration."""

from __future__ import annotations

import json
import os
import sys

import click
import uvicorn

from xui import __version__, config

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 2053


def _format_config(snapshot: dict[str, object]) -> list[str]:
    """Render a configuration snapshot as ``key: value`` lines."""
    lines = []
    for key, value in snapshot.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                lines.append(f"{key}.{sub_key}: {sub_value}")
        else:
            lines.append(f"{key}: {value}")
    return lines


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """x-ui - panel runtime configuration."""
    pass  # pylint: disable=unnecessary-pass


@cli.command()
@click.option("--host", default=DEFAULT_HOST, help="Host to bind to")
@click.option("--port", default=DEFAULT_PORT, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.option("--debug", is_flag=True, help="Force debug logging (sets XUI_DEBUG)")
@click.option("--log-level", default=None, help="Log level (sets XUI_LOG_LEVEL)")
@click.option("--db-folder", default=None, help="Database folder (sets XUI_DB_FOLDER)")
def run(
    host: str,
    port: int,
    reload: bool,
    debug: bool,
    log_level: str | None,
    db_folder: str | None,
) -> None:
    """Run the server."""
    if debug:
        os.environ["XUI_DEBUG"] = "true"
    if log_level:
        os.environ["XUI_LOG_LEVEL"] = log_level
    if db_folder:
        os.environ["XUI_DB_FOLDER"] = db_folder

    click.echo(f"Starting {config.get_name()} {config.get_version()} on {host}:{port}")

    uvicorn.run(
        "xui.app:app",
        host=host,
        port=port,
        reload=reload,
    )


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
def show(as_json: bool) -> None:
    """Show the resolved configuration."""
    try:
        snapshot = config.describe_config()
    except config.DatabaseConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(snapshot, indent=2))
        return

    for line in _format_config(snapshot):
        click.echo(line)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
