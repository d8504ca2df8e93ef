"""CLI interface for mdpreview.

Command-line tool for previewing markdown files in the browser.
"""

import logging
from pathlib import Path

import click

from mdpreview import __version__
from mdpreview.config import Config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(__version__, prog_name="mdpreview")
def cli() -> None:
    """mdpreview - preview markdown files as GitHub renders them."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover mdpreview.toml)",
)
@click.option(
    "--folder",
    "-f",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Folder to use as the root when serving files (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--context",
    default=None,
    help="GitHub repository to render in, as owner/repo (enables gfm mode)",
)
@click.option(
    "--offline/--online",
    default=None,
    help="Render with the built-in markdown parser instead of the GitHub API",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds between live update polls (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def serve(
    config_path: Path | None,
    folder: Path | None,
    host: str | None,
    port: int | None,
    context: str | None,
    offline: bool | None,
    interval: float | None,
    verbose: bool,
) -> None:
    """Start the preview server."""
    from mdpreview.server import run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            root=folder,
            offline=offline,
            context=context,
            interval=interval,
        )
    except (FileNotFoundError, ValueError) as err:
        raise click.ClickException(str(err)) from err

    click.echo(f"Starting server on http://{config.server.host}:{config.server.port}")
    click.echo(f"Folder: {config.docs.root}")
    if config.renderer.offline:
        click.echo("Renderer: offline")
    else:
        click.echo(f"Renderer: {config.renderer.api_url}")
    if config.renderer.context:
        click.echo(f"Context: {config.renderer.context}")
    click.echo(f"Live update interval: {config.live_update.interval}s")

    run_server(config)
