"""
Command-line interface for spot-reverser.

This module implements the CLI using Click, rich-click is used for the
help output colors.

Commands:
    spotrev                      Same as `spotrev serve`
    spotrev serve [--run-now]    Run the workflow on the cron schedule, forever
    spotrev run [--progress]     Run the workflow once and exit
    spotrev order                Print the order the next run would write

Global options:
    --config <path>              YAML file with schedule/sync/logging settings
    --log-dir <dir>              Also write log files to this directory
    --verbose                    Show DEBUG messages on the console
    --version                    Show version and exit

Configuration:
    CLIENT_ID, CLIENT_SECRET, REFRESH_TOKEN, FROM and TO are read from the
    environment, or from a .env file in the current directory.
    An invalid configuration stops the program before any network call.
"""

from pathlib import Path
from typing import Optional

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100

from spot_reverser import __version__
from spot_reverser.core import (
    Config,
    ConfigError,
    SchedulerError,
    SyncError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from spot_reverser.scheduler import build_scheduler, run_forever
from spot_reverser.sync import preview_order, run_sync

logger = get_logger(__name__)


def _load(ctx: click.Context) -> Config:
    """
    Load the configuration and set up logging.

    Exits with status 1 on a configuration error.
    """
    options = ctx.find_root().obj or {}

    try:
        config = load_config(options.get("config_path"))
    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        ctx.exit(1)

    log_dir = options.get("log_dir") or config.logging.directory
    level = "DEBUG" if options.get("verbose") else config.logging.level
    setup_logging(log_dir, level=level)
    return config


@click.group(invoke_without_command=True)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="YAML file with schedule, sync and logging settings"
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Also write log files to this directory"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show DEBUG messages on the console"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    log_dir: Optional[Path],
    verbose: bool,
    version: bool
) -> None:
    """
    spot-reverser: keep a Spotify playlist in newest-added-first order.

    Reads every track of the FROM playlist, clears the TO playlist and
    writes the tracks back into it, most recently added first.

    \b
    USAGE:
        spotrev                       # hourly, forever
        spotrev serve --run-now       # run now, then hourly
        spotrev run                   # a single run
        spotrev order                 # preview, writes nothing
    """
    if version:
        click.echo(f"spot-reverser {__version__}")
        ctx.exit(0)

    ctx.obj = {"config_path": config_path, "log_dir": log_dir, "verbose": verbose}

    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command()
@click.option(
    "--run-now",
    is_flag=True,
    help="Run once immediately before waiting for the schedule"
)
@click.pass_context
def serve(ctx: click.Context, run_now: bool) -> None:
    """Run the workflow on the cron schedule until interrupted."""
    config = _load(ctx)

    try:
        scheduler = build_scheduler(config)
        if run_now:
            scheduler.jobs[0].run(scheduler.clock)
        run_forever(scheduler)
    except SchedulerError as e:
        logger.critical(f"Scheduler stopped: {e}")
        ctx.exit(1)
    except KeyboardInterrupt:
        logger.info("Scheduler interrupted by user")
    finally:
        shutdown_logging()


@cli.command()
@click.option(
    "--progress",
    is_flag=True,
    help="Show a progress bar while writing"
)
@click.pass_context
def run(ctx: click.Context, progress: bool) -> None:
    """Run the workflow once and exit."""
    config = _load(ctx)

    try:
        result = run_sync(config, progress=progress)
    except SyncError:
        # Already logged by the workflow
        ctx.exit(1)
    finally:
        shutdown_logging()

    click.echo(
        f"Wrote {result.written} of {result.fetched} songs in {result.batches} batches"
    )


@cli.command()
@click.pass_context
def order(ctx: click.Context) -> None:
    """Print the uris in the order the next run would write them."""
    config = _load(ctx)

    try:
        uris = preview_order(config)
    except SyncError as e:
        logger.error(f"Preview failed: {e}")
        ctx.exit(1)
    finally:
        shutdown_logging()

    for uri in uris:
        click.echo(uri)


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `spotrev` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
