"""
spot-reverser: keep a Spotify playlist in newest-added-first order.

Every hour, on the hour, the workflow reads every track of a source
playlist, clears a destination playlist and writes the source's tracks
into it, most recently added first.

Architecture:
    A run is a fixed sequence of remote calls:

    1. spotify/auth.py: exchange the refresh token for a bearer token
    2. spotify/writer.py: reset the destination to an empty list
    3. spotify/reader.py: page through the source playlist (50 per page)
    4. sync/reorder.py: drop local tracks, sort by added_at, reverse
    5. spotify/writer.py: append the uris 2 at a time, 100 ms apart

    Any failure aborts the run. The scheduler logs it and the next tick
    starts over from the remote state; nothing is stored locally.

Modules:
    core/       - Configuration, logging, exceptions
    spotify/    - HTTP transport, token, reader, writer, models
    sync/       - Reordering and the run workflow
    scheduler/  - Cron jobs and the driver loop
    cli.py      - Command-line interface

Usage:
    Command Line:
        spotrev                  # run hourly until interrupted
        spotrev run              # run once
        spotrev order            # preview the computed order

    Python API:
        from spot_reverser.core import load_config, setup_logging
        from spot_reverser.sync import run_sync

        config = load_config()
        setup_logging(config.logging.directory)
        run_sync(config)

Configuration:
    Environment variables (or a .env file):
        CLIENT_ID, CLIENT_SECRET, REFRESH_TOKEN, FROM, TO

Dependencies:
    - requests: HTTP transport
    - python-dotenv: .env loading
    - pyyaml: optional config.yaml
    - croniter: cron schedule computation
    - click / rich-click: CLI
    - tqdm: progress bar and tqdm-safe console logging
"""

__version__ = "0.1.0"
__author__ = "spot-reverser"
__license__ = "MIT"

# Convenience imports for common usage
from spot_reverser.core import (
    AuthError,
    Config,
    ConfigError,
    FetchError,
    ResetError,
    SchedulerError,
    SpotReverserError,
    SyncError,
    WriteError,
    get_logger,
    load_config,
    setup_logging,
)
from spot_reverser.spotify import AccessToken, PlaylistItem, Track
from spot_reverser.sync import compute_order, run_sync

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "SpotReverserError",
    "ConfigError",
    "SchedulerError",
    "SyncError",
    "AuthError",
    "FetchError",
    "ResetError",
    "WriteError",
    # Models
    "AccessToken",
    "Track",
    "PlaylistItem",
    # Workflow
    "compute_order",
    "run_sync",
]
