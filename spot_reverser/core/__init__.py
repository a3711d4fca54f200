"""
Core module for spot-reverser.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with console and file outputs

Usage:
    from spot_reverser.core import (
        Config, load_config,
        setup_logging, get_logger,
        SpotReverserError, ConfigError, SyncError
    )
"""

from spot_reverser.core.config import (
    Config,
    LoggingConfig,
    PlaylistConfig,
    ScheduleConfig,
    SpotifyConfig,
    SyncConfig,
    load_config,
)
from spot_reverser.core.exceptions import (
    AuthError,
    ConfigError,
    FetchError,
    ResetError,
    SchedulerError,
    SpotReverserError,
    SyncError,
    WriteError,
)
from spot_reverser.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "SpotifyConfig",
    "PlaylistConfig",
    "ScheduleConfig",
    "SyncConfig",
    "LoggingConfig",
    "load_config",
    # Exceptions
    "SpotReverserError",
    "ConfigError",
    "SchedulerError",
    "SyncError",
    "AuthError",
    "FetchError",
    "ResetError",
    "WriteError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
