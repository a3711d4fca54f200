"""
Configuration management for spot-reverser.

This module loads and validates the application configuration from two
sources:

    - Environment variables (optionally from a .env file) for the secrets
      and playlist ids: CLIENT_ID, CLIENT_SECRET, REFRESH_TOKEN, FROM, TO.
    - An optional config.yaml for non-secret tuning: schedule, batching
      and logging.

The whole configuration is validated before any network call is made.
All missing environment variables are reported together in a single
ConfigError.

Example config.yaml:
    schedule:
      cron: "0 * * * *"       # hourly, on the hour

    sync:
      page_size: 50           # items per GET (Spotify maximum for this call: 50)
      batch_size: 2           # uris per append POST
      batch_delay: 0.1        # seconds between append POSTs

    logging:
      directory: null         # set to write log files, e.g. "~/.spot-reverser/logs"
      level: INFO
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from croniter import croniter
from dotenv import load_dotenv

from spot_reverser.core.exceptions import ConfigError


# Default configuration file name (looked up in the current working directory)
CONFIG_FILENAME = "config.yaml"

# Environment variable names, in the order they are reported when missing
ENV_CLIENT_ID = "CLIENT_ID"
ENV_CLIENT_SECRET = "CLIENT_SECRET"
ENV_REFRESH_TOKEN = "REFRESH_TOKEN"
ENV_SOURCE = "FROM"
ENV_DESTINATION = "TO"
REQUIRED_ENV = (ENV_CLIENT_ID, ENV_CLIENT_SECRET, ENV_REFRESH_TOKEN, ENV_SOURCE, ENV_DESTINATION)

DEFAULT_CRON = "0 * * * *"
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 50
DEFAULT_BATCH_SIZE = 2
DEFAULT_BATCH_DELAY = 0.1
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SpotifyConfig:
    """
    Spotify API credentials.

    All three values are opaque strings. They are never logged.

    Attributes:
        client_id: The Spotify application client ID.
        client_secret: The Spotify application client secret.
        refresh_token: Long-lived refresh credential exchanged for a
                       bearer token at the start of every run.
    """
    client_id: str
    client_secret: str
    refresh_token: str

    def __repr__(self) -> str:
        return f"SpotifyConfig(client_id={self.client_id!r}, client_secret='***', refresh_token='***')"


@dataclass(frozen=True)
class PlaylistConfig:
    """
    Playlists involved in a run.

    Attributes:
        source_id: Playlist that is read (FROM).
        destination_id: Playlist that is cleared and rewritten (TO).
    """
    source_id: str
    destination_id: str


@dataclass(frozen=True)
class ScheduleConfig:
    """Cron cadence of the scheduler (5-field cron expression)."""
    cron: str = DEFAULT_CRON


@dataclass(frozen=True)
class SyncConfig:
    """
    Paging and batching behavior.

    Attributes:
        page_size: Items requested per page when reading the source.
        batch_size: Maximum number of uris per append request.
        batch_delay: Pause in seconds between two append requests.
    """
    page_size: int = DEFAULT_PAGE_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay: float = DEFAULT_BATCH_DELAY


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging output.

    Attributes:
        directory: Directory for log files, or None for console only.
        level: Console log level name.
    """
    directory: Path | None = None
    level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and passed explicitly into the workflow.

    Example:
        config = load_config()
        print(f"Reversing {config.playlists.source_id} into {config.playlists.destination_id}")
    """
    spotify: SpotifyConfig
    playlists: PlaylistConfig
    schedule: ScheduleConfig = ScheduleConfig()
    sync: SyncConfig = SyncConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None
) -> Config:
    """
    Load and validate the complete configuration.

    Args:
        config_path: Optional explicit path to a YAML config file. It must exist.
                     If None, config.yaml in the current working directory is
                     used when present; otherwise defaults apply.
        environ: Mapping to read the environment from. If None, a .env file
                 is loaded into os.environ (existing variables win) and
                 os.environ is used.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If environment variables are missing, the config file is
                     unreadable or invalid, or a value is out of range.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    spotify_config, playlist_config = _parse_environment(environ)
    raw_config = _read_config_file(config_path)

    return Config(
        spotify=spotify_config,
        playlists=playlist_config,
        schedule=_parse_schedule_config(_section(raw_config, "schedule")),
        sync=_parse_sync_config(_section(raw_config, "sync")),
        logging=_parse_logging_config(_section(raw_config, "logging")),
    )


def _parse_environment(environ: Mapping[str, str]) -> tuple[SpotifyConfig, PlaylistConfig]:
    """
    Extract credentials and playlist ids from the environment.

    Raises:
        ConfigError: Listing every missing or empty variable at once,
                     or if source and destination are the same playlist.
    """
    values = {name: (environ.get(name) or "").strip() for name in REQUIRED_ENV}
    missing = [name for name in REQUIRED_ENV if not values[name]]

    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}",
            details={"missing": missing}
        )

    if values[ENV_SOURCE] == values[ENV_DESTINATION]:
        raise ConfigError(
            f"{ENV_SOURCE} and {ENV_DESTINATION} must be different playlists",
            details={"playlist_id": values[ENV_SOURCE]}
        )

    spotify_config = SpotifyConfig(
        client_id=values[ENV_CLIENT_ID],
        client_secret=values[ENV_CLIENT_SECRET],
        refresh_token=values[ENV_REFRESH_TOKEN]
    )
    playlist_config = PlaylistConfig(
        source_id=values[ENV_SOURCE],
        destination_id=values[ENV_DESTINATION]
    )
    return spotify_config, playlist_config


def _read_config_file(config_path: Path | None) -> dict[str, Any]:
    """
    Read the optional YAML config file.

    Returns:
        The parsed mapping, or an empty dict when no file is used.
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return {}
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file parses to None
    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return raw_config


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _parse_schedule_config(section: dict[str, Any]) -> ScheduleConfig:
    cron = section.get("cron", DEFAULT_CRON)

    if not isinstance(cron, str) or not croniter.is_valid(cron.strip()):
        raise ConfigError(
            f"'schedule.cron' is not a valid cron expression: {cron!r}",
            details={"field": "schedule.cron", "value": cron}
        )

    return ScheduleConfig(cron=cron.strip())


def _parse_sync_config(section: dict[str, Any]) -> SyncConfig:
    page_size = section.get("page_size", DEFAULT_PAGE_SIZE)
    batch_size = section.get("batch_size", DEFAULT_BATCH_SIZE)
    batch_delay = section.get("batch_delay", DEFAULT_BATCH_DELAY)

    # bool is a subclass of int, reject it explicitly
    if isinstance(page_size, bool) or not isinstance(page_size, int) or not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ConfigError(
            f"'sync.page_size' must be an integer between 1 and {MAX_PAGE_SIZE}",
            details={"field": "sync.page_size", "value": page_size}
        )

    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
        raise ConfigError(
            "'sync.batch_size' must be a positive integer",
            details={"field": "sync.batch_size", "value": batch_size}
        )

    if isinstance(batch_delay, bool) or not isinstance(batch_delay, (int, float)) or batch_delay < 0:
        raise ConfigError(
            "'sync.batch_delay' must be a non-negative number of seconds",
            details={"field": "sync.batch_delay", "value": batch_delay}
        )

    return SyncConfig(
        page_size=page_size,
        batch_size=batch_size,
        batch_delay=float(batch_delay)
    )


def _parse_logging_config(section: dict[str, Any]) -> LoggingConfig:
    directory = section.get("directory")
    level = section.get("level", DEFAULT_LOG_LEVEL)

    log_dir = None
    if directory is not None:
        if not isinstance(directory, str) or not directory.strip():
            raise ConfigError(
                "'logging.directory' must be a non-empty string or null",
                details={"field": "logging.directory"}
            )
        # Expand ~ and make absolute
        log_dir = Path(directory.strip()).expanduser().resolve()

    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"'logging.level' must be one of {', '.join(LOG_LEVELS)}",
            details={"field": "logging.level", "value": level}
        )

    return LoggingConfig(directory=log_dir, level=level.upper())
