"""
One complete synchronization run.

A run executes these steps in order, stopping at the first failure:

    1. Acquire a bearer token from the refresh token
    2. Reset the destination playlist to empty
    3. Read every item of the source playlist
    4. Compute the newest-first order of the non-local tracks
    5. Append the uris to the destination in rate-limited batches

The token and the transport belong to the run. Nothing survives it, so
every run is re-derived entirely from the remote state.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from spot_reverser.core.config import Config
from spot_reverser.core.exceptions import SyncError
from spot_reverser.core.logger import get_logger
from spot_reverser.spotify.auth import acquire_token
from spot_reverser.spotify.http import HttpClient
from spot_reverser.spotify.models import AccessToken
from spot_reverser.spotify.reader import fetch_all_tracks
from spot_reverser.spotify.writer import append_batches, reset
from spot_reverser.sync.reorder import compute_order


logger = get_logger(__name__)


@dataclass(frozen=True)
class SyncResult:
    """
    Summary of a successful run.

    Attributes:
        fetched: Items read from the source, local tracks included.
        written: Uris appended to the destination.
        batches: Append requests sent.
    """
    fetched: int
    written: int
    batches: int


def _token(http: HttpClient, config: Config) -> AccessToken:
    try:
        token = acquire_token(
            http,
            config.spotify.client_id,
            config.spotify.client_secret,
            config.spotify.refresh_token,
        )
    except SyncError as e:
        logger.error(f"Failed to acquire token: {e}")
        raise

    logger.info(f"Token acquired, scope: {token.scope}")
    return token


def preview_order(config: Config, http: HttpClient | None = None) -> list[str]:
    """
    Compute the order the next run would write, without writing anything.

    Raises:
        AuthError, FetchError: As in run_sync().
    """
    owns_http = http is None
    http = http if http is not None else HttpClient()

    try:
        token = _token(http, config)
        items = fetch_all_tracks(
            http, token.access_token, config.playlists.source_id, config.sync.page_size
        )
        return compute_order(items)
    finally:
        if owns_http:
            http.close()


def run_sync(
    config: Config,
    http: HttpClient | None = None,
    sleep: Callable[[float], None] = time.sleep,
    progress: bool = False
) -> SyncResult:
    """
    Execute one full run: token, reset, fetch, reorder, append.

    Args:
        config: Validated configuration.
        http: Transport to use. If None, a new HttpClient is created for
              this run and closed when it ends.
        sleep: Sleep function used between append batches.
        progress: Show a progress bar while appending.

    Returns:
        SyncResult describing the run.

    Raises:
        AuthError: Token exchange failed. No other request was sent.
        ResetError: The destination could not be cleared.
        FetchError: The source could not be read completely. The
                    destination has already been cleared at this point.
        WriteError: A batch failed. The destination holds the batches
                    written before it.
    """
    owns_http = http is None
    http = http if http is not None else HttpClient()
    source = config.playlists.source_id
    destination = config.playlists.destination_id

    try:
        token = _token(http, config)

        try:
            reset(http, token.access_token, destination)
        except SyncError as e:
            logger.error(f"Failed to reset playlist {destination}: {e}")
            raise
        logger.info(f"Playlist {destination} reset successfully")

        try:
            items = fetch_all_tracks(http, token.access_token, source, config.sync.page_size)
        except SyncError as e:
            logger.error(f"Failed to get songs of playlist {source}: {e}")
            raise
        logger.info(f"Got {len(items)} songs")

        uris = compute_order(items)
        skipped = len(items) - len(uris)
        if skipped:
            logger.info(f"Skipping {skipped} local songs")

        try:
            batches = append_batches(
                http,
                token.access_token,
                destination,
                uris,
                batch_size=config.sync.batch_size,
                delay=config.sync.batch_delay,
                sleep=sleep,
                progress=progress,
            )
        except SyncError as e:
            logger.error(f"Failed to add songs {e.details.get('batch')}: {e}")
            raise

        logger.info(f"Added {len(uris)} songs to playlist {destination}")
        return SyncResult(fetched=len(items), written=len(uris), batches=batches)
    finally:
        if owns_http:
            http.close()
