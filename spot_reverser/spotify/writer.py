"""
Playlist writing for spot-reverser.

Two operations act on the destination playlist:

    reset(): replaces the whole track list with an empty list in a single
             PUT. Safe to repeat; an already empty playlist stays empty.

    append_batches(): appends uris in small batches, one POST per batch,
             with a pause between batches to stay clear of rate limits.
             Each POST appends to the end of the playlist, so the order of
             the calls is the final order of the playlist. Batches are
             therefore sent strictly one after another.

A failed batch aborts the append. Batches already written stay in the
destination until the next run resets it.
"""

import time
from collections.abc import Callable, Iterator, Sequence

from tqdm import tqdm

from spot_reverser.core.config import DEFAULT_BATCH_DELAY, DEFAULT_BATCH_SIZE
from spot_reverser.core.exceptions import ResetError, WriteError
from spot_reverser.core.logger import get_logger
from spot_reverser.spotify.http import HttpClient, playlist_tracks_url


logger = get_logger(__name__)


def batched(uris: Sequence[str], size: int) -> Iterator[list[str]]:
    """
    Split uris into consecutive chunks of at most `size` items.

    Example:
        >>> list(batched(["a", "b", "c", "d", "e"], 2))
        [['a', 'b'], ['c', 'd'], ['e']]
    """
    if size < 1:
        raise ValueError("Batch size must be at least 1")
    for i in range(0, len(uris), size):
        yield list(uris[i:i + size])


def reset(http: HttpClient, token: str, playlist_id: str) -> None:
    """
    Clear the destination playlist.

    Raises:
        ResetError: On a non-2xx response.
    """
    logger.info(f"Resetting playlist {playlist_id}")

    http.request(
        "PUT",
        playlist_tracks_url(playlist_id),
        headers=http.bearer(token),
        json={"uris": []},
        error_cls=ResetError,
        error_message="Failed to reset playlist",
    )


def add_songs(http: HttpClient, token: str, playlist_id: str, uris: list[str]) -> None:
    """
    Append one batch of uris to the end of the playlist.

    Raises:
        WriteError: On a non-2xx response, with the batch in details.
    """
    try:
        http.request(
            "POST",
            playlist_tracks_url(playlist_id),
            headers=http.bearer(token),
            json={"uris": uris},
            error_cls=WriteError,
            error_message="Failed to add songs",
        )
    except WriteError as e:
        e.details["batch"] = list(uris)
        raise


def append_batches(
    http: HttpClient,
    token: str,
    playlist_id: str,
    uris: Sequence[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay: float = DEFAULT_BATCH_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    progress: bool = False
) -> int:
    """
    Append uris to the playlist in order, batch by batch.

    Args:
        http: Transport of the current run.
        token: Bearer credential.
        playlist_id: Destination playlist.
        uris: Uris in their final playlist order.
        batch_size: Maximum uris per request.
        delay: Seconds to pause between two consecutive requests.
        sleep: Sleep function (injected by tests).
        progress: Show a tqdm progress bar over the batches.

    Returns:
        Number of batches written.

    Raises:
        WriteError: On the first failed batch. Later batches are not sent.
    """
    batches = list(batched(uris, batch_size))
    logger.info(f"Adding {len(uris)} songs in {len(batches)} batches")

    written = 0
    for batch in tqdm(batches, desc="Writing", unit="batch", disable=not progress):
        if written:
            sleep(delay)
        add_songs(http, token, playlist_id, batch)
        logger.debug(f"Added songs {batch}")
        written += 1

    return written
