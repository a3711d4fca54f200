"""
Playlist reading for spot-reverser.

Retrieves the complete, ordered content of a playlist through offset
pagination. The listing is only complete once a page without a 'next'
cursor has been received; a failure on any page discards everything
read so far.
"""

import json

from spot_reverser.core.config import DEFAULT_PAGE_SIZE
from spot_reverser.core.exceptions import FetchError
from spot_reverser.core.logger import get_logger
from spot_reverser.spotify.http import HttpClient, playlist_tracks_url
from spot_reverser.spotify.models import Page, PlaylistItem


logger = get_logger(__name__)


def fetch_page(
    http: HttpClient,
    token: str,
    playlist_id: str,
    offset: int,
    limit: int = DEFAULT_PAGE_SIZE
) -> Page[PlaylistItem]:
    """
    Fetch one page of playlist items.

    Raises:
        FetchError: On a non-2xx response or a malformed page payload.
    """
    url = playlist_tracks_url(playlist_id)
    response = http.request(
        "GET",
        url,
        headers=http.bearer(token),
        params={"offset": offset, "limit": limit},
        error_cls=FetchError,
        error_message="Failed to get songs",
    )

    try:
        return Page.from_spotify_api(response.json(), PlaylistItem.from_spotify_api)
    except (json.JSONDecodeError, ValueError) as e:
        raise FetchError(
            f"Invalid playlist page at offset {offset}: {e}",
            body=response.text,
            status_code=response.status_code,
            details={"playlist_id": playlist_id, "offset": offset}
        ) from e


def fetch_all_tracks(
    http: HttpClient,
    token: str,
    playlist_id: str,
    page_size: int = DEFAULT_PAGE_SIZE
) -> list[PlaylistItem]:
    """
    Get ALL items of a playlist, handling pagination automatically.

    Args:
        http: Transport of the current run.
        token: Bearer credential.
        playlist_id: Playlist to read.
        page_size: Items requested per page.

    Returns:
        Every item of the playlist in API order. No deduplication.

    Raises:
        FetchError: If any page fails. No partial result is returned.

    Pagination:
        Requests offsets 0, page_size, 2 * page_size, ... and stops at the
        first page whose 'next' is null.
    """
    logger.info(f"Getting songs of playlist {playlist_id}")

    all_items: list[PlaylistItem] = []
    offset = 0

    while True:
        page = fetch_page(http, token, playlist_id, offset, page_size)
        all_items.extend(page.items)
        logger.debug(f"Got {len(page.items)} songs at offset {offset}")

        if not page.has_next:
            break
        offset += page_size

    return all_items
