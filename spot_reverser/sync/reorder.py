"""
Target ordering of the destination playlist.

compute_order() is a pure function: no I/O, no side effects. It is the
only place where the "newest added first" rule lives.
"""

from collections.abc import Iterable

from spot_reverser.spotify.models import PlaylistItem


def compute_order(items: Iterable[PlaylistItem]) -> list[str]:
    """
    Order playlist items newest-added first and return their uris.

    Steps:
        1. Drop local tracks, which have no catalog uri to add back
        2. Stable sort ascending by added_at
        3. Reverse, so the most recently added track comes first
        4. Keep only the uri

    Items sharing the same added_at keep their relative order from the
    ascending sort, and that order is then reversed with everything else.

    Example:
        added_at 2021-01-01 (A), 2021-06-01 (B), 2020-01-01 (C)
        -> ["B", "A", "C"]
    """
    remote = [item for item in items if not item.is_local]
    ordered = sorted(remote, key=lambda item: item.added_at)
    return [item.track.uri for item in reversed(ordered)]
