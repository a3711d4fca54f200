"""
Data models for Spotify entities.

This module defines immutable dataclasses for the parts of the Spotify Web
API responses that a run needs. Everything else in the payloads is ignored.

Design Decisions:
    - All dataclasses are frozen (immutable)
    - Field names match the Spotify API response keys
    - A payload missing a required key, or holding a value of the wrong
      type (such as a null added_at), raises ValueError naming the key;
      callers convert it to the error type of their component

Usage:
    from spot_reverser.spotify.models import Page, PlaylistItem

    page = Page.from_spotify_api(response.json(), PlaylistItem.from_spotify_api)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar


T = TypeVar("T")


def _require(data: Any, key: str, context: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"{context} must be a JSON object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"{context} is missing '{key}'")
    return data[key]


def _require_type(data: Any, key: str, expected: type, context: str) -> Any:
    value = _require(data, key, context)
    if not isinstance(value, expected):
        raise ValueError(
            f"{context} '{key}' must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class AccessToken:
    """
    Short-lived bearer credential returned by the token endpoint.

    One AccessToken is created per workflow run and dropped when the run
    ends. It is never persisted, and its repr hides the credential so it
    cannot leak into logs.

    Attributes:
        access_token: The bearer credential for the Authorization header.
        scope: Space-delimited list of granted permissions.
                Example: "playlist-read-private playlist-modify-public"
    """
    access_token: str
    scope: str = ""

    @classmethod
    def from_spotify_api(cls, data: dict[str, Any]) -> "AccessToken":
        access_token = _require(data, "access_token", "Token response")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("Token response has an empty 'access_token'")
        return cls(access_token=access_token, scope=data.get("scope") or "")

    @property
    def scopes(self) -> tuple[str, ...]:
        """Granted permissions as a tuple."""
        return tuple(self.scope.split())

    def __repr__(self) -> str:
        return f"AccessToken(access_token='***', scope={self.scope!r})"


@dataclass(frozen=True)
class Track:
    """
    A catalog track, reduced to its resource identifier.

    Attributes:
        uri: Opaque Spotify URI. Example: "spotify:track:4cOdK2wGLETKBW3PvgPWqT"
    """
    uri: str

    @classmethod
    def from_spotify_api(cls, data: dict[str, Any]) -> "Track":
        return cls(uri=_require_type(data, "uri", str, "Track"))


@dataclass(frozen=True)
class PlaylistItem:
    """
    One entry of a playlist.

    Attributes:
        added_at: ISO-8601 timestamp of when the track was added.
                  Fixed-width and zero-padded, so string comparison
                  orders it chronologically.
                  Example: "2024-01-15T10:30:00Z"
        is_local: True for files stored on a user's device. Local tracks
                  have no catalog URI that can be added through the API.
        track: The referenced track.
    """
    added_at: str
    is_local: bool
    track: Track

    @classmethod
    def from_spotify_api(cls, data: dict[str, Any]) -> "PlaylistItem":
        return cls(
            added_at=_require_type(data, "added_at", str, "Playlist item"),
            is_local=_require_type(data, "is_local", bool, "Playlist item"),
            track=Track.from_spotify_api(_require(data, "track", "Playlist item")),
        )

    @property
    def uri(self) -> str:
        return self.track.uri


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of a paginated listing.

    Attributes:
        items: Entries of this page, in API order.
        next: URL of the following page, or None on the last page.
    """
    items: tuple[T, ...]
    next: str | None = None

    @classmethod
    def from_spotify_api(
        cls,
        data: dict[str, Any],
        parse_item: Callable[[dict[str, Any]], T]
    ) -> "Page[T]":
        raw_items = _require(data, "items", "Page")
        if not isinstance(raw_items, list):
            raise ValueError("Page 'items' must be a list")
        return cls(
            items=tuple(parse_item(item) for item in raw_items),
            next=data.get("next"),
        )

    @property
    def has_next(self) -> bool:
        return self.next is not None
