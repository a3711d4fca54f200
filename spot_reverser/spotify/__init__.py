"""
Spotify integration module for spot-reverser.

This module provides all functionality for talking to the Spotify Web API:
    - HttpClient: per-run transport classifying responses as 2xx or failure
    - acquire_token: refresh-token exchange (Token Manager)
    - fetch_all_tracks: paginated playlist listing (Playlist Reader)
    - reset, append_batches: destination writes (Playlist Writer)
    - AccessToken, Track, PlaylistItem, Page: data models

Usage:
    from spot_reverser.spotify import HttpClient, acquire_token, fetch_all_tracks

    with HttpClient() as http:
        token = acquire_token(http, client_id, client_secret, refresh_token)
        items = fetch_all_tracks(http, token.access_token, playlist_id)
"""

from spot_reverser.spotify.auth import SCOPES, acquire_token
from spot_reverser.spotify.http import HttpClient
from spot_reverser.spotify.models import AccessToken, Page, PlaylistItem, Track
from spot_reverser.spotify.reader import fetch_all_tracks
from spot_reverser.spotify.writer import append_batches, batched, reset

__all__ = [
    # Transport
    "HttpClient",
    # Models
    "AccessToken",
    "Track",
    "PlaylistItem",
    "Page",
    # Operations
    "SCOPES",
    "acquire_token",
    "fetch_all_tracks",
    "reset",
    "append_batches",
    "batched",
]
