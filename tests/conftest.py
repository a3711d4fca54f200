"""Test configuration and fixtures"""

import json
from unittest.mock import Mock

import pytest
import requests

from spot_reverser.core.config import Config, PlaylistConfig, SpotifyConfig, SyncConfig
from spot_reverser.spotify.http import HttpClient


def make_response(status_code=200, body=None, text=None):
    """Build a mock requests.Response with a JSON body"""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text if text is not None else ("" if body is None else json.dumps(body))
    if body is None:
        response.json.side_effect = ValueError("No JSON body")
    else:
        response.json.return_value = body
    return response


def make_item(uri, added_at="2023-01-01T00:00:00Z", is_local=False):
    """Raw playlist item as returned by the Spotify API"""
    return {
        'added_at': added_at,
        'is_local': is_local,
        'track': {'uri': uri, 'name': uri},
    }


def make_page(items, next_url=None):
    """Raw page payload as returned by the Spotify API"""
    return {'items': items, 'next': next_url, 'total': len(items)}


@pytest.fixture
def session():
    """Mock requests session; set session.request.side_effect per test"""
    return Mock(spec=requests.Session)


@pytest.fixture
def http(session):
    """HttpClient over the mock session"""
    return HttpClient(session=session)


@pytest.fixture
def config():
    """Complete configuration for a run"""
    return Config(
        spotify=SpotifyConfig(
            client_id='client-id',
            client_secret='client-secret',
            refresh_token='refresh-token',
        ),
        playlists=PlaylistConfig(source_id='source123', destination_id='dest456'),
        sync=SyncConfig(page_size=50, batch_size=2, batch_delay=0.1),
    )


@pytest.fixture
def env():
    """Environment with every required variable set"""
    return {
        'CLIENT_ID': 'client-id',
        'CLIENT_SECRET': 'client-secret',
        'REFRESH_TOKEN': 'refresh-token',
        'FROM': 'source123',
        'TO': 'dest456',
    }
