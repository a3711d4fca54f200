"""Test Spotify data models"""

import pytest

from spot_reverser.spotify.models import AccessToken, Page, PlaylistItem, Track
from tests.conftest import make_item, make_page


class TestSpotifyModels:
    """Test Spotify data models"""

    def test_access_token_creation(self):
        """Test AccessToken creation from token response"""
        token = AccessToken.from_spotify_api({
            'access_token': 'BQD-secret',
            'token_type': 'Bearer',
            'expires_in': 3600,
            'scope': 'playlist-read-private playlist-modify-public',
        })

        assert token.access_token == 'BQD-secret'
        assert token.scopes == ('playlist-read-private', 'playlist-modify-public')

    def test_access_token_repr_hides_credential(self):
        """The bearer credential never appears in repr"""
        token = AccessToken(access_token='BQD-secret', scope='x')
        assert 'BQD-secret' not in repr(token)

    def test_access_token_without_scope(self):
        """A missing scope becomes an empty string"""
        token = AccessToken.from_spotify_api({'access_token': 'abc'})
        assert token.scope == ''
        assert token.scopes == ()

    def test_access_token_missing_field(self):
        """Missing access_token raises ValueError"""
        with pytest.raises(ValueError, match='access_token'):
            AccessToken.from_spotify_api({'scope': 'x'})

    def test_playlist_item_creation(self):
        """Test PlaylistItem creation from API item"""
        item = PlaylistItem.from_spotify_api(
            make_item('spotify:track:abc', added_at='2021-06-01T00:00:00Z')
        )

        assert item.added_at == '2021-06-01T00:00:00Z'
        assert item.is_local is False
        assert item.track == Track(uri='spotify:track:abc')
        assert item.uri == 'spotify:track:abc'

    def test_playlist_item_missing_track(self):
        """A null track is rejected"""
        data = make_item('x')
        data['track'] = None
        with pytest.raises(ValueError):
            PlaylistItem.from_spotify_api(data)

    @pytest.mark.parametrize("key, value", [
        ('added_at', None),
        ('is_local', 'false'),
        ('is_local', 0),
    ])
    def test_playlist_item_wrong_type(self, key, value):
        """Values of the wrong type are rejected"""
        data = make_item('spotify:track:abc')
        data[key] = value
        with pytest.raises(ValueError, match=key):
            PlaylistItem.from_spotify_api(data)

    def test_track_uri_must_be_string(self):
        """A null uri is rejected"""
        with pytest.raises(ValueError, match='uri'):
            Track.from_spotify_api({'uri': None})

    def test_page_creation(self):
        """Test Page parsing with and without next cursor"""
        page = Page.from_spotify_api(
            make_page([make_item('a'), make_item('b')], next_url='https://next'),
            PlaylistItem.from_spotify_api,
        )
        assert [item.uri for item in page.items] == ['a', 'b']
        assert page.has_next

        last = Page.from_spotify_api(make_page([]), PlaylistItem.from_spotify_api)
        assert last.items == ()
        assert not last.has_next

    def test_page_requires_items(self):
        """A page without items is rejected"""
        with pytest.raises(ValueError, match='items'):
            Page.from_spotify_api({'next': None}, PlaylistItem.from_spotify_api)
