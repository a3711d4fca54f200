"""Test a complete workflow run"""

from unittest.mock import Mock

import pytest

from spot_reverser.core.exceptions import AuthError, FetchError, ResetError, WriteError
from spot_reverser.sync.workflow import preview_order, run_sync
from tests.conftest import make_item, make_page, make_response


TOKEN_URL = 'https://accounts.spotify.com/api/token'
SOURCE_URL = 'https://api.spotify.com/v1/playlists/source123/tracks'
DEST_URL = 'https://api.spotify.com/v1/playlists/dest456/tracks'


def token_ok():
    return make_response(200, {'access_token': 'BQD', 'scope': 'playlist-modify-public'})


def source_page():
    return make_response(200, make_page([
        make_item('spotify:track:A', '2021-01-01T00:00:00Z'),
        make_item('spotify:local:L', '2022-01-01T00:00:00Z', is_local=True),
        make_item('spotify:track:B', '2021-06-01T00:00:00Z'),
        make_item('spotify:track:C', '2020-01-01T00:00:00Z'),
    ]))


class TestRunSync:
    """Test run_sync"""

    def test_full_run(self, config, http, session):
        """Token, reset, fetch, then newest-first batches"""
        session.request.side_effect = [
            token_ok(),
            make_response(201, {}),   # reset
            source_page(),
            make_response(201, {}),   # batch 1
            make_response(201, {}),   # batch 2
        ]
        sleep = Mock()

        result = run_sync(config, http=http, sleep=sleep)

        assert result.fetched == 4
        assert result.written == 3
        assert result.batches == 2

        calls = session.request.call_args_list
        assert [call.args for call in calls] == [
            ('POST', TOKEN_URL),
            ('PUT', DEST_URL),
            ('GET', SOURCE_URL),
            ('POST', DEST_URL),
            ('POST', DEST_URL),
        ]
        assert calls[3].kwargs['json'] == {'uris': ['spotify:track:B', 'spotify:track:A']}
        assert calls[4].kwargs['json'] == {'uris': ['spotify:track:C']}
        for call in calls[1:]:
            assert call.kwargs['headers'] == {'Authorization': 'Bearer BQD'}
        sleep.assert_called_once_with(0.1)

    def test_token_failure_stops_everything(self, config, http, session):
        """No reset, fetch or append after a failed token exchange"""
        session.request.return_value = make_response(401, text='invalid_client')

        with pytest.raises(AuthError):
            run_sync(config, http=http, sleep=Mock())

        assert session.request.call_count == 1

    def test_reset_failure_stops_before_fetch(self, config, http, session):
        session.request.side_effect = [token_ok(), make_response(403, text='forbidden')]

        with pytest.raises(ResetError):
            run_sync(config, http=http, sleep=Mock())

        assert session.request.call_count == 2

    def test_fetch_failure_writes_nothing(self, config, http, session):
        session.request.side_effect = [
            token_ok(),
            make_response(201, {}),
            make_response(500, text='oops'),
        ]

        with pytest.raises(FetchError):
            run_sync(config, http=http, sleep=Mock())

        assert session.request.call_count == 3

    def test_item_without_added_at_is_fetch_error(self, config, http, session):
        """A null added_at fails the run as FetchError before anything is written"""
        session.request.side_effect = [
            token_ok(),
            make_response(201, {}),
            make_response(200, make_page([
                make_item('spotify:track:A', None),
                make_item('spotify:track:B', '2021-01-01T00:00:00Z'),
            ])),
        ]

        with pytest.raises(FetchError):
            run_sync(config, http=http, sleep=Mock())

        assert session.request.call_count == 3

    def test_write_failure_propagates(self, config, http, session):
        session.request.side_effect = [
            token_ok(),
            make_response(201, {}),
            source_page(),
            make_response(201, {}),
            make_response(500, text='oops'),
        ]

        with pytest.raises(WriteError) as exc_info:
            run_sync(config, http=http, sleep=Mock())

        assert exc_info.value.details['batch'] == ['spotify:track:C']

    def test_injected_client_not_closed(self, config, http, session):
        """A caller-provided transport stays open"""
        session.request.return_value = make_response(401, text='no')

        with pytest.raises(AuthError):
            run_sync(config, http=http, sleep=Mock())

        session.close.assert_not_called()

    def test_token_not_logged(self, config, http, session, caplog):
        """The bearer credential never reaches the logs"""
        session.request.side_effect = [
            token_ok(),
            make_response(201, {}),
            make_response(200, make_page([])),
        ]

        with caplog.at_level('DEBUG'):
            run_sync(config, http=http, sleep=Mock())

        assert 'BQD' not in caplog.text


class TestPreviewOrder:
    """Test preview_order"""

    def test_preview_reads_only(self, config, http, session):
        session.request.side_effect = [token_ok(), source_page()]

        assert preview_order(config, http=http) == [
            'spotify:track:B', 'spotify:track:A', 'spotify:track:C'
        ]
        methods = [call.args[0] for call in session.request.call_args_list]
        assert methods == ['POST', 'GET']
