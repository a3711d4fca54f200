"""Test configuration loading"""

from pathlib import Path

import pytest

from spot_reverser.core.config import DEFAULT_CRON, load_config
from spot_reverser.core.exceptions import ConfigError


@pytest.fixture
def no_config_file(tmp_path, monkeypatch):
    """Run from an empty directory so no config.yaml is picked up"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestEnvironment:
    """Test credential and playlist loading"""

    def test_complete_environment(self, env, no_config_file):
        config = load_config(environ=env)

        assert config.spotify.client_id == 'client-id'
        assert config.spotify.client_secret == 'client-secret'
        assert config.spotify.refresh_token == 'refresh-token'
        assert config.playlists.source_id == 'source123'
        assert config.playlists.destination_id == 'dest456'

    def test_defaults(self, env, no_config_file):
        config = load_config(environ=env)

        assert config.schedule.cron == DEFAULT_CRON
        assert config.sync.page_size == 50
        assert config.sync.batch_size == 2
        assert config.sync.batch_delay == 0.1
        assert config.logging.directory is None
        assert config.logging.level == 'INFO'

    def test_all_missing_fields_reported_together(self, no_config_file):
        with pytest.raises(ConfigError) as exc_info:
            load_config(environ={'CLIENT_ID': 'x', 'FROM': 'a'})

        assert exc_info.value.details['missing'] == ['CLIENT_SECRET', 'REFRESH_TOKEN', 'TO']
        assert 'CLIENT_SECRET, REFRESH_TOKEN, TO' in str(exc_info.value)

    def test_blank_value_counts_as_missing(self, env, no_config_file):
        env['REFRESH_TOKEN'] = '   '

        with pytest.raises(ConfigError) as exc_info:
            load_config(environ=env)

        assert exc_info.value.details['missing'] == ['REFRESH_TOKEN']

    def test_same_source_and_destination_rejected(self, env, no_config_file):
        env['TO'] = env['FROM']

        with pytest.raises(ConfigError, match='different'):
            load_config(environ=env)

    def test_secrets_not_in_repr(self, env, no_config_file):
        config = load_config(environ=env)

        assert 'client-secret' not in repr(config)
        assert 'refresh-token' not in repr(config)


class TestConfigFile:
    """Test optional config.yaml"""

    def test_values_from_file(self, env, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text(
            'schedule:\n'
            '  cron: "30 */2 * * *"\n'
            'sync:\n'
            '  page_size: 20\n'
            '  batch_size: 10\n'
            '  batch_delay: 0\n'
            'logging:\n'
            f'  directory: "{tmp_path / "logs"}"\n'
            '  level: debug\n',
            encoding='utf-8',
        )

        config = load_config(path, environ=env)

        assert config.schedule.cron == '30 */2 * * *'
        assert config.sync.page_size == 20
        assert config.sync.batch_size == 10
        assert config.sync.batch_delay == 0.0
        assert config.logging.directory == (tmp_path / 'logs').resolve()
        assert config.logging.level == 'DEBUG'

    def test_config_yaml_in_cwd_is_used(self, env, no_config_file):
        (no_config_file / 'config.yaml').write_text('sync:\n  batch_size: 3\n', encoding='utf-8')

        assert load_config(environ=env).sync.batch_size == 3

    def test_empty_file_uses_defaults(self, env, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('', encoding='utf-8')

        assert load_config(path, environ=env).sync.batch_size == 2

    def test_explicit_missing_file(self, env, tmp_path):
        with pytest.raises(ConfigError, match='not found'):
            load_config(tmp_path / 'nope.yaml', environ=env)

    def test_invalid_yaml(self, env, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('sync: [unclosed\n', encoding='utf-8')

        with pytest.raises(ConfigError, match='Invalid YAML'):
            load_config(path, environ=env)

    def test_not_a_mapping(self, env, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('- a\n- b\n', encoding='utf-8')

        with pytest.raises(ConfigError, match='dictionary'):
            load_config(path, environ=env)

    @pytest.mark.parametrize('content, field', [
        ('schedule:\n  cron: "every hour"\n', 'schedule.cron'),
        ('sync:\n  page_size: 100\n', 'sync.page_size'),
        ('sync:\n  page_size: 0\n', 'sync.page_size'),
        ('sync:\n  batch_size: 0\n', 'sync.batch_size'),
        ('sync:\n  batch_size: true\n', 'sync.batch_size'),
        ('sync:\n  batch_delay: -1\n', 'sync.batch_delay'),
        ('logging:\n  level: LOUD\n', 'logging.level'),
        ('sync: 5\n', None),
    ])
    def test_invalid_values(self, env, tmp_path, content, field):
        path = tmp_path / 'config.yaml'
        path.write_text(content, encoding='utf-8')

        with pytest.raises(ConfigError) as exc_info:
            load_config(path, environ=env)

        if field:
            assert exc_info.value.details['field'] == field
