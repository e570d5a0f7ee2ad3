"""
Unit tests for engine configuration

Sources (priority order): runtime overrides, environment, defaults.
"""

import time

import pytest

from object_capability.core.config import CapabilityConfig, get_config, reload_config


class TestConfigSources:
    """Test multi-source resolution"""

    @pytest.fixture
    def config(self, monkeypatch):
        """Fresh config with no OBJECT_CAPABILITY_* variables set"""
        for key in ('LOG_ENABLED', 'LOG_DIR', 'LOG_MAX_SIZE', 'LOG_MEMORY_LIMIT'):
            monkeypatch.delenv(f'OBJECT_CAPABILITY_{key}', raising=False)
        return CapabilityConfig()

    def test_defaults(self, config):
        assert config.get_bool('LOG_ENABLED') is True
        assert config.get('LOG_DIR') is None
        assert config.get_int('LOG_MAX_SIZE') == 10 * 1024 * 1024
        assert config.get_with_source('LOG_MEMORY_LIMIT') == (10000, 'default')

    def test_unknown_key_uses_caller_default(self, config):
        assert config.get('NOT_A_KEY', 'fallback') == 'fallback'

    def test_environment_beats_default(self, config, monkeypatch):
        monkeypatch.setenv('OBJECT_CAPABILITY_LOG_MEMORY_LIMIT', '50')

        assert config.get_with_source('LOG_MEMORY_LIMIT') == ('50', 'environment')
        assert config.get_int('LOG_MEMORY_LIMIT') == 50

    def test_override_beats_environment(self, config, monkeypatch):
        monkeypatch.setenv('OBJECT_CAPABILITY_LOG_ENABLED', 'true')
        config.set_override('log_enabled', False)

        assert config.get_with_source('LOG_ENABLED') == (False, 'override')
        assert config.get_bool('LOG_ENABLED') is False

    def test_expired_override_ignored(self, config, monkeypatch):
        config.set_override('LOG_DIR', '/tmp/somewhere', ttl=10)
        now = time.time()
        monkeypatch.setattr(time, 'time', lambda: now + 60)

        assert config.get('LOG_DIR') is None

    def test_clear_override(self, config):
        config.set_override('LOG_DIR', '/tmp/somewhere')

        assert config.clear_override('LOG_DIR') is True
        assert config.clear_override('LOG_DIR') is False
        assert config.get('LOG_DIR') is None

    def test_clear_all_overrides(self, config):
        config.set_override('LOG_DIR', '/tmp/a')
        config.set_override('LOG_ENABLED', False)

        config.clear_override()

        assert config.list_all()['LOG_ENABLED'] is True

    def test_bool_parsing(self, config, monkeypatch):
        for raw, expected in [('1', True), ('yes', True), ('off', False), ('FALSE', False)]:
            monkeypatch.setenv('OBJECT_CAPABILITY_LOG_ENABLED', raw)
            assert config.get_bool('LOG_ENABLED') is expected

    def test_invalid_values_rejected(self, config, monkeypatch):
        monkeypatch.setenv('OBJECT_CAPABILITY_LOG_ENABLED', 'maybe')
        monkeypatch.setenv('OBJECT_CAPABILITY_LOG_MAX_SIZE', 'large')

        with pytest.raises(ValueError):
            config.get_bool('LOG_ENABLED')
        with pytest.raises(ValueError):
            config.get_int('LOG_MAX_SIZE')

    def test_custom_defaults(self):
        config = CapabilityConfig(defaults={'LOG_MEMORY_LIMIT': 5})
        assert config.get_int('LOG_MEMORY_LIMIT') == 5


class TestGlobalConfig:
    """Test the process-wide instance"""

    def teardown_method(self):
        reload_config()

    def test_get_config_is_singleton(self):
        assert get_config() is get_config()

    def test_reload_discards_overrides(self):
        get_config().set_override('LOG_DIR', '/tmp/elsewhere')

        fresh = reload_config()

        assert fresh is get_config()
        assert fresh.get_with_source('LOG_DIR')[1] != 'override'
