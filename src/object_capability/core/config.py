"""
Capability configuration

Multi-source configuration for the composition engine.

Sources (priority order):
1. Runtime overrides (highest priority - for testing, may expire)
2. Environment variables (OBJECT_CAPABILITY_<KEY>)
3. Default values (lowest priority)

Keys:
    LOG_ENABLED       Write composition events to the journal (default: true)
    LOG_DIR           Directory for TSV journal files (default: in-memory)
    LOG_MAX_SIZE      Journal file size in bytes before rotation (default: 10MB)
    LOG_MEMORY_LIMIT  Entries kept by an in-memory journal (default: 10000)
"""

import os
import time
from typing import Any, Dict, Optional, Tuple


ENV_PREFIX = 'OBJECT_CAPABILITY_'

DEFAULTS: Dict[str, Any] = {
    'LOG_ENABLED': True,
    'LOG_DIR': None,
    'LOG_MAX_SIZE': 10 * 1024 * 1024,
    'LOG_MEMORY_LIMIT': 10000,
}


class CapabilityConfig:
    """Load and manage engine configuration"""

    def __init__(self, defaults: Optional[Dict[str, Any]] = None):
        self.defaults = dict(DEFAULTS)
        if defaults:
            self.defaults.update(defaults)

        # key -> {'value': ..., 'expires_at': float | None}
        self._overrides: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value from the highest-priority source"""
        value, _ = self.get_with_source(key, default)
        return value

    def get_with_source(self, key: str, default: Any = None) -> Tuple[Any, str]:
        """
        Get a config value and the name of the source it came from.

        Returns:
            (value, source) where source is 'override', 'environment'
            or 'default'
        """
        key = key.upper()

        # 1. Runtime overrides
        override = self._overrides.get(key)
        if override:
            expires_at = override['expires_at']
            if expires_at is not None and expires_at <= time.time():
                del self._overrides[key]
            else:
                return override['value'], 'override'

        # 2. Environment variables
        env_value = os.environ.get(ENV_PREFIX + key)
        if env_value is not None:
            return env_value, 'environment'

        # 3. Defaults
        if key in self.defaults and self.defaults[key] is not None:
            return self.defaults[key], 'default'

        return default, 'default'

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a config value as a boolean"""
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if str(value).lower() in ('true', '1', 'yes', 'on'):
            return True
        if str(value).lower() in ('false', '0', 'no', 'off'):
            return False
        raise ValueError(f'Invalid bool for {key}: {value}')

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """Get a config value as an integer"""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (ValueError, TypeError):
            raise ValueError(f'Invalid int for {key}: {value}')

    def set_override(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Set a runtime override.

        Args:
            key: Config key (case-insensitive)
            value: Override value
            ttl: Seconds until the override expires (None = never)
        """
        self._overrides[key.upper()] = {
            'value': value,
            'expires_at': time.time() + ttl if ttl is not None else None,
        }

    def clear_override(self, key: Optional[str] = None) -> bool:
        """Remove one override (or all when key is None)"""
        if key is None:
            had_any = bool(self._overrides)
            self._overrides.clear()
            return had_any
        return self._overrides.pop(key.upper(), None) is not None

    def list_all(self) -> Dict[str, Any]:
        """Resolved value of every known key"""
        keys = set(self.defaults) | set(self._overrides)
        return {key: self.get(key) for key in sorted(keys)}


# Global instance (lazy loaded)
_config = None


def get_config() -> CapabilityConfig:
    """Get the global engine configuration"""
    global _config
    if _config is None:
        _config = CapabilityConfig()
    return _config


def reload_config() -> CapabilityConfig:
    """Discard overrides and rebuild the global configuration"""
    global _config
    _config = CapabilityConfig()
    return _config
