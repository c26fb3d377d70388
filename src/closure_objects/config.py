"""
Runtime Configuration - multi-source settings for the object runtime

Each setting is resolved from several sources in priority order:
1. Overrides (highest priority - constructor kwargs or set_override())
2. Environment variables (CLOSURE_OBJECTS_<KEY>, e.g. CLOSURE_OBJECTS_LOG_DIR)
3. Default values (lowest priority)

Example usage:
    config = RuntimeConfig(log_dir='/tmp/objects')
    config.get('log_dir')         # ('/tmp/objects', 'override')
    config.get('separator')       # ('::', 'default')

    os.environ['CLOSURE_OBJECTS_FALLBACK_NAME'] = 'method_missing'
    RuntimeConfig().fallback_name  # 'method_missing'
"""

import os
from typing import Any, Dict, Mapping, Optional

from .core.errors import ConfigError


ENV_PREFIX = 'CLOSURE_OBJECTS_'

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# key -> (type, default)
SETTINGS: Dict[str, tuple[str, Any]] = {
    'separator': ('string', '::'),
    'super_token': ('string', 'SUPER'),
    'fallback_name': ('string', 'AUTOLOAD'),
    'log_dir': ('path', None),
    'log_level': ('level', 'DEBUG'),
    'max_log_size': ('int', 10 * 1024 * 1024),
}


class RuntimeConfig:
    """
    Settings shared by dispatchers, factories and the object runtime.

    Overrides are validated when set; environment values are validated
    when read, so a bad variable fails at the first lookup.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None, **overrides):
        self._environ = os.environ if environ is None else environ
        self._overrides: Dict[str, Any] = {}

        for key, value in overrides.items():
            self.set_override(key, value)

    def get(self, key: str) -> tuple[Any, str]:
        """
        Get a setting and the source it came from.

        Returns:
            (value, source) where source is 'override', 'environment'
            or 'default'
        """
        value_type, default = _setting(key)

        # 1. Overrides
        if key in self._overrides:
            return self._overrides[key], 'override'

        # 2. Environment variables
        env_value = self._environ.get(ENV_PREFIX + key.upper())
        if env_value is not None:
            validated, error = _validate_value(env_value, value_type)
            if error:
                raise ConfigError(f'{ENV_PREFIX}{key.upper()}: {error}')
            return validated, 'environment'

        # 3. Default
        return default, 'default'

    def value(self, key: str) -> Any:
        """Get a setting's value"""
        return self.get(key)[0]

    def set_override(self, key: str, value: Any) -> None:
        """Set an override (validated)"""
        value_type, _ = _setting(key)
        validated, error = _validate_value(value, value_type)
        if error:
            raise ConfigError(f'{key}: {error}')
        self._overrides[key] = validated

    def clear_override(self, key: str) -> bool:
        """Remove an override. Returns True if one was set."""
        _setting(key)
        return self._overrides.pop(key, _MISSING) is not _MISSING

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        """All settings with their sources"""
        result = {}
        for key in SETTINGS:
            value, source = self.get(key)
            result[key] = {'value': value, 'source': source}
        return result

    @property
    def separator(self) -> str:
        return self.value('separator')

    @property
    def super_token(self) -> str:
        return self.value('super_token')

    @property
    def fallback_name(self) -> str:
        return self.value('fallback_name')

    @property
    def log_dir(self) -> Optional[str]:
        return self.value('log_dir')

    @property
    def log_level(self) -> str:
        return self.value('log_level')

    @property
    def max_log_size(self) -> int:
        return self.value('max_log_size')


_MISSING = object()
_default_config: Optional[RuntimeConfig] = None


def default_config() -> RuntimeConfig:
    """Process-wide config used when no config is passed explicitly"""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig()
    return _default_config


def reset_default_config() -> None:
    """Drop the process-wide config (next default_config() rebuilds it)"""
    global _default_config
    _default_config = None


# Helper functions

def _setting(key: str) -> tuple[str, Any]:
    if key not in SETTINGS:
        raise ConfigError(f'Unknown setting: {key}')
    return SETTINGS[key]


def _validate_value(value: Any, value_type: str) -> tuple[Any, Optional[str]]:
    """Validate value matches expected type"""

    if value_type == 'string':
        if not isinstance(value, str) or not value:
            return None, f'Invalid string: {value!r}'
        return value, None

    elif value_type == 'path':
        if value is None:
            return None, None
        if isinstance(value, os.PathLike):
            value = os.fspath(value)
        if not isinstance(value, str) or not value:
            return None, f'Invalid path: {value!r}'
        return value, None

    elif value_type == 'int':
        if isinstance(value, bool):
            return None, f'Invalid int: {value}'
        try:
            number = int(value)
        except (ValueError, TypeError):
            return None, f'Invalid int: {value}'
        if number <= 0:
            return None, f'Must be positive: {value}'
        return number, None

    elif value_type == 'level':
        if isinstance(value, str) and value.upper() in LOG_LEVELS:
            return value.upper(), None
        return None, f'Invalid log level: {value!r} (expected one of {", ".join(LOG_LEVELS)})'

    else:
        return None, f'Unknown type: {value_type}'
