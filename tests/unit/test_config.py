"""
Tests for RuntimeConfig

Priority order: overrides > environment variables > defaults.
"""

import pytest

from closure_objects import (
    ConfigError,
    MethodNotFoundError,
    RuntimeConfig,
    create_object,
    factory,
)
from closure_objects.config import default_config, reset_default_config


class TestConfigSources:
    """Where each value comes from"""

    def test_defaults(self):
        """Should fall back to built-in defaults"""
        config = RuntimeConfig(environ={})

        assert config.get('separator') == ('::', 'default')
        assert config.super_token == 'SUPER'
        assert config.fallback_name == 'AUTOLOAD'
        assert config.log_dir is None
        assert config.log_level == 'DEBUG'
        assert config.max_log_size == 10 * 1024 * 1024

    def test_environment_beats_default(self):
        """Should read CLOSURE_OBJECTS_<KEY> variables"""
        config = RuntimeConfig(environ={'CLOSURE_OBJECTS_FALLBACK_NAME': 'method_missing'})

        assert config.get('fallback_name') == ('method_missing', 'environment')

    def test_override_beats_environment(self):
        """Should prefer overrides over environment variables"""
        config = RuntimeConfig(
            environ={'CLOSURE_OBJECTS_LOG_LEVEL': 'ERROR'},
            log_level='info',
        )

        assert config.get('log_level') == ('INFO', 'override')

    def test_clear_override(self):
        """Should fall back to the next source once the override is gone"""
        config = RuntimeConfig(environ={'CLOSURE_OBJECTS_SEPARATOR': '.'}, separator='/')

        assert config.separator == '/'
        assert config.clear_override('separator') is True
        assert config.get('separator') == ('.', 'environment')
        assert config.clear_override('separator') is False

    def test_environment_int_is_converted(self):
        """Should convert numeric environment values"""
        config = RuntimeConfig(environ={'CLOSURE_OBJECTS_MAX_LOG_SIZE': '2048'})

        assert config.max_log_size == 2048

    def test_as_dict(self):
        """Should list every setting with its source"""
        config = RuntimeConfig(environ={}, log_dir='/tmp/objects')
        settings = config.as_dict()

        assert settings['log_dir'] == {'value': '/tmp/objects', 'source': 'override'}
        assert settings['separator'] == {'value': '::', 'source': 'default'}
        assert set(settings) == {
            'separator', 'super_token', 'fallback_name',
            'log_dir', 'log_level', 'max_log_size',
        }

    def test_path_override_accepts_pathlike(self, tmp_path):
        """Should store path-like log_dir values as strings"""
        config = RuntimeConfig(environ={}, log_dir=tmp_path)

        assert config.log_dir == str(tmp_path)


class TestConfigValidation:
    """Invalid values raise ConfigError"""

    def test_unknown_setting(self):
        """Should reject unknown keys"""
        with pytest.raises(ConfigError):
            RuntimeConfig(environ={}, colour='blue')

        with pytest.raises(ConfigError):
            RuntimeConfig(environ={}).get('colour')

    def test_invalid_level(self):
        """Should reject unknown log levels"""
        with pytest.raises(ConfigError):
            RuntimeConfig(environ={}, log_level='LOUD')

    def test_invalid_int(self):
        """Should reject non-numeric and non-positive sizes"""
        with pytest.raises(ConfigError):
            RuntimeConfig(environ={}, max_log_size='big')

        with pytest.raises(ConfigError):
            RuntimeConfig(environ={}, max_log_size=0)

    def test_empty_string(self):
        """Should reject empty separators"""
        with pytest.raises(ConfigError):
            RuntimeConfig(environ={}, separator='')

    def test_bad_environment_value(self):
        """Should fail at lookup when an environment value is invalid"""
        config = RuntimeConfig(environ={'CLOSURE_OBJECTS_MAX_LOG_SIZE': 'lots'})

        with pytest.raises(ConfigError) as exc_info:
            config.max_log_size

        assert 'CLOSURE_OBJECTS_MAX_LOG_SIZE' in str(exc_info.value)


class TestConfiguredDispatch:
    """Dispatchers follow their config's syntax"""

    def test_custom_separator_and_tokens(self):
        """Should use the configured separator, super token and fallback name"""
        config = RuntimeConfig(
            environ={},
            separator='.',
            super_token='PARENT',
            fallback_name='method_missing',
        )
        parent = create_object({'m': lambda: 'parent'}, {}, False, config=config)
        obj = create_object(
            {
                'm': lambda: 'child',
                'method_missing': lambda name: f'missing {name}',
            },
            {'p': parent},
            True,
            config=config,
        )

        assert obj('p.m') == 'parent'
        assert obj('PARENT.m') == 'parent'
        assert obj('nothing') == 'missing nothing'

    def test_custom_syntax_through_factories(self):
        """Factory chains should use the root's configured syntax"""
        config = RuntimeConfig(
            environ={},
            separator='.',
            super_token='BASE',
            fallback_name='method_missing',
        )

        @factory
        def shape(this):
            this['describe'] = lambda: 'shape'
            this['sides'] = lambda: 0

        @factory
        def square(this):
            this.inherit('shape', shape)
            this['describe'] = lambda: 'square < ' + this.super('describe')
            this['parent_sides'] = lambda: this('BASE.sides')
            this['via_path'] = lambda: this('shape.describe')
            this['method_missing'] = lambda name, *args: f'no {name}{args}'

        sq = square.construct(config=config)

        assert sq('describe') == 'square < shape'
        assert sq('parent_sides') == 0
        assert sq('via_path') == 'shape'
        assert sq('shape.describe') == 'shape'
        assert sq('BASE.describe') == 'shape'
        assert sq('spin', 3) == 'no spin(3,)'

        # Default syntax is just an unknown bare name here
        assert sq('SUPER::describe') == 'no SUPER::describe()'

        with pytest.raises(MethodNotFoundError):
            sq('shape.spin')

    def test_syntax_fixed_when_object_is_built(self):
        """Later environment changes should not reroute an existing object"""
        environ = {}
        config = RuntimeConfig(environ=environ)

        @factory
        def part(this):
            this['m'] = lambda: 'part'

        @factory
        def top(this):
            this.inherit('p', part)
            this['call_parent'] = lambda: this('p::m')
            this['call_super'] = lambda: this.super('m')

        obj = top.construct(config=config)
        environ['CLOSURE_OBJECTS_SEPARATOR'] = '.'
        environ['CLOSURE_OBJECTS_SUPER_TOKEN'] = 'BASE'

        assert obj.separator == '::'
        assert obj('call_parent') == 'part'
        assert obj('call_super') == 'part'
        assert obj('p::m') == 'part'

    def test_default_config_is_shared(self):
        """Should hand out one process-wide config until reset"""
        reset_default_config()
        first = default_config()

        assert default_config() is first

        reset_default_config()
        assert default_config() is not first
