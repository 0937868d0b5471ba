"""Tests for the Spotlight facade and the module-level search functions."""

import io
import sys
import types
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import spotlight
from spotlight import (
    CollectErrorsPolicy,
    CollectingReporter,
    ConfigurationError,
    ConsoleReporter,
    PlainDataAdapter,
    ReportError,
    Root,
    Spotlight,
    SpotlightConfig,
)
from spotlight import api


@pytest.fixture
def reporter():
    return CollectingReporter()


@pytest.fixture
def finder(reporter):
    return Spotlight(SpotlightConfig(roots=[], global_object=None, debug=True), reporter=reporter)


@pytest.fixture
def fresh_default(monkeypatch):
    """Give the module-level functions a clean shared instance."""
    monkeypatch.setattr(api, '_default', None)
    yield
    monkeypatch.setattr(api, '_default', None)


class TestSearches:
    """The four search operations."""

    def test_by_name(self, finder, reporter):
        settings = {'http': {'timeout': 30}, 'db': {'timeout': 5}}
        results = finder.by_name('timeout', obj=settings, path='settings')

        assert [r.message for r in results] == [
            'settings.db.timeout -> (int)',
            'settings.http.timeout -> (int)',
        ]
        assert reporter.lines == [r.message for r in results]

    def test_by_value_is_strict(self, finder):
        results = finder.by_value(0, obj={'a': 0, 'b': '0', 'c': False}, path='r')
        assert [r.message for r in results] == ['r.a -> (int)']

    def test_by_kind_with_class(self, finder):
        class F:
            pass

        results = finder.by_kind(F, obj={'f': F(), 'g': 1}, path='r')
        assert [r.message for r in results] == ['r.f -> (f)']

    def test_by_kind_with_name(self, finder):
        results = finder.by_kind('str', obj={'s': 'x', 'n': 1}, path='r')
        assert [r.path for r in results] == ['r.s']

    def test_custom(self, finder):
        data = {'foo': 1, 'bar': 2, 'boo': 3}
        results = finder.custom(lambda value, key, owner: 'oo' in str(key), obj=data, path='d')
        assert [r.path for r in results] == ['d.foo', 'd.boo']

    def test_custom_with_node(self, finder):
        data = {'a': {'b': 1}}
        results = finder.custom(lambda value, key, owner, node: node.depth == 1,
                                obj=data, path='d', pass_node=True)
        assert [r.path for r in results] == ['d.a.b']

    def test_anonymous_root(self, finder):
        results = finder.by_name('x', obj={'x': 1})
        assert results[0].path == '<object>.x'

    def test_self_cycle(self, finder):
        a = {}
        a['b'] = a
        results = finder.custom(lambda value, key, owner: True, obj=a, path='a')

        assert [r.message for r in results] == ['a.b -> (<a>)']
        assert results[0].is_alias


class TestDebugMode:
    """Searches only return matches in debug mode."""

    def test_returns_none_without_debug(self, reporter):
        finder = Spotlight(SpotlightConfig(roots=[]), reporter=reporter)

        assert finder.by_name('x', obj={'x': 1}, path='r') is None
        assert reporter.lines == ['r.x -> (int)']

    def test_toggle(self, finder):
        finder.debug = False
        assert finder.by_name('x', obj={'x': 1}) is None
        finder.debug = True
        assert len(finder.by_name('x', obj={'x': 1})) == 1

    def test_empty_list_when_nothing_matches(self, finder):
        assert finder.by_name('missing', obj={'x': 1}) == []


class TestArgumentErrors:
    """Bad arguments are reported and nothing is walked."""

    @pytest.mark.parametrize('method, argument, message', [
        ('by_kind', 42, "`42` must be a class or str"),
        ('by_name', 42, "`42` must be a str"),
        ('custom', 'nope', "`'nope'` must be a function"),
    ])
    def test_rejected_before_traversal(self, finder, reporter, method, argument, message):
        result = getattr(finder, method)(argument, obj={'x': 1}, path='r')

        assert result is None
        assert reporter.errors == [message]
        assert reporter.matches == []
        assert finder.last_plan.traverser.nodes_visited == 0

    def test_console_reporter_writes_error_stream(self):
        errors = io.StringIO()
        finder = Spotlight(SpotlightConfig(roots=[]), reporter=ConsoleReporter(error_stream=errors))

        finder.by_kind(42, obj={})
        assert errors.getvalue() == "error: `42` must be a class or str\n"


class TestReporting:

    def test_console_output(self):
        out = io.StringIO()
        finder = Spotlight(SpotlightConfig(roots=[]), reporter=ConsoleReporter(stream=out))

        finder.by_name('timeout', obj={'http': {'timeout': 30}}, path='settings')
        assert out.getvalue() == "settings.http.timeout -> (int) 30\n"

    def test_long_values_are_truncated(self):
        out = io.StringIO()
        finder = Spotlight(SpotlightConfig(roots=[]), reporter=ConsoleReporter(stream=out, max_repr=10))

        finder.by_name('s', obj={'s': 'x' * 50}, path='r')
        assert out.getvalue() == "r.s -> (str) 'xxxxxx...\n"


class TestEnvironment:
    """Default roots and the global object."""

    @pytest.fixture
    def env(self):
        module = types.ModuleType('env')
        module.self_ref = module
        module.data = {'x': 1}
        return module

    def test_global_label(self, env, reporter):
        finder = Spotlight(SpotlightConfig.for_module(env, debug=True), reporter=reporter)
        finder.custom(lambda value, key, owner: True)

        assert reporter.lines == [
            'env.self_ref -> (global)',
            'env.data -> (dict)',
            'env.data.x -> (int)',
        ]

    def test_global_alias_when_following_modules(self, env, reporter):
        finder = Spotlight(SpotlightConfig.for_module(env, follow_modules=True), reporter=reporter)
        finder.by_name('self_ref')

        assert reporter.lines == ['env.self_ref -> (<env>)']

    def test_explicit_root_reuses_default_path(self, env, reporter):
        finder = Spotlight(SpotlightConfig.for_module(env), reporter=reporter)
        finder.by_name('x', obj=env)

        assert reporter.lines == ['env.data.x -> (int)']

    def test_path_without_object_is_ignored(self, env, reporter):
        finder = Spotlight(SpotlightConfig.for_module(env), reporter=reporter)
        finder.by_name('x', path='elsewhere')

        assert reporter.lines == ['env.data.x -> (int)']

    def test_multiple_roots(self, reporter):
        config = SpotlightConfig(roots=[Root({'k': 1}, 'one'), Root({'k': 2}, 'two')])
        Spotlight(config, reporter=reporter).by_name('k')

        assert reporter.lines == ['two.k -> (int)', 'one.k -> (int)']


class TestConfiguration:

    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigurationError):
            Spotlight(SpotlightConfig(max_depth=-1))

    def test_configure_keeps_previous_config_on_error(self, finder):
        before = finder.config
        with pytest.raises(ConfigurationError):
            finder.configure(max_depth=-1)
        assert finder.config == before

    def test_configure_applies_max_depth(self, finder):
        finder.configure(max_depth=0)
        results = finder.custom(lambda v, k, o: True, obj={'a': {'b': 1}}, path='r')
        assert [r.path for r in results] == ['r.a']

    def test_config_is_a_copy(self, finder):
        finder.config.max_depth = -1
        finder.config.roots.append(Root({'x': 1}, 'stray'))

        assert finder.config.max_depth is None
        assert finder.config.roots == []
        assert [r.path for r in finder.by_name('x', obj={'x': 1}, path='r')] == ['r.x']

    def test_invalid_config_reported_not_raised(self, finder, reporter):
        finder._config.max_depth = -1

        assert finder.by_name('x', obj={'x': 1}, path='r') is None
        assert reporter.errors == ["Invalid configuration: max_depth cannot be negative"]
        assert reporter.matches == []

    def test_failing_error_reporter_is_contained(self):
        class Grumpy(CollectingReporter):
            def error(self, message):
                raise IOError("disk full")

        policy = CollectErrorsPolicy()
        finder = Spotlight(SpotlightConfig(roots=[]), reporter=Grumpy(), error_policy=policy)

        assert finder.by_kind(42, obj={'a': 1}) is None
        assert policy.errors[0]['error_type'] == ReportError.__name__
        assert policy.errors[0]['cause_type'] == 'OSError'

    def test_shared_error_policy(self, reporter):
        policy = CollectErrorsPolicy()
        finder = Spotlight(SpotlightConfig(roots=[]), reporter=reporter, error_policy=policy)

        def boom(value, key, owner):
            raise ValueError(key)

        finder.custom(boom, obj={'a': 1})
        finder.custom(boom, obj={'b': 1})
        assert [e['key'] for e in policy.errors] == ['a', 'b']

    def test_plan_summary(self, finder):
        finder.by_name('a', obj={'a': {'a': 1}}, path='r')
        summary = finder.last_plan.get_summary()

        assert summary['adapter'] == 'ObjectGraphAdapter'
        assert summary['filter'] == "NameFilter('a')"
        assert summary['nodes_visited'] == 2
        assert summary['matches_found'] == 2

    def test_plain_data_adapter(self, reporter):
        finder = Spotlight(SpotlightConfig(roots=[], global_object=None), reporter=reporter,
                           adapter_factory=PlainDataAdapter.from_config)
        finder.by_kind('array', obj={'items': [1, 2], 'meta': {'tags': ['x']}}, path='doc')

        assert reporter.lines == ['doc.items -> (array)', 'doc.meta.tags -> (array)']


class TestModuleFunctions:
    """spotlight.by_* use a shared default instance."""

    def test_shared_instance(self, fresh_default):
        assert spotlight.get_default() is spotlight.get_default()

    def test_debug_toggle(self, fresh_default, capsys):
        assert spotlight.by_name('x', obj={'x': 1}, path='r') is None
        spotlight.set_debug(True)
        results = spotlight.by_value(1, obj={'x': 1}, path='r')

        assert [r.path for r in results] == ['r.x']
        assert capsys.readouterr().out == "r.x -> (int) 1\nr.x -> (int) 1\n"

    def test_configure(self, fresh_default):
        config = spotlight.configure(max_depth=3)
        assert config.max_depth == 3
        assert spotlight.get_default().config.max_depth == 3

    def test_argument_error(self, fresh_default, capsys):
        assert spotlight.by_kind(42, obj={}) is None
        assert capsys.readouterr().err == "error: `42` must be a class or str\n"

    def test_custom(self, fresh_default, capsys):
        spotlight.set_debug(True)
        results = spotlight.custom(lambda v, k, o: k == 'y', obj={'y': None}, path='r')

        assert [r.message for r in results] == ['r.y -> (null)']
