"""High-level API for Spotlight.

This module provides the Spotlight facade and module-level search
functions bound to a shared default instance. Searches print each match as
they go; in debug mode they also return the matches.

Example:
    >>> import spotlight
    >>> spotlight.by_name('timeout', obj=settings, path='settings')
    settings.http.timeout -> (int) 30
    >>> spotlight.set_debug(True)
    >>> [m.path for m in spotlight.by_value(30, obj=settings, path='settings')]
    ['settings.http.timeout']
"""

import dataclasses
from typing import Any, Callable, List, Optional, Union

from .adapters.objects import ObjectGraphAdapter
from .config import SpotlightConfig
from .core.adapter import GraphAdapter
from .core.filters import FilterKind, create_filter
from .core.node import MatchResult
from .core.reporter import ConsoleReporter, Reporter
from .error_policies import ErrorPolicy
from .errors import ArgumentTypeError, ConfigurationError, ErrorThresholdExceeded, ReportError
from .planning import SearchPlan


SearchResult = Optional[List[MatchResult]]


class Spotlight:
    """Searches an object graph for properties matching a filter.

    One instance holds one configuration. ``configure()`` swaps it for a
    validated copy between searches; a search always runs to completion
    with the configuration it started with.
    """

    def __init__(self,
                 config: Optional[SpotlightConfig] = None,
                 reporter: Optional[Reporter] = None,
                 error_policy: Optional[ErrorPolicy] = None,
                 adapter_factory: Callable[[SpotlightConfig], GraphAdapter] = ObjectGraphAdapter.from_config):
        """Initialize the facade.

        Args:
            config: Configuration (default: SpotlightConfig())
            reporter: Sink for matches and errors (default: ConsoleReporter)
            error_policy: Shared policy for contained errors (default: a
                fresh CollectErrorsPolicy per search)
            adapter_factory: Builds the GraphAdapter for a config

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self._config = SpotlightConfig()
        self.configure(config)
        self.reporter = reporter if reporter is not None else ConsoleReporter()
        self.error_policy = error_policy
        self.adapter_factory = adapter_factory
        self.last_plan: Optional[SearchPlan] = None

    @property
    def config(self) -> SpotlightConfig:
        """A copy of the configuration in effect; change it with ``configure()``."""
        return dataclasses.replace(self._config, roots=list(self._config.roots))

    def configure(self, config: Optional[SpotlightConfig] = None, **changes) -> SpotlightConfig:
        """Replace the configuration.

        Args:
            config: New base configuration (default: the current one)
            **changes: Fields to override on top of it

        Returns:
            The configuration now in effect

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        new_config = dataclasses.replace(config if config is not None else self._config, **changes)
        new_config.roots = list(new_config.roots)
        errors = new_config.validate()
        if errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")
        self._config = new_config
        return new_config

    @property
    def debug(self) -> bool:
        return self._config.debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self.configure(debug=bool(value))

    def by_kind(self, kind: Union[type, str], obj: Any = None, path: Optional[str] = None) -> SearchResult:
        """Find properties whose values are instances of a class, or of a type/kind name.

        Args:
            kind: A class (``isinstance`` check), a type name (``'int'``,
                ``'collections.OrderedDict'``) or a kind label
                (``'constructor'``, ``'null'``, ``'dict'``)
            obj: Object to crawl instead of the default roots
            path: Label for ``obj`` in reported paths

        Example:
            spotlight.by_kind(re.Pattern)
            spotlight.by_kind('constructor', obj=mymodule, path='mymodule')
        """
        return self._search(FilterKind.KIND, kind, obj, path)

    def by_name(self, name: str, obj: Any = None, path: Optional[str] = None) -> SearchResult:
        """Find properties with the given key.

        Example:
            # > app.config.timeout -> (int) 30
            spotlight.by_name('timeout', obj=app, path='app')
        """
        return self._search(FilterKind.NAME, name, obj, path)

    def by_value(self, value: Any, obj: Any = None, path: Optional[str] = None) -> SearchResult:
        """Find properties whose value strictly equals ``value``.

        Objects match by identity; immutable scalars match by same-type
        equality, so ``by_value(0)`` does not report ``False`` or ``'0'``.
        """
        return self._search(FilterKind.VALUE, value, obj, path)

    def custom(self,
               predicate: Callable[..., Any],
               obj: Any = None,
               path: Optional[str] = None,
               pass_node: bool = False) -> SearchResult:
        """Find properties for which ``predicate(value, key, owner)`` is true.

        Exceptions raised by the predicate skip that property only.

        Example:
            # property names containing "oo"
            spotlight.custom(lambda value, key, owner: 'oo' in str(key))
        """
        return self._search(FilterKind.CUSTOM, predicate, obj, path, pass_node=pass_node)

    def _search(self, kind: FilterKind, argument: Any, obj: Any, path: Optional[str], **options) -> SearchResult:
        config = self._config
        adapter = self.adapter_factory(config)
        property_filter = create_filter(kind, argument, adapter, **options)

        try:
            plan = SearchPlan(config, property_filter, adapter, self.error_policy)
            self.last_plan = plan
            plan.check_argument()
        except (ArgumentTypeError, ConfigurationError) as exc:
            self._report_error(str(exc))
            return None

        results = plan.execute(config.resolve_roots(obj, path), self.reporter)
        return results if config.debug else None

    def _report_error(self, message: str) -> None:
        """Send a rejected search to the reporter; a failing reporter goes to the policy."""
        try:
            self.reporter.error(message)
        except Exception as exc:
            if self.error_policy is None:
                return
            failure = ReportError(f"reporter failed on error: {message}")
            failure.__cause__ = exc
            try:
                self.error_policy.handle(failure)
            except ErrorThresholdExceeded:
                # the search was already rejected, nothing left to stop
                return


_default: Optional[Spotlight] = None


def get_default() -> Spotlight:
    """Return the shared Spotlight used by the module-level functions."""
    global _default
    if _default is None:
        _default = Spotlight()
    return _default


def configure(config: Optional[SpotlightConfig] = None, **changes) -> SpotlightConfig:
    """Reconfigure the shared Spotlight (see Spotlight.configure)."""
    return get_default().configure(config, **changes)


def set_debug(enabled: bool = True) -> None:
    """Turn debug mode on or off for the module-level functions."""
    get_default().debug = enabled


def by_kind(kind: Union[type, str], obj: Any = None, path: Optional[str] = None) -> SearchResult:
    """Module-level Spotlight.by_kind."""
    return get_default().by_kind(kind, obj=obj, path=path)


def by_name(name: str, obj: Any = None, path: Optional[str] = None) -> SearchResult:
    """Module-level Spotlight.by_name."""
    return get_default().by_name(name, obj=obj, path=path)


def by_value(value: Any, obj: Any = None, path: Optional[str] = None) -> SearchResult:
    """Module-level Spotlight.by_value."""
    return get_default().by_value(value, obj=obj, path=path)


def custom(predicate: Callable[..., Any], obj: Any = None, path: Optional[str] = None,
           pass_node: bool = False) -> SearchResult:
    """Module-level Spotlight.custom."""
    return get_default().custom(predicate, obj=obj, path=path, pass_node=pass_node)
