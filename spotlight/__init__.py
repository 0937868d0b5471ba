"""Spotlight - find properties anywhere in a live Python object graph.

Spotlight crawls objects starting from one or more roots (by default the
``__main__`` module) and reports every property matching a filter, together
with the path used to reach it. Cycles and shared objects are handled per
branch: an object met again on its own branch is reported as an alias of
the earlier path instead of being walked twice.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    import spotlight

    spotlight.by_name('timeout', obj=app, path='app')
    spotlight.by_kind(re.Pattern)
    spotlight.by_value(None, obj=config, path='config')
    spotlight.custom(lambda value, key, owner: str(key).startswith('_'))
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .config import Root, SpotlightConfig, default_roots
from .errors import (
    SpotlightError,
    ArgumentTypeError,
    ConfigurationError,
    PropertyAccessError,
    EnumerationFailure,
    FilterEvaluationError,
    HookRestoreError,
    ReportError,
    ErrorThresholdExceeded,
)
from .error_policies import (
    ErrorPolicy,
    CollectErrorsPolicy,
    ContinueOnErrorsPolicy,
    ThresholdPolicy,
)
from .core import (
    Node,
    PoolEntry,
    MatchResult,
    GraphAdapter,
    FilterKind,
    PropertyFilter,
    KindFilter,
    NameFilter,
    ValueFilter,
    CustomFilter,
    create_filter,
    Reporter,
    ConsoleReporter,
    CollectingReporter,
    NullReporter,
    GraphTraverser,
)
from .adapters import ObjectGraphAdapter, PlainDataAdapter, UNDEFINED
from .planning import SearchPlan
from .api import (
    Spotlight,
    get_default,
    configure,
    set_debug,
    by_kind,
    by_name,
    by_value,
    custom,
)

__all__ = [
    "__version__",
    # Searches
    "Spotlight",
    "get_default",
    "configure",
    "set_debug",
    "by_kind",
    "by_name",
    "by_value",
    "custom",
    # Config
    "Root",
    "SpotlightConfig",
    "default_roots",
    # Core
    "Node",
    "PoolEntry",
    "MatchResult",
    "GraphAdapter",
    "FilterKind",
    "PropertyFilter",
    "KindFilter",
    "NameFilter",
    "ValueFilter",
    "CustomFilter",
    "create_filter",
    "Reporter",
    "ConsoleReporter",
    "CollectingReporter",
    "NullReporter",
    "GraphTraverser",
    "SearchPlan",
    # Adapters
    "ObjectGraphAdapter",
    "PlainDataAdapter",
    "UNDEFINED",
    # Errors
    "SpotlightError",
    "ArgumentTypeError",
    "ConfigurationError",
    "PropertyAccessError",
    "EnumerationFailure",
    "FilterEvaluationError",
    "HookRestoreError",
    "ReportError",
    "ErrorThresholdExceeded",
    "ErrorPolicy",
    "CollectErrorsPolicy",
    "ContinueOnErrorsPolicy",
    "ThresholdPolicy",
]
