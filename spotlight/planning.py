"""Search planning for Spotlight.

A SearchPlan ties one search together: it checks the filter argument
before anything is walked, builds the traverser for the configured
adapter, and runs the crawl over the resolved roots.
"""

from typing import Any, Dict, Iterable, List, Optional

from .config import SpotlightConfig
from .core.adapter import GraphAdapter
from .core.filters import PropertyFilter
from .core.node import MatchResult
from .core.reporter import Reporter
from .core.traverser import GraphTraverser
from .error_policies import ErrorPolicy, resolve_policy
from .errors import ArgumentTypeError, ConfigurationError


class SearchPlan:
    """Validated plan for one search.

    The plan validates the configuration when created and the filter
    argument through ``check_argument()``, so that a bad search is
    rejected before any object is enumerated.
    """

    def __init__(self,
                 config: SpotlightConfig,
                 property_filter: PropertyFilter,
                 adapter: GraphAdapter,
                 error_policy: Optional[ErrorPolicy] = None):
        """Create a search plan.

        Args:
            config: The configuration in effect for this search
            property_filter: Filter deciding what gets reported
            adapter: GraphAdapter for the object model being searched
            error_policy: Where contained errors go (default: a fresh
                CollectErrorsPolicy per plan)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config_errors = config.validate()
        if config_errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(config_errors)}")

        self.config = config
        self.filter = property_filter
        self.adapter = adapter
        self.error_policy = resolve_policy(error_policy)
        self.traverser = GraphTraverser(adapter, self.error_policy, config.max_depth)
        self.results: List[MatchResult] = []

    def check_argument(self) -> None:
        """Reject the search if the filter argument is of the wrong kind.

        Raises:
            ArgumentTypeError: With the message to report
        """
        message = self.filter.validate()
        if message is not None:
            raise ArgumentTypeError(message)

    def execute(self, roots: Iterable[Any], reporter: Optional[Reporter] = None) -> List[MatchResult]:
        """Run the crawl.

        Args:
            roots: Roots to crawl, processed last-first
            reporter: Sink receiving each match as it is found

        Returns:
            Every match across all roots
        """
        self.results = self.traverser.crawl(roots, self.filter, reporter)
        return self.results

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the plan and its last execution.

        Useful for debugging and logging.

        Returns:
            Dictionary with plan details
        """
        summary = {
            'filter': repr(self.filter),
            'adapter': self.adapter.describe(),
            'max_depth': self.config.max_depth,
            'debug': self.config.debug,
            'errors': len(getattr(self.error_policy, 'errors', ())),
        }
        summary.update(self.traverser.get_statistics())
        return summary
