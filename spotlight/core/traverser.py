"""Object graph traversal for Spotlight.

The traverser walks a mutable, possibly cyclic object graph without
recursion. Each root gets its own LIFO work list, which gives depth-first
order: the children of the most recently discovered object are visited
before siblings discovered earlier.

Cycle detection is per branch. Every node carries the pool of objects
scheduled on the way down to it; a property whose value is already in that
pool is reported as an alias of the earlier path and not descended into.
Pools are copied when a branch forks, so an object reached through two
unrelated paths is explored (and reported) under both.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

from .adapter import GraphAdapter
from .filters import PropertyFilter
from .node import MatchResult, Node, PoolEntry, join_path
from .reporter import Reporter
from ..error_policies import ErrorPolicy, resolve_policy
from ..errors import ErrorThresholdExceeded, FilterEvaluationError, PropertyAccessError, ReportError


class GraphTraverser:
    """Non-recursive, depth-first, per-branch cycle-safe graph walker."""

    def __init__(self,
                 adapter: GraphAdapter,
                 error_policy: Optional[ErrorPolicy] = None,
                 max_depth: Optional[int] = None):
        """Initialize traverser with an adapter.

        Args:
            adapter: GraphAdapter for reflecting over the graph
            error_policy: Where contained errors go (default CollectErrorsPolicy)
            max_depth: Depth below which nothing new is enqueued (None = unlimited)
        """
        self.adapter = adapter
        self.error_policy = resolve_policy(error_policy)
        self.adapter.error_policy = self.error_policy
        self.max_depth = max_depth
        self._reset()

    def _reset(self) -> None:
        self.nodes_visited = 0
        self.nodes_skipped = 0
        self.aliases_found = 0
        self.matches_found = 0
        self.stopped_early = False

    def iter_matches(self,
                     roots: Iterable[Any],
                     property_filter: PropertyFilter) -> Iterator[MatchResult]:
        """Walk every root and yield matching properties.

        Roots are processed last-first. Matches of one node are yielded
        only after that node is fully enumerated, so no adapter preparation
        is ever held open across a yield.

        Args:
            roots: Objects with ``object`` and ``path`` attributes
            property_filter: Filter evaluated against every own property

        Yields:
            MatchResult per matching property
        """
        self._reset()
        pending = [Node(root.object, root.path, [PoolEntry(root.object, root.path)])
                   for root in roots]

        try:
            while pending:
                # a non-recursive walk keeps depth independent of the call stack
                queue: List[Node] = [pending.pop()]
                while queue:
                    node = queue.pop()
                    for result in self._visit(node, queue, property_filter):
                        self.matches_found += 1
                        yield result
        except ErrorThresholdExceeded:
            self.stopped_early = True

    def crawl(self,
              roots: Iterable[Any],
              property_filter: PropertyFilter,
              reporter: Optional[Reporter] = None) -> List[MatchResult]:
        """Walk every root, report each match, and return all of them.

        Args:
            roots: Objects with ``object`` and ``path`` attributes
            property_filter: Filter evaluated against every own property
            reporter: Optional sink receiving each match as it is found

        Returns:
            List of MatchResult across all roots, in discovery order
        """
        results: List[MatchResult] = []
        matches = self.iter_matches(roots, property_filter)
        try:
            for result in matches:
                results.append(result)
                if reporter is not None:
                    self._emit(reporter, result)
        except ErrorThresholdExceeded:
            self.stopped_early = True
        finally:
            matches.close()
        return results

    def _emit(self, reporter: Reporter, result: MatchResult) -> None:
        """Send one match to the reporter.

        Reporter failures go to the error policy. ErrorThresholdExceeded
        propagates so that ``crawl`` stops the walk.
        """
        try:
            reporter.match(result)
        except Exception as exc:
            failure = ReportError(f"reporter failed on {result.path}", path=result.path)
            failure.__cause__ = exc
            self.error_policy.handle(failure)

    def _visit(self, node: Node, queue: List[Node], property_filter: PropertyFilter) -> List[MatchResult]:
        """Enumerate one node, schedule its children, and collect its matches."""
        matches: List[MatchResult] = []
        explore = self.max_depth is None or node.depth < self.max_depth

        def visit(value: Any, key: Any, owner: Any) -> None:
            try:
                path = join_path(node.path, key)
            except Exception as exc:
                failure = PropertyAccessError(f"cannot build a path for key of type {type(key).__name__}",
                                              path=node.path, key=key)
                failure.__cause__ = exc
                self.error_policy.handle(failure, node)
                return
            pooled: Optional[PoolEntry] = None

            if self.adapter.is_traversable(value):
                pooled = node.find_pooled(value)
                if pooled is not None:
                    self.aliases_found += 1
                elif explore:
                    # siblings get their own copy of the pool
                    pool = list(node.pool)
                    pool.append(PoolEntry(value, path))
                    queue.append(Node(value, path, pool))

            try:
                if property_filter.matches(value, key, owner, node):
                    if pooled is not None:
                        label, alias_of = f"<{pooled.path}>", pooled.path
                    else:
                        label, alias_of = self.adapter.classify(value), None
                    matches.append(MatchResult(path, label, value, alias_of))
            except Exception as exc:
                failure = FilterEvaluationError(f"filter failed on {path}", path=path, key=key)
                failure.__cause__ = exc
                self.error_policy.handle(failure, node)

        with self.adapter.prepared(node.object, node) as ready:
            if ready:
                self.nodes_visited += 1
                self.adapter.for_each_own_property(node.object, visit, node)
            else:
                self.nodes_skipped += 1

        return matches

    def get_statistics(self) -> Dict[str, Any]:
        """Counters from the most recent walk."""
        return {
            'nodes_visited': self.nodes_visited,
            'nodes_skipped': self.nodes_skipped,
            'aliases_found': self.aliases_found,
            'matches_found': self.matches_found,
            'stopped_early': self.stopped_early,
        }
