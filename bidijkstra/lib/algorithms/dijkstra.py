from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, Tuple, Union

from bidijkstra.config import SEARCH_CONFIG
from bidijkstra.lib.algorithms.base import (
    Connection,
    EmptyFrontierError,
    ExpansionLimitError,
    GraphCapability,
    NodeID,
    SearchMode,
    Weight,
)
from bidijkstra.lib.algorithms.candidate import (
    Candidate,
    CandidateSolution,
    CandidateTree,
    Frontier,
)
from bidijkstra.lib.algorithms.path_utils import resolve_to_path
from bidijkstra.lib.path import DijkstraPath
from bidijkstra.logging import get_logger

logger = get_logger(__name__)

NeighborFunc = Callable[[NodeID], Iterable[Connection]]


def _check_limit(expansions: int, max_expansions: Optional[int]) -> None:
    if max_expansions is not None and expansions > max_expansions:
        raise ExpansionLimitError(max_expansions)


def _vanilla_dijkstra(
    graph: GraphCapability,
    src_node: NodeID,
    dst_node: NodeID,
    max_expansions: Optional[int],
) -> Optional[CandidateSolution]:
    """
    Single-direction Dijkstra from src_node until dst_node is closed.

    Returns:
        The destination candidate paired with a zero-weight sentinel, or None
        if the source's reachable set is exhausted first.
    """
    tree = CandidateTree()
    frontier = Frontier(tree)
    frontier.push(tree.add_root(src_node))

    while True:
        try:
            candidate = frontier.pop()
        except EmptyFrontierError:
            logger.debug(
                "Frontier from %r exhausted after %d expansions",
                src_node,
                frontier.expansions,
            )
            return None

        frontier.close(candidate)
        _check_limit(frontier.expansions, max_expansions)
        if candidate.node == dst_node:
            return CandidateSolution.single(candidate, tree)

        for connection in graph.successors_for_node(candidate.node):
            frontier.relax(candidate, connection)


class _BidirectionalSearch:
    """
    State of one bidirectional Dijkstra run.

    The forward frontier grows over successors from the source, the backward
    frontier over predecessors from the destination. Each step expands the
    side holding the smallest open weight. Any node labelled by both sides is
    a meeting point; the cheapest one seen so far is kept. Once the two open
    minimums add up to at least that cost, no unseen meeting point can beat
    it.
    """

    def __init__(
        self,
        graph: GraphCapability,
        src_node: NodeID,
        dst_node: NodeID,
        max_expansions: Optional[int],
    ) -> None:
        self.forward = Frontier(CandidateTree())
        self.backward = Frontier(CandidateTree())
        self.forward_neighbors: NeighborFunc = graph.successors_for_node
        self.backward_neighbors: NeighborFunc = graph.predecessors_for_node
        self.max_expansions = max_expansions
        self.best_weight: Weight = math.inf
        self.best: Optional[Tuple[Candidate, Candidate]] = None

        self.forward.push(self.forward.tree.add_root(src_node))
        self.backward.push(self.backward.tree.add_root(dst_node))
        self._record_meeting(src_node)

    def _record_meeting(self, node: NodeID) -> None:
        forward = self.forward.best(node)
        if forward is None:
            return
        backward = self.backward.best(node)
        if backward is None:
            return
        total = forward.weight + backward.weight
        if total < self.best_weight:
            logger.debug("Meeting at %r improves best weight to %s", node, total)
            self.best_weight = total
            self.best = (forward, backward)

    def _expand(self, frontier: Frontier, neighbors: NeighborFunc) -> None:
        candidate = frontier.pop()
        frontier.close(candidate)
        _check_limit(
            self.forward.expansions + self.backward.expansions, self.max_expansions
        )
        self._record_meeting(candidate.node)
        for connection in neighbors(candidate.node):
            if frontier.relax(candidate, connection) is not None:
                self._record_meeting(connection.destination)

    def run(self) -> Optional[CandidateSolution]:
        while True:
            forward_top = self.forward.peek_weight()
            backward_top = self.backward.peek_weight()
            # An exhausted side reports infinity and ends the search as well
            if forward_top + backward_top >= self.best_weight:
                break
            if forward_top <= backward_top:
                self._expand(self.forward, self.forward_neighbors)
            else:
                self._expand(self.backward, self.backward_neighbors)

        logger.debug(
            "Bidirectional search stopped after %d forward and %d backward expansions",
            self.forward.expansions,
            self.backward.expansions,
        )
        if self.best is None:
            return None
        forward, backward = self.best
        return CandidateSolution(
            forward, backward, self.forward.tree, self.backward.tree
        )


def search_path(
    graph: GraphCapability,
    src_node: NodeID,
    dst_node: NodeID,
    mode: Union[SearchMode, str, None] = None,
    max_expansions: Optional[int] = None,
) -> Tuple[Optional[DijkstraPath], bool]:
    """
    Find a minimum-weight path from src_node to dst_node.

    Both modes return a path of the same total weight; when several
    equal-weight paths exist, which one is returned depends on the order in
    which the graph lists its connections.

    Args:
        graph: Any object implementing the GraphCapability protocol.
        src_node: The source node.
        dst_node: The destination node.
        mode: SearchMode.VANILLA or SearchMode.BIDIR (or their names).
            Defaults to SEARCH_CONFIG.default_mode.
        max_expansions: Upper bound on closed candidates across all search
            directions. Defaults to SEARCH_CONFIG.max_expansions.

    Returns:
        A tuple (path, found). When found is False no path exists and path
        is None.

    Raises:
        ValueError: If the mode is unknown.
        ExpansionLimitError: If the search needs more than max_expansions.
    """
    search_mode = SEARCH_CONFIG.resolve_mode(mode)
    if max_expansions is None:
        max_expansions = SEARCH_CONFIG.max_expansions

    logger.debug("Searching %r -> %r (%s)", src_node, dst_node, search_mode.name)
    if search_mode == SearchMode.VANILLA:
        solution = _vanilla_dijkstra(graph, src_node, dst_node, max_expansions)
    else:
        solution = _BidirectionalSearch(
            graph, src_node, dst_node, max_expansions
        ).run()

    if solution is None:
        logger.debug("No path from %r to %r", src_node, dst_node)
        return None, False

    path = resolve_to_path(solution, src_node, dst_node)
    logger.debug("Found %r", path)
    return path, True
