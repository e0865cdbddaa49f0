from __future__ import annotations

from enum import IntEnum
from typing import Hashable, Iterable, NamedTuple, Protocol, Union

#: Any hashable value can name a node (strings in practice).
NodeID = Hashable

#: Represents a numeric edge weight or cumulative path weight.
Weight = Union[int, float]


class SearchMode(IntEnum):
    """
    Shortest path search strategies.
    """

    #: Single-direction Dijkstra from the source.
    VANILLA = 1
    #: Two frontiers, one from the source over successors and one from the
    #: destination over predecessors.
    BIDIR = 2


class Connection(NamedTuple):
    """
    An edge as seen from one of its endpoints.

    For successors, `destination` is the edge's target; for predecessors it is
    the edge's source. `weight` is always the weight of the underlying edge.
    """

    destination: NodeID
    weight: Weight


class GraphCapability(Protocol):
    """
    Read-only view of a directed weighted graph consumed by the search engine.

    The returned collections are unordered from the engine's point of view.
    """

    def successors_for_node(self, node: NodeID) -> Iterable[Connection]: ...

    def predecessors_for_node(self, node: NodeID) -> Iterable[Connection]: ...

    def edge_weight(self, u: NodeID, v: NodeID) -> Weight: ...


class BidijkstraError(Exception):
    """Base class for errors raised by bidijkstra."""


class EmptyFrontierError(BidijkstraError):
    """A search direction has no open candidates left."""


class ExpansionLimitError(BidijkstraError):
    """A search closed more candidates than its configured bound allows."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Search exceeded the limit of {limit} expansions.")
        self.limit = limit
