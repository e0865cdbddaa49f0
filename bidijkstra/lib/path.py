from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple

from bidijkstra.lib.algorithms.base import NodeID, Weight


class PathElement(NamedTuple):
    """A node on a path and the cumulative weight from the path's start."""

    node: NodeID
    weight: Weight


@dataclass(frozen=True)
class DijkstraPath:
    """
    An ordered, weighted path between two nodes.

    Attributes:
        elements (Tuple[PathElement, ...]):
            The visited nodes in order, each with its cumulative weight from
            the first node. Never empty.
        weight (Weight):
            Total weight, equal to the last element's weight.
        start_node (NodeID):
            The first node of the path.
        end_node (NodeID):
            The last node of the path.

    Paths are immutable; every operation below returns a new path.
    """

    elements: Tuple[PathElement, ...]

    def __post_init__(self) -> None:
        """
        Normalize `elements` into a tuple of PathElement and reject empty paths.
        """
        elements = tuple(PathElement(node, weight) for node, weight in self.elements)
        if not elements:
            raise ValueError("A path needs at least one element.")
        object.__setattr__(self, "elements", elements)

    def __getitem__(self, idx: int) -> PathElement:
        return self.elements[idx]

    def __iter__(self) -> Iterator[PathElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __lt__(self, other: Any) -> bool:
        """
        Compare two paths by total weight.

        Returns NotImplemented if `other` is not a DijkstraPath.
        """
        if not isinstance(other, DijkstraPath):
            return NotImplemented
        return self.weight < other.weight

    def __repr__(self) -> str:
        return f"DijkstraPath({list(self.nodes_seq)}, weight={self.weight})"

    @property
    def weight(self) -> Weight:
        return self.elements[-1].weight

    @property
    def start_node(self) -> NodeID:
        return self.elements[0].node

    @property
    def end_node(self) -> NodeID:
        return self.elements[-1].node

    def last_element(self) -> PathElement:
        return self.elements[-1]

    @cached_property
    def nodes_seq(self) -> Tuple[NodeID, ...]:
        """The ordered node IDs from start to end."""
        return tuple(element.node for element in self.elements)

    @cached_property
    def weights_seq(self) -> Tuple[Weight, ...]:
        """The cumulative weights, aligned with `nodes_seq`."""
        return tuple(element.weight for element in self.elements)

    @cached_property
    def edges_seq(self) -> Tuple[Tuple[NodeID, NodeID], ...]:
        """
        The traversed edges as (u, v) node pairs.

        Returns an empty tuple for a single-node path.
        """
        nodes = self.nodes_seq
        return tuple(zip(nodes[:-1], nodes[1:]))

    def is_equal(self, other: DijkstraPath) -> bool:
        """
        Check whether two paths visit the same nodes in the same order.

        Weights are not compared. Use `==` for full value equality.
        """
        return self.nodes_seq == other.nodes_seq

    def root_paths(self) -> List[DijkstraPath]:
        """
        Return every proper prefix of this path, shortest first.

        A path of n elements yields n - 1 prefixes, of lengths 1 .. n - 1.
        Each prefix keeps the original cumulative weights.
        """
        return [DijkstraPath(self.elements[:i]) for i in range(1, len(self.elements))]

    def includes_path(self, sub: DijkstraPath) -> bool:
        """Check whether `sub`'s node sequence is a prefix of this path's."""
        if len(sub) > len(self):
            return False
        return self.nodes_seq[: len(sub)] == sub.nodes_seq

    def outgoing_edge_for_sub_path(
        self, sub: DijkstraPath
    ) -> Optional[Tuple[NodeID, NodeID]]:
        """
        Return the edge that follows the prefix `sub` along this path.

        Returns:
            A (u, v) node pair, or None if `sub` is not a prefix of this path
            or already covers all of it.
        """
        if not self.includes_path(sub) or len(sub) == len(self):
            return None
        idx = len(sub)
        return self.nodes_seq[idx - 1], self.nodes_seq[idx]

    def merge_with(self, other: DijkstraPath) -> DijkstraPath:
        """
        Append `other` to this path.

        If this path ends where `other` starts, the join node appears once.
        Weights of the appended elements are rebased so that the result has a
        single cumulative scale starting at this path's first node:
        ``self.weight + (element.weight - other[0].weight)``.
        """
        base = self.weight
        origin = other.elements[0].weight
        appended = other.elements
        if self.end_node == other.start_node:
            appended = appended[1:]
        merged = self.elements + tuple(
            PathElement(element.node, base + (element.weight - origin))
            for element in appended
        )
        return DijkstraPath(merged)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "start_node": self.start_node,
            "end_node": self.end_node,
            "weight": self.weight,
            "path": [
                {"node": element.node, "weight": element.weight}
                for element in self.elements
            ],
        }
