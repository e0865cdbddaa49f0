from __future__ import annotations

import math
from dataclasses import dataclass
from heapq import heappop, heappush
from itertools import count
from typing import Dict, Iterator, List, Optional, Tuple

from bidijkstra.lib.algorithms.base import (
    Connection,
    EmptyFrontierError,
    NodeID,
    Weight,
)


@dataclass(frozen=True)
class Candidate:
    """
    A node reached by one search direction.

    Attributes:
        node: The node this candidate stands for.
        weight: Cumulative weight from the root of its tree.
        parent: Handle of the parent candidate in the same tree, or None for
            the root.
        handle: Index of this candidate in its tree.
    """

    node: NodeID
    weight: Weight
    parent: Optional[int]
    handle: int


class CandidateTree:
    """
    Arena owning every candidate created by one search direction.

    Candidates refer to their parent by integer handle, so the structure is
    a tree by construction: a parent is always created before its children.
    """

    def __init__(self) -> None:
        self._candidates: List[Candidate] = []

    def __len__(self) -> int:
        return len(self._candidates)

    def add_root(self, node: NodeID) -> Candidate:
        """Create the zero-weight root candidate for `node`."""
        return self.add(node, 0.0, None)

    def add(self, node: NodeID, weight: Weight, parent: Optional[int]) -> Candidate:
        """
        Create a candidate and return it.

        Raises:
            ValueError: If `parent` is not a handle of this tree.
        """
        if parent is not None and not 0 <= parent < len(self._candidates):
            raise ValueError(f"Unknown parent handle {parent}.")
        candidate = Candidate(node, weight, parent, len(self._candidates))
        self._candidates.append(candidate)
        return candidate

    def get(self, handle: int) -> Candidate:
        return self._candidates[handle]

    def chain(self, handle: Optional[int]) -> Iterator[Candidate]:
        """
        Walk from the candidate `handle` up to the root, inclusive.

        Yields nothing when `handle` is None.
        """
        while handle is not None:
            candidate = self._candidates[handle]
            yield candidate
            handle = candidate.parent


class Frontier:
    """
    Open and closed candidate sets for one search direction.

    The open set is a binary heap keyed by (weight, insertion sequence), so
    equal weights are served in insertion order. Improved candidates are
    pushed anew and stale heap entries are dropped when they surface.
    """

    def __init__(self, tree: CandidateTree) -> None:
        self.tree = tree
        self.closed: Dict[NodeID, Candidate] = {}
        self.expansions = 0
        self._open: Dict[NodeID, Candidate] = {}
        self._heap: List[Tuple[Weight, int, int]] = []
        self._seq = count()

    def push(self, candidate: Candidate) -> None:
        """Make `candidate` the open candidate of its node."""
        self._open[candidate.node] = candidate
        heappush(self._heap, (candidate.weight, next(self._seq), candidate.handle))

    def _discard_stale(self) -> None:
        heap = self._heap
        while heap:
            handle = heap[0][2]
            candidate = self.tree.get(handle)
            if self._open.get(candidate.node) is candidate:
                return
            heappop(heap)

    def peek_weight(self) -> Weight:
        """Return the minimum open weight, or infinity when nothing is open."""
        self._discard_stale()
        if not self._heap:
            return math.inf
        return self._heap[0][0]

    def pop(self) -> Candidate:
        """
        Remove and return the minimum-weight open candidate.

        Raises:
            EmptyFrontierError: If no open candidate remains.
        """
        self._discard_stale()
        if not self._heap:
            raise EmptyFrontierError("No open candidates left.")
        _, _, handle = heappop(self._heap)
        candidate = self.tree.get(handle)
        del self._open[candidate.node]
        return candidate

    def close(self, candidate: Candidate) -> None:
        """Finalize `candidate` as the best candidate of its node."""
        self._open.pop(candidate.node, None)
        self.closed[candidate.node] = candidate
        self.expansions += 1

    def is_closed(self, node: NodeID) -> bool:
        return node in self.closed

    def relax(self, via: Candidate, connection: Connection) -> Optional[Candidate]:
        """
        Offer the route `via` -> `connection.destination`.

        A new candidate (with parent `via`) is opened when the destination is
        not closed and either has no open candidate or the new weight beats
        the open one.

        Returns:
            The new candidate, or None if the route was not an improvement.
        """
        node = connection.destination
        if node in self.closed:
            return None
        new_weight = via.weight + connection.weight
        current = self._open.get(node)
        if current is not None and new_weight >= current.weight:
            return None
        candidate = self.tree.add(node, new_weight, via.handle)
        self.push(candidate)
        return candidate

    def best(self, node: NodeID) -> Optional[Candidate]:
        """Return the closed candidate of `node`, else its open one, else None."""
        closed = self.closed.get(node)
        if closed is not None:
            return closed
        return self._open.get(node)


@dataclass(frozen=True)
class CandidateSolution:
    """
    The meeting pair selected by a search.

    `forward` belongs to the source-rooted tree and `backward` to the
    destination-rooted tree; both stand for the same node. A single-direction
    search pairs the destination candidate with a one-node sentinel tree.
    """

    forward: Candidate
    backward: Candidate
    forward_tree: CandidateTree
    backward_tree: CandidateTree

    @property
    def weight(self) -> Weight:
        return self.forward.weight + self.backward.weight

    @classmethod
    def single(cls, forward: Candidate, forward_tree: CandidateTree) -> CandidateSolution:
        """Pair a forward candidate with a zero-weight sentinel for its node."""
        sentinel_tree = CandidateTree()
        sentinel = sentinel_tree.add_root(forward.node)
        return cls(forward, sentinel, forward_tree, sentinel_tree)
