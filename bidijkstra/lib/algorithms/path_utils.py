from __future__ import annotations

from typing import List

from bidijkstra.lib.algorithms.base import NodeID
from bidijkstra.lib.algorithms.candidate import CandidateSolution
from bidijkstra.lib.path import DijkstraPath, PathElement


def resolve_to_path(
    solution: CandidateSolution,
    start_node: NodeID,
    end_node: NodeID,
) -> DijkstraPath:
    """
    Stitch the two candidate chains of a solution into one path.

    The forward chain runs from the meeting candidate back to the source and
    is reversed as is. The backward chain is walked from the meeting
    candidate's parent out to the destination; its weights count from the
    destination, so each one is rebased onto the forward scale as
    ``forward.weight + (backward.weight - candidate.weight)``.

    Args:
        solution: Meeting pair produced by a search.
        start_node: Expected first node (the search source).
        end_node: Expected last node (the search destination).

    Returns:
        The reconstructed path from start_node to end_node.

    Raises:
        ValueError: If the chains do not start at start_node and end at end_node.
    """
    forward_half = [
        PathElement(c.node, c.weight)
        for c in solution.forward_tree.chain(solution.forward.handle)
    ]
    forward_half.reverse()

    meet_weight = solution.forward.weight
    back_meet_weight = solution.backward.weight
    backward_half: List[PathElement] = [
        PathElement(c.node, meet_weight + (back_meet_weight - c.weight))
        for c in solution.backward_tree.chain(solution.backward.parent)
    ]

    path = DijkstraPath(tuple(forward_half + backward_half))
    if path.start_node != start_node or path.end_node != end_node:
        raise ValueError(
            f"Solution runs from '{path.start_node}' to '{path.end_node}', "
            f"expected '{start_node}' to '{end_node}'."
        )
    return path
