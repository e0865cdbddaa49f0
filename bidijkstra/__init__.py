"""bidijkstra: shortest weighted paths with vanilla and bidirectional Dijkstra.

Primary API:
    search_path() - Find a minimum-weight path between two nodes
    SearchMode - VANILLA or BIDIR search strategy
    DijkstraPath, PathElement - Immutable path values and their algebra
    StrictMultiDiGraph - NetworkX-based graph implementing GraphCapability

Example:
    from bidijkstra import StrictMultiDiGraph, SearchMode, search_path

    g = StrictMultiDiGraph()
    for n in ("S", "A", "T"):
        g.add_node(n)
    g.add_edge("S", "A", weight=1)
    g.add_edge("A", "T", weight=2)

    path, found = search_path(g, "S", "T", SearchMode.BIDIR)
    # path.nodes_seq == ("S", "A", "T"), path.weight == 3.0
"""

from __future__ import annotations

from bidijkstra import logging
from bidijkstra._version import __version__
from bidijkstra.config import SEARCH_CONFIG, SearchConfig
from bidijkstra.lib.algorithms.base import (
    BidijkstraError,
    Connection,
    ExpansionLimitError,
    GraphCapability,
    SearchMode,
)
from bidijkstra.lib.algorithms.dijkstra import search_path
from bidijkstra.lib.graph import StrictMultiDiGraph
from bidijkstra.lib.io import load_graph, load_graph_yaml
from bidijkstra.lib.path import DijkstraPath, PathElement

__all__ = [
    # Version
    "__version__",
    # Search
    "search_path",
    "SearchMode",
    "GraphCapability",
    "Connection",
    # Paths
    "DijkstraPath",
    "PathElement",
    # Graph
    "StrictMultiDiGraph",
    "load_graph",
    "load_graph_yaml",
    # Configuration and errors
    "SearchConfig",
    "SEARCH_CONFIG",
    "BidijkstraError",
    "ExpansionLimitError",
    # Utilities
    "logging",
]
