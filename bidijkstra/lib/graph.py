from __future__ import annotations

import base64
import uuid
from typing import Any, Dict, Hashable, List, Optional, Tuple

import networkx as nx

from bidijkstra.config import SEARCH_CONFIG
from bidijkstra.lib.algorithms.base import Connection, NodeID, Weight


def new_base64_uuid() -> str:
    """
    Generate a Base64-encoded UUID without padding.

    Returns:
        str: A unique 22-character, URL-safe string.
    """
    # 16 bytes always encode to 24 characters ending in '=='
    return base64.urlsafe_b64encode(uuid.uuid4().bytes)[:-2].decode("ascii")


EdgeID = Hashable
AttrDict = Dict[str, Any]
EdgeTuple = Tuple[NodeID, NodeID, EdgeID, AttrDict]


class StrictMultiDiGraph(nx.MultiDiGraph):
    """
    A directed multigraph with strict rules, usable as a search graph.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes or edge keys (ValueError).
      - Removing non-existent nodes or edges raises ValueError.
      - Edge weights must be non-negative.

    It implements the GraphCapability protocol: parallel edges between the
    same pair of nodes collapse into one Connection carrying the minimum
    weight among them.
    """

    def __init__(self, *args, weight_attr: Optional[str] = None, **kwargs) -> None:
        """
        Initialize a StrictMultiDiGraph.

        Args:
            *args: Positional arguments forwarded to the MultiDiGraph constructor.
            weight_attr: Edge attribute holding the weight. Defaults to
                SEARCH_CONFIG.weight_attr.
            **kwargs: Keyword arguments forwarded to the MultiDiGraph constructor.
        """
        super().__init__(*args, **kwargs)
        self.weight_attr: str = weight_attr or SEARCH_CONFIG.weight_attr
        self._edges: Dict[EdgeID, EdgeTuple] = {}

    #
    # Node management
    #
    def add_node(self, n: NodeID, **attr: Any) -> None:
        """
        Add a single node, disallowing duplicates.

        Raises:
            ValueError: If the node already exists in the graph.
        """
        if n in self:
            raise ValueError(f"Node '{n}' already exists in this graph.")
        super().add_node(n, **attr)

    def remove_node(self, n: NodeID) -> None:
        """
        Remove a single node and all incident edges.

        Raises:
            ValueError: If the node does not exist in the graph.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        to_delete = [
            e_id for e_id, (s, t, _, _) in self._edges.items() if s == n or t == n
        ]
        for e_id in to_delete:
            del self._edges[e_id]

        super().remove_node(n)

    #
    # Edge management
    #
    def add_edge(
        self,
        u_for_edge: NodeID,
        v_for_edge: NodeID,
        key: Optional[EdgeID] = None,
        **attr: Any,
    ) -> EdgeID:
        """
        Add a directed edge from u_for_edge to v_for_edge.

        Both nodes must already exist. If no key is provided, a unique
        Base64-UUID is generated.

        Args:
            u_for_edge: The source node.
            v_for_edge: The target node.
            key: The unique edge key, generated when None.
            **attr: Edge attributes; the weight attribute, when present, must
                be a non-negative number.

        Returns:
            EdgeID: The key associated with this new edge.

        Raises:
            ValueError: If either node does not exist, the key is already in
                use, or the weight is negative.
        """
        if u_for_edge not in self:
            raise ValueError(f"Source node '{u_for_edge}' does not exist.")
        if v_for_edge not in self:
            raise ValueError(f"Target node '{v_for_edge}' does not exist.")
        self._check_weight(attr)

        if key is None:
            key = new_base64_uuid()
        elif key in self._edges:
            raise ValueError(f"Edge with id '{key}' already exists.")

        super().add_edge(u_for_edge, v_for_edge, key=key, **attr)
        self._edges[key] = (
            u_for_edge,
            v_for_edge,
            key,
            self[u_for_edge][v_for_edge][key],
        )
        return key

    def remove_edge(
        self,
        u: NodeID,
        v: NodeID,
        key: Optional[EdgeID] = None,
    ) -> None:
        """
        Remove the edge `key` from u to v, or every edge from u to v.

        Raises:
            ValueError: If the nodes or the edge(s) do not exist, or if `key`
                belongs to another pair of nodes.
        """
        if u not in self:
            raise ValueError(f"Source node '{u}' does not exist.")
        if v not in self:
            raise ValueError(f"Target node '{v}' does not exist.")

        if key is not None:
            if key not in self._edges:
                raise ValueError(f"No edge with id='{key}' found from {u} to {v}.")
            src_node, dst_node, _, _ = self._edges[key]
            if src_node != u or dst_node != v:
                raise ValueError(
                    f"Edge with id='{key}' is actually from {src_node} to {dst_node}, "
                    f"not from {u} to {v}."
                )
            self.remove_edge_by_id(key)
        else:
            edge_ids = tuple(self.succ[u].get(v, ()))
            if not edge_ids:
                raise ValueError(f"No edges from '{u}' to '{v}' to remove.")
            for e_id in edge_ids:
                self.remove_edge_by_id(e_id)

    def remove_edge_by_id(self, key: EdgeID) -> None:
        """
        Remove a directed edge by its unique key.

        Raises:
            ValueError: If no edge with this key exists in the graph.
        """
        if key not in self._edges:
            raise ValueError(f"Edge with id='{key}' not found.")
        src_node, dst_node, _, _ = self._edges.pop(key)
        super().remove_edge(src_node, dst_node, key=key)

    #
    # GraphCapability
    #
    def successors_for_node(self, node: NodeID) -> List[Connection]:
        """
        Return one Connection per distinct successor of `node`.

        Raises:
            ValueError: If the node does not exist.
        """
        if node not in self:
            raise ValueError(f"Node '{node}' does not exist.")
        return [
            Connection(dst, self._min_weight(edges))
            for dst, edges in self._adj[node].items()
        ]

    def predecessors_for_node(self, node: NodeID) -> List[Connection]:
        """
        Return one Connection per distinct predecessor of `node`.

        Each Connection's destination is the predecessor; its weight is the
        weight of the edge predecessor -> node.

        Raises:
            ValueError: If the node does not exist.
        """
        if node not in self:
            raise ValueError(f"Node '{node}' does not exist.")
        return [
            Connection(src, self._min_weight(edges))
            for src, edges in self._pred[node].items()
        ]

    def edge_weight(self, u: NodeID, v: NodeID) -> Weight:
        """
        Return the minimum weight among the edges from u to v.

        Raises:
            ValueError: If there is no edge from u to v.
        """
        if u not in self.succ or v not in self.succ[u]:
            raise ValueError(f"No edge from '{u}' to '{v}'.")
        return self._min_weight(self.succ[u][v])

    def _min_weight(self, edges: Dict[EdgeID, AttrDict]) -> Weight:
        return min(
            attr.get(self.weight_attr, SEARCH_CONFIG.default_weight)
            for attr in edges.values()
        )

    def _check_weight(self, attr: AttrDict) -> None:
        weight = attr.get(self.weight_attr)
        if weight is not None and weight < 0:
            raise ValueError(
                f"Edge weight must be non-negative, got {weight!r} "
                f"for attribute '{self.weight_attr}'."
            )
