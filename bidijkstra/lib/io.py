from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from bidijkstra.lib.graph import AttrDict, StrictMultiDiGraph

#: Suffixes read as YAML by `load_graph`; anything else is an edge list.
YAML_SUFFIXES = (".yaml", ".yml")

#: Column layout of edge list files read by `load_graph`.
EDGELIST_COLUMNS = ["src", "dst", "weight"]


def _coerce_weight(graph: StrictMultiDiGraph, attr: AttrDict) -> AttrDict:
    """Return `attr` with the graph's weight attribute converted to float."""
    if graph.weight_attr not in attr:
        return attr
    raw = attr[graph.weight_attr]
    try:
        weight = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid edge weight {raw!r}.") from exc
    return {**attr, graph.weight_attr: weight}


def _ensure_node(graph: StrictMultiDiGraph, node: str) -> None:
    # StrictMultiDiGraph never creates nodes implicitly
    if node not in graph:
        graph.add_node(node)


def edgelist_to_graph(
    lines: Iterable[str],
    columns: List[str],
    separator: str = " ",
    graph: Optional[StrictMultiDiGraph] = None,
    source: str = "src",
    target: str = "dst",
    key: str = "key",
) -> StrictMultiDiGraph:
    """
    Build or extend a StrictMultiDiGraph from an edge list.

    Each line is split by `separator` and its tokens are mapped to `columns`.
    The `source` and `target` tokens name the nodes, created on first use.
    A `key` token, if present, becomes the edge ID. Remaining tokens become
    edge attributes; the weight column is parsed as a float. Blank lines and
    lines starting with '#' are skipped.

    Args:
        lines: An iterable of strings, each representing one edge.
        columns: Column names, e.g. ["src", "dst", "weight"].
        separator: Token separator (default is a space).
        graph: An existing graph to update; a new one is created if None.
        source: The column name for the source node ID.
        target: The column name for the target node ID.
        key: The column name for a custom edge ID (if present).

    Returns:
        The updated (or newly created) StrictMultiDiGraph.

    Raises:
        ValueError: If a line's token count does not match `columns` or a
            weight is not numeric.
    """
    if graph is None:
        graph = StrictMultiDiGraph()

    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        tokens = line.split(separator)
        if len(tokens) != len(columns):
            raise ValueError(
                f"Line '{line}' does not match expected columns {columns} (token count mismatch)."
            )

        line_dict = dict(zip(columns, tokens))
        src_id = line_dict[source]
        dst_id = line_dict[target]
        attr_dict = {
            k: v for k, v in line_dict.items() if k not in (source, target, key)
        }

        _ensure_node(graph, src_id)
        _ensure_node(graph, dst_id)
        graph.add_edge(
            src_id,
            dst_id,
            key=line_dict.get(key),
            **_coerce_weight(graph, attr_dict),
        )

    return graph


def _adjacency_to_entries(
    graph: StrictMultiDiGraph, edges: Dict[Any, Any], path: Union[str, Path]
) -> List[Dict[str, Any]]:
    entries = []
    for src, targets in edges.items():
        if targets is None:
            continue
        if not isinstance(targets, dict):
            raise ValueError(
                f"Adjacency of '{src}' in '{path}' must be a mapping, "
                f"got {type(targets).__name__}."
            )
        for dst, weight in targets.items():
            entries.append({"source": src, "target": dst, graph.weight_attr: weight})
    return entries


def load_graph_yaml(path: Union[str, Path]) -> StrictMultiDiGraph:
    """
    Load a graph from a YAML file.

    Two edge layouts are accepted:

        nodes: [S, A, U]          # optional, for isolated nodes
        edges:
          - {source: S, target: A, weight: 1}

    or an adjacency mapping:

        edges:
          S: {A: 1}
          A: {B: 2, C: 1}

    Node names are stored as strings, so `1` in the file and "1" on the
    command line name the same node. Edges without a weight use the
    configured default weight.

    Raises:
        ValueError: If the document does not follow either layout.
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Graph file '{path}' must contain a mapping.")

    graph = StrictMultiDiGraph()
    nodes = data.get("nodes") or []
    if not isinstance(nodes, list):
        raise ValueError(f"'nodes' in '{path}' must be a list.")
    for node in nodes:
        _ensure_node(graph, str(node))

    edges = data.get("edges") or []
    if isinstance(edges, dict):
        edges = _adjacency_to_entries(graph, edges, path)
    if not isinstance(edges, list):
        raise ValueError(f"'edges' in '{path}' must be a list or a mapping.")

    for entry in edges:
        if not isinstance(entry, dict) or "source" not in entry or "target" not in entry:
            raise ValueError(f"Malformed edge entry {entry!r} in '{path}'.")
        src, dst = str(entry["source"]), str(entry["target"])
        attr = {k: v for k, v in entry.items() if k not in ("source", "target")}
        if attr.get(graph.weight_attr) is None:
            attr.pop(graph.weight_attr, None)
        _ensure_node(graph, src)
        _ensure_node(graph, dst)
        graph.add_edge(src, dst, **_coerce_weight(graph, attr))

    return graph


def load_graph(path: Union[str, Path]) -> StrictMultiDiGraph:
    """
    Load a graph file, choosing the format by suffix.

    `.yaml` and `.yml` files go through `load_graph_yaml`. Any other file is
    read as a space-separated edge list with `src dst weight` columns.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is malformed.
    """
    path = Path(path)
    if path.suffix.lower() in YAML_SUFFIXES:
        return load_graph_yaml(path)
    with open(path, "r", encoding="utf-8") as fh:
        return edgelist_to_graph(fh, EDGELIST_COLUMNS)
