"""Command-line interface for bidijkstra."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from bidijkstra.config import SEARCH_CONFIG
from bidijkstra.lib.algorithms.base import BidijkstraError, SearchMode
from bidijkstra.lib.algorithms.dijkstra import search_path
from bidijkstra.lib.graph import StrictMultiDiGraph
from bidijkstra.lib.io import load_graph
from bidijkstra.logging import get_logger, set_global_log_level

logger = get_logger(__name__)


def _format_table(headers: List[str], rows: List[List[str]], min_width: int = 8) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string, empty when there are no rows.
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = [
        max(max(len(str(row[col_idx])) for row in all_data), min_width)
        for col_idx in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def _format_weight(value: Any) -> str:
    """Return a weight with up to three decimals and no trailing zeros.

    Examples:
        0.1 -> "0.1"; 4.0 -> "4"; 1234.567 -> "1,234.567".
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return str(value)

    s = f"{v:,.3f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _format_duration(seconds: float) -> str:
    """Return a concise duration: "12.3 ms" below one second, else "1.23 s"."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _load_graph(path: Path) -> StrictMultiDiGraph:
    try:
        return load_graph(path)
    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        sys.exit(1)
    except ValueError as exc:
        logger.error(f"Invalid graph file {path}: {exc}")
        sys.exit(1)


def _run_search(
    path: Path,
    src_node: str,
    dst_node: str,
    mode: SearchMode,
    max_expansions: Optional[int],
    as_json: bool,
) -> None:
    """Load a graph, search it and print the resulting path.

    Exits with status 1 when the graph cannot be loaded, a node is unknown,
    the expansion limit is hit, or no path exists.
    """
    graph = _load_graph(path)
    for node in (src_node, dst_node):
        if node not in graph:
            logger.error(f"Node '{node}' is not in graph {path}")
            sys.exit(1)

    logger.info(f"Searching {src_node} -> {dst_node} ({mode.name}) in {path}")
    start = perf_counter()
    try:
        result, found = search_path(graph, src_node, dst_node, mode, max_expansions)
    except BidijkstraError as exc:
        logger.error(f"Search failed: {exc}")
        sys.exit(1)
    elapsed = perf_counter() - start

    if not found:
        logger.error(f"No path from {src_node} to {dst_node}")
        sys.exit(1)

    logger.info(f"Search completed in {_format_duration(elapsed)}")
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"Path: {' -> '.join(str(n) for n in result.nodes_seq)}")
    print(f"Weight: {_format_weight(result.weight)}")
    print(
        _format_table(
            ["Node", "Weight"],
            [[str(el.node), _format_weight(el.weight)] for el in result],
        )
    )


def _inspect_graph(path: Path) -> None:
    """Print a short summary of a graph file."""
    graph = _load_graph(path)
    isolated = [n for n in graph.nodes if graph.degree(n) == 0]
    print(f"Graph: {path}")
    print(f"Nodes: {graph.number_of_nodes()}")
    print(f"Edges: {graph.number_of_edges()}")
    print(f"Isolated nodes: {len(isolated)}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``bidijkstra`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="bidijkstra",
        description="Find shortest weighted paths in directed graphs.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{search,inspect}",
        help="Available commands",
    )

    search_parser = subparsers.add_parser(
        "search", help="Find a shortest path between two nodes"
    )
    search_parser.add_argument(
        "graph", type=Path, help="Graph file (YAML or edge list)"
    )
    search_parser.add_argument("source", help="Source node")
    search_parser.add_argument("destination", help="Destination node")
    search_parser.add_argument(
        "--mode",
        "-m",
        choices=[m.name.lower() for m in SearchMode],
        default=SEARCH_CONFIG.default_mode.name.lower(),
        help="Search strategy (default: %(default)s)",
    )
    search_parser.add_argument(
        "--max-expansions",
        type=int,
        default=None,
        help="Abort the search after this many expanded nodes",
    )
    search_parser.add_argument(
        "--json", action="store_true", help="Print the path as JSON"
    )

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a graph file")
    inspect_parser.add_argument(
        "graph", type=Path, help="Graph file (YAML or edge list)"
    )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "search":
        _run_search(
            path=args.graph,
            src_node=args.source,
            dst_node=args.destination,
            mode=SEARCH_CONFIG.resolve_mode(args.mode),
            max_expansions=args.max_expansions,
            as_json=args.json,
        )
    elif args.command == "inspect":
        _inspect_graph(args.graph)


if __name__ == "__main__":
    main()
