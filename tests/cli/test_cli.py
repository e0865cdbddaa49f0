import json
import logging
from pathlib import Path

import pytest

from bidijkstra import cli
from bidijkstra.logging import reset_logging

GRAPH_YAML = """
nodes: [U]
edges:
  S: {A: 1}
  A: {B: 1, C: 1}
  B: {C: 1, D: 1}
  C: {E: 1, G: 1}
  D: {C: 1}
  E: {F: 1}
  F: {G: 1}
  G: {T: 1}
"""


@pytest.fixture(autouse=True)
def _reset_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    path = tmp_path / "graph.yaml"
    path.write_text(GRAPH_YAML)
    return path


def test_search_prints_path(graph_file: Path, capsys) -> None:
    cli.main(["search", str(graph_file), "S", "T"])
    out = capsys.readouterr().out
    assert "Path: S -> A -> C -> G -> T" in out
    assert "Weight: 4" in out
    assert "Node" in out and "Weight" in out


@pytest.mark.parametrize("mode", ["vanilla", "bidir"])
def test_search_json(graph_file: Path, capsys, mode: str) -> None:
    cli.main(["--quiet", "search", str(graph_file), "S", "T", "--mode", mode, "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["start_node"] == "S"
    assert payload["end_node"] == "T"
    assert payload["weight"] == 4.0
    assert [e["node"] for e in payload["path"]] == ["S", "A", "C", "G", "T"]


def test_search_unreachable_exits_one(graph_file: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="bidijkstra"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["search", str(graph_file), "S", "U"])
    assert exc_info.value.code == 1
    assert "No path from S to U" in caplog.text


def test_search_unknown_node(graph_file: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="bidijkstra"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["search", str(graph_file), "S", "Z"])
    assert exc_info.value.code == 1
    assert "Node 'Z' is not in graph" in caplog.text


def test_search_expansion_limit(graph_file: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="bidijkstra"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["search", str(graph_file), "S", "T", "--max-expansions", "1"])
    assert exc_info.value.code == 1
    assert "Search failed" in caplog.text


def test_missing_graph_file(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="bidijkstra"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["inspect", str(tmp_path / "missing.yaml")])
    assert exc_info.value.code == 1
    assert "Graph file not found" in caplog.text


def test_invalid_graph_file(tmp_path: Path, caplog) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("edges: 5\n")
    with caplog.at_level(logging.ERROR, logger="bidijkstra"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["search", str(path), "A", "B"])
    assert exc_info.value.code == 1
    assert "Invalid graph file" in caplog.text


def test_invalid_adjacency_is_reported(tmp_path: Path, caplog) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("edges:\n  S: [A, B]\n")
    with caplog.at_level(logging.ERROR, logger="bidijkstra"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["search", str(path), "S", "A"])
    assert exc_info.value.code == 1
    assert "Invalid graph file" in caplog.text


def test_search_numeric_node_names(tmp_path: Path, capsys) -> None:
    path = tmp_path / "numeric.yaml"
    path.write_text("edges:\n  1: {2: 1}\n  2: {3: 1}\n")
    cli.main(["search", str(path), "1", "3"])
    out = capsys.readouterr().out
    assert "Path: 1 -> 2 -> 3" in out
    assert "Weight: 2" in out


def test_search_edgelist_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "graph.txt"
    path.write_text("S A 1\nA T 2.5\nS T 4\n")
    cli.main(["--quiet", "search", str(path), "S", "T", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert [e["node"] for e in payload["path"]] == ["S", "A", "T"]
    assert payload["weight"] == 3.5


def test_inspect(graph_file: Path, capsys) -> None:
    cli.main(["inspect", str(graph_file)])
    out = capsys.readouterr().out
    assert "Nodes: 10" in out
    assert "Edges: 11" in out
    assert "Isolated nodes: 1" in out


def test_no_arguments_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: bidijkstra" in capsys.readouterr().out


def test_verbose_enables_debug(graph_file: Path) -> None:
    cli.main(["--verbose", "search", str(graph_file), "S", "T"])
    assert logging.getLogger("bidijkstra").level == logging.DEBUG


def test_format_helpers() -> None:
    assert cli._format_weight(4.0) == "4"
    assert cli._format_weight(0.125) == "0.125"
    assert cli._format_weight(1234.5) == "1,234.5"
    assert cli._format_weight("n/a") == "n/a"
    assert cli._format_duration(0.0123) == "12.3 ms"
    assert cli._format_duration(2.5) == "2.50 s"
    assert cli._format_table(["A"], []) == ""
