import json

import pytest

from bidijkstra.lib.algorithms.base import SearchMode
from bidijkstra.lib.algorithms.dijkstra import search_path
from bidijkstra.lib.path import DijkstraPath, PathElement


def _path(*pairs):
    return DijkstraPath(tuple(pairs))


def test_path_init():
    """Elements are normalized to PathElement and endpoints derive from them."""
    p = _path(("A", 0), ("B", 2), ("C", 5))
    assert p.elements == (
        PathElement("A", 0),
        PathElement("B", 2),
        PathElement("C", 5),
    )
    assert p.weight == 5
    assert p.start_node == "A"
    assert p.end_node == "C"
    assert p.last_element() == PathElement("C", 5)


def test_path_empty_rejected():
    with pytest.raises(ValueError, match="at least one element"):
        DijkstraPath(())


def test_path_is_immutable():
    p = _path(("A", 0))
    with pytest.raises(AttributeError):
        p.elements = ()


def test_path_indexing_iteration_len():
    p = _path(("N1", 0), ("N2", 3))
    assert p[0] == ("N1", 0)
    assert p[-1].node == "N2"
    assert [el.node for el in p] == ["N1", "N2"]
    assert len(p) == 2


def test_path_sequences():
    p = _path(("X", 0), ("Y", 1), ("Z", 4))
    assert p.nodes_seq == ("X", "Y", "Z")
    assert p.weights_seq == (0, 1, 4)
    assert p.edges_seq == (("X", "Y"), ("Y", "Z"))
    assert _path(("X", 0)).edges_seq == ()


def test_path_repr():
    p = _path(("A", 0), ("B", 5))
    assert repr(p) == "DijkstraPath(['A', 'B'], weight=5)"


def test_path_comparison():
    p1 = _path(("A", 0), ("B", 10))
    p2 = _path(("A", 0), ("B", 20))
    assert p1 < p2
    assert not (p2 < p1)
    assert sorted([p2, p1]) == [p1, p2]


def test_is_equal_ignores_weights():
    p1 = _path(("A", 0), ("B", 1))
    p2 = _path(("A", 0), ("B", 7))
    p3 = _path(("A", 0), ("C", 1))
    p4 = _path(("A", 0), ("B", 1), ("C", 2))
    assert p1.is_equal(p2)
    assert p1 != p2
    assert not p1.is_equal(p3)
    assert not p1.is_equal(p4)
    assert p1 == _path(("A", 0), ("B", 1))
    assert hash(p1) == hash(_path(("A", 0), ("B", 1)))


def test_root_paths():
    p = _path(("S", 0), ("A", 1), ("C", 2), ("T", 3))
    roots = p.root_paths()
    assert [r.nodes_seq for r in roots] == [
        ("S",),
        ("S", "A"),
        ("S", "A", "C"),
    ]
    assert [r.weight for r in roots] == [0, 1, 2]
    assert all(r.start_node == "S" for r in roots)
    assert [r.end_node for r in roots] == ["S", "A", "C"]
    assert _path(("S", 0)).root_paths() == []


def test_includes_path():
    p = _path(("S", 0), ("A", 1), ("C", 2))
    assert p.includes_path(_path(("S", 0), ("A", 1)))
    assert p.includes_path(_path(("S", 5), ("A", 9)))
    assert p.includes_path(p)
    assert not p.includes_path(_path(("A", 0), ("C", 1)))
    assert not p.includes_path(_path(("S", 0), ("A", 1), ("C", 2), ("T", 3)))


def test_outgoing_edge_for_sub_path():
    p = _path(("S", 0), ("A", 1), ("C", 2), ("T", 3))
    assert p.outgoing_edge_for_sub_path(_path(("S", 0))) == ("S", "A")
    assert p.outgoing_edge_for_sub_path(_path(("S", 0), ("A", 1))) == ("A", "C")
    assert p.outgoing_edge_for_sub_path(_path(("X", 0))) is None
    assert p.outgoing_edge_for_sub_path(p) is None


def test_merge_with_shared_join_node():
    p = _path(("S", 0), ("A", 2))
    q = _path(("A", 10), ("B", 11), ("C", 15))
    merged = p.merge_with(q)
    assert merged.nodes_seq == ("S", "A", "B", "C")
    assert merged.weights_seq == (0, 2, 3, 7)
    assert merged.weight == 7
    assert merged.start_node == "S"
    assert merged.end_node == "C"
    # Inputs are untouched
    assert p.nodes_seq == ("S", "A")
    assert q.weights_seq == (10, 11, 15)


def test_merge_with_disjoint_paths():
    p = _path(("S", 0), ("A", 2))
    q = _path(("B", 0), ("C", 1))
    merged = p.merge_with(q)
    assert merged.nodes_seq == ("S", "A", "B", "C")
    # B is rebased onto A's weight: 2 + (0 - 0)
    assert merged.weights_seq == (0, 2, 2, 3)


def test_merge_single_node_paths():
    p = _path(("S", 0))
    assert p.merge_with(_path(("S", 4))) == p


def test_to_dict_is_json_serializable():
    p = _path(("S", 0), ("T", 1.5))
    data = p.to_dict()
    assert data == {
        "start_node": "S",
        "end_node": "T",
        "weight": 1.5,
        "path": [{"node": "S", "weight": 0}, {"node": "T", "weight": 1.5}],
    }
    assert json.loads(json.dumps(data)) == data


@pytest.mark.parametrize("mode", [SearchMode.VANILLA, SearchMode.BIDIR])
def test_splice_round_trip(reference_graph, mode):
    """Each prefix plus its outgoing edge rebuilds the next prefix exactly."""
    path, found = search_path(reference_graph, "S", "T", mode)
    assert found
    for i, root in enumerate(path.root_paths()):
        assert path.includes_path(root)
        u, v = path.outgoing_edge_for_sub_path(root)
        step = _path((u, 0), (v, reference_graph.edge_weight(u, v)))
        rebuilt = root.merge_with(step)
        assert rebuilt.nodes_seq == path.nodes_seq[: i + 2]
        assert rebuilt.weights_seq == pytest.approx(path.weights_seq[: i + 2])


def test_split_and_merge_search_results(reference_graph):
    """Merging two independently searched halves matches the direct search."""
    first, _ = search_path(reference_graph, "S", "C", SearchMode.BIDIR)
    second, _ = search_path(reference_graph, "C", "T", SearchMode.VANILLA)
    direct, _ = search_path(reference_graph, "S", "T", SearchMode.BIDIR)
    merged = first.merge_with(second)
    assert merged.is_equal(direct)
    assert merged.weights_seq == pytest.approx(direct.weights_seq)
