"""Tests for the workflow graph model."""

import pydantic
import pytest

from schemas.workflow_schemas import Edge, Graph, Node, NodeKind
from conftest import make_graph


def test_node_gets_default_label_for_kind():
    assert Node(id="1", kind=NodeKind.SEND_EMAIL).label == "Send Email"
    assert Node(id="1", kind="open-pdf").label == "Open PDF"
    assert Node(id="1", kind=NodeKind.SUMMARIZE, label="Digest").label == "Digest"


def test_unknown_node_kind_rejected():
    with pytest.raises(pydantic.ValidationError):
        Node(id="1", kind="translate")


def test_duplicate_node_ids_rejected():
    with pytest.raises(pydantic.ValidationError):
        Graph(nodes=[Node(id="1", kind=NodeKind.OPEN_PDF), Node(id="1", kind=NodeKind.SUMMARIZE)])


def test_duplicate_edge_ids_rejected():
    nodes = [Node(id="1", kind=NodeKind.OPEN_PDF), Node(id="2", kind=NodeKind.SUMMARIZE)]
    with pytest.raises(pydantic.ValidationError):
        Graph(nodes=nodes, edges=[Edge(id="e", source="1", target="2"), Edge(id="e", source="2", target="1")])


def test_adjacency_queries():
    graph = make_graph(
        [("1", NodeKind.OPEN_PDF), ("2", NodeKind.EXTRACT_TEXT), ("3", NodeKind.SUMMARIZE)],
        [("1", "3"), ("1", "2"), ("2", "3")],
    )
    assert graph.incoming_edges("3") == {"1", "2"}
    assert graph.incoming_edges("1") == set()
    assert graph.outgoing_targets("1") == ["3", "2"]
    assert graph.outgoing_targets("3") == []


def test_dangling_edges_excluded_from_queries():
    graph = make_graph(
        [("1", NodeKind.OPEN_PDF), ("2", NodeKind.EXTRACT_TEXT)],
        [("1", "2"), ("1", "ghost"), ("ghost", "2")],
    )
    assert graph.outgoing_targets("1") == ["2"]
    assert graph.incoming_edges("2") == {"1"}
    assert graph.incoming_edges("ghost") == set()
    assert graph.outgoing_targets("ghost") == []


def test_start_nodes_in_node_order():
    graph = make_graph(
        [("b", NodeKind.SUMMARIZE), ("a", NodeKind.OPEN_PDF), ("c", NodeKind.EXTRACT_TEXT)],
        [("a", "c")],
    )
    assert [n.id for n in graph.start_nodes()] == ["b", "a"]


def test_from_dict_reads_editor_export():
    graph = Graph.from_dict({
        "nodes": [
            {"id": "1", "type": "open-pdf", "data": {"label": "Open PDF"}, "position": {"x": 0, "y": 0}},
            {"id": "2", "type": "extract-text", "data": {"label": "Pull words out"}},
            {"id": 3, "type": "summarize"},
        ],
        "edges": [{"id": "e1-2", "source": "1", "target": "2"}, {"source": "2", "target": 3}],
    })
    assert [n.kind for n in graph.nodes] == [NodeKind.OPEN_PDF, NodeKind.EXTRACT_TEXT, NodeKind.SUMMARIZE]
    assert graph.get_node("2").label == "Pull words out"
    assert graph.get_node("3").label == "Summarize"
    assert graph.outgoing_targets("2") == ["3"]
    assert len({e.id for e in graph.edges}) == 2


def test_from_dict_requires_node_type():
    with pytest.raises(ValueError):
        Graph.from_dict({"nodes": [{"id": "2", "data": {"label": "Extract Text"}}]})


def test_to_dict_round_trips_editor_shape(linear_graph):
    assert Graph.from_dict(linear_graph.to_dict()) == linear_graph
