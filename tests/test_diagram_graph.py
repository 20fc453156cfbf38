import pytest

from mule_flow_diagrams.models import DiagramEdge, DiagramGraph, DiagramNode, DiagramType, EdgeKind, NodeKind


def test_duplicate_node_id_is_rejected():
    graph = DiagramGraph(DiagramType.GRAPH)
    graph.add_node(DiagramNode("a.xml#main", "main", NodeKind.CONTAINER, "a.xml#main"))

    with pytest.raises(ValueError, match="Duplicate node id 'a.xml#main'"):
        graph.add_node(DiagramNode("a.xml#main", "other", NodeKind.CONTAINER, "a.xml#main"))

    assert graph.nodes["a.xml#main"].label == "main"


def test_edge_endpoints_must_be_nodes():
    graph = DiagramGraph(DiagramType.GRAPH)
    graph.add_node(DiagramNode("a.xml#main", "main", NodeKind.CONTAINER, "a.xml#main"))

    with pytest.raises(KeyError):
        graph.add_edge(DiagramEdge("a.xml#main", "a.xml#missing", EdgeKind.SEQUENCE))
