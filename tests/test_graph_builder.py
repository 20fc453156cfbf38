from pathlib import Path

import pytest

from mule_flow_diagrams.drawings import GraphBuilder, container_node_id, step_node_id
from mule_flow_diagrams.flow_model_parser import FlowModelParser
from mule_flow_diagrams.models import DiagramType, EdgeKind, FlowContainer, NodeKind, ProcessingStep


def step(kind, label=None, children=(), target=None):
    return ProcessingStep(element_kind=kind, display_label=label or kind, children=tuple(children),
                          reference_target=target)


@pytest.fixture
def mule4_flows(catalog, renderer_resource):
    return FlowModelParser(catalog).parse(renderer_resource("mule4-example/src/main/mule/mule4-config.xml"))


def test_nodes_and_sequence_edges():
    flow = FlowContainer("flow", "main", (step("logger"), step("set-payload")), Path("a.xml"))

    graph = GraphBuilder().build([flow])

    assert list(graph.nodes) == ["a.xml#main", "a.xml#main#step:0", "a.xml#main#step:1"]
    assert [(e.source, e.target, e.kind) for e in graph.edges] == [
        ("a.xml#main", "a.xml#main#step:0", EdgeKind.SEQUENCE),
        ("a.xml#main#step:0", "a.xml#main#step:1", EdgeKind.SEQUENCE),
    ]
    assert graph.nodes["a.xml#main"].kind == NodeKind.CONTAINER
    assert graph.nodes["a.xml#main#step:1"].label == "set-payload"


def test_nested_steps_use_parent_as_anchor():
    choice = step("choice", children=[step("when", children=[step("logger")]), step("otherwise")])
    flow = FlowContainer("flow", "main", (choice, step("logger")), Path("a.xml"))

    graph = GraphBuilder().build([flow])

    edges = {(e.source, e.target) for e in graph.edges}
    assert edges == {
        ("a.xml#main", "a.xml#main#step:0"),
        ("a.xml#main#step:0", "a.xml#main#step:0.0"),
        ("a.xml#main#step:0.0", "a.xml#main#step:0.0.0"),
        ("a.xml#main#step:0.0", "a.xml#main#step:0.1"),
        ("a.xml#main#step:0", "a.xml#main#step:1"),
    }


def test_reference_edges_resolve_forward_and_across_files():
    caller = FlowContainer("flow", "caller", (step("flow-ref", target="callee"),), Path("a.xml"))
    callee = FlowContainer("sub-flow", "callee", (step("logger"),), Path("b.xml"))

    graph = GraphBuilder().build([caller, callee])

    references = [(e.source, e.target) for e in graph.edges if e.kind == EdgeKind.REFERENCE]
    assert references == [("a.xml#caller#step:0", "b.xml#callee")]
    assert graph.diagnostics == []


def test_reference_prefers_container_in_same_file():
    other = FlowContainer("sub-flow", "shared", (), Path("a.xml"))
    caller = FlowContainer("flow", "caller", (step("flow-ref", target="shared"),), Path("b.xml"))
    local = FlowContainer("sub-flow", "shared", (), Path("b.xml"))

    graph = GraphBuilder().build([other, caller, local])

    references = [e.target for e in graph.edges if e.kind == EdgeKind.REFERENCE]
    assert references == ["b.xml#shared"]
    assert "a.xml#shared" in graph.nodes


def test_dangling_reference_is_omitted_with_diagnostic(mule4_flows, caplog):
    graph = GraphBuilder().build(mule4_flows)

    reference_targets = [e.target for e in graph.edges if e.kind == EdgeKind.REFERENCE]
    assert reference_targets == [container_node_id(mule4_flows[1])]
    assert len(graph.diagnostics) == 1
    assert "standard-subflow" in graph.diagnostics[0]
    assert any("standard-subflow" in m for m in caplog.messages)


def test_every_edge_endpoint_is_a_node(mule4_flows):
    graph = GraphBuilder().build(mule4_flows)

    assert len(graph.nodes) == 15
    assert len(graph.edges) == 13
    for edge in graph.edges:
        assert edge.source in graph.nodes
        assert edge.target in graph.nodes


def test_build_is_deterministic(mule4_flows, catalog):
    first = GraphBuilder(catalog).build(mule4_flows, DiagramType.GRAPH)
    second = GraphBuilder(catalog).build(list(mule4_flows), DiagramType.GRAPH)

    assert first.node_set() == second.node_set()
    assert first.edge_set() == second.edge_set()
    assert first.groups == second.groups


def test_diagram_type_only_changes_style_hints(mule4_flows):
    graph = GraphBuilder().build(mule4_flows, DiagramType.GRAPH)
    compact = GraphBuilder().build(mule4_flows, DiagramType.COMPACT)

    assert list(graph.nodes) == list(compact.nodes)
    assert [(e.source, e.target, e.kind) for e in graph.edges] == \
        [(e.source, e.target, e.kind) for e in compact.edges]
    assert graph.nodes[container_node_id(mule4_flows[0])].attrs["compact"] == "false"
    assert compact.nodes[container_node_id(mule4_flows[0])].attrs["compact"] == "true"


def test_same_name_in_two_files_gives_two_nodes():
    first = FlowContainer("flow", "main", (), Path("a.xml"))
    second = FlowContainer("flow", "main", (), Path("b.xml"))

    graph = GraphBuilder().build([first, second])

    assert list(graph.nodes) == ["a.xml#main", "b.xml#main"]


def test_unreferenced_sub_flows_are_marked(mule4_flows):
    graph = GraphBuilder().build(mule4_flows)

    marks = {node.label: node.attrs["unreferenced"] for node in graph.nodes.values()
             if node.kind == NodeKind.CONTAINER}
    assert marks == {"orders-main": "false", "express-subflow": "false", "unused-subflow": "true"}


def test_step_category_comes_from_catalog(mule4_flows, catalog):
    graph = GraphBuilder(catalog).build(mule4_flows)

    listener = graph.nodes[step_node_id(container_node_id(mule4_flows[0]), "0")]
    assert listener.attrs["category"] == "source"
    assert listener.attrs["element_kind"] == "http:listener"


def test_flow_name_selects_reachable_flows(mule4_flows):
    graph = GraphBuilder().build(mule4_flows, flow_name="orders-main")

    assert set(graph.groups) == {container_node_id(mule4_flows[0]), container_node_id(mule4_flows[1])}


def test_unknown_flow_name_gives_empty_graph(mule4_flows):
    assert GraphBuilder().build(mule4_flows, flow_name="nope").is_empty()


def test_empty_input_gives_empty_graph():
    graph = GraphBuilder().build([])

    assert graph.is_empty()
    assert graph.edges == []


def test_flow_name_shaped_like_a_step_id_keeps_both_nodes():
    main = FlowContainer("flow", "main", (step("logger"),), Path("a.xml"))
    lookalike = FlowContainer("flow", "main#step:0", (), Path("a.xml"))
    slashed = FlowContainer("flow", "main/0", (), Path("a.xml"))

    graph = GraphBuilder().build([main, lookalike, slashed])

    assert len(graph.nodes) == 4
    assert graph.nodes["a.xml#main#step:0"].kind == NodeKind.STEP
    assert graph.nodes["a.xml#main#step:0"].label == "logger"
    assert graph.nodes[container_node_id(lookalike)].label == "main#step:0"
    assert graph.nodes["a.xml#main/0"].kind == NodeKind.CONTAINER
    assert [(e.source, e.target) for e in graph.edges] == [("a.xml#main", "a.xml#main#step:0")]


def test_duplicate_container_in_one_file_is_drawn_once():
    first = FlowContainer("flow", "main", (step("logger"),), Path("a.xml"))
    second = FlowContainer("flow", "main", (step("set-payload"),), Path("a.xml"))

    graph = GraphBuilder().build([first, second])

    assert list(graph.nodes) == ["a.xml#main", "a.xml#main#step:0"]
    assert graph.nodes["a.xml#main#step:0"].label == "logger"
    assert len(graph.diagnostics) == 1
    assert "Duplicate flow 'main'" in graph.diagnostics[0]


def test_unreferenced_mark_tells_same_named_sub_flows_apart():
    caller = FlowContainer("flow", "caller", (step("flow-ref", target="shared"),), Path("a.xml"))
    local = FlowContainer("sub-flow", "shared", (), Path("a.xml"))
    other = FlowContainer("sub-flow", "shared", (), Path("b.xml"))

    graph = GraphBuilder().build([caller, local, other])

    assert graph.nodes["a.xml#shared"].attrs["unreferenced"] == "false"
    assert graph.nodes["b.xml#shared"].attrs["unreferenced"] == "true"
