"""
Render backend producing Graphviz diagrams.
"""
import logging
import subprocess
from pathlib import Path
from typing import Dict

import graphviz

from mule_flow_diagrams.drawings.base_backend import RenderBackend, RenderError
from mule_flow_diagrams.models import DiagramGraph, DiagramType, DrawingContext, EdgeKind, NodeKind

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "png"
SOURCE_FORMATS = {"dot", "gv"}
RENDER_FORMATS = {"png", "svg", "pdf"}

COLORS = {
    "flow": "#B8E6F0",
    "sub-flow": "#E1BEE7",
    "source": "#C8E6C9",
    "scope": "#FFF9C4",
    "router": "#FFE0B2",
    "error-handler": "#FFCDD2",
    "connector": "#E8F4F8",
    "unknown": "#EEEEEE",
    "edge": "#546E7A",
    "reference": "#1565C0",
    "unreferenced": "#C62828",
}

SHAPES = {
    "source": "cds",
    "router": "diamond",
    "scope": "box",
    "error-handler": "octagon",
}


class GraphvizBackend(RenderBackend):
    """
    Draws diagram graphs with the graphviz package.

    GRAPH diagrams cluster the steps of each flow and run top to bottom;
    COMPACT diagrams run left to right without clusters and with small nodes.
    The output format follows the output file suffix. ``dot``/``gv`` write the
    DOT source only and need no Graphviz executables.
    """

    def render(self, graph: DiagramGraph, context: DrawingContext) -> Path:
        if context.diagram_type not in (DiagramType.GRAPH, DiagramType.COMPACT):
            raise RenderError(context.output_file, f"Unsupported diagram type {context.diagram_type}")

        output_file = Path(context.output_file)
        fmt = output_file.suffix.lstrip(".").lower()
        if not fmt:
            fmt = DEFAULT_FORMAT
            output_file = output_file.with_name(f"{output_file.name}.{fmt}")
        if fmt not in SOURCE_FORMATS | RENDER_FORMATS:
            raise RenderError(output_file, f"Unsupported output format '{fmt}'")

        dot = self.build_digraph(graph, context)
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            if fmt in SOURCE_FORMATS:
                output_file.write_text(dot.source, encoding="utf-8")
            else:
                dot.render(outfile=output_file, format=fmt, cleanup=True)
        except graphviz.ExecutableNotFound as e:
            raise RenderError(output_file, f"Graphviz executables not found: {e}") from e
        except (subprocess.CalledProcessError, OSError) as e:
            raise RenderError(output_file, str(e)) from e

        logger.info(f"Diagram written to {output_file}")
        return output_file

    def build_digraph(self, graph: DiagramGraph, context: DrawingContext) -> graphviz.Digraph:
        """
        Build the graphviz Digraph for a diagram graph.

        Args:
            graph: The diagram graph
            context: Drawing context, its flow name becomes the diagram label

        Returns:
            The Digraph, not yet rendered
        """
        compact = graph.diagram_type == DiagramType.COMPACT
        dot = graphviz.Digraph(name="mule_flows", comment="Mule flow diagram")
        dot.attr(
            rankdir="LR" if compact else "TB",
            fontname="Arial",
            fontsize="10" if compact else "12",
            nodesep="0.2" if compact else "0.5",
            label=f"Flow: {context.flow_name}" if context.flow_name else "",
        )
        dot.attr("node", shape="box", style="filled,rounded", fontname="Arial",
                 fontsize="9" if compact else "11", height="0.3" if compact else "0.5")
        dot.attr("edge", color=COLORS["edge"], arrowsize="0.6" if compact else "0.8")

        # graphviz reads "a:b" as node a, port b, so file path ids are mapped to plain ones
        ids = {node_id: f"n{index}" for index, node_id in enumerate(graph.nodes)}
        if compact:
            for node in graph.nodes.values():
                dot.node(ids[node.id], node.label, **self._node_style(node.kind, node.attrs))
        else:
            for index, (group, title) in enumerate(graph.groups.items()):
                with dot.subgraph(name=f"cluster_{index}") as cluster:
                    cluster.attr(label=title, style="rounded", color="#BDBDBD")
                    for node in graph.nodes.values():
                        if node.group == group:
                            cluster.node(ids[node.id], node.label, **self._node_style(node.kind, node.attrs))

        for edge in graph.edges:
            if edge.kind == EdgeKind.REFERENCE:
                dot.edge(ids[edge.source], ids[edge.target], style="dashed", color=COLORS["reference"])
            else:
                dot.edge(ids[edge.source], ids[edge.target])
        return dot

    @staticmethod
    def _node_style(kind: str, attrs: Dict[str, str]) -> Dict[str, str]:
        category = attrs.get("category", "unknown")
        style = {"fillcolor": COLORS.get(category, COLORS["unknown"])}
        if kind == NodeKind.CONTAINER:
            style["shape"] = "folder"
            style["penwidth"] = "2"
            if attrs.get("unreferenced") == "true":
                style["color"] = COLORS["unreferenced"]
                style["style"] = "filled,dashed"
        else:
            style["shape"] = SHAPES.get(category, "box")
            if category == "unknown":
                style["style"] = "filled,dotted"
        return style
