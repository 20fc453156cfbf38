"""
Transformation of aggregated flow containers into a diagram graph.

The graph is built in two phases. All containers and their steps become nodes
linked by sequence edges first; flow references are linked only afterwards,
once every container is known, so references may point forward and across
files.
"""
import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple

from mule_flow_diagrams.models import (
    ContainerType,
    DiagramEdge,
    DiagramGraph,
    DiagramNode,
    DiagramType,
    EdgeKind,
    FlowContainer,
    NodeKind,
    ProcessingStep,
)
from mule_flow_diagrams.utils.component_catalog import ComponentCatalog

logger = logging.getLogger(__name__)

STYLE_HINTS = {
    DiagramType.GRAPH: {"layout": "clustered", "compact": "false"},
    DiagramType.COMPACT: {"layout": "flat", "compact": "true"},
}


def _escape_id_part(text: str) -> str:
    return text.replace("%", "%25").replace("#", "%23")


def container_node_id(container: FlowContainer) -> str:
    """
    Build the anchor node id of a container from its source file and name.

    Both parts are escaped so an anchor id holds exactly one ``#``; step ids
    add a second one and can never equal an anchor id.
    """
    return f"{_escape_id_part(container.source_file.as_posix())}#{_escape_id_part(container.name)}"


def step_node_id(anchor: str, step_path: str) -> str:
    """Build the node id of a step from its container anchor and dotted position."""
    return f"{anchor}#step:{step_path}"


class GraphBuilder:
    """
    Builds a DiagramGraph from flow containers.

    The same containers and diagram type always give the same graph.
    """

    def __init__(self, catalog: Optional[ComponentCatalog] = None):
        self.catalog = catalog or ComponentCatalog()

    def build(self,
              containers: Sequence[FlowContainer],
              diagram_type: DiagramType = DiagramType.GRAPH,
              flow_name: Optional[str] = None) -> DiagramGraph:
        """
        Build the diagram graph.

        Args:
            containers: Aggregated flow containers
            diagram_type: Diagram style, only affects style hints
            flow_name: Only draw this flow and the flows reachable from it

        Returns:
            The diagram graph, with diagnostics for references that did not resolve
        """
        graph = DiagramGraph(diagram_type=diagram_type)
        index = self._index_by_name(containers)
        if flow_name:
            containers = self._reachable_from(flow_name, containers, index)

        referenced = {
            container_node_id(target)
            for container in containers
            for target in self._resolve_all(container, index)
        }
        pending: List[Tuple[str, FlowContainer, str]] = []
        for container in containers:
            if container_node_id(container) in graph.nodes:
                message = (
                    f"Duplicate {container.type} '{container.name}' in {container.source_file}, "
                    f"only the first definition is drawn"
                )
                logger.warning(message)
                graph.diagnostics.append(message)
                continue
            anchor = self._add_container(graph, container, referenced)
            pending.extend(self._add_steps(graph, container, anchor, anchor, container.processors, ""))

        for step_id, container, target_name in pending:
            target = self._resolve(target_name, container, index)
            if target is None:
                message = (
                    f"Flow reference '{target_name}' in {container.type} '{container.name}' "
                    f"({container.source_file}) does not match any flow"
                )
                logger.warning(message)
                graph.diagnostics.append(message)
                continue
            graph.add_edge(DiagramEdge(
                source=step_id,
                target=container_node_id(target),
                kind=EdgeKind.REFERENCE,
                attributes=self._hints(diagram_type, kind=EdgeKind.REFERENCE),
            ))

        logger.debug(f"Built graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges")
        return graph

    def _add_container(self, graph: DiagramGraph, container: FlowContainer, referenced: set) -> str:
        anchor = container_node_id(container)
        unreferenced = container.type == ContainerType.SUB_FLOW and anchor not in referenced
        graph.groups[anchor] = f"{container.type}: {container.name}"
        graph.add_node(DiagramNode(
            id=anchor,
            label=container.name,
            kind=NodeKind.CONTAINER,
            group=anchor,
            attributes=self._hints(
                graph.diagram_type,
                category=container.type,
                unreferenced=str(unreferenced).lower(),
                source_file=container.source_file.name,
            ),
        ))
        return anchor

    def _add_steps(self,
                   graph: DiagramGraph,
                   container: FlowContainer,
                   group: str,
                   anchor: str,
                   steps: Sequence[ProcessingStep],
                   path: str) -> List[Tuple[str, FlowContainer, str]]:
        """
        Add nodes and sequence edges for steps, recursing into nested steps.

        Returns:
            (step node id, container, target name) for every flow reference seen
        """
        references = []
        previous = anchor
        for position, step in enumerate(steps):
            step_path = f"{path}.{position}" if path else str(position)
            step_id = step_node_id(group, step_path)
            graph.add_node(DiagramNode(
                id=step_id,
                label=step.display_label,
                kind=NodeKind.STEP,
                group=group,
                attributes=self._hints(
                    graph.diagram_type,
                    category=self.catalog.lookup(step.element_kind).category,
                    element_kind=step.element_kind,
                ),
            ))
            graph.add_edge(DiagramEdge(
                source=previous,
                target=step_id,
                kind=EdgeKind.SEQUENCE,
                attributes=self._hints(graph.diagram_type, kind=EdgeKind.SEQUENCE),
            ))
            if step.reference_target:
                references.append((step_id, container, step.reference_target))
            if step.children:
                references.extend(self._add_steps(graph, container, group, step_id, step.children, step_path))
            previous = step_id
        return references

    @staticmethod
    def _hints(diagram_type: DiagramType, **attributes: str) -> Tuple[Tuple[str, str], ...]:
        hints = dict(STYLE_HINTS[diagram_type])
        hints.update(attributes)
        return tuple(sorted(hints.items()))

    @staticmethod
    def _index_by_name(containers: Sequence[FlowContainer]) -> Dict[str, List[FlowContainer]]:
        index: Dict[str, List[FlowContainer]] = OrderedDict()
        for container in containers:
            index.setdefault(container.name, []).append(container)
        return index

    @staticmethod
    def _resolve(target_name: str,
                 origin: FlowContainer,
                 index: Dict[str, List[FlowContainer]]) -> Optional[FlowContainer]:
        """
        Find the container a reference points at.

        A container of that name in the referencing file wins over containers
        in other files; otherwise the first in aggregated order is used.
        """
        candidates = index.get(target_name)
        if not candidates:
            return None
        for candidate in candidates:
            if candidate.source_file == origin.source_file:
                return candidate
        return candidates[0]

    def _resolve_all(self, container: FlowContainer, index: Dict[str, List[FlowContainer]]) -> List[FlowContainer]:
        resolved = []
        for target_name in container.references():
            target = self._resolve(target_name, container, index)
            if target is not None:
                resolved.append(target)
        return resolved

    def _reachable_from(self,
                        flow_name: str,
                        containers: Sequence[FlowContainer],
                        index: Dict[str, List[FlowContainer]]) -> List[FlowContainer]:
        """
        Select the named flow and every container it reaches through references.

        Returns:
            The selected containers in their original order, empty if no flow has that name
        """
        start = index.get(flow_name)
        if not start:
            logger.error(f"Flow '{flow_name}' not found in any configuration file")
            return []
        seen = set()
        stack = list(start)
        while stack:
            container = stack.pop()
            key = container_node_id(container)
            if key in seen:
                continue
            seen.add(key)
            stack.extend(self._resolve_all(container, index))
        return [container for container in containers if container_node_id(container) in seen]
