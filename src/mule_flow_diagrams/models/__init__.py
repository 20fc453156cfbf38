"""
Data models for parsed flows, diagram graphs and run configuration.
"""

from .flow_container import ContainerType, ElementKind, FlowContainer, ProcessingStep
from .diagram_graph import DiagramEdge, DiagramGraph, DiagramNode, DiagramType, EdgeKind, NodeKind
from .command_model import CommandModel, DrawingContext

__all__ = [
    'ContainerType',
    'ElementKind',
    'FlowContainer',
    'ProcessingStep',
    'DiagramEdge',
    'DiagramGraph',
    'DiagramNode',
    'DiagramType',
    'EdgeKind',
    'NodeKind',
    'CommandModel',
    'DrawingContext',
]
