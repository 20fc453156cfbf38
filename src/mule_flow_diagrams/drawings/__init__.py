"""
Diagram graph building and rendering.
"""

from .base_backend import RenderBackend, RenderError
from .graph_builder import GraphBuilder, container_node_id, step_node_id
from .graphviz_backend import GraphvizBackend

__all__ = [
    'RenderBackend',
    'RenderError',
    'GraphBuilder',
    'container_node_id',
    'step_node_id',
    'GraphvizBackend'
]
