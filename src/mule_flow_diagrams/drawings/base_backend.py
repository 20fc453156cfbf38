"""
Interface for diagram render backends.
"""
from pathlib import Path

from mule_flow_diagrams.models import DiagramGraph, DrawingContext


class RenderBackend:
    """
    Base class for render backends.

    A backend turns an abstract diagram graph into a file.
    """

    def render(self, graph: DiagramGraph, context: DrawingContext) -> Path:
        """
        Render a graph to the context's output file.

        Args:
            graph: The graph to render
            context: Output file and diagram type

        Returns:
            Path of the written file

        Raises:
            RenderError: If the graph cannot be rendered or written
        """
        raise NotImplementedError("Subclasses must implement render()")


class RenderError(Exception):
    """
    Exception raised when a diagram cannot be rendered or written.
    """

    def __init__(self, output_file: Path, message: str):
        self.output_file = output_file
        self.message = message
        super().__init__(f"Unable to render {output_file}: {message}")
