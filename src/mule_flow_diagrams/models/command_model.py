"""
Run configuration passed from the command line (or a library caller) to the renderer.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mule_flow_diagrams.models.diagram_graph import DiagramType


@dataclass
class CommandModel:
    """
    User supplied options for one rendering run.

    Attributes:
        source_path: Project directory or single configuration file
        target_path: Directory the diagram is written to
        output_filename: Diagram file name, its suffix selects the output format
        diagram_type: Diagram style
        flow_name: Restrict the diagram to this flow and the flows it references
    """
    source_path: Path
    target_path: Path = Path(".")
    output_filename: str = "mule-diagram.png"
    diagram_type: DiagramType = DiagramType.GRAPH
    flow_name: Optional[str] = None


@dataclass(frozen=True)
class DrawingContext:
    """Everything a render backend needs besides the graph itself."""
    diagram_type: DiagramType
    output_file: Path
    flow_name: Optional[str] = None
