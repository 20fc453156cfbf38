"""
Main entry point for rendering Mule flow diagrams.
"""
import logging
from pathlib import Path
from typing import List, Optional

from mule_flow_diagrams.drawings import GraphBuilder, GraphvizBackend, RenderBackend, RenderError
from mule_flow_diagrams.flow_model_parser import FlowModelParser
from mule_flow_diagrams.model_aggregator import ModelAggregator
from mule_flow_diagrams.models import CommandModel, DrawingContext, FlowContainer
from mule_flow_diagrams.utils import ComponentCatalog, FileSystemStorage, PathResolver, load_known_components

logger = logging.getLogger(__name__)


class DiagramRenderer:
    """
    Renders the flows of a Mule project or configuration file into a diagram.

    One call to ``render`` runs the whole pipeline: resolve the source path,
    parse and aggregate the configuration files, build the diagram graph and
    hand it to the render backend. Problems with single files or references are
    logged and skipped; only an empty model or a backend failure makes the run
    fail, and both are reported as ``False`` rather than raised.
    """

    def __init__(self,
                 command_model: CommandModel,
                 backend: Optional[RenderBackend] = None,
                 storage: Optional[FileSystemStorage] = None,
                 path_resolver: Optional[PathResolver] = None):
        """
        Initialize the renderer.

        Args:
            command_model: Options for this run
            backend: Render backend, Graphviz by default
            storage: File system access
            path_resolver: Project layout resolution
        """
        self.command_model = command_model
        self.backend = backend or GraphvizBackend()
        self.storage = storage or FileSystemStorage()
        self.path_resolver = path_resolver or PathResolver()
        self.known_components: ComponentCatalog = ComponentCatalog()

    def render(self) -> bool:
        """
        Run the pipeline.

        Returns:
            True if a diagram was written, False otherwise
        """
        self.known_components = self.prepare_known_components()
        source_path = self.get_mule_source_path()
        flows = self.find_flows(source_path)
        return self.diagram(flows)

    def prepare_known_components(self) -> ComponentCatalog:
        """Load the catalog of known components."""
        return load_known_components()

    def get_mule_source_path(self) -> Path:
        """Resolve the directory or file holding the configuration files."""
        return self.path_resolver.resolve(self.command_model.source_path)

    def find_flows(self, source_path: Path) -> List[FlowContainer]:
        """
        Parse all configuration files below a source path.

        Args:
            source_path: Resolved source file or directory

        Returns:
            The aggregated flow containers
        """
        config_files = self.storage.list_config_files(source_path)
        logger.debug(f"Found {len(config_files)} configuration files in {source_path}")
        parser = FlowModelParser(self.known_components, self.storage)
        return ModelAggregator(parser).aggregate(config_files)

    def diagram(self, flows: List[FlowContainer]) -> bool:
        """
        Build the diagram graph and render it.

        Args:
            flows: Aggregated flow containers

        Returns:
            True if the backend wrote the diagram, False for an empty model or
            a backend failure
        """
        if not flows:
            logger.error("No mule flows found in the source")
            return False

        context = self.drawing_context(self.command_model)
        graph = GraphBuilder(self.known_components).build(flows, context.diagram_type, context.flow_name)
        if graph.is_empty():
            logger.error("Nothing to draw, the diagram would be empty")
            return False
        if graph.diagnostics:
            logger.info(f"Diagram built with {len(graph.diagnostics)} unresolved or skipped elements")

        try:
            output_file = self.backend.render(graph, context)
        except (RenderError, OSError) as e:
            logger.error(f"Diagram rendering failed: {e}")
            return False
        logger.info(f"Generated diagram {output_file}")
        return True

    def drawing_context(self, command_model: CommandModel) -> DrawingContext:
        """Create the drawing context for a command model."""
        return DrawingContext(
            diagram_type=command_model.diagram_type,
            output_file=Path(command_model.target_path) / command_model.output_filename,
            flow_name=command_model.flow_name,
        )
