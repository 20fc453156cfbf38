"""
Aggregation of the flow containers of all resolved configuration files.
"""
import logging
from pathlib import Path
from typing import Iterable, List

from mule_flow_diagrams.flow_model_parser import FlowModelParser
from mule_flow_diagrams.models import FlowContainer

logger = logging.getLogger(__name__)


class ModelAggregator:
    """
    Concatenates per-file parse results.

    Order is file order first, then document order within a file. Containers
    are never deduplicated: two files may define flows with the same name.
    """

    def __init__(self, parser: FlowModelParser):
        self.parser = parser

    def aggregate(self, config_files: Iterable[Path]) -> List[FlowContainer]:
        """
        Parse and aggregate configuration files.

        Args:
            config_files: Files in resolution order

        Returns:
            All flow containers found
        """
        containers: List[FlowContainer] = []
        for config_file in config_files:
            containers.extend(self.parser.parse(config_file))
        logger.debug(f"Aggregated {len(containers)} flow containers")
        return containers
