"""
Parsing of Mule configuration files into flow containers.
"""
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import xml.etree.ElementTree as ET

from mule_flow_diagrams.element_processors import (
    BaseElementProcessor,
    ElementChainProcessor,
    FlowRefProcessor,
    GenericProcessor,
    ScopeProcessor,
)
from mule_flow_diagrams.element_processors.base_processor import split_tag
from mule_flow_diagrams.models import ContainerType, ElementKind, FlowContainer
from mule_flow_diagrams.utils import ComponentCatalog, FileSystemStorage

MULE_ROOT_ELEMENT = "mule"

logger = logging.getLogger(__name__)


class FlowModelParser:
    """
    Parses one Mule configuration file into its flow containers.

    Files that are not Mule configuration, or not well-formed XML, are skipped
    with a log entry and contribute no containers.
    """

    def __init__(self, catalog: Optional[ComponentCatalog] = None, storage: Optional[FileSystemStorage] = None):
        """
        Initialize the parser.

        Args:
            catalog: Known components used to label steps
            storage: File system access, defaults to the local file system
        """
        self.catalog = catalog or ComponentCatalog()
        self.storage = storage or FileSystemStorage()
        self.element_chain_processor = ElementChainProcessor({}, GenericProcessor(self.catalog))
        self._initialize_processors()
        self.element_chain_processor.processors = self.processors

    def _initialize_processors(self) -> None:
        """Initialize all element processors."""
        scope_processor = ScopeProcessor(self.catalog, self.element_chain_processor)
        self.processors: Dict[str, BaseElementProcessor] = {
            kind: scope_processor for kind in ElementKind.SCOPES
        }
        self.processors[ElementKind.FLOW_REF] = FlowRefProcessor(self.catalog)

    def parse(self, config_file: Path) -> List[FlowContainer]:
        """
        Parse a configuration file.

        Args:
            config_file: Path to the XML file

        Returns:
            Flow containers in document order, empty for skipped files
        """
        logger.debug(f"Parsing configuration file {config_file}")
        try:
            root, prefixes = self._read_and_parse(config_file)
        except ET.ParseError as e:
            logger.warning(f"Unable to parse {config_file}: {e}")
            return []
        except OSError as e:
            logger.warning(f"Unable to read {config_file}: {e}")
            return []

        if split_tag(root.tag)[1] != MULE_ROOT_ELEMENT:
            logger.info(f"Not a mule configuration file: {config_file}")
            return []

        self.element_chain_processor.reset(prefixes)
        containers = []
        for element in root:
            if not isinstance(element.tag, str):
                continue
            _, local = split_tag(element.tag)
            if not ContainerType.is_valid_type(local):
                continue
            name = element.get("name")
            if not name:
                logger.warning(f"Skipping unnamed {local} in {config_file}")
                continue
            containers.append(FlowContainer(
                type=local,
                name=name,
                processors=tuple(self.element_chain_processor.process_children(element)),
                source_file=config_file,
            ))

        logger.debug(f"Found {len(containers)} flow containers in {config_file}")
        return containers

    def _read_and_parse(self, config_file: Path) -> Tuple[ET.Element, Dict[str, str]]:
        """
        Read and parse the XML file.

        Args:
            config_file: Path to the XML file

        Returns:
            Tuple of (root element, namespace URI to prefix mapping)
        """
        content = self.storage.read_file(config_file)
        prefixes: Dict[str, str] = {}
        root = None
        for event, item in ET.iterparse(io.BytesIO(content), events=("start-ns", "start")):
            if event == "start-ns":
                prefix, uri = item
                prefixes.setdefault(uri, prefix)
            elif root is None:
                root = item
        if root is None:
            raise ET.ParseError("no element found")
        return root, prefixes
