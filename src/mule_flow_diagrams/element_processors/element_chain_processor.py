"""
Processor for the ordered chain of elements inside a flow or scope.

This module provides the ElementChainProcessor class which walks the child
elements of a flow container in document order and dispatches each one to the
processor registered for its element kind. It handles:
- Mapping namespaced tags to ``prefix:name`` element kinds
- Skipping children that carry no processing meaning
- Falling back to the generic processor for unknown kinds
- Absorbing elements a processor cannot interpret
"""
import logging
from typing import Dict, List, Mapping, Optional
import xml.etree.ElementTree as ET

from mule_flow_diagrams.element_processors.base_processor import (
    BaseElementProcessor,
    ElementProcessingError,
    split_tag,
)
from mule_flow_diagrams.element_processors.generic_processor import GenericProcessor
from mule_flow_diagrams.models import ElementKind, ProcessingStep

CORE_NAMESPACE = "http://www.mulesoft.org/schema/mule/core"


class ElementChainProcessor:
    """
    Handles processing of element chains in Mule configuration.

    The processor works by:
    1. Iterating over the child elements of a flow or scope
    2. Deriving the element kind from the tag and the document's prefixes
    3. Processing each element with the processor registered for its kind
    4. Letting scope processors call back for their own children

    The processors mapping should be:
    {
        'elementKind': processor
    }
    """

    def __init__(self, processors: Dict[str, BaseElementProcessor], default_processor: GenericProcessor):
        """
        Initialize the ElementChainProcessor.

        Args:
            processors: Dictionary mapping element kinds to their processors
            default_processor: Processor for kinds without a registered processor
        """
        self.processors = processors
        self.default_processor = default_processor
        self.prefixes: Dict[str, str] = {}
        self.current_path: List[str] = []
        self.logger = logging.getLogger(__name__)

    def reset(self, prefixes: Optional[Mapping[str, str]] = None) -> None:
        """
        Reset state before processing a new document.

        Args:
            prefixes: Namespace URI to prefix mapping declared by the document
        """
        self.prefixes = dict(prefixes or {})
        self.current_path.clear()

    def element_kind(self, element: ET.Element) -> str:
        """
        Get the element kind for an element.

        Args:
            element: The XML element

        Returns:
            ``prefix:name`` for namespaced elements, the bare name for core ones
        """
        uri, local = split_tag(element.tag)
        if not uri or uri == CORE_NAMESPACE:
            return local
        prefix = self.prefixes.get(uri)
        if prefix is None:
            prefix = uri.rstrip("/").rsplit("/", 1)[-1]
        return f"{prefix}:{local}" if prefix else local

    def process_children(self, parent: ET.Element) -> List[ProcessingStep]:
        """
        Process the child elements of a flow or scope in document order.

        Args:
            parent: The flow or scope element

        Returns:
            One processing step per processing child
        """
        steps = []
        for child in parent:
            if not isinstance(child.tag, str):
                # comments and processing instructions
                continue
            kind = self.element_kind(child)
            if kind in ElementKind.IGNORED or split_tag(child.tag)[1] in ElementKind.IGNORED:
                continue
            steps.append(self.process_element(child, kind))
        return steps

    def process_element(self, element: ET.Element, kind: str) -> ProcessingStep:
        """
        Process one element with the appropriate processor.

        Args:
            element: The XML element
            kind: Its element kind

        Returns:
            The processing step; elements the processor rejects are recorded
            as generic steps
        """
        processor = self.processors.get(kind, self.default_processor)
        self.current_path.append(kind)
        self.logger.debug(f"Processing element {'/'.join(self.current_path)}")
        try:
            return processor.process(element, kind)
        except ElementProcessingError as e:
            self.logger.warning(f"{e}. Recording it as a plain step.")
            return self.default_processor.process(element, kind)
        finally:
            self.current_path.pop()
