"""
Base processor class for Mule element processing.
"""
import xml.etree.ElementTree as ET
from typing import Dict, Optional, Tuple

from mule_flow_diagrams.models import ProcessingStep
from mule_flow_diagrams.utils.component_catalog import ComponentCatalog

DOC_NAMESPACE = "http://www.mulesoft.org/schema/mule/documentation"
DOC_NAME_ATTRIBUTE = f"{{{DOC_NAMESPACE}}}name"


def split_tag(tag: str) -> Tuple[str, str]:
    """
    Split an ElementTree tag into namespace URI and local name.

    Args:
        tag: Tag such as ``{http://www.mulesoft.org/schema/mule/http}listener``

    Returns:
        Tuple of (namespace URI, local name), the URI is empty for unqualified tags
    """
    if tag.startswith("{"):
        uri, _, local = tag[1:].partition("}")
        return uri, local
    return "", tag


class BaseElementProcessor:
    """
    Base class for all Mule element processors.

    Each processor turns one XML element of a flow into a ProcessingStep.
    Processors are registered per element kind; elements without a dedicated
    processor are handled by the generic one.
    """

    def __init__(self, catalog: Optional[ComponentCatalog] = None):
        """
        Initialize the base processor.

        Args:
            catalog: Known components used to label steps
        """
        self.catalog = catalog or ComponentCatalog()

    def process(self, element: ET.Element, element_kind: str) -> ProcessingStep:
        """
        Process a Mule element into a processing step.

        Args:
            element: The XML element to process
            element_kind: The element kind, ``prefix:name`` or a bare core name

        Returns:
            The processing step for the element

        Raises:
            ElementProcessingError: If the element cannot be processed
        """
        return self._process_impl(element, element_kind)

    def _process_impl(self, element: ET.Element, element_kind: str) -> ProcessingStep:
        """
        Implementation of element processing. Subclasses must override this method.
        """
        raise NotImplementedError("Subclasses must implement _process_impl()")

    def get_display_label(self, element: ET.Element, element_kind: str) -> str:
        """
        Get the label shown for an element.

        Args:
            element: The XML element
            element_kind: The element kind

        Returns:
            The ``doc:name`` attribute, else the ``name`` attribute, else the
            catalog display name for the kind
        """
        label = element.get(DOC_NAME_ATTRIBUTE) or element.get("name")
        if label:
            return label
        return self.catalog.lookup(element_kind).name

    def get_attributes(self, element: ET.Element) -> Dict[str, str]:
        """Get element attributes keyed by local name."""
        return {split_tag(key)[1]: value for key, value in element.attrib.items()}


class ElementProcessingError(Exception):
    """
    Exception raised when processing a Mule element fails.

    This exception should be raised when a processor encounters an element
    it cannot interpret.
    """

    def __init__(self, element_name: str, message: str):
        """
        Initialize the error.

        Args:
            element_name: The name of the element that failed to process
            message: A description of what went wrong
        """
        self.element_name = element_name
        self.message = message
        super().__init__(f"Error processing element '{element_name}': {message}")
