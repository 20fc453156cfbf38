"""
Processor for Mule flow-ref elements.
"""
import logging
import xml.etree.ElementTree as ET

from mule_flow_diagrams.element_processors.base_processor import BaseElementProcessor, ElementProcessingError
from mule_flow_diagrams.models import ProcessingStep


class FlowRefProcessor(BaseElementProcessor):
    """
    Processor for ``flow-ref`` elements.

    The referenced flow name is recorded as the step's reference target. It is
    not looked up here because the target may live in a file that has not been
    parsed yet.
    """

    def __init__(self, catalog=None):
        super().__init__(catalog)
        self.logger = logging.getLogger(__name__)

    def _process_impl(self, element: ET.Element, element_kind: str) -> ProcessingStep:
        """
        Process a flow-ref element.

        Args:
            element: The flow-ref element
            element_kind: The element kind

        Returns:
            A step whose reference target is the referenced flow name

        Raises:
            ElementProcessingError: If the element has no ``name`` attribute
        """
        target = (element.get("name") or "").strip()
        if not target:
            raise ElementProcessingError(element_kind, "Missing required 'name' attribute")
        if target.startswith("#["):
            self.logger.debug(f"Flow reference uses an expression, target '{target}' will not resolve")

        return ProcessingStep(
            element_kind=element_kind,
            display_label=self.get_display_label(element, element_kind),
            reference_target=target,
        )
