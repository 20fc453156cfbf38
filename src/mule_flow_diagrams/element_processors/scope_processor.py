"""
Processor for Mule scopes and routers.
"""
import xml.etree.ElementTree as ET

from mule_flow_diagrams.element_processors.base_processor import BaseElementProcessor
from mule_flow_diagrams.models import ProcessingStep


class ScopeProcessor(BaseElementProcessor):
    """
    Processes elements that contain other processors, such as ``choice``,
    ``when``, ``try``, ``foreach`` or ``error-handler``.

    The nested elements are handed back to the element chain processor, so
    scopes nest to any depth and keep document order.
    """

    def __init__(self, catalog, element_chain_processor):
        """
        Initialize the scope processor.

        Args:
            catalog: Known components used to label steps
            element_chain_processor: Chain processor used for the nested elements
        """
        super().__init__(catalog)
        self.element_chain_processor = element_chain_processor

    def _process_impl(self, element: ET.Element, element_kind: str) -> ProcessingStep:
        label = self.get_display_label(element, element_kind)
        attributes = self.get_attributes(element)
        # when/until-successful style scopes are easier to read with their expression
        expression = attributes.get("expression")
        if expression and label == self.catalog.lookup(element_kind).name:
            label = f"{label} {expression}"

        return ProcessingStep(
            element_kind=element_kind,
            display_label=label,
            children=tuple(self.element_chain_processor.process_children(element)),
        )
