"""
Processor for Mule elements without a dedicated processor.
"""
import xml.etree.ElementTree as ET

from mule_flow_diagrams.element_processors.base_processor import BaseElementProcessor
from mule_flow_diagrams.models import ProcessingStep


class GenericProcessor(BaseElementProcessor):
    """
    Records any element as a leaf step.

    Nested XML children of a plain processor are its configuration (headers,
    bodies, parameters), not processing steps, so they are not expanded.
    Unknown element kinds end up here as well and keep their kind as label.
    """

    def _process_impl(self, element: ET.Element, element_kind: str) -> ProcessingStep:
        return ProcessingStep(
            element_kind=element_kind,
            display_label=self.get_display_label(element, element_kind),
        )
