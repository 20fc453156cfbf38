"""
Element processors turning Mule XML elements into processing steps.
"""

from .base_processor import BaseElementProcessor, ElementProcessingError
from .element_chain_processor import ElementChainProcessor
from .flow_ref_processor import FlowRefProcessor
from .generic_processor import GenericProcessor
from .scope_processor import ScopeProcessor

__all__ = [
    'BaseElementProcessor',
    'ElementProcessingError',
    'ElementChainProcessor',
    'FlowRefProcessor',
    'GenericProcessor',
    'ScopeProcessor'
]
