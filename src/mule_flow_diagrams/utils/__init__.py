"""
Utility classes for locating, reading and labelling Mule configuration.
"""

from .component_catalog import ComponentCatalog, ComponentItem, load_known_components
from .file_storage import FileSystemStorage
from .path_resolver import LayoutConvention, PathResolver

__all__ = [
    'ComponentCatalog',
    'ComponentItem',
    'load_known_components',
    'FileSystemStorage',
    'LayoutConvention',
    'PathResolver'
]
