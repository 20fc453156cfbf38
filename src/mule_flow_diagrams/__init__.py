"""
Diagrams of the flows in Mule configuration files.
"""

from .diagram_renderer import DiagramRenderer
from .models import CommandModel, DiagramType

__version__ = "0.1.0"

__all__ = [
    'DiagramRenderer',
    'CommandModel',
    'DiagramType'
]
