"""
HTML serialization.
"""

from .escape import escape_text, escape_attribute
from .serializer import render

__all__ = ['escape_text', 'escape_attribute', 'render']
