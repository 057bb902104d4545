"""
Language-specific renderers.

This module contains renderers for the supported target languages.
"""

from .java import JavaRenderer, create_java_renderer
from .python import PythonRenderer, create_python_renderer

__all__ = [
    "JavaRenderer",
    "create_java_renderer",
    "PythonRenderer",
    "create_python_renderer",
]
