"""
Python renderer module.

Renders component classes as Python modules backed by ``prefroom.runtime``.
"""

from .renderer import PythonRenderer
from .syntax import PythonSyntax, PythonTypeNamer

__all__ = [
    "PythonRenderer",
    "PythonSyntax",
    "PythonTypeNamer",
    "create_python_renderer",
]


def create_python_renderer(**options) -> PythonRenderer:
    """Create a Python renderer with the Python configuration defaults."""
    from ...core.config import load_config

    return PythonRenderer(load_config("python", custom_config=options))
