"""
Java renderer module.

Renders component classes as Java source files.
"""

from .renderer import JavaRenderer
from .syntax import JavaSyntax, JavaTypeNamer

__all__ = [
    "JavaRenderer",
    "JavaSyntax",
    "JavaTypeNamer",
    "create_java_renderer",
]


def create_java_renderer(**options) -> JavaRenderer:
    """
    Create a Java renderer with the Java configuration defaults.

    Args:
        **options: Configuration overrides (indent_size, add_comments, etc.)

    Returns:
        Configured JavaRenderer instance
    """
    from ...core.config import load_config

    return JavaRenderer(load_config("java", custom_config=options))
