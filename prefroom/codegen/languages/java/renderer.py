"""
Java renderer implementation.

Renders generated component classes as Java source, the reference target
of the annotation processor.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.errors import RenderError
from ...core.model import ClassSpec, MethodSpec
from ...core.naming import JAVA_RESERVED_WORDS
from ...core.renderer import LanguageRenderer
from .syntax import JavaSyntax, JavaTypeNamer, javadoc_lines

logger = get_logger(__name__)


class JavaRenderer(LanguageRenderer):
    """Renderer for Java component classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Java renderer with configuration."""
        super().__init__(config)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "java"

    @property
    def file_extension(self) -> str:
        """Return Java file extension."""
        return ".java"

    def get_template_directory(self) -> Path:
        """Return the Java templates directory."""
        return Path(__file__).parent / "templates"

    def render(self, class_spec: ClassSpec) -> str:
        """Render a complete Java source file."""
        self._check_identifiers(class_spec)

        namer = JavaTypeNamer(
            class_spec.package_name,
            class_spec.referenced_types(),
            own_types=[class_spec.type_ref],
            emit_imports=self.config.emit_imports,
        )
        syntax = JavaSyntax(class_spec.name, namer)
        indent = self.config.indent

        members = []
        if class_spec.constructor is not None:
            members.append(self._method_data(class_spec.constructor, syntax))
        members.extend(self._method_data(m, syntax) for m in class_spec.methods)

        context = {
            "package_name": class_spec.package_name,
            "imports": namer.imports,
            "doc_lines": javadoc_lines(class_spec.doc) if self.config.add_comments else [],
            "declaration": self._declaration(class_spec, syntax),
            "indent": indent,
            "fields": [
                f"{syntax.modifiers(f.modifiers)} {syntax.type_name(f.type)} {f.name};"
                for f in class_spec.fields
            ],
            "methods": members,
        }

        logger.debug("Rendering Java class %s", class_spec.name)
        return self.render_template("class.java.j2", context)

    def _declaration(self, class_spec: ClassSpec, syntax: JavaSyntax) -> str:
        parts = [syntax.modifiers(class_spec.modifiers), "class", class_spec.name]
        if class_spec.superinterface is not None:
            parts.extend(["implements", syntax.type_name(class_spec.superinterface)])
        return " ".join(part for part in parts if part)

    def _method_data(self, method: MethodSpec, syntax: JavaSyntax) -> Dict[str, Any]:
        indent = self.config.indent
        return {
            "annotations": ["@Override"] if method.overrides else [],
            "signature": syntax.signature(method),
            "body": syntax.body(method, indent * 2),
        }

    def _check_identifiers(self, class_spec: ClassSpec):
        """Reject members whose names are Java keywords."""
        names: List[str] = [class_spec.name, *class_spec.field_names()]
        for method in class_spec.methods:
            names.append(method.name)
            names.extend(p.name for p in method.parameters)

        for name in names:
            if name in JAVA_RESERVED_WORDS:
                raise RenderError(f"'{name}' is a reserved word in Java")
