"""
Python renderer implementation.

Renders component classes as importable Python modules with the same
public surface as the Java output.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.errors import RenderError
from ...core.model import ClassSpec, MethodSpec
from ...core.naming import PYTHON_RESERVED_WORDS
from ...core.renderer import LanguageRenderer
from .config import DEFAULT_RUNTIME_MODULE, LOCK_ATTRIBUTE, UNINITIALIZED_ERROR
from .syntax import PythonSyntax, PythonTypeNamer, attribute_name

logger = get_logger(__name__)


class PythonRenderer(LanguageRenderer):
    """Renderer for Python component modules."""

    max_blank_lines = 2

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python renderer with configuration."""
        super().__init__(config)
        self.runtime_module = self.config.custom.get(
            "runtime_module", DEFAULT_RUNTIME_MODULE
        )

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def render(self, class_spec: ClassSpec) -> str:
        """Render a complete Python module."""
        self._check_identifiers(class_spec)

        namer = PythonTypeNamer(class_spec.type_ref)
        syntax = PythonSyntax(class_spec.name, class_spec.fields, namer)

        declaration = class_spec.name
        if class_spec.superinterface is not None:
            declaration += f"({namer.runtime_name(class_spec.superinterface)})"

        fields = [
            f"{attribute_name(f)}: {namer.optional(f.type)} = None"
            for f in class_spec.fields
        ]

        methods = []
        if class_spec.constructor is not None:
            methods.append(self._method_data(class_spec.constructor, [], syntax, namer))
        for group in self._group_overloads(class_spec.methods):
            methods.append(self._method_data(group[0], group[1:], syntax, namer))

        lock = None
        if any(m.is_synchronized for m in class_spec.methods):
            lock = LOCK_ATTRIBUTE

        stdlib_imports = []
        if lock:
            stdlib_imports.append("import threading")
        typing_names = set(namer.typing_names)
        type_checking_imports = []
        if self.config.emit_imports:
            type_checking_imports = namer.type_checking_imports()
            if type_checking_imports:
                typing_names.add("TYPE_CHECKING")
        if typing_names:
            stdlib_imports.append(f"from typing import {', '.join(sorted(typing_names))}")

        external_imports = []
        if self.config.emit_imports:
            external_imports.extend(namer.runtime_imports())
        if syntax.raises:
            external_imports.append(f"from {self.runtime_module} import {UNINITIALIZED_ERROR}")
        external_imports.sort()

        doc = None
        if self.config.add_comments and class_spec.doc:
            doc = class_spec.doc.replace('"""', '\\"\\"\\"')

        context = {
            "doc": doc,
            "stdlib_imports": stdlib_imports,
            "external_imports": external_imports,
            "type_checking_imports": type_checking_imports,
            "declaration": declaration,
            "indent": self.config.indent,
            "lock": lock,
            "fields": fields,
            "methods": methods,
        }

        logger.debug("Rendering Python class %s", class_spec.name)
        return self.render_template("module.py.j2", context)

    def _group_overloads(self, methods) -> List[List[MethodSpec]]:
        """
        Collapse methods sharing a name into one Python method.

        Overloads must agree on arity and static-ness; the first overload
        supplies the parameter names.
        """
        groups: Dict[str, List[MethodSpec]] = {}
        for method in methods:
            groups.setdefault(method.name, []).append(method)

        for name, group in groups.items():
            first = group[0]
            for other in group[1:]:
                if len(other.parameters) != len(first.parameters):
                    raise RenderError(
                        f"Overloads of '{name}' differ in parameter count and "
                        f"cannot be expressed in Python"
                    )
                if other.is_static != first.is_static:
                    raise RenderError(
                        f"Overloads of '{name}' mix static and instance methods"
                    )
        return list(groups.values())

    def _method_data(
        self,
        method: MethodSpec,
        overloads: List[MethodSpec],
        syntax: PythonSyntax,
        namer: PythonTypeNamer,
    ) -> Dict[str, Any]:
        params = [] if method.is_static else ["self"]
        for index, param in enumerate(method.parameters):
            spellings = []
            for candidate in [method, *overloads]:
                spelling = namer.annotation(candidate.parameters[index].type)
                if spelling not in spellings:
                    spellings.append(spelling)
            params.append(f"{param.name}: {' | '.join(spellings)}")

        name = "__init__" if method.is_constructor else method.name
        returns = "None" if method.is_constructor else namer.annotation(method.returns)

        indent = self.config.indent
        depth = 2
        lines = []
        if method.is_synchronized:
            lines.append(f"{indent * depth}with {syntax.class_name}.{LOCK_ATTRIBUTE}:")
            depth += 1

        statement_lines = []
        for statement in method.statements:
            statement_lines.extend(syntax.statement(statement))
        if not statement_lines:
            statement_lines.append((0, "pass"))
        lines.extend(indent * (depth + level) + text for level, text in statement_lines)

        return {
            "decorators": ["@staticmethod"] if method.is_static else [],
            "signature": f"def {name}({', '.join(params)}) -> {returns}:",
            "body": lines,
        }

    def _check_identifiers(self, class_spec: ClassSpec):
        """Reject members whose names are Python keywords."""
        names: List[str] = [class_spec.name]
        for method in class_spec.methods:
            names.append(method.name)
            names.extend(p.name for p in method.parameters)

        for name in names:
            if name in PYTHON_RESERVED_WORDS:
                raise RenderError(f"'{name}' is a reserved word in Python")
