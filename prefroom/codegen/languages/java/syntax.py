"""
Java spelling of the class tree.

Turns types, expressions and statements into Java source fragments and
decides which types are imported and which must stay fully qualified.
"""

import json
from typing import Dict, Iterable, List, Optional

from ...core.errors import RenderError
from ...core.model import (
    ARRAY_LIST,
    LIST,
    Append,
    Assign,
    Call,
    DeclareList,
    ExpressionStatement,
    FieldRef,
    Literal,
    MethodSpec,
    Modifier,
    Name,
    New,
    ParameterSpec,
    Raise,
    Return,
    ReturnIfSet,
    TypeRef,
)

UNINITIALIZED_ERROR = "VerifyError"


class JavaTypeNamer:
    """Chooses between simple and qualified names for referenced types."""

    def __init__(
        self,
        package_name: str,
        types: Iterable[TypeRef],
        own_types: Iterable[TypeRef] = (),
        emit_imports: bool = True,
    ):
        """
        Initialize namer.

        Args:
            package_name: Package of the class being rendered
            types: Every type the class references
            own_types: Types declared in the rendered file
            emit_imports: Import external types instead of qualifying them
        """
        self.package_name = package_name
        self.emit_imports = emit_imports
        self._simple: Dict[str, str] = {}
        self._imports: List[str] = []

        for type_ref in own_types:
            self._simple[type_ref.simple_name] = type_ref.qualified_name
        for type_ref in types:
            self._claim(type_ref)

    def _claim(self, type_ref: TypeRef):
        # First claimant of a simple name keeps it
        if not type_ref.package_name or type_ref.simple_name in self._simple:
            return
        if self._is_implicit(type_ref):
            self._simple[type_ref.simple_name] = type_ref.qualified_name
        elif self.emit_imports:
            self._simple[type_ref.simple_name] = type_ref.qualified_name
            self._imports.append(type_ref.qualified_name)

    def _is_implicit(self, type_ref: TypeRef) -> bool:
        return type_ref.package_name in ("java.lang", self.package_name)

    @property
    def imports(self) -> List[str]:
        return sorted(set(self._imports))

    def name(self, type_ref: TypeRef) -> str:
        """Return the shortest unambiguous spelling of a type."""
        if (
            not type_ref.package_name
            or self._simple.get(type_ref.simple_name) == type_ref.qualified_name
        ):
            base = type_ref.simple_name
        else:
            base = type_ref.qualified_name

        if type_ref.type_arguments:
            arguments = ", ".join(self.name(arg) for arg in type_ref.type_arguments)
            return f"{base}<{arguments}>"
        return base


class JavaSyntax:
    """Renders members and statements as Java source lines."""

    def __init__(self, class_name: str, namer: JavaTypeNamer):
        self.class_name = class_name
        self.namer = namer

    def type_name(self, type_ref: TypeRef) -> str:
        return self.namer.name(type_ref)

    def modifiers(self, values: Iterable[Modifier]) -> str:
        return " ".join(modifier.value for modifier in values)

    def parameter(self, param: ParameterSpec) -> str:
        annotations = "".join(f"@{self.type_name(a)} " for a in param.annotations)
        return f"{annotations}{self.type_name(param.type)} {param.name}"

    def signature(self, method: MethodSpec) -> str:
        """Method or constructor declaration without the body."""
        params = ", ".join(self.parameter(p) for p in method.parameters)
        prefix = self.modifiers(method.modifiers)
        if method.is_constructor:
            head = f"{self.class_name}({params})"
        else:
            head = f"{self.type_name(method.returns)} {method.name}({params})"
        return f"{prefix} {head}" if prefix else head

    def expression(self, expression) -> str:
        if isinstance(expression, Name):
            return expression.id
        if isinstance(expression, FieldRef):
            return expression.name
        if isinstance(expression, Literal):
            return json.dumps(expression.value)
        if isinstance(expression, Call):
            target = (
                self.type_name(expression.target)
                if isinstance(expression.target, TypeRef)
                else self.expression(expression.target)
            )
            return f"{target}.{expression.method}({self._arguments(expression.arguments)})"
        if isinstance(expression, New):
            type_name = self.type_name(expression.type)
            return f"new {type_name}({self._arguments(expression.arguments)})"
        raise RenderError(f"Unsupported expression: {expression!r}")

    def _arguments(self, arguments) -> str:
        return ", ".join(self.expression(arg) for arg in arguments)

    def statement(self, statement) -> List[str]:
        """Render one statement as one or more lines."""
        if isinstance(statement, Assign):
            target = self.expression(statement.target)
            return [f"{target} = {self.expression(statement.value)};"]
        if isinstance(statement, ExpressionStatement):
            return [f"{self.expression(statement.expression)};"]
        if isinstance(statement, Return):
            if statement.value is None:
                return ["return;"]
            return [f"return {self.expression(statement.value)};"]
        if isinstance(statement, ReturnIfSet):
            name = self.expression(statement.field)
            return [f"if ({name} != null) return {name};"]
        if isinstance(statement, Raise):
            message = json.dumps(statement.message)
            return [f"throw new {UNINITIALIZED_ERROR}({message});"]
        if isinstance(statement, DeclareList):
            element = self.type_name(statement.element_type)
            list_type = self.type_name(LIST)
            array_list = self.type_name(ARRAY_LIST)
            return [f"{list_type}<{element}> {statement.name} = new {array_list}<>();"]
        if isinstance(statement, Append):
            return [f"{statement.list_name}.add({self.expression(statement.value)});"]
        raise RenderError(f"Unsupported statement: {statement!r}")

    def body(self, method: MethodSpec, indent: str) -> List[str]:
        lines = []
        for statement in method.statements:
            lines.extend(self.statement(statement))
        return [indent + line for line in lines]


def javadoc_lines(doc: Optional[str]) -> List[str]:
    """Split a documentation string into Javadoc body lines."""
    if not doc:
        return []
    return [line.rstrip() for line in doc.strip().split("\n")]
