"""
Python spelling of the class tree.

Static fields become class attributes, static methods become
``@staticmethod`` functions and the uninitialized state raises
``UninitializedStateError``.
"""

import json
from collections import OrderedDict
from typing import Dict, Iterable, List, Set, Tuple

from ...core.errors import RenderError
from ...core.model import (
    Append,
    Assign,
    Call,
    DeclareList,
    ExpressionStatement,
    FieldRef,
    FieldSpec,
    Literal,
    Modifier,
    Name,
    New,
    Raise,
    Return,
    ReturnIfSet,
    TypeRef,
)
from .config import PYTHON_TYPE_MAP, TYPING_NAMES, UNINITIALIZED_ERROR


def attribute_name(field: FieldSpec) -> str:
    """Class attribute name of a field; private fields get a leading underscore."""
    if Modifier.PRIVATE in field.modifiers:
        return f"_{field.name}"
    return field.name


class PythonTypeNamer:
    """Spells types and records which imports they need."""

    def __init__(self, own_type: TypeRef):
        self.own_type = own_type
        self.typing_names: Set[str] = set()
        self._runtime: Dict[str, TypeRef] = {}
        self._annotation_only: Dict[str, TypeRef] = {}
        self._simple_names: Dict[str, str] = {own_type.simple_name: own_type.qualified_name}

    def _track(self, type_ref: TypeRef, bucket: Dict[str, TypeRef]):
        erased = type_ref.erasure()
        if erased == self.own_type or not erased.package_name:
            return
        owner = self._simple_names.setdefault(erased.simple_name, erased.qualified_name)
        if owner != erased.qualified_name:
            raise RenderError(
                f"Types {owner} and {erased.qualified_name} share the name "
                f"'{erased.simple_name}'"
            )
        bucket[erased.qualified_name] = erased

    def annotation(self, type_ref: TypeRef) -> str:
        """Spell a type for use in an annotation."""
        mapped = PYTHON_TYPE_MAP.get(type_ref.erasure().qualified_name)
        if mapped is not None:
            base = mapped
            if mapped in TYPING_NAMES:
                self.typing_names.add(mapped)
        else:
            base = type_ref.simple_name
            self._track(type_ref, self._annotation_only)

        if type_ref.type_arguments:
            arguments = ", ".join(self.annotation(a) for a in type_ref.type_arguments)
            return f"{base}[{arguments}]"
        return base

    def optional(self, type_ref: TypeRef) -> str:
        self.typing_names.add("Optional")
        return f"Optional[{self.annotation(type_ref)}]"

    def runtime_name(self, type_ref: TypeRef) -> str:
        """Spell a type that is used when the code runs."""
        self._track(type_ref, self._runtime)
        return type_ref.simple_name

    def runtime_imports(self) -> List[str]:
        return _group_imports(self._runtime.values())

    def type_checking_imports(self) -> List[str]:
        annotation_only = [
            t for name, t in self._annotation_only.items() if name not in self._runtime
        ]
        return _group_imports(annotation_only)


def _group_imports(types: Iterable[TypeRef]) -> List[str]:
    """Build ``from package import A, B`` lines sorted by package."""
    by_package: Dict[str, Set[str]] = {}
    for type_ref in types:
        by_package.setdefault(type_ref.package_name, set()).add(type_ref.simple_name)
    return [
        f"from {package} import {', '.join(sorted(names))}"
        for package, names in sorted(by_package.items())
    ]


class PythonSyntax:
    """Renders statements as Python source lines."""

    def __init__(self, class_name: str, fields: Iterable[FieldSpec], namer: PythonTypeNamer):
        self.class_name = class_name
        self.namer = namer
        self.attributes = OrderedDict((f.name, attribute_name(f)) for f in fields)
        self.raises = False

    def field(self, name: str) -> str:
        try:
            return f"{self.class_name}.{self.attributes[name]}"
        except KeyError:
            raise RenderError(f"Unknown field '{name}' in {self.class_name}") from None

    def expression(self, expression) -> str:
        if isinstance(expression, Name):
            return expression.id
        if isinstance(expression, FieldRef):
            return self.field(expression.name)
        if isinstance(expression, Literal):
            return json.dumps(expression.value)
        if isinstance(expression, Call):
            if isinstance(expression.target, TypeRef):
                target = self.namer.runtime_name(expression.target)
            else:
                target = self.expression(expression.target)
            return f"{target}.{expression.method}({self._arguments(expression.arguments)})"
        if isinstance(expression, New):
            type_name = self.namer.runtime_name(expression.type)
            return f"{type_name}({self._arguments(expression.arguments)})"
        raise RenderError(f"Unsupported expression: {expression!r}")

    def _arguments(self, arguments) -> str:
        return ", ".join(self.expression(arg) for arg in arguments)

    def statement(self, statement) -> List[Tuple[int, str]]:
        """Render one statement as (relative depth, line) pairs."""
        if isinstance(statement, Assign):
            target = self.expression(statement.target)
            return [(0, f"{target} = {self.expression(statement.value)}")]
        if isinstance(statement, ExpressionStatement):
            return [(0, self.expression(statement.expression))]
        if isinstance(statement, Return):
            if statement.value is None:
                return [(0, "return")]
            return [(0, f"return {self.expression(statement.value)}")]
        if isinstance(statement, ReturnIfSet):
            name = self.expression(statement.field)
            return [(0, f"if {name} is not None:"), (1, f"return {name}")]
        if isinstance(statement, Raise):
            self.raises = True
            return [(0, f"raise {UNINITIALIZED_ERROR}({json.dumps(statement.message)})")]
        if isinstance(statement, DeclareList):
            element = self.namer.annotation(statement.element_type)
            self.namer.typing_names.add("List")
            return [(0, f"{statement.name}: List[{element}] = []")]
        if isinstance(statement, Append):
            return [(0, f"{statement.list_name}.append({self.expression(statement.value)})")]
        raise RenderError(f"Unsupported statement: {statement!r}")
