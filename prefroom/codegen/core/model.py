"""
Language-neutral class tree produced by the component generator.

The tree describes fields, a constructor and methods together with their
visibility and static qualifiers. Method bodies are a small statement and
expression vocabulary that every renderer knows how to spell.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from .naming import is_identifier


@dataclass(frozen=True)
class TypeRef:
    """Reference to a type by package and simple name."""

    package_name: str
    simple_name: str
    type_arguments: Tuple["TypeRef", ...] = ()

    @classmethod
    def of(cls, qualified_name: str) -> "TypeRef":
        """
        Parse a qualified type name.

        Accepts ``int``, ``com.x.Request`` and parameterized names such as
        ``java.util.Map<java.lang.String, com.x.User>``. Array and varargs
        types have no counterpart in the generated code and are rejected.

        Args:
            qualified_name: Dotted type name

        Returns:
            Parsed type reference
        """
        text = qualified_name.strip()
        if not text:
            raise ValueError("Type name cannot be empty")
        if text.endswith(("[]", "...")):
            raise ValueError(f"Array and varargs types are not supported: '{text}'")

        arguments: Tuple["TypeRef", ...] = ()
        if "<" in text:
            if not text.endswith(">"):
                raise ValueError(f"Unbalanced type arguments in '{qualified_name}'")
            base, _, inner = text.partition("<")
            arguments = tuple(cls.of(arg) for arg in _split_type_arguments(inner[:-1]))
            text = base.strip()

        if not all(is_identifier(part) for part in text.split(".")):
            raise ValueError(f"Invalid type name '{qualified_name}'")

        package_name, _, simple_name = text.rpartition(".")
        return cls(package_name, simple_name, arguments)

    @property
    def qualified_name(self) -> str:
        """Dotted name without type arguments."""
        if self.package_name:
            return f"{self.package_name}.{self.simple_name}"
        return self.simple_name

    @property
    def is_void(self) -> bool:
        return self.package_name == "" and self.simple_name == "void"

    @property
    def is_primitive(self) -> bool:
        return self.package_name == "" and self.simple_name in PRIMITIVE_NAMES

    def parameterized(self, *arguments: "TypeRef") -> "TypeRef":
        """Return a copy of this type with the given type arguments."""
        return TypeRef(self.package_name, self.simple_name, tuple(arguments))

    def erasure(self) -> "TypeRef":
        """Return this type without type arguments."""
        return TypeRef(self.package_name, self.simple_name)

    def iter_types(self) -> Iterator["TypeRef"]:
        yield self.erasure()
        for argument in self.type_arguments:
            yield from argument.iter_types()

    def __str__(self) -> str:
        if not self.type_arguments:
            return self.qualified_name
        arguments = ", ".join(str(arg) for arg in self.type_arguments)
        return f"{self.qualified_name}<{arguments}>"


def _split_type_arguments(text: str) -> List[str]:
    """Split ``A, B<C, D>`` on top-level commas."""
    parts = []
    depth = 0
    current = []
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


PRIMITIVE_NAMES = {
    "boolean",
    "byte",
    "char",
    "short",
    "int",
    "long",
    "float",
    "double",
    "void",
}

VOID = TypeRef("", "void")
STRING = TypeRef("java.lang", "String")
LIST = TypeRef("java.util", "List")
ARRAY_LIST = TypeRef("java.util", "ArrayList")


class Modifier(Enum):
    """Member modifiers, declared in canonical source order."""

    PUBLIC = "public"
    PRIVATE = "private"
    STATIC = "static"
    SYNCHRONIZED = "synchronized"


_MODIFIER_ORDER = {modifier: index for index, modifier in enumerate(Modifier)}


def modifiers(*values: Modifier) -> Tuple[Modifier, ...]:
    """Build a de-duplicated modifier tuple in canonical order."""
    return tuple(sorted(set(values), key=_MODIFIER_ORDER.__getitem__))


# Expressions


@dataclass(frozen=True)
class Name:
    """A parameter or local variable."""

    id: str


@dataclass(frozen=True)
class FieldRef:
    """A static field of the generated class."""

    name: str


@dataclass(frozen=True)
class Literal:
    """A string literal."""

    value: str


@dataclass(frozen=True)
class Call:
    """Method call on an expression, or a static call when target is a TypeRef."""

    target: Union["Expression", TypeRef]
    method: str
    arguments: Tuple["Expression", ...] = ()

    @property
    def is_static(self) -> bool:
        return isinstance(self.target, TypeRef)


@dataclass(frozen=True)
class New:
    """Construction of a new instance."""

    type: TypeRef
    arguments: Tuple["Expression", ...] = ()


Expression = Union[Name, FieldRef, Literal, Call, New]


# Statements


@dataclass(frozen=True)
class Assign:
    target: Union[FieldRef, Name]
    value: Expression


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression


@dataclass(frozen=True)
class Return:
    value: Optional[Expression] = None


@dataclass(frozen=True)
class ReturnIfSet:
    """Return the field's value when it already holds one."""

    field: FieldRef


@dataclass(frozen=True)
class Raise:
    """Fail with the uninitialized-state error."""

    message: str


@dataclass(frozen=True)
class DeclareList:
    """Declare an empty list local."""

    name: str
    element_type: TypeRef


@dataclass(frozen=True)
class Append:
    list_name: str
    value: Expression


Statement = Union[
    Assign, ExpressionStatement, Return, ReturnIfSet, Raise, DeclareList, Append
]


def _expression_types(expression) -> Iterator[TypeRef]:
    if isinstance(expression, Call):
        if isinstance(expression.target, TypeRef):
            yield from expression.target.iter_types()
        else:
            yield from _expression_types(expression.target)
        for argument in expression.arguments:
            yield from _expression_types(argument)
    elif isinstance(expression, New):
        yield from expression.type.iter_types()
        for argument in expression.arguments:
            yield from _expression_types(argument)


def _statement_types(statement) -> Iterator[TypeRef]:
    if isinstance(statement, Assign):
        yield from _expression_types(statement.value)
    elif isinstance(statement, ExpressionStatement):
        yield from _expression_types(statement.expression)
    elif isinstance(statement, Return) and statement.value is not None:
        yield from _expression_types(statement.value)
    elif isinstance(statement, Append):
        yield from _expression_types(statement.value)
    elif isinstance(statement, DeclareList):
        yield from LIST.iter_types()
        yield from ARRAY_LIST.iter_types()
        yield from statement.element_type.iter_types()


# Members


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    type: TypeRef
    annotations: Tuple[TypeRef, ...] = ()


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: TypeRef
    modifiers: Tuple[Modifier, ...] = ()

    @property
    def is_static(self) -> bool:
        return Modifier.STATIC in self.modifiers


CONSTRUCTOR_NAME = "<init>"


@dataclass(frozen=True)
class MethodSpec:
    """A method or constructor with its body."""

    name: str
    modifiers: Tuple[Modifier, ...] = ()
    parameters: Tuple[ParameterSpec, ...] = ()
    returns: TypeRef = VOID
    statements: Tuple[Statement, ...] = ()
    overrides: bool = False

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR_NAME

    @property
    def is_static(self) -> bool:
        return Modifier.STATIC in self.modifiers

    @property
    def is_synchronized(self) -> bool:
        return Modifier.SYNCHRONIZED in self.modifiers

    @property
    def signature(self) -> Tuple[str, Tuple[str, ...]]:
        """Name plus erased parameter types, the overload identity."""
        return self.name, tuple(
            param.type.erasure().qualified_name for param in self.parameters
        )

    def iter_types(self) -> Iterator[TypeRef]:
        if not self.is_constructor:
            yield from self.returns.iter_types()
        for param in self.parameters:
            yield from param.type.iter_types()
            for annotation in param.annotations:
                yield from annotation.iter_types()
        for statement in self.statements:
            yield from _statement_types(statement)


@dataclass(frozen=True)
class ClassSpec:
    """A complete generated class, ready for a renderer."""

    name: str
    package_name: str
    modifiers: Tuple[Modifier, ...] = ()
    superinterface: Optional[TypeRef] = None
    doc: Optional[str] = None
    fields: Tuple[FieldSpec, ...] = ()
    constructor: Optional[MethodSpec] = None
    methods: Tuple[MethodSpec, ...] = ()

    @property
    def type_ref(self) -> TypeRef:
        return TypeRef(self.package_name, self.name)

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def method_names(self) -> List[str]:
        return [m.name for m in self.methods]

    def find_field(self, name: str) -> Optional[FieldSpec]:
        return next((f for f in self.fields if f.name == name), None)

    def find_method(self, name: str) -> Optional[MethodSpec]:
        """Return the first method with the given name, or None."""
        return next((m for m in self.methods if m.name == name), None)

    def referenced_types(self) -> List[TypeRef]:
        """
        Collect every type the class mentions, erased and de-duplicated.

        Returns:
            Types in first-seen order
        """
        seen = {}
        sources = []
        if self.superinterface is not None:
            sources.append(self.superinterface.iter_types())
        for f in self.fields:
            sources.append(f.type.iter_types())
        if self.constructor is not None:
            sources.append(self.constructor.iter_types())
        for method in self.methods:
            sources.append(method.iter_types())

        for source in sources:
            for type_ref in source:
                seen.setdefault(type_ref, None)
        return list(seen)
