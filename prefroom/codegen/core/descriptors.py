"""
Input descriptors for component generation.

These are the already-validated results of the discovery phase: which
interface was declared as a component, which entity keys it references and
which methods need injection. They are read-only snapshots for the length of
one generation call.
"""

from dataclasses import dataclass
from typing import Mapping, Tuple

from .model import Modifier, TypeRef, VOID


@dataclass(frozen=True)
class Parameter:
    """A single parameter of a declared method."""

    name: str
    type: TypeRef


@dataclass(frozen=True)
class MethodSignature:
    """A method declared on the component interface that needs injection."""

    name: str
    return_type: TypeRef = VOID
    parameters: Tuple[Parameter, ...] = ()
    modifiers: Tuple[Modifier, ...] = (Modifier.PUBLIC,)

    @property
    def first_parameter(self) -> Parameter:
        return self.parameters[0]

    @property
    def signature(self) -> Tuple[str, Tuple[str, ...]]:
        """Name plus erased parameter types."""
        return self.name, tuple(
            param.type.erasure().qualified_name for param in self.parameters
        )

    def __str__(self) -> str:
        params = ", ".join(f"{p.type} {p.name}" for p in self.parameters)
        return f"{self.return_type} {self.name}({params})"


@dataclass(frozen=True)
class ComponentDescriptor:
    """An interface declared as a preference component."""

    class_name: str
    package_name: str
    key_names: Tuple[str, ...] = ()
    declared_methods: Tuple[MethodSignature, ...] = ()

    def __post_init__(self):
        # Accept any sequence but store tuples so descriptors stay hashable
        object.__setattr__(self, "key_names", tuple(self.key_names))
        object.__setattr__(self, "declared_methods", tuple(self.declared_methods))

    @property
    def interface_type(self) -> TypeRef:
        return TypeRef(self.package_name, self.class_name)


@dataclass(frozen=True)
class EntityDescriptor:
    """A preference entity whose wrapper class exposes ``getInstance``."""

    entity_name: str
    package_name: str


EntityRegistry = Mapping[str, EntityDescriptor]
