"""prefroom: generates singleton component classes for preference entities."""

from .codegen import (
    ComponentDescriptor,
    EntityDescriptor,
    GeneratorError,
    MethodSignature,
    Parameter,
    TypeRef,
    ValidationError,
    generate_component,
    generate_from_manifest,
    load_manifest,
)
from .runtime import UninitializedStateError

__version__ = "0.1.0"

__all__ = [
    "ComponentDescriptor",
    "EntityDescriptor",
    "GeneratorError",
    "MethodSignature",
    "Parameter",
    "TypeRef",
    "UninitializedStateError",
    "ValidationError",
    "generate_component",
    "generate_from_manifest",
    "load_manifest",
]
