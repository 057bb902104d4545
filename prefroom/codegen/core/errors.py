"""
Exceptions raised while generating and rendering components.

Every failure is deterministic for a given input and is never retried.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ValidationError(GeneratorError):
    """A component description cannot be turned into a class."""

    pass


class NameCollisionError(ValidationError):
    """Two derived identifiers of one generated class are the same."""

    pass


class EntityLookupError(GeneratorError, LookupError):
    """A component key has no entity in the registry."""

    def __init__(self, key: str, component_name: str):
        self.key = key
        self.component_name = component_name
        super().__init__(
            f"Component '{component_name}' references unknown entity key '{key}'"
        )


class TypeResolutionError(GeneratorError, LookupError):
    """A well-known type could not be resolved by name."""

    def __init__(self, qualified_name: str):
        self.qualified_name = qualified_name
        super().__init__(f"Cannot resolve type: {qualified_name}")


class RenderError(GeneratorError):
    """A class tree cannot be expressed in the target language."""

    pass
