"""
Resolution of well-known external types by qualified name.

The generator never hard-codes the platform context type; it asks a
resolver, which stands in for the compiler's element utilities.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from .errors import TypeResolutionError
from .model import TypeRef

DEFAULT_KNOWN_TYPES = (
    "android.content.Context",
    "androidx.annotation.NonNull",
    "com.skydoves.preferenceroom.PreferenceRoom",
)


class TypeResolver(ABC):
    """Resolves a type from its fully qualified name."""

    @abstractmethod
    def resolve(self, qualified_name: str) -> TypeRef:
        """
        Resolve a type.

        Raises:
            TypeResolutionError: If the type is unknown
        """
        pass


class KnownTypeResolver(TypeResolver):
    """Resolves only the types it was told about."""

    def __init__(self, known: Optional[Iterable[str]] = None):
        self._types: Dict[str, TypeRef] = {}
        for name in DEFAULT_KNOWN_TYPES if known is None else known:
            self.register(name)

    def register(self, qualified_name: str) -> TypeRef:
        type_ref = TypeRef.of(qualified_name)
        self._types[type_ref.qualified_name] = type_ref
        return type_ref

    def resolve(self, qualified_name: str) -> TypeRef:
        try:
            return self._types[qualified_name]
        except KeyError:
            raise TypeResolutionError(qualified_name) from None

    def __contains__(self, qualified_name: str) -> bool:
        return qualified_name in self._types
