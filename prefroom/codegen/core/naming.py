"""
Naming utilities for component generation.

Derives identifiers from entity keys and tracks every identifier claimed
inside one generated class so that collisions fail fast instead of silently
overwriting each other.
"""

import keyword
import re
from typing import Dict, List, Set

from .errors import NameCollisionError

_WORD_SEPARATORS = re.compile(r"[_\-.\s]+")
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def split_words(text: str) -> List[str]:
    """Split a key on underscores, hyphens, dots and whitespace."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def to_upper_camel(text: str) -> str:
    """
    Convert a key to UpperCamel case.

    The first character of every word is capitalized and the words are joined
    without separators. The rest of each word is kept as written, so
    ``"user_id"`` and ``"userId"`` both become ``"UserId"``.

    Args:
        text: Key to convert

    Returns:
        UpperCamel identifier (empty when the key has no word characters)
    """
    return "".join(word[0].upper() + word[1:] for word in split_words(text))


def is_identifier(name: str) -> bool:
    """Check that a name is usable as a Java and Python identifier."""
    return bool(_IDENTIFIER.match(name))


class NameRegistry:
    """Tracks identifiers claimed within one generated class."""

    def __init__(self, scope: str):
        """
        Initialize an empty registry.

        Args:
            scope: Description used in error messages (e.g. "method")
        """
        self.scope = scope
        self._owners: Dict[str, str] = {}

    def claim(self, name: str, owner: str) -> str:
        """
        Reserve a name for an owner.

        Raises:
            NameCollisionError: If the name is already claimed
        """
        existing = self._owners.get(name)
        if existing is not None:
            raise NameCollisionError(
                f"{self.scope.capitalize()} name '{name}' derived from {owner} "
                f"collides with {existing}"
            )
        self._owners[name] = owner
        return name

    def __contains__(self, name: str) -> bool:
        return name in self._owners

    def names(self) -> List[str]:
        return list(self._owners)


# Render target reserved words

JAVA_RESERVED_WORDS: Set[str] = {
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
}

PYTHON_RESERVED_WORDS: Set[str] = set(keyword.kwlist)
