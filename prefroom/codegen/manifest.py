"""
Manifest loading for component generation.

A manifest is the JSON form of what the discovery phase produces: the
entity registry, the declared components and any extra types the
environment can resolve.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..logging_config import get_logger
from .core.descriptors import (
    ComponentDescriptor,
    EntityDescriptor,
    MethodSignature,
    Parameter,
)
from .core.model import Modifier, TypeRef, VOID, modifiers

logger = get_logger(__name__)


class ManifestError(Exception):
    """Exception raised for malformed manifests."""

    pass


@dataclass
class Manifest:
    """Components and entities read from a manifest."""

    components: List[ComponentDescriptor] = field(default_factory=list)
    entities: Dict[str, EntityDescriptor] = field(default_factory=dict)
    known_types: List[str] = field(default_factory=list)

    def find_component(self, name: str) -> ComponentDescriptor:
        for component in self.components:
            if component.class_name == name:
                return component
        raise ManifestError(f"Component not found in manifest: {name}")


def load_manifest(data: Any) -> Manifest:
    """
    Build descriptors from parsed manifest JSON.

    Args:
        data: Parsed JSON object

    Returns:
        Manifest with components in declaration order

    Raises:
        ManifestError: If the manifest is malformed
    """
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a JSON object")

    entities_data = data.get("entities", {})
    if not isinstance(entities_data, dict):
        raise ManifestError("'entities' must be an object mapping keys to entities")

    components_data = data.get("components", [])
    if not isinstance(components_data, list):
        raise ManifestError("'components' must be a list")

    known_types = data.get("known_types", [])
    if not isinstance(known_types, list) or not all(
        isinstance(name, str) for name in known_types
    ):
        raise ManifestError("'known_types' must be a list of type names")
    for name in known_types:
        _parse_type(name, "known_types")

    entities = {
        key: _parse_entity(key, value) for key, value in entities_data.items()
    }
    components = [
        _parse_component(index, value) for index, value in enumerate(components_data)
    ]

    logger.debug(
        "Loaded manifest with %d components and %d entities",
        len(components),
        len(entities),
    )
    return Manifest(components, entities, list(known_types))


def _parse_entity(key: str, value: Any) -> EntityDescriptor:
    """Parse ``{"name": ..., "package": ...}`` or a qualified name string."""
    if isinstance(value, str):
        type_ref = _parse_type(value, f"entity '{key}'")
        if not type_ref.package_name:
            raise ManifestError(f"Entity '{key}' needs a package: {value}")
        return EntityDescriptor(type_ref.simple_name, type_ref.package_name)

    if not isinstance(value, dict):
        raise ManifestError(f"Entity '{key}' must be an object or a qualified name")

    name = _require_str(value, "name", f"entity '{key}'")
    package = value.get("package", "")
    if not isinstance(package, str):
        raise ManifestError(f"Entity '{key}' has a non-string package")
    return EntityDescriptor(name, package)


def _parse_component(index: int, value: Any) -> ComponentDescriptor:
    where = f"component #{index}"
    if not isinstance(value, dict):
        raise ManifestError(f"{where} must be an object")

    name = _require_str(value, "name", where)
    where = f"component '{name}'"
    package = value.get("package", "")
    if not isinstance(package, str):
        raise ManifestError(f"{where} has a non-string package")

    keys = value.get("keys", [])
    if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
        raise ManifestError(f"{where}: 'keys' must be a list of strings")

    methods = value.get("methods", [])
    if not isinstance(methods, list):
        raise ManifestError(f"{where}: 'methods' must be a list")

    return ComponentDescriptor(
        class_name=name,
        package_name=package,
        key_names=tuple(keys),
        declared_methods=tuple(_parse_method(where, m) for m in methods),
    )


def _parse_method(where: str, value: Any) -> MethodSignature:
    if not isinstance(value, dict):
        raise ManifestError(f"{where}: every method must be an object")

    name = _require_str(value, "name", f"{where} method")
    where = f"{where} method '{name}'"

    returns = value.get("returns", "void")
    return_type = VOID if returns == "void" else _parse_type(returns, where)

    params = value.get("parameters", [])
    if not isinstance(params, list):
        raise ManifestError(f"{where}: 'parameters' must be a list")

    parameters = []
    for param in params:
        if not isinstance(param, dict):
            raise ManifestError(f"{where}: every parameter must be an object")
        param_name = _require_str(param, "name", f"{where} parameter")
        param_type = _parse_type(_require_str(param, "type", where), where)
        parameters.append(Parameter(param_name, param_type))

    return MethodSignature(
        name=name,
        return_type=return_type,
        parameters=tuple(parameters),
        modifiers=_parse_modifiers(value.get("modifiers", ["public"]), where),
    )


def _parse_modifiers(values: Any, where: str) -> Tuple[Modifier, ...]:
    # Interface methods are implicitly public
    if not isinstance(values, list):
        raise ManifestError(f"{where}: 'modifiers' must be a list")
    for value in values:
        if value != Modifier.PUBLIC.value:
            raise ManifestError(
                f"{where}: declared methods must be public, got modifier {value!r}"
            )
    return modifiers(Modifier.PUBLIC)


def _parse_type(value: Any, where: str) -> TypeRef:
    if not isinstance(value, str):
        raise ManifestError(f"{where}: type names must be strings")
    try:
        return TypeRef.of(value)
    except ValueError as e:
        raise ManifestError(f"{where}: {e}") from e


def _require_str(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ManifestError(f"{where} requires a non-empty string '{key}'")
    return value
