"""
prefroom code generation module.

Generates singleton component classes that wire preference entities
together, and renders them as Java or Python source.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.descriptors import (
    ComponentDescriptor,
    EntityDescriptor,
    MethodSignature,
    Parameter,
)
from .core.errors import (
    EntityLookupError,
    GeneratorError,
    NameCollisionError,
    RenderError,
    TypeResolutionError,
    ValidationError,
)
from .core.generator import ComponentGenerator, generate_component
from .core.model import ClassSpec, TypeRef
from .core.renderer import LanguageRenderer, RenderResult, render_code
from .core.resolver import DEFAULT_KNOWN_TYPES, KnownTypeResolver, TypeResolver
from .manifest import Manifest, ManifestError, load_manifest
from .registry import (
    RegistryError,
    RendererRegistry,
    get_language_info,
    get_registry,
    get_renderer,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)

logger = get_logger(__name__)

# Version info
__version__ = "0.1.0"


@dataclass
class ComponentOutput:
    """Rendering outcome for one component of a manifest."""

    component: ComponentDescriptor
    result: RenderResult
    relative_path: Optional[Path] = None


def manifest_resolver(manifest: Manifest) -> KnownTypeResolver:
    """Type resolver knowing the default types plus the manifest's own."""
    return KnownTypeResolver([*DEFAULT_KNOWN_TYPES, *manifest.known_types])


def generate_from_manifest(
    manifest: Manifest,
    language: str = "java",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    type_resolver: Optional[TypeResolver] = None,
) -> List[ComponentOutput]:
    """
    Generate and render every component of a manifest.

    A failing component is reported in its own result and does not stop
    the others.

    Args:
        manifest: Loaded manifest
        language: Target language name or alias
        config: Configuration as GeneratorConfig, dict, or file path
        type_resolver: Resolver for well-known types (defaults to the manifest's)

    Returns:
        One ComponentOutput per component, in manifest order

    Raises:
        ConfigError: If a configuration dict or file is invalid
        RegistryError: If the language is not supported
    """
    renderer = get_renderer(language, config)
    resolver = type_resolver or manifest_resolver(manifest)

    outputs = []
    for component in manifest.components:
        try:
            class_spec = generate_component(
                component, manifest.entities, resolver, renderer.config
            )
        except GeneratorError as e:
            logger.error("Generation of %s failed: %s", component.class_name, e)
            outputs.append(
                ComponentOutput(component, RenderResult.error(str(e), exception=e))
            )
            continue

        result = render_code(renderer, class_spec)
        relative_path = None
        if result.success:
            relative_path = renderer.output_path(class_spec, Path())
        outputs.append(ComponentOutput(component, result, relative_path))

    return outputs


def quick_generate(manifest_data: Any, language: str = "java", **options) -> str:
    """
    Render every component of a manifest into one string.

    Args:
        manifest_data: Manifest as parsed JSON or a JSON string
        language: Target language
        **options: Configuration overrides

    Returns:
        Rendered code of all components

    Raises:
        GeneratorError: If any component fails
    """
    if isinstance(manifest_data, str):
        import json

        manifest_data = json.loads(manifest_data)

    outputs = generate_from_manifest(load_manifest(manifest_data), language, options)

    for output in outputs:
        if not output.result.success:
            if isinstance(output.result.exception, GeneratorError):
                raise output.result.exception
            raise GeneratorError(output.result.error_message)

    return "\n".join(output.result.code for output in outputs)


# Export main interfaces
__all__ = [
    "ClassSpec",
    "ComponentDescriptor",
    "ComponentGenerator",
    "ComponentOutput",
    "ConfigError",
    "EntityDescriptor",
    "EntityLookupError",
    "GeneratorConfig",
    "GeneratorError",
    "KnownTypeResolver",
    "LanguageRenderer",
    "Manifest",
    "ManifestError",
    "MethodSignature",
    "NameCollisionError",
    "Parameter",
    "RegistryError",
    "RenderError",
    "RenderResult",
    "RendererRegistry",
    "TypeRef",
    "TypeResolutionError",
    "TypeResolver",
    "ValidationError",
    "generate_component",
    "generate_from_manifest",
    "get_language_info",
    "get_registry",
    "get_renderer",
    "is_language_supported",
    "list_all_language_info",
    "list_supported_languages",
    "load_config",
    "load_manifest",
    "manifest_resolver",
    "quick_generate",
    "render_code",
]
