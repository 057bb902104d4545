"""
Core component generation.

Provides the descriptors, the neutral class tree, the generator that builds
it and the base classes shared by all language renderers.
"""

from .errors import (
    GeneratorError,
    ValidationError,
    NameCollisionError,
    EntityLookupError,
    TypeResolutionError,
    RenderError,
)
from .descriptors import (
    ComponentDescriptor,
    EntityDescriptor,
    EntityRegistry,
    MethodSignature,
    Parameter,
)
from .model import ClassSpec, FieldSpec, MethodSpec, Modifier, ParameterSpec, TypeRef
from .naming import NameRegistry, split_words, to_upper_camel
from .resolver import KnownTypeResolver, TypeResolver
from .generator import ComponentGenerator, generate_component
from .renderer import LanguageRenderer, RenderResult, render_code
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Errors
    "GeneratorError",
    "ValidationError",
    "NameCollisionError",
    "EntityLookupError",
    "TypeResolutionError",
    "RenderError",
    # Descriptors - generator input
    "ComponentDescriptor",
    "EntityDescriptor",
    "EntityRegistry",
    "MethodSignature",
    "Parameter",
    # Class tree - generator output
    "ClassSpec",
    "FieldSpec",
    "MethodSpec",
    "Modifier",
    "ParameterSpec",
    "TypeRef",
    # Naming
    "NameRegistry",
    "split_words",
    "to_upper_camel",
    # Type resolution
    "KnownTypeResolver",
    "TypeResolver",
    # Generation
    "ComponentGenerator",
    "generate_component",
    # Rendering
    "LanguageRenderer",
    "RenderResult",
    "render_code",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
