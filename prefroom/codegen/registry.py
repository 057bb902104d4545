"""
Renderer registry for managing available target languages.

Provides dynamic registration and instantiation of language renderers.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.renderer import LanguageRenderer


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class RendererRegistry:
    """Registry for managing available language renderers."""

    def __init__(self):
        """Initialize empty registry."""
        self._renderers: Dict[str, Type[LanguageRenderer]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        renderer_class: Type[LanguageRenderer],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a renderer for a language.

        Args:
            language: Primary language name (e.g., 'java', 'python')
            renderer_class: Class implementing LanguageRenderer
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If renderer class is invalid or aliases conflict
        """
        if not (
            isinstance(renderer_class, type)
            and issubclass(renderer_class, LanguageRenderer)
        ):
            raise RegistryError("Renderer class must inherit from LanguageRenderer")

        language_key = language.lower()

        # Already registered, skip silently
        if language_key in self._renderers and not replace:
            return

        alias_keys = [a.lower() for a in aliases or [] if a.lower() != language_key]

        # Check every alias before touching the registry
        if not replace:
            for alias_key in alias_keys:
                if alias_key in self._renderers:
                    raise RegistryError(
                        f"Alias '{alias_key}' conflicts with existing primary language"
                    )
                if (
                    alias_key in self._aliases
                    and self._aliases[alias_key] != language_key
                ):
                    raise RegistryError(
                        f"Alias '{alias_key}' already points to '{self._aliases[alias_key]}'"
                    )

        self._renderers[language_key] = renderer_class
        for alias_key in alias_keys:
            self._aliases[alias_key] = language_key

    def unregister(self, language: str):
        """
        Unregister a renderer and its aliases.

        Args:
            language: Language name to unregister
        """
        language_key = language.lower()
        self._renderers.pop(language_key, None)

        aliases_to_remove = [
            alias for alias, target in self._aliases.items() if target == language_key
        ]
        for alias in aliases_to_remove:
            del self._aliases[alias]

    def resolve_language(self, language: str) -> str:
        """
        Resolve a language name or alias to its primary name.

        Raises:
            RegistryError: If language not found
        """
        language_key = language.lower()
        if language_key in self._renderers:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        available = self.list_languages()
        raise RegistryError(
            f"No renderer registered for language: {language}. "
            f"Available: {', '.join(available)}"
        )

    def get_renderer_class(self, language: str) -> Type[LanguageRenderer]:
        """Get renderer class for a language name or alias."""
        return self._renderers[self.resolve_language(language)]

    def create_renderer(
        self,
        language: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> LanguageRenderer:
        """
        Create renderer instance for language.

        Args:
            language: Language name
            config: Configuration as GeneratorConfig, dict, or file path

        Returns:
            Configured renderer instance

        Raises:
            RegistryError: If renderer creation fails
            ConfigError: If the configuration is invalid
        """
        primary = self.resolve_language(language)
        renderer_class = self._renderers[primary]

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(primary, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(primary, custom_config=config)
            elif config is None:
                final_config = load_config(primary)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return renderer_class(final_config)

        except (RegistryError, ConfigError):
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {language} renderer: {e}") from e

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._renderers.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        """Get all aliases for a primary language."""
        language_key = language.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == language_key
        )

    def is_supported(self, language: str) -> bool:
        """Check if a language name or alias is supported."""
        language_key = language.lower()
        return language_key in self._renderers or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered language.

        Raises:
            RegistryError: If language not found
        """
        primary = self.resolve_language(language)
        renderer = self.create_renderer(primary)

        return {
            "name": renderer.language_name,
            "class": type(renderer).__name__,
            "file_extension": renderer.file_extension,
            "aliases": self.get_aliases_for_language(primary),
            "module": type(renderer).__module__,
            "indent_size": renderer.config.indent_size,
        }


# Global registry instance - created once
_global_registry: Optional[RendererRegistry] = None


def get_registry() -> RendererRegistry:
    """Get the global renderer registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = RendererRegistry()
        _auto_register_renderers(_global_registry)
    return _global_registry


def _auto_register_renderers(registry: RendererRegistry):
    """Register the built-in renderers with their aliases."""
    from .languages.java import JavaRenderer
    from .languages.python import PythonRenderer

    registry.register("java", JavaRenderer)
    registry.register("python", PythonRenderer, aliases=["py"])


# Public API functions using the global registry


def register_renderer(
    language: str,
    renderer_class: Type[LanguageRenderer],
    aliases: Optional[List[str]] = None,
):
    """Register a renderer in the global registry."""
    get_registry().register(language, renderer_class, aliases)


def get_renderer(
    language: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> LanguageRenderer:
    """Get renderer instance from global registry."""
    return get_registry().create_renderer(language, config)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if language is supported by global registry."""
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a supported language."""
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported languages."""
    return {language: get_language_info(language) for language in list_supported_languages()}
