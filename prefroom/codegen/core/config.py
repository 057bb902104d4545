"""
Configuration management for component generation.

Handles loading and merging configuration from JSON files,
providing per-language defaults and validation.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger
from .model import TypeRef

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Settings shared by the generator and the renderers."""

    # External collaborators
    context_type: str = "android.content.Context"
    injector_type: str = "com.skydoves.preferenceroom.PreferenceRoom"
    nonnull_annotation: Optional[str] = "androidx.annotation.NonNull"

    # Emitted singleton
    synchronized_init: bool = True

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = False
    line_ending: str = "\n"

    # Output settings
    output_dir: Optional[str] = None
    emit_imports: bool = True

    # Comments
    add_comments: bool = True
    header_comment: str = "Generated by prefroom. Do not edit."

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        """One level of indentation."""
        return "\t" if self.use_tabs else " " * self.indent_size


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["java"] = {
            "indent_size": 2,
            "nonnull_annotation": "androidx.annotation.NonNull",
        }

        self._configs["python"] = {
            "indent_size": 4,
            "custom": {
                "runtime_module": "prefroom.runtime",
            },
        }

    def get_config(
        self,
        language: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name (None for plain defaults)
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        # Start with defaults
        base_config = json.loads(json.dumps(self._configs.get(language or "", {})))

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            _merge(base_config, file_config)

        # Apply custom overrides
        if custom_config:
            _merge(base_config, custom_config)

        config = self._dict_to_config(base_config)
        self._check_type_names(config)
        for warning in self.validate_config(config):
            logger.warning("Configuration: %s", warning)
        return config

    def _check_type_names(self, config: GeneratorConfig):
        """Raise ConfigError for type settings that cannot be parsed."""
        settings = {
            "context_type": config.context_type,
            "injector_type": config.injector_type,
        }
        if config.nonnull_annotation:
            settings["nonnull_annotation"] = config.nonnull_annotation

        for setting, value in settings.items():
            if not isinstance(value, str):
                raise ConfigError(f"{setting} must be a type name, got {value!r}")
            try:
                TypeRef.of(value)
            except ValueError as e:
                raise ConfigError(f"Invalid {setting}: {e}") from e

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys land in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = asdict(config)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}")

    def list_languages(self) -> List[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.line_ending not in {"\n", "\r\n"}:
            warnings.append(f"Invalid line_ending: {config.line_ending!r}")

        for setting in ("context_type", "injector_type"):
            value = getattr(config, setting)
            if not value or "." not in value:
                warnings.append(f"{setting} should be a fully qualified name: {value!r}")

        return warnings


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]):
    """Merge overrides into base, combining nested ``custom`` dicts."""
    for key, value in overrides.items():
        if key == "custom" and isinstance(value, dict):
            base.setdefault("custom", {}).update(value)
        else:
            base[key] = value


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)

