"""
Base renderer interface for all target languages.

Defines the contract every language renderer implements to turn a
generated class tree into source text.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .generator import FIELD_INSTANCE
from .model import ClassSpec
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class LanguageRenderer(ABC):
    """Abstract base class for all language renderers."""

    max_blank_lines = 1

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize renderer with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this renderer."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'java', 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for rendered files (e.g., '.java')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this renderer.

        Returns:
            Path to template directory or None for in-memory templates only
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this renderer."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def render(self, class_spec: ClassSpec) -> str:
        """
        Render a class tree to source text.

        Args:
            class_spec: Generated class

        Returns:
            Source code
        """
        pass

    def validate(self, class_spec: ClassSpec) -> List[str]:
        """
        Check a class tree for issues that do not prevent rendering.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        entity_fields = [f for f in class_spec.fields if f.name != FIELD_INSTANCE]
        if not entity_fields:
            warnings.append(f"Component '{class_spec.name}' has no entities")
        return warnings

    def output_path(self, class_spec: ClassSpec, root: Path) -> Path:
        """Path of the rendered file below an output root, one directory per package part."""
        package_dir = Path()
        if class_spec.package_name:
            package_dir = Path(*class_spec.package_name.split("."))
        return Path(root) / package_dir / f"{class_spec.name}{self.file_extension}"

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to rendered code.

        Args:
            code: Raw rendered code

        Returns:
            Formatted code ending in exactly one line ending
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= self.max_blank_lines:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        line_ending = self.config.line_ending
        return line_ending.join(formatted_lines) + line_ending

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class RenderResult:
    """Container for render results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize render result.

        Args:
            code: Rendered code
            warnings: Any warnings from rendering
            metadata: Additional metadata about rendering
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(
        cls, message: str, exception: Optional[Exception] = None
    ) -> "RenderResult":
        """Create a failed render result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def render_code(renderer: LanguageRenderer, class_spec: ClassSpec) -> RenderResult:
    """
    Render a class tree with error handling.

    Args:
        renderer: Language renderer instance
        class_spec: Generated class

    Returns:
        RenderResult with code, warnings, and metadata
    """
    try:
        warnings = renderer.validate(class_spec)
        code = renderer.format_code(renderer.render(class_spec))

        metadata = {
            "language": renderer.language_name,
            "file_extension": renderer.file_extension,
            "class_name": class_spec.name,
            "package_name": class_spec.package_name,
            "field_count": len(class_spec.fields),
            "method_count": len(class_spec.methods),
        }

        return RenderResult(code, warnings, metadata)

    except Exception as e:
        logger.error("Rendering %s failed: %s", class_spec.name, e)
        return RenderResult.error(f"Code rendering failed: {e}", exception=e)
