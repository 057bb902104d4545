"""
Command line interface for prefroom.

Reads a component manifest, generates every component and either prints
the rendered source or writes it below an output directory.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .codegen import (
    ComponentOutput,
    ConfigError,
    GeneratorConfig,
    ManifestError,
    RegistryError,
    generate_from_manifest,
    get_language_info,
    get_registry,
    get_renderer,
    list_all_language_info,
    load_config,
    load_manifest,
)
from .logging_config import get_logger, setup_logging
from .utils import (
    STDIN_SOURCE,
    ManifestSourceError,
    fetch_manifest,
    load_manifest_source,
)

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich consoles; diagnostics go to stderr so piped source stays clean
console = Console()
error_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``prefroom`` command."""
    parser = argparse.ArgumentParser(
        prog="prefroom",
        description="Generate preference component classes from a JSON manifest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  prefroom manifest.json
  prefroom manifest.json --language python --output-dir build/generated
  prefroom --url https://example.com/manifest.json -l java
  prefroom --list-languages
  prefroom --language-info python
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument(
        "manifest", nargs="?", help="Manifest JSON file or URL ('-' reads stdin)"
    )
    input_group.add_argument("--url", help="URL to fetch the manifest from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the manifest from standard input"
    )

    parser.add_argument(
        "--language",
        "-l",
        default="java",
        help="Target language (default: java)",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        metavar="DIR",
        help="Write one file per component below DIR (default: stdout)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add the header comment to generated classes",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (default: WARNING)",
    )
    log_group.add_argument("--log-file", metavar="FILE", help="Write a debug log to FILE")

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``prefroom`` command.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = create_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not (args.manifest or args.url or args.stdin):
            console.print(
                "[red]✗[/red] Input source required (manifest file, --url, or --stdin)"
            )
            return 1

        language = _resolve_language(args.language)
        manifest_data = _get_input_data(args)
        config = _build_config(args, language)
        return _generate_and_output(manifest_data, language, config, args)

    except CLIError as e:
        error_console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Renderer Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(lang_name, info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] prefroom [dim]manifest.json[/dim] --language [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] prefroom --language-info [cyan]LANGUAGE[/cyan]",
            title="Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    try:
        info = get_language_info(language)
    except RegistryError as e:
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        logger.debug("Language lookup failed: %s", e)
        return 1

    info_text = (
        f"[bold]Language:[/bold] {info['name']}\n"
        f"[bold]File Extension:[/bold] {info['file_extension']}\n"
        f"[bold]Renderer Class:[/bold] {info['class']}\n"
        f"[bold]Module:[/bold] {info['module']}"
    )
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"{info['name'].title()} Renderer", border_style="green")
    )

    config = get_renderer(language).config
    config_table = Table(
        title="Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")
    config_table.add_row("Context Type", config.context_type)
    config_table.add_row("Injector Type", config.injector_type)
    config_table.add_row("Synchronized Init", str(config.synchronized_init))
    config_table.add_row("Indent Size", str(config.indent_size))
    config_table.add_row("Add Comments", str(config.add_comments))

    console.print()
    console.print(config_table)
    return 0


def _resolve_language(language: str) -> str:
    try:
        return get_registry().resolve_language(language)
    except RegistryError as e:
        raise CLIError(str(e)) from e


def _get_input_data(args: argparse.Namespace) -> Any:
    """Get manifest JSON from the selected source."""
    try:
        if args.url:
            return fetch_manifest(args.url)
        return load_manifest_source(STDIN_SOURCE if args.stdin else args.manifest)
    except ManifestSourceError as e:
        raise CLIError(f"Failed to load manifest {e}") from e


def _build_config(args: argparse.Namespace, language: str) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    config_dict: Dict[str, Any] = {}

    if args.no_comments:
        config_dict["add_comments"] = False
    if args.output_dir:
        config_dict["output_dir"] = args.output_dir

    try:
        return load_config(language, custom_config=config_dict, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _generate_and_output(
    manifest_data: Any, language: str, config: GeneratorConfig, args: argparse.Namespace
) -> int:
    """Generate all components and print or write them."""
    try:
        manifest = load_manifest(manifest_data)
    except ManifestError as e:
        raise CLIError(f"Invalid manifest: {e}") from e

    if not manifest.components:
        console.print("[yellow]⚠️  Manifest declares no components[/yellow]")
        return 0

    outputs = generate_from_manifest(manifest, language, config)

    failures = 0
    for output in outputs:
        if not output.result.success:
            failures += 1
            error_console.print(
                f"[red]✗ {output.component.class_name}:[/red] "
                f"{output.result.error_message}"
            )
            continue

        if config.output_dir:
            _write_output(output, Path(config.output_dir))
        else:
            _print_output(output, language)

        if args.verbose and output.result.metadata:
            _print_metadata(output)

        if output.result.warnings:
            error_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
            for warning in output.result.warnings:
                error_console.print(f"  [yellow]•[/yellow] {warning}")
            error_console.print()

    logger.info(
        "Generated %d of %d components", len(outputs) - failures, len(outputs)
    )
    return 1 if failures else 0


def _write_output(output: ComponentOutput, output_dir: Path):
    path = output_dir / output.relative_path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(output.result.code, encoding="utf-8")
    except OSError as e:
        raise CLIError(f"Failed to write to {path}: {e}") from e
    console.print(f"[green]✓[/green] {output.component.class_name} saved to [cyan]{path}[/cyan]")


def _print_output(output: ComponentOutput, language: str):
    if not sys.stdout.isatty():
        # Piped output is the exact source text
        sys.stdout.write(output.result.code)
        return

    console.print(f"[green]── {output.relative_path} ──[/green]\n")
    console.print(
        Syntax(output.result.code, language, theme="monokai", word_wrap=True)
    )
    console.print()


def _print_metadata(output: ComponentOutput):
    metadata_table = Table(
        title="Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in output.result.metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)


if __name__ == "__main__":
    sys.exit(main())
