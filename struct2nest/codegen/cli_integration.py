"""
CLI integration for code generation functionality.

Provides the argument parser and command handlers for converting a
directory of Go structs into schema files.
"""

import argparse
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..logging_config import get_logger
from ..utils import OutputError, SourceLoaderError
from .batch import ConversionReport, OutcomeStatus, convert_directory
from .core.config import ConfigError, GeneratorConfig, get_config_manager, load_config
from .registry import (
    RegistryError,
    get_generator,
    get_registry,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()

STATUS_STYLES = {
    OutcomeStatus.SUCCESS: "[green]✓ success[/green]",
    OutcomeStatus.SKIPPED: "[yellow]- skipped[/yellow]",
    OutcomeStatus.FAILED: "[red]✗ failed[/red]",
}


def create_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="struct2nest",
        description="Convert tagged Go structs into NestJS Mongoose schema classes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  struct2nest models/
  struct2nest models/ --output src/schemas --all-structs
  struct2nest models/ --dry-run --show-code
  struct2nest --list-targets
        """.strip(),
    )

    parser.add_argument("input_dir", nargs="?", help="Directory of Go source files")

    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Directory for generated schemas (default: out_schemas)",
    )
    parser.add_argument(
        "--target",
        "-t",
        default="nestjs",
        help="Target framework (default: nestjs)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--all-structs",
        action="store_true",
        help="Convert every struct in a file, not only the first",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate and report without writing files",
    )
    parser.add_argument(
        "--show-code",
        action="store_true",
        help="Print generated code to the console",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    nest_group = parser.add_argument_group("NestJS options")
    nest_group.add_argument(
        "--no-timestamps",
        action="store_true",
        help="Disable Mongoose timestamps in @Schema options",
    )
    nest_group.add_argument(
        "--no-virtuals",
        action="store_true",
        help="Don't serialize virtuals in toJSON/toObject",
    )
    nest_group.add_argument(
        "--duplicate-fields",
        choices=["error", "last_wins"],
        help="How to treat repeated field names (default: error)",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-targets",
        action="store_true",
        help="List supported targets and exit",
    )

    return parser


def handle_convert_command(args: argparse.Namespace) -> int:
    """
    Handle a conversion run from CLI arguments.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        if args.list_targets:
            return _list_targets()

        if not args.input_dir:
            console.print("[red]✗[/red] Please provide an input directory path!")
            return 1

        _validate_target(args.target)

        config = _build_config(args)
        for warning in get_config_manager().validate_config(config):
            console.print(f"[yellow]⚠️  {warning}[/yellow]")

        generator = get_generator(args.target, config)
        output_dir = Path(args.output or config.output_dir)

        report = convert_directory(
            args.input_dir,
            output_dir,
            generator,
            all_structs=config.all_structs,
            dry_run=args.dry_run,
        )

        _print_report(report, show_code=args.show_code)
        return 0 if report.ok else 1

    except (
        CLIError,
        ConfigError,
        OutputError,
        RegistryError,
        SourceLoaderError,
    ) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_targets() -> int:
    """List supported targets."""
    language_info = list_all_language_info()

    table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    return 0


def _validate_target(target: str):
    """Raise CLIError unless ``target`` names a registered generator."""
    if not is_language_supported(target):
        raise CLIError(
            f"Unsupported target '{target}'. "
            f"Supported targets: {', '.join(list_supported_languages())}"
        )


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments on top of the config file."""
    overrides = {}

    if args.output:
        overrides["output_dir"] = args.output
    if args.all_structs:
        overrides["all_structs"] = True
    if args.duplicate_fields:
        overrides["duplicate_fields"] = args.duplicate_fields

    language_overrides = {}
    if args.no_timestamps:
        language_overrides["timestamps"] = False
    if args.no_virtuals:
        language_overrides["virtuals"] = False
    if language_overrides:
        overrides["language_config"] = language_overrides

    return load_config(
        get_registry().resolve_name(args.target),
        custom_config=overrides or None,
        config_file=args.config,
    )


def _print_report(report: ConversionReport, show_code: bool = False):
    """Render a conversion report."""
    if not report.outcomes:
        console.print("[yellow]⚠️  No input files found[/yellow]")
        return

    table = Table(
        title="📊 Conversion Results",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Source", style="bold")
    table.add_column("Struct")
    table.add_column("Status")
    table.add_column("Output / Message", style="dim")

    for outcome in report.outcomes:
        detail = str(outcome.output_path) if outcome.output_path else outcome.message
        table.add_row(
            outcome.source.name,
            outcome.struct_name or "",
            STATUS_STYLES[outcome.status],
            detail or "",
        )

    console.print()
    console.print(table)

    warnings = [(o, w) for o in report.outcomes for w in o.warnings]
    if warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for outcome, warning in warnings:
            console.print(f"  [yellow]•[/yellow] {outcome.source.name}: {warning}")

    if show_code:
        for outcome in report.succeeded:
            console.print(f"\n[green]📄 {outcome.struct_name}[/green]")
            console.print(Syntax(outcome.code or "", "typescript", theme="monokai"))

    counts = report.summary()
    console.print(
        Panel(
            f"[green]{counts['success']} converted[/green], "
            f"[yellow]{counts['skipped']} skipped[/yellow], "
            f"[red]{counts['failed']} failed[/red]",
            title="Summary",
            border_style="green" if report.ok else "red",
        )
    )
