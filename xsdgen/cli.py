"""
Command-line interface for xsdgen.

Reads an XSD file, resolves it and writes the generated code to stdout or a
file. Messages go to stderr so the generated code can be piped.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import generate_code, get_generator
from .codegen.core.config import ConfigError, GeneratorConfig, load_config
from .codegen.registry import RegistryError, get_registry, list_all_language_info
from .loader import SchemaLoaderError
from .logging_config import configure_logging, get_logger
from .resolver import ResolutionError, ResolutionSession

logger = get_logger(__name__)

# Messages and progress go to stderr, generated code to stdout
console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="xsdgen",
        description="Generate Go structs for encoding/xml from an XML Schema (XSD)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  xsdgen schema.xsd
  xsdgen -p models -o models.go schema.xsd
  xsdgen -e -x xsd --pretty schema.xsd
  xsdgen --list-languages
        """.strip(),
    )

    parser.add_argument("xsd_file", nargs="?", metavar="XSD_FILE", help="Entry XSD file")

    parser.add_argument("--output", "-o", metavar="FILE", help="Output file (default: stdout)")
    parser.add_argument(
        "--package",
        "-p",
        metavar="NAME",
        help="Package name of the generated file; empty for no package clause (default: main)",
    )
    parser.add_argument(
        "--prefix", "-x", metavar="PREFIX", help="Prefix prepended to every generated type name"
    )
    parser.add_argument(
        "--exported", "-e", action="store_true", help="Generate exported type names"
    )
    parser.add_argument(
        "--language", "-l", default="go", help="Target language (default: go)"
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--no-comments", action="store_true", help="Don't add comments to generated code"
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--pretty",
        action="store_true",
        help="Show the generated code with syntax highlighting",
    )
    output_group.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )
    output_group.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages", action="store_true", help="List supported languages and exit"
    )
    info_group.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.list_languages:
        return _list_languages()

    if not args.xsd_file:
        parser.error("the following arguments are required: XSD_FILE")

    try:
        config = _build_config(args)
        generator = get_generator(args.language, config)
        return _generate_and_output(generator, args)

    except (SchemaLoaderError, ResolutionError) as e:
        console.print(f"[red]✗ {escape(args.xsd_file)}:[/red] {escape(str(e))}")
        logger.debug("Schema processing failed", exc_info=True)
        return 1
    except (ConfigError, RegistryError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    language = get_registry().resolve_language(args.language)

    overrides: Dict[str, Any] = {}
    if args.package is not None:
        overrides["package_name"] = args.package
    if args.prefix is not None:
        overrides["type_prefix"] = args.prefix
    if args.exported:
        overrides["exported"] = True
    if args.no_comments:
        overrides["add_comments"] = False
    if args.output:
        overrides["output_file"] = args.output

    return load_config(language, custom_config=overrides, config_file=args.config)


def _generate_and_output(generator, args: argparse.Namespace) -> int:
    """Resolve the schema, generate code and write it out."""
    session = ResolutionSession(strict_names=generator.config.strict_names)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        load_task = progress.add_task("[cyan]Loading schema...", total=None)
        session.load(args.xsd_file)
        progress.remove_task(load_task)

        resolve_task = progress.add_task("[cyan]Resolving types...", total=None)
        trees = session.build()
        progress.remove_task(resolve_task)

        gen_task = progress.add_task(
            f"[green]Generating {generator.language_name} code...", total=None
        )
        result = generate_code(generator, trees, session)
        progress.remove_task(gen_task)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {escape(result.error_message)}")
        return 1

    output_file = generator.config.output_file
    if output_file:
        output_path = Path(output_file)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        console.print(
            f"[green]✓[/green] Generated {generator.language_name} code saved to "
            f"[cyan]{output_path}[/cyan]"
        )
    elif args.pretty:
        Console().print(Syntax(result.code, generator.language_name, theme="monokai"))
    else:
        sys.stdout.write(result.code)

    if args.verbose and result.metadata:
        _print_metadata(result.metadata)

    # Session warnings were already logged when they were raised
    remaining = [w for w in result.warnings if w not in session.warnings]
    if remaining:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in remaining:
            console.print(f"  [yellow]•[/yellow] {escape(warning)}")

    return 0


def _print_metadata(metadata: Dict[str, Any]):
    summary = Table(
        title="Generation summary",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    summary.add_column("Property", style="bold")
    summary.add_column("Value", style="green")

    for key, value in metadata.items():
        summary.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(summary)


def _list_languages() -> int:
    """Print the registered target languages."""
    language_info = list_all_language_info()

    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Aliases", style="blue")
    table.add_column("Extension", style="cyan")
    table.add_column("Module", style="dim")

    for name, info in language_info.items():
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, aliases, info["file_extension"], info["module"])

    out = Console()
    out.print(table)
    out.print(
        Panel(
            "xsdgen [dim]schema.xsd[/dim] --language [cyan]LANGUAGE[/cyan]",
            title="Usage",
            border_style="blue",
        )
    )
    return 0
