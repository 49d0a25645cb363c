"""nextflex command-line entry point.

Usage::

    nextflex my-app
    nextflex my-app --yes --package-manager npm
    nextflex --config prefs.json --example
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from nextflex import __version__
from nextflex.config import ToolSettings
from nextflex.errors import ScaffoldError
from nextflex.scaffolder import ProjectGenerator
from nextflex.utils import (
    configure_logging,
    console,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
)
from nextflex.wizard import Prompter, resolve, select_source


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nextflex",
        description="Scaffold a pre-wired Next.js project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nextflex my-app\n"
            "  nextflex my-app --yes\n"
            "  nextflex my-app --config prefs.json --example\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Name of the project (asked interactively if omitted)",
    )
    parser.add_argument(
        "-e", "--example",
        action="store_true",
        help="Also write example components for every enabled integration",
    )
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Skip prompts and use default options",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Read preferences from a JSON file instead of prompting",
    )
    parser.add_argument(
        "--package-manager",
        choices=["npm", "yarn", "pnpm"],
        default=None,
        help="Package manager for create-next-app and installs (default: yarn)",
    )
    parser.add_argument(
        "--output", "-o",
        default=".",
        help="Directory to create the project in (default: current directory)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``nextflex`` and ``python -m nextflex``."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    console.print("[bold]Welcome to the nextflex Next.js setup![/bold]")
    prompter = Prompter()

    try:
        project_name = args.project_name or prompter.ask_project_name()

        print_stage_header(1)
        source = select_source(yes=args.yes, config_file=args.config, prompter=prompter)
        config = resolve(source, project_name)
        settings = ToolSettings.from_env(package_manager=args.package_manager)
        print_summary_table(config.summary(), title="Configuration")

        generator = ProjectGenerator(config, settings, include_examples=args.example)
        result = asyncio.run(generator.generate(Path(args.output)))
    except ValidationError as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(1)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_error("Aborted.")
        sys.exit(130)

    for path in result.written:
        console.print(f"  [green]+[/green] {path.relative_to(result.project_root).as_posix()}")
    if result.layout_patched:
        console.print("  [yellow]~[/yellow] src/app/layout.tsx")

    print_success(f"Project {config.project_name} created successfully!")
    console.print("You can now start your development server with:")
    console.print(f"  cd {result.project_root} && {settings.dev_command()}", soft_wrap=True)


if __name__ == "__main__":
    main()
