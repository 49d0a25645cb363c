"""Shared utility functions for nextflex.

Provides async command execution, Rich-based console output, and logging
setup.  External tools are always run from an explicit working directory;
nothing here changes the process-wide cwd.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from nextflex.errors import ExternalToolError

console = Console()

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Argument vector; no shell is involved.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits indefinitely.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )
    except FileNotFoundError:
        return (127, "", f"Command not found: {cmd[0]}")

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


async def run_tool(cmd: list[str], cwd: str | Path) -> None:
    """Run an external tool with inherited streams, raising on failure.

    The child shares the terminal so interactive tools such as
    ``create-next-app`` can prompt the user.  No timeout is applied.

    Raises:
        ExternalToolError: If the tool exits with a non-zero status or the
            executable cannot be found.
    """
    cmd_str = " ".join(cmd)
    logger.debug("Running %s in %s", cmd_str, cwd)
    returncode, _, stderr = await run_command(cmd, cwd=cwd, capture=False)
    if returncode != 0:
        detail = f"\n{stderr}" if stderr else ""
        raise ExternalToolError(
            f"Command failed (exit {returncode}): {cmd_str}{detail}",
            command=cmd_str,
            returncode=returncode,
        )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route ``logging`` records through Rich on the shared console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STAGE_NAMES: dict[int, str] = {
    1: "CONFIGURE",
    2: "MATERIALIZE",
    3: "INSTALL",
    4: "TEMPLATES",
}

STAGE_COLORS: dict[int, str] = {
    1: "bright_cyan",
    2: "bright_green",
    3: "bright_yellow",
    4: "bright_magenta",
}


def print_stage_header(stage: int) -> None:
    """Print a full-width rule naming the scaffolding stage."""
    color = STAGE_COLORS.get(stage, "white")
    name = STAGE_NAMES.get(stage, "?")
    console.print()
    console.print(
        Rule(
            f"[bold {color}] Step {stage}: {name} [/bold {color}]",
            style=color,
        )
    )
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
