"""Shared utility functions for crudgen.

Provides async command execution, file helpers that run blocking I/O off the
event loop, and Rich-based console reporting used by every command.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 300,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (
            -1,
            "",
            f"Command timed out after {timeout}s: {format_command(cmd)}",
        )

    stdout_str = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr_str = stderr_bytes.decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


def format_command(cmd: list[str]) -> str:
    """Return *cmd* as a single printable string."""
    return " ".join(cmd)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def write_text(path: str | Path, content: str) -> Path:
    """Write *content* to *path* (overwriting it) off the event loop."""
    out = Path(path)
    await asyncio.to_thread(_write_file, out, content)
    return out


async def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file off the event loop."""
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")


async def path_exists(path: str | Path) -> bool:
    return await asyncio.to_thread(Path(path).exists)


async def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    await asyncio.to_thread(dir_path.mkdir, parents=True, exist_ok=True)
    return dir_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_info(message: str) -> None:
    """Print a blue progress message."""
    console.print(f"[blue]{message}[/blue]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_file_table(paths: list[Path], root: Path, title: str = "Generated files") -> None:
    """Print the written files relative to *root*."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("File", no_wrap=True)

    for path in paths:
        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        table.add_row(str(shown))

    console.print(table)
