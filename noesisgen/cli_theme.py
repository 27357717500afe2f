# noesisgen/cli_theme.py
"""Terminal theme for the noesisgen CLI.

Teal & sand palette:
  - Compact brand line with version
  - Numbered section headers ("01 · SECTION NAME")
  - Rounded tables with sand borders
  - One-line status markers (info / ok / warn / err)
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

# ── Brand ─────────────────────────────────────────────────────────

BRAND = "N O E S I S G E N"
TAGLINE = "Noesis structures & data sets to TypeScript"

# ── Palette ───────────────────────────────────────────────────────

TEAL = "#2A9D8F"
SAND = "#C9B79C"
MUTED = "dim"


def print_banner(version: str, console: Console) -> None:
    """Print the brand line and tagline."""
    console.print()
    console.print(f"  [bold {TEAL}]{BRAND}[/bold {TEAL}]")
    console.print(f"  [{SAND}]{TAGLINE}[/{SAND}]  [{MUTED}]v{version}[/{MUTED}]")
    console.print()


def print_version(version: str, console: Console) -> None:
    """Print a compact branded version line."""
    t = Text()
    t.append(BRAND, style=f"bold {TEAL}")
    t.append(f"  v{version}", style=MUTED)
    console.print(t)


# ── Section headers ──────────────────────────────────────────────


def section(title: str, console: Console, number: str | None = None) -> None:
    """Print a numbered section header."""
    console.print()
    t = Text()
    if number:
        t.append(f"  {number}", style=f"bold {TEAL}")
        t.append(" · ", style=MUTED)
    else:
        t.append("  ")
    t.append(title.upper(), style="bold")
    console.print(t)
    console.print(f"  {'─' * len(TAGLINE)}", style=SAND)


# ── Tables ───────────────────────────────────────────────────────


def make_table(title: str | None = None, **kwargs: object) -> Table:
    """Create a table with rounded sand borders."""
    return Table(
        title=title,
        box=box.ROUNDED,
        border_style=SAND,
        title_style=f"bold {TEAL}",
        header_style="bold",
        padding=(0, 1),
        **kwargs,
    )


# ── Status lines ─────────────────────────────────────────────────


def info(msg: str) -> str:
    return f"  [{TEAL}]›[/{TEAL}] [{MUTED}]{msg}[/{MUTED}]"


def ok(msg: str) -> str:
    return f"  [bold green]✓[/bold green] {msg}"


def warn(msg: str) -> str:
    return f"  [bold yellow]![/bold yellow] [yellow]{msg}[/yellow]"


def err(msg: str) -> str:
    return f"  [bold red]✗[/bold red] {msg}"
