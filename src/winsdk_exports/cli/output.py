"""
CLI Output Utilities

Machine-aware output functions that adapt based on machine mode.
"""

import json
import re
from typing import Any

import typer
from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table

from winsdk_exports.cli.config import CLIConfig

_MARKUP_RE = re.compile(r"\[/?[a-z #]+\]")


class MachineAwareConsole:
    """
    A Console wrapper that drops rich formatting in machine mode.
    """

    def __init__(self):
        self._rich_console = RichConsole()

    def print(self, *args, **kwargs):
        if not CLIConfig.is_machine_mode():
            self._rich_console.print(*args, **kwargs)
            return
        for arg in args:
            if isinstance(arg, Table):
                # Tables are human-only; machine callers use --json
                continue
            if isinstance(arg, str):
                plain = _MARKUP_RE.sub("", arg).strip()
                if plain:
                    typer.echo(plain)
            elif arg is not None:
                typer.echo(str(arg))

    def __getattr__(self, name):
        return getattr(self._rich_console, name)


_console = MachineAwareConsole()


def get_console() -> MachineAwareConsole:
    return _console


def print_json(data: Any) -> None:
    """Minified JSON in machine mode, indented in human mode."""
    if CLIConfig.is_machine_mode():
        typer.echo(json.dumps(data, separators=(",", ":")))
    else:
        typer.echo(json.dumps(data, indent=2))


def print_error(message: str, code: str = "ERROR") -> None:
    """Structured JSON error in machine mode, red text in human mode."""
    if CLIConfig.is_machine_mode():
        typer.echo(json.dumps({"status": "error", "code": code, "message": message}), err=True)
    else:
        RichConsole(stderr=True).print(f"[red]Error: {escape(message)}[/red]")
