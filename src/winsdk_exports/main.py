import typer
from pathlib import Path
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from winsdk_exports.logging_config import setup_logging
from winsdk_exports.cli.config import CLIConfig
from winsdk_exports.cli.output import get_console, print_error, print_json
from winsdk_exports.discovery import get_lib_list
from winsdk_exports.dumpbin import DumpbinConfig
from winsdk_exports.exceptions import DumpbinError, ReportError, StoreCorruptionError
from winsdk_exports.parser import parse_report_file
from winsdk_exports.paths import WorkspacePaths
from winsdk_exports.pipeline import (
    DEFAULT_ARCH,
    DEFAULT_WORKERS,
    DEFAULT_X86_SNAPSHOTS,
    export_snapshot,
    merge_library,
)

app = typer.Typer(help="Parse dumpbin reports and resolve ordinal imports across Windows SDK snapshots.")
console = get_console()


@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: tables and colors (also via WINSDK_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log at DEBUG level."
    ),
):
    """
    winsdk-exports: symbol tables and ordinal resolution for Windows import libraries.

    Machine mode is the default (plain text and JSON). Use --human/-H for pretty output.
    """
    if human:
        CLIConfig.set_machine_mode(False)
    else:
        CLIConfig.reset()
    level = "DEBUG" if verbose else "INFO"
    setup_logging(level=level, suppress_console=CLIConfig.is_machine_mode(), force=True)


def _counts_table(title: str, counts: dict) -> Table:
    table = Table(title=title)
    table.add_column("Records", style="cyan")
    table.add_column("Count", justify="right", style="magenta")
    for key, value in counts.items():
        table.add_row(key, str(value))
    return table


@app.command()
def parse(
    report: Path = typer.Argument(
        ..., help="Saved dumpbin report.", exists=True, dir_okay=False, readable=True
    ),
    encoding: str = typer.Option("utf-8", "--encoding", help="Text encoding of the report file."),
    json_output: bool = typer.Option(False, "--json", help="Print the parsed records as JSON."),
):
    """
    Parses one saved dumpbin report.
    """
    try:
        result = parse_report_file(report, encoding)
    except ReportError as e:
        print_error(str(e), code="REPORT_FORMAT")
        raise typer.Exit(code=1)
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Cannot read {report}: {e}", code="REPORT_UNREADABLE")
        raise typer.Exit(code=1)

    if json_output:
        print_json(result.to_json_dict())
        return

    counts = result.counts()
    if CLIConfig.is_machine_mode():
        for key, value in counts.items():
            typer.echo(f"{key}: {value}")
    else:
        console.print(_counts_table(f"Records in '{escape(str(report))}'", counts))


@app.command()
def dump(
    root: Path = typer.Argument(
        ..., help="Workspace root containing deps/<snapshot>/<arch>/.", exists=True, file_okay=False
    ),
    snapshot: Optional[List[str]] = typer.Option(
        None, "--snapshot", "-s", help="Snapshot directory to export. Can be used multiple times. Default: all x86 snapshots."
    ),
    arch: str = typer.Option(DEFAULT_ARCH, "--arch", help="Architecture subdirectory."),
    workers: int = typer.Option(DEFAULT_WORKERS, "--workers", help="Binaries processed in parallel."),
    dumpbin: Optional[str] = typer.Option(None, "--dumpbin", help="dumpbin executable (default: WINSDK_DUMPBIN or 'dumpbin')."),
    json_output: bool = typer.Option(False, "--json", help="Print per-snapshot library counts as JSON."),
):
    """
    Runs dumpbin over every binary of each snapshot and saves text and JSON results.
    """
    config = DumpbinConfig()
    if dumpbin:
        config.executable = dumpbin

    summary = {}
    for name in snapshot or DEFAULT_X86_SNAPSHOTS:
        try:
            results = export_snapshot(root, name, arch, workers, config)
        except (DumpbinError, ReportError) as e:
            print_error(str(e), code="EXPORT_FAILED")
            raise typer.Exit(code=1)
        summary[name] = len(results)

    if json_output:
        print_json(summary)
        return
    for name, count in summary.items():
        console.print(f"[green]{name}[/green]: exported [bold]{count}[/bold] libraries")


@app.command("merge")
def merge_command(
    root: Path = typer.Argument(..., help="Workspace root.", exists=True, file_okay=False),
    name: str = typer.Argument(..., help="Library name, e.g. 'comctl32'."),
    deps: List[str] = typer.Argument(..., help="Snapshots in precedence order; later snapshots win conflicts."),
    arch: str = typer.Option(DEFAULT_ARCH, "--arch", help="Architecture subdirectory."),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", help="Raw symbol name to skip. Replaces the configured list. Can be used multiple times."
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the merge summary as JSON."),
):
    """
    Resolves ordinal imports of one library across snapshots and writes the merged index.
    """
    try:
        merged = merge_library(root, name, deps, arch, exclude)
    except StoreCorruptionError as e:
        print_error(str(e), code="STORE_CORRUPT")
        raise typer.Exit(code=1)

    path = WorkspacePaths(root).merged_json(name, arch)
    if json_output:
        print_json({
            "library": merged.library,
            "path": str(path),
            "names": len(merged.symbols),
            "diagnostics": [d.model_dump(mode="json") for d in merged.diagnostics],
        })
        return

    console.print(f"Merged [bold blue]{len(merged.symbols)}[/bold blue] names into {escape(str(path))}")
    if merged.diagnostics and not CLIConfig.is_machine_mode():
        table = Table(title="Diagnostics")
        table.add_column("Kind", style="yellow")
        table.add_column("Snapshot", style="cyan")
        table.add_column("Symbol")
        table.add_column("Resolved", style="green")
        for diagnostic in merged.diagnostics:
            table.add_row(
                diagnostic.kind.value,
                diagnostic.snapshot,
                escape(diagnostic.symbol_name),
                escape(diagnostic.resolved_name),
            )
        console.print(table)
    else:
        console.print(f"{len(merged.conflicts)} conflicts, {len(merged.misses)} misses")


@app.command()
def libs(
    dll_dir: Path = typer.Argument(..., help="Snapshot directory of DLLs.", exists=True, file_okay=False),
    lib_dir: Path = typer.Argument(..., help="Snapshot directory of import libraries.", exists=True, file_okay=False),
    new_lib_dir: Path = typer.Argument(..., help="Newer snapshot directory of import libraries.", exists=True, file_okay=False),
    json_output: bool = typer.Option(False, "--json", help="Print the names as a JSON array."),
):
    """
    Lists libraries present in all three snapshot directories.
    """
    names = get_lib_list(dll_dir, lib_dir, new_lib_dir)
    if json_output:
        print_json(names)
        return
    for name in names:
        typer.echo(name)


if __name__ == "__main__":
    app()
