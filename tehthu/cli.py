"""
Command-line interface for Tehthu.

Provides commands for:
- Translating a sentence in either direction
- An interactive translation shell
- Inspecting a dictionary (names, counts, suffix rules, ambiguities)
- Remembering a default dictionary
- Environment diagnostics

Usage:
    tehthu translate "Hello world" --dict english-spanish.teh
    tehthu translate "Hola mundo" --reverse
    tehthu shell
    tehthu inspect --dict english-spanish.teh
    tehthu open english-spanish.teh
    tehthu info
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from tehthu import __version__
from tehthu.config import APP_NAME
from tehthu.session import Session
from tehthu.settings import SettingsStore
from tehthu.translate import DictionaryNotFoundError, Direction

app = typer.Typer(
    name="tehthu",
    help="Tehthu: word-by-word translation between syntactically identical languages",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log progress and diagnostics",
    ),
):
    """Tehthu: dictionary-driven translation."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _print_log_line(line: str) -> None:
    console.print(f"[dim]{escape(line)}[/]")


def _resolve_dictionary(dict_path: Optional[Path]) -> Path:
    if dict_path is not None:
        return dict_path
    remembered = SettingsStore().last_dictionary()
    if remembered is None:
        console.print("[red]Error:[/] No dictionary given and none remembered", style="bold")
        console.print("Pass [cyan]--dict <file>[/] or run [cyan]tehthu open <file>[/]")
        raise typer.Exit(1)
    return remembered


def _open_session(dict_path: Optional[Path], show_log: bool, remember: bool) -> Session:
    path = _resolve_dictionary(dict_path)
    session = Session(on_log_line=_print_log_line if show_log else None)
    try:
        parsed = session.open_dictionary(path, remember=remember)
    except DictionaryNotFoundError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}", style="bold")
        raise typer.Exit(1)
    except ImportError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}", style="bold")
        raise typer.Exit(1)
    if not parsed:
        session.close()
        console.print(
            f"[red]Error:[/] Your dictionary file {escape(str(path))} could not be parsed. "
            "Make sure it is not open in any other application, check the format, and try again.",
        )
        raise typer.Exit(1)
    return session


DictOption = typer.Option(
    None, "--dict", "-d",
    help="Dictionary file (defaults to the remembered one)",
)


@app.command()
def translate(
    text: str = typer.Argument(..., help="Sentence to translate"),
    dict_path: Optional[Path] = DictOption,
    reverse: bool = typer.Option(
        False, "--reverse", "-r",
        help="Translate from the right-hand language to the left-hand one",
    ),
    show_log: bool = typer.Option(
        False, "--show-log",
        help="Print parse and translation diagnostics",
    ),
):
    """Translate a sentence."""
    session = _open_session(dict_path, show_log, remember=False)
    if reverse:
        session.swap_direction()
    try:
        result = session.translate(text)
    finally:
        session.close()
    console.print(escape(result or ""))


@app.command()
def shell(
    dict_path: Optional[Path] = DictOption,
    show_log: bool = typer.Option(
        True, "--show-log/--hide-log",
        help="Print diagnostics as they arrive",
    ),
):
    """Translate interactively.

    Type a sentence and press Enter. Commands:
        :swap     translate in the other direction
        :reload   re-read the dictionary
        :names    show the language names
        :quit     leave the shell
    """
    session = _open_session(dict_path, show_log, remember=True)
    console.print(f"[green]Loaded dictionary:[/] {escape(str(session.translator.file))}")
    console.print("[dim]Commands: :swap :reload :names :quit[/]\n")

    try:
        while True:
            source, target = session.language_names()
            try:
                line = console.input(f"[bold cyan]{escape(source)} → {escape(target)}[/]> ")
            except (EOFError, KeyboardInterrupt):
                break

            command = line.strip()
            if not command:
                continue
            if command in (":quit", ":q", ":exit"):
                break
            if command == ":swap":
                session.swap_direction()
                continue
            if command == ":reload":
                if session.reload():
                    console.print("[green]Dictionary reloaded[/]")
                else:
                    console.print("[red]Error:[/] Dictionary could not be parsed; it is now empty")
                continue
            if command == ":names":
                t = session.translator
                console.print(f"Left: [cyan]{escape(t.left_language_name)}[/]  Right: [cyan]{escape(t.right_language_name)}[/]")
                continue

            console.print(escape(session.translate(line) or ""))
    finally:
        session.close()


@app.command()
def inspect(
    dict_path: Optional[Path] = DictOption,
    show_log: bool = typer.Option(
        False, "--show-log",
        help="Print parse diagnostics",
    ),
):
    """Show what a dictionary contains."""
    session = _open_session(dict_path, show_log, remember=False)
    try:
        translator = session.translator
        store = translator.store
        stats = store.stats()

        console.print(f"[bold]{escape(str(translator.file))}[/]\n")

        table = Table(title="Dictionary")
        table.add_column("Property", style="cyan")
        table.add_column(escape(translator.left_language_name), style="green")
        table.add_column(escape(translator.right_language_name), style="green")
        table.add_row("Words", str(stats.ltr_entries), str(stats.rtl_entries))
        table.add_row("Suffix rules", str(stats.ltr_suffixes), str(stats.rtl_suffixes))
        table.add_row("Ambiguous words", str(stats.ltr_ambiguous), str(stats.rtl_ambiguous))
        console.print(table)
        console.print(f"Delimiter: [cyan]{escape(translator.delimiter)}[/]")

        rules = store.suffix_rules(Direction.LEFT_TO_RIGHT)
        if rules:
            suffix_table = Table(title="Suffix rules")
            suffix_table.add_column(escape(translator.left_language_name), style="cyan")
            suffix_table.add_column(escape(translator.right_language_name), style="green")
            for suffix, replacement in rules:
                suffix_table.add_row(f"-{escape(suffix)}", f"-{escape(replacement)}")
            console.print(suffix_table)

        for direction in Direction:
            ambiguous = store.ambiguous_keys(direction)
            if not ambiguous:
                continue
            language = store.language_name(direction)
            amb_table = Table(title=f"Ambiguous {escape(language)} words")
            amb_table.add_column("Word", style="cyan")
            amb_table.add_column("Translations")
            for key in sorted(ambiguous):
                amb_table.add_row(escape(key), escape(", ".join(ambiguous[key])))
            console.print(amb_table)
    finally:
        session.close()


@app.command("open")
def open_dictionary(
    path: Path = typer.Argument(..., help="Dictionary file to parse and remember"),
):
    """Parse a dictionary and make it the default."""
    session = _open_session(path, show_log=False, remember=True)
    try:
        translator = session.translator
        console.print(
            f"[green]✓[/] {escape(translator.left_language_name)}-to-{escape(translator.right_language_name)} "
            f"dictionary remembered ({len(translator.store)} words)"
        )
    finally:
        session.close()


@app.command()
def info():
    """Show system information and dependency status."""
    from tehthu.diagnostics import collect_diagnostics, summarize_checks

    console.print(f"[bold]{APP_NAME} v{__version__}[/]\n")

    checks = collect_diagnostics()
    table = Table(title="Environment")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Detail")

    colors = {"ok": "green", "warn": "yellow", "error": "red"}
    for check in checks:
        color = colors.get(check.status, "white")
        table.add_row(check.name, f"[{color}]{check.status}[/]", escape(check.detail))
    console.print(table)

    summary = summarize_checks(checks)
    console.print(f"\n{summary['ok']} ok, {summary['warn']} warnings, {summary['error']} errors")
    if summary["error"]:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
