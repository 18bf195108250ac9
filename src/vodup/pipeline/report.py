"""Results file written after a batch upload."""

import configparser
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.table import Table

from vodup.pipeline._shared import UploadOutcome


@dataclass(frozen=True)
class ReportEntry:
    """One section of a results file."""

    file_name: str
    vid: str
    published: bool
    error: str = ""


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None, default_section="__defaults__")
    parser.optionxform = str
    return parser


def write_report(outcomes: Iterable[UploadOutcome], output_path: Path):
    """
    Write one section per outcome to an INI file, replacing any existing file.

    Each section is named after the file and holds `vid`, `published` and,
    when the file failed, `error`. A file name seen twice keeps its last
    outcome.
    """
    parser = _new_parser()

    for outcome in outcomes:
        section = {
            "vid": outcome.vid,
            "published": "true" if outcome.published else "false",
        }
        if outcome.error_message:
            section["error"] = outcome.error_message
        parser[outcome.file_name] = section

    with open(output_path, "w", encoding="utf-8") as f:
        parser.write(f)


def read_report(report_path: Path) -> list[ReportEntry]:
    """Parse a results file back into entries, in file order."""
    parser = _new_parser()
    with open(report_path, encoding="utf-8") as f:
        parser.read_file(f)

    return [
        ReportEntry(
            file_name=name,
            vid=parser[name].get("vid", ""),
            published=parser[name].getboolean("published", fallback=False),
            error=parser[name].get("error", ""),
        )
        for name in parser.sections()
    ]


def print_report(entries: Iterable[ReportEntry], console: Console, title: str = "Results"):
    """Show report entries as a table."""
    table = Table(title=title, show_header=True)
    table.add_column("#", style="dim")
    table.add_column("File")
    table.add_column("Vid")
    table.add_column("Published", justify="center")
    table.add_column("Error", style="red")

    for i, entry in enumerate(entries):
        table.add_row(
            str(i + 1),
            entry.file_name,
            entry.vid or "-",
            "[green]yes[/green]" if entry.published else "no",
            entry.error,
        )

    console.print(table)
