"""
Rendering functions for stackrepo output.

This module handles table formatting. Services return domain objects,
this module makes them human-readable. Tables are rendered to plain
strings so commands decide where they go.
"""

from io import StringIO
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .domain import RepoIndex, RepositoryFile

DESCRIPTION_WIDTH = 60
URL_WIDTH = 120
CONSOLE_WIDTH = 200


def _new_table(headers: List[str], widths: List[Optional[int]]) -> Table:
    table = Table(
        box=None,
        show_header=True,
        show_edge=False,
        pad_edge=False,
        header_style="",
    )
    for header, width in zip(headers, widths):
        table.add_column(header, max_width=width, overflow="fold", no_wrap=False)
    return table


def table_to_text(table: Table) -> str:
    """Render a rich table to plain text (no colour, trailing spaces stripped)."""
    console = Console(file=StringIO(), width=CONSOLE_WIDTH, color_system=None,
                      force_terminal=False, record=True)
    console.print(table)
    lines = console.export_text(styles=False).splitlines()
    return "\n".join(line.rstrip() for line in lines) + "\n"


def render_projects(index: RepoIndex) -> str:
    """
    Render the catalog as an ID / VERSION / DESCRIPTION table.

    Each project shows the first entry of its version list, as listed by
    the source. Projects appear in catalog order.
    """
    table = _new_table(["ID", "VERSION", "DESCRIPTION"], [None, None, DESCRIPTION_WIDTH])
    for name in index.projects:
        first = index.first_version(name)
        if first is None:
            table.add_row(Text(name), Text(""), Text(""))
        else:
            table.add_row(Text(name), Text(first.version), Text(first.description))
    return table_to_text(table)


def render_repositories(repo_file: RepositoryFile) -> str:
    """Render configured repositories as a NAME / URL table."""
    table = _new_table(["NAME", "URL"], [None, URL_WIDTH])
    for entry in repo_file.repositories:
        table.add_row(Text(entry.name), Text(entry.url))
    return table_to_text(table)
