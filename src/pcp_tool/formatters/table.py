"""Rich table formatter for terminal output."""

from __future__ import annotations

import shutil
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from pcp_tool.formatters.base import registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pcp_tool.core.models import ResultTable

NO_RESULTS = "No results"


def _cell(value: object, width: int) -> str:
    text = "" if value is None else str(value)
    if len(text) > width:
        return text[: width - 1] + "…"
    return text


def _is_numeric_column(result: ResultTable, index: int) -> bool:
    values = [row[index] for row in result.rows if row[index] is not None]
    return bool(values) and all(
        isinstance(v, int | float) and not isinstance(v, bool) for v in values
    )


@registry.register("table")
class TableFormatter:
    """Counts, ports and weights are right-aligned; text is left-aligned."""

    def __init__(self, width: int = 40) -> None:
        self.width = width

    def format(self, result: ResultTable) -> Iterator[str]:
        if not result.rows:
            yield NO_RESULTS
            return

        table = Table(show_edge=True, pad_edge=True)
        for index, name in enumerate(result.columns):
            justify = "right" if _is_numeric_column(result, index) else "left"
            table.add_column(name, no_wrap=True, justify=justify)
        for row in result.rows:
            table.add_row(*(_cell(v, self.width) for v in row))

        buf = StringIO()
        term_width = shutil.get_terminal_size((120, 24)).columns
        Console(file=buf, force_terminal=True, width=term_width).print(table)
        yield buf.getvalue().rstrip("\n")
