"""Output options for PCP results: format choice and TTY auto-detection.

The global --format/--table/--compact/--width/--no-header flags are
collected once into OutputOptions; commands only hand over a ResultTable.
"""

from __future__ import annotations

import sys
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from pcp_tool.core.models import ResultTable
    from pcp_tool.formatters.base import Formatter


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def detect_tty() -> bool:
    return sys.stdout.isatty()


class OutputOptions(BaseModel):
    format: OutputFormat | None = None
    compact: bool = False
    width: int = 40
    no_header: bool = False

    @classmethod
    def from_flags(
        cls,
        format: OutputFormat | None = None,
        *,
        table: bool = False,
        compact: bool = False,
        width: int = 40,
        no_header: bool = False,
    ) -> OutputOptions:
        """--table wins over --format."""
        return cls(
            format=OutputFormat.TABLE if table else format,
            compact=compact,
            width=width,
            no_header=no_header,
        )

    def resolved_format(self) -> OutputFormat:
        """Explicit format, else table on a TTY and CSV when piped."""
        if self.format is not None:
            return self.format
        return OutputFormat.TABLE if detect_tty() else OutputFormat.CSV

    def formatter(self) -> Formatter:
        # Importing the package populates the registry.
        import pcp_tool.formatters  # noqa: F401
        from pcp_tool.formatters.base import registry

        fmt = self.resolved_format()
        if fmt is OutputFormat.TABLE:
            return registry.get(fmt.value, width=self.width)
        if fmt is OutputFormat.JSON:
            return registry.get(fmt.value, compact=self.compact)
        return registry.get(fmt.value, no_header=self.no_header)


def write_output(formatter: Formatter, result: ResultTable) -> None:
    for line in formatter.format(result):
        sys.stdout.write(line + "\n")
