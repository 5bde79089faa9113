"""CSV formatter (RFC 4180 quoting, one line per PCP record)."""

from __future__ import annotations

import csv
from io import StringIO
from typing import TYPE_CHECKING

from pcp_tool.formatters.base import registry

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from pcp_tool.core.models import ResultTable


@registry.register("csv")
class CSVFormatter:
    def __init__(self, no_header: bool = False) -> None:
        self.no_header = no_header

    def format(self, result: ResultTable) -> Iterator[str]:
        buf = StringIO()
        writer = csv.writer(buf, lineterminator="")

        def line(values: Iterable[object]) -> str:
            buf.seek(0)
            buf.truncate()
            writer.writerow(["" if v is None else v for v in values])
            return buf.getvalue()

        if not self.no_header:
            yield line(result.columns)
        for row in result.rows:
            yield line(row)
