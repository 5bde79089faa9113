"""JSON formatter: a list of one object per PCP record."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic_core import to_jsonable_python

from pcp_tool.formatters.base import registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pcp_tool.core.models import ResultTable


@registry.register("json")
class JSONFormatter:
    def __init__(self, compact: bool = False) -> None:
        self.compact = compact

    def format(self, result: ResultTable) -> Iterator[str]:
        # Paths and enums become plain JSON values; anything else unknown is str()'d.
        payload = to_jsonable_python(result.as_dicts(), fallback=str)
        yield json.dumps(payload, indent=None if self.compact else 2)
