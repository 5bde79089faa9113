"""Output formatters; importing this package registers table, json and csv."""

from pcp_tool.formatters.base import Formatter, FormatterRegistry, registry
from pcp_tool.formatters.csv import CSVFormatter
from pcp_tool.formatters.json import JSONFormatter
from pcp_tool.formatters.table import TableFormatter

__all__ = [
    "CSVFormatter",
    "Formatter",
    "FormatterRegistry",
    "JSONFormatter",
    "TableFormatter",
    "registry",
]
