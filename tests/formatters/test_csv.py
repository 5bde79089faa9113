"""Tests for CSVFormatter."""

import csv
from io import StringIO

import pytest

from pcp_tool.core.models import ResultTable
from pcp_tool.formatters.base import Formatter
from pcp_tool.formatters.csv import CSVFormatter


def _make_result(rows=None):
    if rows is None:
        rows = [("app", "alice", True), ("bi", "bob", False)]
    return ResultTable(columns=["database", "username", "connected"], rows=rows)


@pytest.mark.unit
def test_csv_formatter_implements_protocol():
    assert isinstance(CSVFormatter(), Formatter)


@pytest.mark.unit
def test_csv_formatter_outputs_header_and_data():
    lines = list(CSVFormatter().format(_make_result()))
    assert lines == [
        "database,username,connected",
        "app,alice,True",
        "bi,bob,False",
    ]


@pytest.mark.unit
def test_csv_formatter_no_header():
    lines = list(CSVFormatter(no_header=True).format(_make_result()))
    assert lines == ["app,alice,True", "bi,bob,False"]


@pytest.mark.unit
def test_csv_formatter_empty_result_header_only():
    assert list(CSVFormatter().format(_make_result(rows=[]))) == [
        "database,username,connected"
    ]


@pytest.mark.unit
def test_csv_formatter_handles_none_values():
    lines = list(CSVFormatter().format(_make_result(rows=[("app", None, False)])))
    assert lines[1] == "app,,False"


@pytest.mark.unit
def test_csv_formatter_quotes_status_labels():
    result = ResultTable(
        columns=["node_id", "status"],
        rows=[(0, "Node is up. Connections are pooled"), (1, 'say "hi", then leave')],
    )
    output = "\n".join(CSVFormatter().format(result))
    rows = list(csv.reader(StringIO(output)))
    assert rows[1] == ["0", "Node is up. Connections are pooled"]
    assert rows[2] == ["1", 'say "hi", then leave']
