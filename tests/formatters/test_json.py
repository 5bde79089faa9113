"""Tests for JSONFormatter."""

import json
from pathlib import Path

import pytest

from pcp_tool.core.models import ResultTable
from pcp_tool.formatters.base import Formatter
from pcp_tool.formatters.json import JSONFormatter


def _make_result(rows=None):
    if rows is None:
        rows = [(0, "db1", 0.5), (1, "db2", 0.5)]
    return ResultTable(columns=["node_id", "hostname", "weight"], rows=rows)


def _parse(formatter, result):
    return json.loads("\n".join(formatter.format(result)))


@pytest.mark.unit
def test_json_formatter_implements_protocol():
    assert isinstance(JSONFormatter(), Formatter)


@pytest.mark.unit
def test_json_formatter_rows_as_dicts():
    assert _parse(JSONFormatter(), _make_result()) == [
        {"node_id": 0, "hostname": "db1", "weight": 0.5},
        {"node_id": 1, "hostname": "db2", "weight": 0.5},
    ]


@pytest.mark.unit
def test_json_formatter_pretty_print_default():
    output = "\n".join(JSONFormatter().format(_make_result()))
    assert "\n  " in output


@pytest.mark.unit
def test_json_formatter_compact_mode():
    output = "\n".join(JSONFormatter(compact=True).format(_make_result()))
    assert "\n" not in output
    assert json.loads(output)[0]["hostname"] == "db1"


@pytest.mark.unit
def test_json_formatter_empty_result():
    assert _parse(JSONFormatter(), _make_result(rows=[])) == []


@pytest.mark.unit
def test_json_formatter_keeps_booleans_and_none():
    result = ResultTable(columns=["vip", "role"], rows=[(True, None)])
    assert _parse(JSONFormatter(), result) == [{"vip": True, "role": None}]


@pytest.mark.unit
def test_json_formatter_stringifies_other_types():
    result = ResultTable(columns=["pass_file"], rows=[(Path("/etc/pcppass"),)])
    assert _parse(JSONFormatter(), result) == [{"pass_file": "/etc/pcppass"}]
