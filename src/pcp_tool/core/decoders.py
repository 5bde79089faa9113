"""Decoders for PCP command output.

pcp_node_info -v and pcp_watchdog_info -v print one "Label : value" pair
per line. A line is assigned to a field when it contains the field's label
anywhere, so "Alive Remote Nodes" also feeds the "Remote Nodes" field, and
the last matching line wins. This mirrors how pgpool's output has always
been read; do not tighten it to exact label matches.

Decoding is best-effort. A value that fails numeric coercion is dropped and
the field keeps its default; only a failure to read the stream is an error.
"""

from __future__ import annotations

import io
import re
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from pcp_tool.core.exceptions import DecodeError
from pcp_tool.core.models import NodeInfo, ProcInfo, WatchdogInfo
from pcp_tool.core.status import node_status_to_string, quorum_state_to_code

LineSource = str | Iterable[str]

PROC_INFO_FIELD_COUNT = 13

_VALUE_RE = re.compile(r"^[^:]+: (.*)$")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _strict_int(raw: str) -> int:
    """ASCII digits with an optional sign; no spaces, underscores or other numerals."""
    if not _INT_RE.fullmatch(raw):
        raise ValueError(f"invalid integer: {raw!r}")
    return int(raw)


def _strict_float(raw: str) -> float:
    if not _FLOAT_RE.fullmatch(raw):
        raise ValueError(f"invalid float: {raw!r}")
    return float(raw)


_NODE_INFO_FIELDS: tuple[tuple[str, str, Callable[[str], Any]], ...] = (
    ("Hostname", "hostname", str),
    ("Port", "port", _strict_int),
    ("Status", "status_code", _strict_int),
    ("Weight", "weight", _strict_float),
    ("Role", "role", str),
)

_WATCHDOG_INFO_FIELDS: tuple[tuple[str, str, Callable[[str], Any]], ...] = (
    ("Total Nodes", "total_nodes", _strict_int),
    ("Remote Nodes", "remote_nodes", _strict_int),
    ("Quorum state", "quorum_state", str),
    ("Alive Remote Nodes", "alive_remote_nodes", _strict_int),
    # case-sensitive: "yes" is not up
    ("VIP up on local node", "vip", lambda raw: raw == "YES"),
)


def extract_value(line: str) -> str:
    """Return the value of a "label: value" line, or "" for any other shape."""
    match = _VALUE_RE.match(line)
    if match:
        return match.group(1)
    return ""


def _iter_lines(source: LineSource) -> Iterator[str]:
    if isinstance(source, str):
        source = io.StringIO(source)
    try:
        for line in source:
            yield line.strip()
    except (OSError, UnicodeDecodeError) as e:
        raise DecodeError(f"Failed to read PCP output: {e}") from e


def _read_all(source: LineSource) -> str:
    return "\n".join(_iter_lines(source)).strip()


def _scan_fields(
    source: LineSource,
    fields: tuple[tuple[str, str, Callable[[str], Any]], ...],
) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for line in _iter_lines(source):
        if not line:
            continue
        for label, attr, coerce in fields:
            if label not in line:
                continue
            try:
                values[attr] = coerce(extract_value(line))
            except ValueError:
                # rest of the line is skipped too
                break
    return values


def decode_node_count(source: LineSource) -> int:
    """Parse pcp_node_count output. Empty output means zero nodes."""
    text = _read_all(source)
    if not text:
        return 0
    try:
        return _strict_int(text)
    except ValueError as e:
        raise DecodeError(f"Unexpected pcp_node_count output: {text!r}") from e


def decode_proc_count(source: LineSource) -> list[str]:
    """Split pcp_proc_count output into per-child tokens, left uninterpreted."""
    text = _read_all(source)
    if not text:
        return []
    return text.split(" ")


def decode_node_info(source: LineSource) -> NodeInfo:
    values = _scan_fields(source, _NODE_INFO_FIELDS)
    if "status_code" in values:
        values["status"] = node_status_to_string(values["status_code"])
    return NodeInfo(**values)


def decode_watchdog_info(source: LineSource) -> WatchdogInfo:
    values = _scan_fields(source, _WATCHDOG_INFO_FIELDS)
    values["quorum_state_code"] = quorum_state_to_code(values.get("quorum_state", ""))
    return WatchdogInfo(**values)


def decode_proc_info(source: LineSource) -> list[ProcInfo]:
    """Decode pcp_proc_info rows.

    Only rows of exactly 13 whitespace-separated fields count; headers and
    malformed rows are skipped. Field 12 is the connected flag, "1" meaning
    connected.
    """
    rows: list[ProcInfo] = []
    for line in _iter_lines(source):
        fields = line.split()
        if len(fields) != PROC_INFO_FIELD_COUNT:
            continue
        rows.append(
            ProcInfo(
                database=fields[0],
                username=fields[1],
                connected=fields[12] == "1",
            )
        )
    return rows
