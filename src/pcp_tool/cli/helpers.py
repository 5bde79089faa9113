"""Conversions from PCP models to ResultTable for the formatters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pcp_tool.core.models import ResultTable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from pcp_tool.core.models import (
        NodeInfo,
        ProcInfo,
        ProcInfoSummary,
        WatchdogInfo,
    )

NODE_INFO_COLUMNS = ["node_id", "hostname", "port", "status_code", "status", "weight", "role"]


def node_info_table(nodes: Iterable[tuple[int, NodeInfo]]) -> ResultTable:
    rows = [
        (
            node_id,
            node.hostname,
            node.port,
            node.status_code,
            node.status,
            node.weight,
            node.role,
        )
        for node_id, node in nodes
    ]
    return ResultTable(columns=NODE_INFO_COLUMNS, rows=rows)


def proc_info_table(procs: Sequence[ProcInfo]) -> ResultTable:
    return ResultTable(
        columns=["database", "username", "connected"],
        rows=[(p.database, p.username, p.connected) for p in procs],
    )


def proc_summary_table(summary: ProcInfoSummary) -> ResultTable:
    """One row per database, sorted by name, with a TOTAL row."""
    databases = sorted(set(summary.active) | set(summary.inactive))
    rows: list[tuple[object, ...]] = [
        (db, summary.active.get(db, 0), summary.inactive.get(db, 0))
        for db in databases
    ]
    rows.append(
        (
            "TOTAL",
            sum(summary.active.values()),
            sum(summary.inactive.values()),
        )
    )
    return ResultTable(columns=["database", "active", "inactive"], rows=rows)


def proc_count_table(tokens: Sequence[str]) -> ResultTable:
    return ResultTable(columns=["value"], rows=[(token,) for token in tokens])


def watchdog_info_table(info: WatchdogInfo) -> ResultTable:
    return ResultTable(
        columns=[
            "total_nodes",
            "remote_nodes",
            "alive_remote_nodes",
            "quorum_state",
            "quorum_state_code",
            "vip",
        ],
        rows=[
            (
                info.total_nodes,
                info.remote_nodes,
                info.alive_remote_nodes,
                info.quorum_state,
                info.quorum_state_code,
                info.vip,
            )
        ],
    )
