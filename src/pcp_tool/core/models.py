"""Result models for PCP Tool.

Pydantic models for the records decoded from PCP command output and the
tabular shape the CLI formatters consume.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pcp_tool.core.status import QuorumState


class NodeInfo(BaseModel):
    """Backend node detail from pcp_node_info."""

    model_config = ConfigDict(frozen=True)

    hostname: str = ""
    port: int = 0
    status_code: int = 0
    status: str = ""
    weight: float = 0.0
    role: str = ""


class ProcInfo(BaseModel):
    """One pgpool child connection slot from pcp_proc_info."""

    model_config = ConfigDict(frozen=True)

    database: str
    username: str
    connected: bool = False


class WatchdogInfo(BaseModel):
    """Watchdog cluster state from pcp_watchdog_info."""

    model_config = ConfigDict(frozen=True)

    total_nodes: int = 0
    remote_nodes: int = 0
    quorum_state: str = ""
    quorum_state_code: int = QuorumState.UNKNOWN
    alive_remote_nodes: int = 0
    vip: bool = False


class ProcInfoSummary(BaseModel):
    """Connection slot counts per database, split by connected state."""

    active: dict[str, int] = Field(default_factory=dict)
    inactive: dict[str, int] = Field(default_factory=dict)

    def add(self, database: str, active: bool) -> None:
        counts = self.active if active else self.inactive
        counts[database] = counts.get(database, 0) + 1

    @classmethod
    def from_proc_info(cls, rows: Iterable[ProcInfo]) -> ProcInfoSummary:
        summary = cls()
        for row in rows:
            summary.add(row.database, row.connected)
        return summary


class ResultTable(BaseModel):
    """Column names plus rows, ready for an output formatter."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    columns: list[str]
    rows: list[tuple[Any, ...]]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def as_dicts(self) -> list[dict[str, Any]]:
        """Rows keyed by column name, in row order."""
        return [dict(zip(self.columns, row, strict=True)) for row in self.rows]
