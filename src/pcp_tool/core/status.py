"""Fixed code tables for pgpool node status and watchdog quorum state."""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType

NODE_STATUS_INITIALIZATION = "Initialization"
NODE_STATUS_UP_NO_CONNECTIONS = "Node is up. No connections yet"
NODE_STATUS_UP_POOLED = "Node is up. Connections are pooled"
NODE_STATUS_DOWN = "Node is down"
NODE_STATUS_UNKNOWN = "Unknown node status"


class QuorumState(IntEnum):
    """Watchdog quorum state, ordered from worst to best.

    Values match pcp_watchdog_info; consumers compare them numerically,
    so do not reorder.
    """

    UNKNOWN = -3
    NO_MASTER_NODE = -2
    ABSENT = -1
    ON_THE_EDGE = 0
    EXIST = 1


_NODE_STATUS_LABELS = MappingProxyType(
    {
        0: NODE_STATUS_INITIALIZATION,
        1: NODE_STATUS_UP_NO_CONNECTIONS,
        2: NODE_STATUS_UP_POOLED,
        3: NODE_STATUS_DOWN,
    }
)

_QUORUM_STATE_CODES = MappingProxyType(
    {
        "UNKNOWN": QuorumState.UNKNOWN,
        "NO MASTER NODE": QuorumState.NO_MASTER_NODE,
        "QUORUM ABSENT": QuorumState.ABSENT,
        "QUORUM IS ON THE EDGE": QuorumState.ON_THE_EDGE,
        "QUORUM EXIST": QuorumState.EXIST,
    }
)


def node_status_to_string(status_code: int) -> str:
    return _NODE_STATUS_LABELS.get(status_code, NODE_STATUS_UNKNOWN)


def quorum_state_to_code(state: str) -> int:
    """Exact, case-sensitive label lookup. Unrecognised labels map to UNKNOWN."""
    return int(_QUORUM_STATE_CODES.get(state, QuorumState.UNKNOWN))
