"""pcp-tool: pgpool-II PCP administration client."""

from pcp_tool.__about__ import __version__

__all__ = ["__version__"]
