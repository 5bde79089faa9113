"""pgpool version detection.

pgpool-II 3.5 added PCPPASSFILE support to the PCP tools; older releases
only accept the password as a positional argument.
"""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

from pcp_tool.core.exceptions import VersionError

PASS_FILE_SINCE = Version("3.5.0")

_VERSION_RE = re.compile(r"([0-9]+\.[0-9]+\.[0-9]+)")


def extract_version(text: str) -> str:
    """Return the first N.N.N token in text, or "" when there is none.

    "pgpool-II version 3.7.1 (amefuriboshi)" -> "3.7.1"
    """
    match = _VERSION_RE.search(text)
    if match:
        return match.group(1)
    return ""


def parse_version(text: str) -> Version:
    """Parse `pgpool --version` output into a Version.

    Raises VersionError when the output is empty, carries no version token,
    or the token does not parse.
    """
    text = text.strip()
    if not text:
        raise VersionError("pgpool returned empty version information")

    token = extract_version(text)
    if not token:
        raise VersionError(f"Can't extract pgpool version from string: {text}")

    try:
        return Version(token)
    except InvalidVersion as e:
        raise VersionError(f"Invalid pgpool version '{token}': {e}") from e


def supports_pass_file(version: Version) -> bool:
    return version >= PASS_FILE_SINCE
