"""
Flexible version parsing and comparison for flexversion.

This package turns arbitrary version strings into Windows-style four-part
versions (major.minor.build.revision, 32-bit components, -1 for unset) and
keeps a record of everything that did not fit.

Modules
-------
components : module
    Immutable result types (VersionComponents, LeftoverRecord,
    ParseOutcome, ParseResult).
numeric : module
    Digit-prefix extraction, tiered int32/int64/big-integer/double parsing
    and the strict version parse.
parser : module
    FlexibleVersionParser, the best-effort repair algorithm.
compare : module
    4-tuple ordering of parsed versions.

Public API
----------
FlexibleVersionParser : class
    Best-effort parser; configurable numeric tiers and logger.
parse_flexible_version : function
    One-off parse with default settings.
NumericCapabilities : dataclass
    Switches for the big-integer and double tiers.
compare_versions : function
    Compare two versions, returning -1, 0, or 1.
is_newer : function
    Check if a remote version is newer than the current version.
version_key : function
    Sortable key for any version string.

Outcome Codes
-------------
The parser classifies every input:

1. **FULL_SUCCESS (0)**: strict parse, no leftovers.
2. **PARTIAL_MINOR..PARTIAL_REVISION (2-4)**: usable version; the numbered
   component (1-based) or a later one lost information.
3. **EXCESS_ONLY (5)**: valid four-part version followed by extra segments.
4. **FAILURE (-1)**: no usable version.

Examples
--------
Tagged revision:

    >>> from flexversion.versioning import parse_flexible_version
    >>> result = parse_flexible_version("1.2.3.4-beta3")
    >>> result.outcome.name, str(result.version), result.leftovers.revision
    ('PARTIAL_REVISION', '1.2.3.4', '-beta3')

Oversized build number:

    >>> result = parse_flexible_version("1.2.2147483700.4")
    >>> result.version
    VersionComponents(major=1, minor=2, build=2147483647, revision=-1)
    >>> result.leftovers.build, result.leftovers.revision
    ('53', '4')

Comparison:

    >>> from flexversion.versioning import compare_versions
    >>> compare_versions("1.2.0", "1.2")
    1

Notes
-----
- Parsing is pure: no network or file I/O, no shared mutable state
- Full SemVer pre-release semantics are intentionally not modelled
"""

from .compare import VersionLike, compare_versions, is_newer, version_key
from .components import (
    UNSET,
    LeftoverRecord,
    ParseOutcome,
    ParseResult,
    VersionComponents,
)
from .numeric import INT32_MAX, NumericCapabilities, tiered_parse, try_parse_version
from .parser import FlexibleVersionParser, parse_flexible_version

__all__ = [
    "INT32_MAX",
    "UNSET",
    "FlexibleVersionParser",
    "LeftoverRecord",
    "NumericCapabilities",
    "ParseOutcome",
    "ParseResult",
    "VersionComponents",
    "VersionLike",
    "compare_versions",
    "is_newer",
    "parse_flexible_version",
    "tiered_parse",
    "try_parse_version",
    "version_key",
]
