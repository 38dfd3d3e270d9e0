"""
flexversion - best-effort four-part version parsing

Windows tooling reads version strings from package feeds, the registry and
binary metadata, and many of them fail a strict "major.minor.build.revision"
parse. flexversion recovers the longest usable version and records every
fragment it had to leave out.

flexversion provides:
  - A flexible parser with int32 -> int64 -> big integer -> double overflow
    handling and per-component leftover tracking
  - 4-tuple version ordering (unset components sort lowest)
  - A freshness check against JSON package feeds (NuGet v3 by default)
  - Layered YAML configuration
  - The `flexver` command-line tool

Quick Start
-----------
Parse a version string:

    $ flexver parse 1.2.3.4-beta3

Check a package against its feed:

    $ flexver check Newtonsoft.Json 12.0.3

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
versioning : package
    Parser, numeric primitives and comparison.
freshness : module
    Installed-vs-published version check.
config : package
    YAML configuration loading and merging.

Public API
----------
    from flexversion.versioning import FlexibleVersionParser, parse_flexible_version
    from flexversion.versioning import compare_versions, is_newer
    from flexversion.freshness import check_freshness
    from flexversion.config import load_effective_config
"""

__version__ = "0.1.0"
__description__ = "Best-effort four-part version parsing"

# Re-export commonly used functions for convenience
from flexversion.config import load_effective_config
from flexversion.freshness import check_freshness
from flexversion.versioning import (
    FlexibleVersionParser,
    LeftoverRecord,
    NumericCapabilities,
    ParseOutcome,
    ParseResult,
    VersionComponents,
    compare_versions,
    is_newer,
    parse_flexible_version,
)

__all__ = [
    "__version__",
    "__description__",
    "FlexibleVersionParser",
    "LeftoverRecord",
    "NumericCapabilities",
    "ParseOutcome",
    "ParseResult",
    "VersionComponents",
    "check_freshness",
    "compare_versions",
    "is_newer",
    "load_effective_config",
    "parse_flexible_version",
]
