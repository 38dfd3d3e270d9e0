# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Ordering of parsed versions.

Versions are compared as 4-tuples (major, minor, build, revision) with
UNSET (-1) sorting lowest, so "1.2" < "1.2.0". Raw strings go through the
flexible parser first; a string that fails to parse sorts below every
usable version. Leftover text never affects ordering.
"""

from __future__ import annotations

from typing import Union

from flexversion.logging import Logger, get_global_logger

from .components import ParseResult, VersionComponents
from .parser import FlexibleVersionParser

VersionLike = Union[str, VersionComponents, ParseResult]


def version_key(
    value: VersionLike, *, parser: FlexibleVersionParser | None = None
) -> tuple[int, VersionComponents]:
    """Compute a sortable key for a version string or parsed version.

    Keys are (usable_flag, components): unparseable input gets
    (0, all-UNSET) and sorts first.
    """
    if isinstance(value, ParseResult):
        result = value
    elif isinstance(value, VersionComponents):
        return (1, value)
    elif isinstance(value, str):
        result = (parser or FlexibleVersionParser()).parse(value)
    else:
        raise TypeError(f"cannot compare version of type {type(value).__name__}")

    if not result.is_usable:
        return (0, VersionComponents())
    return (1, result.version)


def compare_versions(
    a: VersionLike,
    b: VersionLike,
    *,
    parser: FlexibleVersionParser | None = None,
    logger: Logger | None = None,
) -> int:
    """Compare two versions.

    Returns -1 if a < b, 0 if equal, 1 if a > b.
    """
    if logger is None:
        logger = get_global_logger()
    ka = version_key(a, parser=parser)
    kb = version_key(b, parser=parser)
    result = (ka > kb) - (ka < kb)

    if result < 0:
        logger.verbose("COMPARE", f"{a!r} is older than {b!r}")
    elif result > 0:
        logger.verbose("COMPARE", f"{a!r} is newer than {b!r}")
    else:
        logger.verbose("COMPARE", f"{a!r} is the same as {b!r}")
    return result


def is_newer(
    remote: VersionLike,
    current: VersionLike | None,
    *,
    parser: FlexibleVersionParser | None = None,
    logger: Logger | None = None,
) -> bool:
    """Decide if 'remote' should be considered newer than 'current'.

    A missing current version (None) means anything is newer.
    """
    if current is None:
        if logger is None:
            logger = get_global_logger()
        logger.verbose("COMPARE", f"No current version. Treat {remote!r} as newer")
        return True
    return compare_versions(remote, current, parser=parser, logger=logger) > 0
