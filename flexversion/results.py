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

"""Public API return types for flexversion.

Note:
    Only public API return types of the outer layers belong in this module.
    Parser types (ParseResult and friends) stay co-located with the parser
    in flexversion.versioning.components.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flexversion.versioning import ParseOutcome, VersionComponents


@dataclass(frozen=True)
class FreshnessResult:
    """Result from comparing an installed version against a feed.

    Attributes:
        package: Package identifier as given by the caller.
        installed: Installed version string as given by the caller.
        installed_version: Parsed installed version.
        installed_outcome: Parse outcome of the installed version.
        latest: Highest published version string, or None if the feed
            had no usable version.
        latest_version: Parsed form of latest, or None.
        latest_outcome: Parse outcome of latest, or None.
        is_outdated: True when latest is newer than installed.
        candidate_count: Number of version strings read from the feed.
    """

    package: str
    installed: str
    installed_version: VersionComponents
    installed_outcome: ParseOutcome
    latest: str | None
    latest_version: VersionComponents | None
    latest_outcome: ParseOutcome | None
    is_outdated: bool
    candidate_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "package": self.package,
            "installed": self.installed,
            "installed_outcome": self.installed_outcome.name,
            "latest": self.latest,
            "latest_outcome": (
                self.latest_outcome.name if self.latest_outcome is not None else None
            ),
            "is_outdated": self.is_outdated,
            "candidate_count": self.candidate_count,
        }
