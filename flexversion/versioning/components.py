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

"""Value types produced by the flexible version parser.

All types here are immutable. A parse builds them fresh and never mutates
them afterwards, so results can be shared freely between threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, NamedTuple, Sequence

UNSET = -1
MAX_COMPONENTS = 4
COMPONENT_NAMES = ("major", "minor", "build", "revision")


class VersionComponents(NamedTuple):
    """Four-part Windows-style version (major.minor.build.revision).

    Each component is a non-negative 32-bit value or UNSET (-1). Once a
    component is unset every component to its right is unset as well.
    Tuple ordering doubles as version ordering, with UNSET sorting lowest.
    """

    major: int = UNSET
    minor: int = UNSET
    build: int = UNSET
    revision: int = UNSET

    @classmethod
    def from_values(cls, values: Sequence[int]) -> VersionComponents:
        """Build components from up to four leading values, padding with UNSET."""
        if len(values) > MAX_COMPONENTS:
            raise ValueError(
                f"a version holds at most {MAX_COMPONENTS} components, got {len(values)}"
            )
        padded = list(values) + [UNSET] * (MAX_COMPONENTS - len(values))
        return cls(*padded)

    @property
    def values(self) -> tuple[int, ...]:
        """The set components, in order."""
        out: list[int] = []
        for value in self:
            if value == UNSET:
                break
            out.append(value)
        return tuple(out)

    def with_component(self, value: int) -> VersionComponents:
        """Return a copy with 'value' placed in the first unset slot."""
        current = self.values
        return VersionComponents.from_values(current + (value,))

    def __str__(self) -> str:
        return ".".join(str(v) for v in self.values)


class ParseOutcome(IntEnum):
    """How completely a version string was understood.

    PARTIAL_* members carry the 1-based number of the first component that
    needed cleanup, so ``int(outcome)`` matches the classic outcome codes.
    PARTIAL_MAJOR is part of the code space but the repair walk never stops
    before the minor component.
    """

    FAILURE = -1
    FULL_SUCCESS = 0
    PARTIAL_MAJOR = 1
    PARTIAL_MINOR = 2
    PARTIAL_BUILD = 3
    PARTIAL_REVISION = 4
    EXCESS_ONLY = 5

    @classmethod
    def partial(cls, component: int) -> ParseOutcome:
        """Return the PARTIAL_* member for a 1-based component number."""
        if not 1 <= component <= MAX_COMPONENTS:
            raise ValueError(f"component number out of range: {component}")
        return cls(component)

    @property
    def is_partial(self) -> bool:
        return 1 <= self.value <= MAX_COMPONENTS

    @property
    def is_usable(self) -> bool:
        return self is not ParseOutcome.FAILURE


@dataclass(frozen=True)
class LeftoverRecord:
    """Text that could not be folded into a numeric component.

    Attributes:
        major: Leftover for the major component.
        minor: Leftover for the minor component.
        build: Leftover for the build component.
        revision: Leftover for the revision component.
        excess: Dot-joined segments beyond the fourth.

    """

    major: str = ""
    minor: str = ""
    build: str = ""
    revision: str = ""
    excess: str = ""

    @property
    def slots(self) -> tuple[str, str, str, str, str]:
        """All five slots in order (major, minor, build, revision, excess)."""
        return (self.major, self.minor, self.build, self.revision, self.excess)

    @property
    def is_empty(self) -> bool:
        return not any(self.slots)

    def to_dict(self) -> dict[str, str]:
        return dict(zip(COMPONENT_NAMES + ("excess",), self.slots))


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a flexible parse.

    Attributes:
        raw: The input string exactly as given.
        version: Best-effort version. All UNSET when outcome is FAILURE.
        leftovers: Unconverted text per component plus excess segments.
        outcome: Classification of the parse.

    """

    raw: str
    version: VersionComponents
    leftovers: LeftoverRecord
    outcome: ParseOutcome

    @property
    def is_usable(self) -> bool:
        """True when the version may be used for comparisons."""
        return self.outcome.is_usable

    @property
    def is_partial(self) -> bool:
        return self.outcome.is_partial

    def as_tuple(self) -> tuple[VersionComponents, LeftoverRecord, ParseOutcome]:
        return (self.version, self.leftovers, self.outcome)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation used by the CLI."""
        return {
            "input": self.raw,
            "version": str(self.version) or None,
            "components": list(self.version),
            "outcome": self.outcome.name,
            "outcome_code": int(self.outcome),
            "leftovers": self.leftovers.to_dict(),
        }
