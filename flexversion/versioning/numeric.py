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

"""Numeric primitives for the flexible version parser.

Version components are signed 32-bit values (the System.Version model used
by Windows file and product versions). Digit runs that do not fit are
re-read through wider tiers so the size of the overflow is preserved:

1. int32 (the component itself)
2. int64
3. arbitrary precision (decimal.Decimal; can be disabled)
4. double (can be disabled; infinite results count as failure)

None of the parse_* functions raise. Each returns a NumberParse whose
status is "ok", "overflow" or "invalid".

Example:
    Tiered parse of an oversized build number:

        from flexversion.versioning.numeric import tiered_parse
        tiered = tiered_parse("2147483700")
        print(tiered.value, tiered.excess, tiered.tier)
        # 2147483647 53 int64

"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import MAX_EMAX, Decimal, localcontext
import math
import re
from typing import Literal, Sequence

from flexversion.logging import Logger, get_global_logger

from .components import MAX_COMPONENTS, VersionComponents

INT32_MAX = 2_147_483_647
INT64_MAX = 9_223_372_036_854_775_807

_INT32_DIGITS = len(str(INT32_MAX))
_INT64_DIGITS = len(str(INT64_MAX))

# ASCII only: str.isdigit() and \d both accept other Unicode digits
_LEADING_DIGITS = re.compile(r"^[0-9]+")
_ALL_DIGITS = re.compile(r"[0-9]+")

NumberStatus = Literal["ok", "overflow", "invalid"]
Tier = Literal["int32", "int64", "big_integer", "double"]


@dataclass(frozen=True)
class NumberParse:
    """Result of a single-tier numeric conversion."""

    status: NumberStatus
    value: int | float | Decimal | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass(frozen=True)
class NumericCapabilities:
    """Which wide numeric tiers the parser may use.

    Attributes:
        big_integer: Allow the arbitrary-precision tier. When False, digit
            runs beyond int64 go straight to the double tier.
        floating_point: Allow the double tier. When False, digit runs that
            no integer tier accepts are treated as non-numeric.

    """

    big_integer: bool = True
    floating_point: bool = True


@dataclass(frozen=True)
class TieredValue:
    """A digit run reduced to a version component.

    Attributes:
        value: Component value; INT32_MAX whenever a wider tier was needed.
        excess: Text form of (parsed value - INT32_MAX), empty for int32.
        tier: The tier that accepted the digit run.

    """

    value: int
    excess: str
    tier: Tier


def leading_digits(segment: str) -> tuple[str, str]:
    """Split a segment into its leading ASCII digit run and the remainder.

    >>> leading_digits("4-beta3")
    ('4', '-beta3')
    >>> leading_digits("beta")
    ('', 'beta')
    """
    m = _LEADING_DIGITS.match(segment)
    if not m:
        return "", segment
    return m.group(0), segment[m.end() :]


def _parse_bounded(text: str, maximum: int, max_digits: int) -> NumberParse:
    if not _ALL_DIGITS.fullmatch(text):
        return NumberParse("invalid")
    significant = text.lstrip("0")
    # Length check first so huge runs never reach int()
    if len(significant) > max_digits:
        return NumberParse("overflow")
    value = int(significant or "0")
    if value > maximum:
        return NumberParse("overflow")
    return NumberParse("ok", value)


def parse_int32(text: str) -> NumberParse:
    """Parse an unsigned digit string into a signed 32-bit range."""
    return _parse_bounded(text, INT32_MAX, _INT32_DIGITS)


def parse_int64(text: str) -> NumberParse:
    """Parse an unsigned digit string into a signed 64-bit range."""
    return _parse_bounded(text, INT64_MAX, _INT64_DIGITS)


def parse_big_integer(text: str) -> NumberParse:
    """Parse an unsigned digit string with arbitrary precision.

    The value is a Decimal, which has no digit limit (CPython caps int()
    on long strings).
    """
    if not _ALL_DIGITS.fullmatch(text):
        return NumberParse("invalid")
    return NumberParse("ok", Decimal(text))


def _big_excess(value: Decimal, digits: int) -> str:
    # Context precision must cover every digit or subtraction rounds
    with localcontext() as ctx:
        ctx.prec = digits + 1
        ctx.Emax = MAX_EMAX
        return format(value - INT32_MAX, "f")


def parse_double(text: str) -> NumberParse:
    """Parse an unsigned digit string as a double. Infinity is an overflow."""
    if not _ALL_DIGITS.fullmatch(text):
        return NumberParse("invalid")
    value = float(text)
    if math.isinf(value):
        return NumberParse("overflow")
    return NumberParse("ok", value)


def tiered_parse(
    digits: str,
    capabilities: NumericCapabilities | None = None,
    logger: Logger | None = None,
) -> TieredValue | None:
    """Reduce a digit run to a version component, widening on overflow.

    Tiers are tried strictly in order int32, int64, big integer, double.
    Whenever a tier wider than int32 accepts the run, the component becomes
    INT32_MAX and the difference is returned as text in TieredValue.excess.

    Args:
        digits: A non-empty run of ASCII digits.
        capabilities: Which wide tiers are available. Defaults to all.
        logger: Logger for diagnostics. Defaults to the global logger.

    Returns:
        The reduced value, or None when no tier accepts the run. The caller
            then treats the run as non-numeric.

    Note:
        int32 and int64 rejecting a pure digit run for anything other than
        overflow is a parser defect and is reported as a warning. Running
        out of tiers at the double stage is expected and only logged at
        debug level.

    """
    if capabilities is None:
        capabilities = NumericCapabilities()
    if logger is None:
        logger = get_global_logger()

    result = parse_int32(digits)
    if result.ok:
        return TieredValue(value=int(result.value), excess="", tier="int32")
    if result.status == "invalid":
        logger.warning(
            "NUMERIC",
            f"int32 conversion rejected digit run {digits!r}; this should not be possible",
        )
        return None

    logger.debug("NUMERIC", f"{digits!r} overflows int32, trying int64")
    result = parse_int64(digits)
    if result.ok:
        return TieredValue(
            value=INT32_MAX, excess=str(int(result.value) - INT32_MAX), tier="int64"
        )
    if result.status == "invalid":
        logger.warning(
            "NUMERIC",
            f"int64 conversion rejected digit run {digits!r}; this should not be possible",
        )
        return None

    if capabilities.big_integer:
        logger.debug("NUMERIC", f"{digits[:20]!r}... overflows int64, trying big integer")
        result = parse_big_integer(digits)
        if result.ok:
            return TieredValue(
                value=INT32_MAX,
                excess=_big_excess(result.value, len(digits)),
                tier="big_integer",
            )
        logger.debug("NUMERIC", "big integer conversion failed")

    if capabilities.floating_point:
        logger.debug("NUMERIC", "Trying double")
        result = parse_double(digits)
        if result.ok:
            return TieredValue(
                value=INT32_MAX,
                excess=repr(float(result.value) - INT32_MAX),
                tier="double",
            )

    logger.debug("NUMERIC", "Digit run exceeds every numeric tier, treating as text")
    return None


def version_from_parts(parts: Sequence[str]) -> VersionComponents | None:
    """Strictly convert 2 to 4 digit-only parts into VersionComponents."""
    if not 2 <= len(parts) <= MAX_COMPONENTS:
        return None
    values: list[int] = []
    for part in parts:
        result = parse_int32(part)
        if not result.ok:
            return None
        values.append(int(result.value))
    return VersionComponents.from_values(values)


def try_parse_version(text: str) -> VersionComponents | None:
    """Strict version parse.

    Accepts "major.minor[.build[.revision]]" where every component is
    ASCII digits only and fits in a signed 32-bit integer.

    >>> try_parse_version("1.2.3.4")
    VersionComponents(major=1, minor=2, build=3, revision=4)
    >>> try_parse_version("1.2-beta") is None
    True
    """
    return version_from_parts(text.split("."))
