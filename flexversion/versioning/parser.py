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

"""Flexible version-string parser.

Version strings read from package feeds, the registry or binary metadata
frequently fail a strict "1.2.3.4" parse: vendors append tags
("1.2.3.4-beta3"), add a fifth segment ("1.2.3.4.5") or publish build
numbers that do not fit a 32-bit component. This parser recovers the
longest usable four-part version and records what it had to leave out.

Algorithm:

1. Strict parse of the whole string. Success -> FULL_SUCCESS.
2. Split on "."; fewer than two segments -> FAILURE.
3. Segments beyond the fourth are joined as excess text. If the first four
   segments parse strictly, the result is EXCESS_ONLY.
4. Otherwise walk right to left looking for the longest strictly valid
   prefix. The segment right after it contributes its leading digit run
   (widened through int64/big integer/double on overflow) and the rest of
   that segment, plus every later segment, is kept as leftover text.

Example:
    Parse a tagged version:

        from flexversion.versioning import FlexibleVersionParser

        parser = FlexibleVersionParser()
        result = parser.parse("1.2.3.4-beta3")
        print(result.version, result.outcome.name, result.leftovers.revision)
        # 1.2.3.4 PARTIAL_REVISION -beta3

    Disable the arbitrary-precision tier:

        from flexversion.versioning import NumericCapabilities

        parser = FlexibleVersionParser(
            capabilities=NumericCapabilities(big_integer=False)
        )

Note:
    Malformed input never raises. Only a non-str argument raises TypeError.
    A conversion that is guaranteed by construction but fails anyway is
    reported as a warning through the logger, and the best-effort result is
    still returned.

"""

from __future__ import annotations

from typing import Sequence

from flexversion.logging import Logger, get_global_logger

from .components import (
    MAX_COMPONENTS,
    LeftoverRecord,
    ParseOutcome,
    ParseResult,
    VersionComponents,
)
from .numeric import (
    NumericCapabilities,
    leading_digits,
    parse_int32,
    tiered_parse,
    try_parse_version,
    version_from_parts,
)


def _failure(raw: str) -> ParseResult:
    return ParseResult(
        raw=raw,
        version=VersionComponents(),
        leftovers=LeftoverRecord(),
        outcome=ParseOutcome.FAILURE,
    )


def _parse_prefix(parts: Sequence[str]) -> VersionComponents | None:
    """Strictly parse a prefix of segments. A lone major is allowed here."""
    if len(parts) == 1:
        result = parse_int32(parts[0])
        if not result.ok:
            return None
        return VersionComponents(major=int(result.value))
    return version_from_parts(parts)


class FlexibleVersionParser:
    """Best-effort parser for four-part version strings.

    Instances are cheap and stateless apart from their settings; one parser
    can be shared between threads.

    Args:
        capabilities: Which wide numeric tiers are available. Defaults to
            all of them.
        logger: Logger for diagnostics. Defaults to the global logger,
            looked up on every call.

    """

    def __init__(
        self,
        capabilities: NumericCapabilities | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.capabilities = capabilities or NumericCapabilities()
        self._logger = logger

    def _get_logger(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    def parse(self, text: str) -> ParseResult:
        """Parse a version string.

        Args:
            text: The version string.

        Returns:
            The best-effort version, leftover record and outcome.

        Raises:
            TypeError: If text is not a str.

        """
        if not isinstance(text, str):
            raise TypeError(
                f"version string must be a str, not {type(text).__name__}"
            )
        logger = self._get_logger()

        direct = try_parse_version(text)
        if direct is not None:
            logger.debug("PARSE", f"{text!r} parsed directly as {direct}")
            return ParseResult(
                raw=text,
                version=direct,
                leftovers=LeftoverRecord(),
                outcome=ParseOutcome.FULL_SUCCESS,
            )

        segments = text.split(".")
        if len(segments) < 2:
            logger.verbose("PARSE", f"{text!r} has no major.minor pair")
            return _failure(text)

        excess = ""
        if len(segments) > MAX_COMPONENTS:
            excess = ".".join(segments[MAX_COMPONENTS:])
            core = version_from_parts(segments[:MAX_COMPONENTS])
            if core is not None:
                logger.verbose(
                    "PARSE", f"{text!r} parsed as {core} with excess {excess!r}"
                )
                return ParseResult(
                    raw=text,
                    version=core,
                    leftovers=LeftoverRecord(excess=excess),
                    outcome=ParseOutcome.EXCESS_ONLY,
                )

        # Right to left: the first valid prefix is the longest one
        start = min(MAX_COMPONENTS - 1, len(segments) - 1)
        for index in range(start, 0, -1):
            prefix = _parse_prefix(segments[:index])
            if prefix is None:
                logger.debug("PARSE", f"Prefix of {index} segment(s) is not a version")
                continue
            return self._repair(text, segments, index, prefix, excess, logger)

        logger.verbose("PARSE", f"{text!r} has no numeric major component")
        return _failure(text)

    def _repair(
        self,
        text: str,
        segments: list[str],
        index: int,
        prefix: VersionComponents,
        excess: str,
        logger: Logger,
    ) -> ParseResult:
        """Fold segments[index] into 'prefix' as far as its digits allow."""
        segment = segments[index]
        digits, remainder = leading_digits(segment)
        slots = [""] * MAX_COMPONENTS
        version = prefix

        tiered = tiered_parse(digits, self.capabilities, logger) if digits else None
        if tiered is None:
            slots[index] = segment
        else:
            candidate = prefix.with_component(tiered.value)
            if try_parse_version(str(candidate)) != candidate:
                logger.warning(
                    "PARSE",
                    f"Appending {tiered.value} to {prefix} did not yield a valid "
                    f"version while parsing {text!r}; this should not be possible",
                )
                slots[index] = segment
            else:
                version = candidate
                slots[index] = tiered.excess + remainder

        for later in range(index + 1, min(len(segments), MAX_COMPONENTS)):
            slots[later] = segments[later]

        outcome = ParseOutcome.partial(index + 1)
        logger.verbose(
            "PARSE",
            f"{text!r} parsed as {version} ({outcome.name})",
        )
        return ParseResult(
            raw=text,
            version=version,
            leftovers=LeftoverRecord(*slots, excess=excess),
            outcome=outcome,
        )


def parse_flexible_version(
    text: str,
    *,
    capabilities: NumericCapabilities | None = None,
    logger: Logger | None = None,
) -> ParseResult:
    """Parse 'text' with a one-off FlexibleVersionParser."""
    return FlexibleVersionParser(capabilities=capabilities, logger=logger).parse(text)
