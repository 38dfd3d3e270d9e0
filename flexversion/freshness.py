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

"""
Package freshness check for flexversion.

Compares an installed version string against the versions published in a
JSON feed. Both sides go through the flexible parser, so feeds that mix
"5.5.0", "5.6.0-rc1" and "2024.1.15.1.hotfix" still produce an ordering.

Workflow:
    1. Build the feed URL ({package} placeholder, lower-cased id)
    2. GET the feed and decode JSON
    3. Extract every candidate version with a JSONPath expression
    4. Parse every candidate; pick the highest usable one
    5. Compare it against the parsed installed version

Feed Configuration:
    - **feed_url** (str): URL template with a {package} placeholder. Default
      is the NuGet v3 flat-container index, which is also what the
      PowerShell Gallery exposes.
    - **versions_path** (str): JSONPath selecting version strings. Default
      "versions[*]" (every entry of the flat-container "versions" list).
    - **headers** (dict, optional): Extra HTTP headers. Values of the form
      "${VAR}" are read from the environment.
    - **timeout** (int, optional): Request timeout in seconds. Default 30.

Error Handling:
    - NetworkError: HTTP errors, connection failures, invalid JSON
    - ConfigError: invalid JSONPath, or a path that matches nothing
    - Errors are chained with 'from err' for better debugging

Example:
    Check a module against the NuGet feed:

        from flexversion.freshness import check_freshness

        result = check_freshness("Newtonsoft.Json", "12.0.3")
        if result.is_outdated:
            print(f"Update available: {result.latest}")

Notes:
- Unparseable installed versions are treated as older than any usable
  published version
- Feed entries that fail to parse are ignored when picking the latest
"""

from __future__ import annotations

import json
import os
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
import requests

from flexversion.exceptions import ConfigError, NetworkError
from flexversion.logging import Logger, get_global_logger
from flexversion.results import FreshnessResult
from flexversion.versioning import FlexibleVersionParser, ParseResult, version_key

DEFAULT_FEED_URL = "https://api.nuget.org/v3-flatcontainer/{package}/index.json"
DEFAULT_VERSIONS_PATH = "versions[*]"
DEFAULT_TIMEOUT = 30


def _expand_headers(headers: dict[str, Any], logger: Logger) -> dict[str, str]:
    """Expand "${VAR}" header values from the environment."""
    expanded: dict[str, str] = {}
    for key, value in headers.items():
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            env_value = os.environ.get(env_var)
            if not env_value:
                logger.verbose(
                    "FRESHNESS", f"Warning: Environment variable {env_var} not set"
                )
            else:
                expanded[key] = env_value
        else:
            expanded[key] = str(value)
    return expanded


def fetch_published_versions(
    package: str,
    *,
    feed_url: str = DEFAULT_FEED_URL,
    versions_path: str = DEFAULT_VERSIONS_PATH,
    timeout: float = DEFAULT_TIMEOUT,
    headers: dict[str, Any] | None = None,
    logger: Logger | None = None,
) -> list[str]:
    """Query a JSON feed and return every published version string.

    Args:
        package: Package identifier substituted into feed_url.
        feed_url: URL template with a {package} placeholder.
        versions_path: JSONPath expression selecting version strings.
        timeout: Request timeout in seconds.
        headers: Extra HTTP headers; "${VAR}" values come from the environment.
        logger: Logger for diagnostics. Defaults to the global logger.

    Returns:
        Version strings in feed order.

    Raises:
        NetworkError: If the request fails or the response is not JSON.
        ConfigError: If versions_path is invalid or matches nothing.

    """
    if logger is None:
        logger = get_global_logger()

    try:
        version_expr = jsonpath_parse(versions_path)
    except Exception as err:
        raise ConfigError(f"Invalid versions_path JSONPath {versions_path!r}: {err}") from err

    url = feed_url.replace("{package}", package.lower())
    logger.verbose("FRESHNESS", f"Calling feed: GET {url}")
    try:
        response = requests.get(
            url, headers=_expand_headers(headers or {}, logger), timeout=timeout
        )
        response.raise_for_status()
    except requests.exceptions.HTTPError as err:
        raise NetworkError(
            f"Feed request failed: {response.status_code} {response.reason}"
        ) from err
    except requests.exceptions.RequestException as err:
        raise NetworkError(f"Failed to call feed: {err}") from err

    logger.verbose("FRESHNESS", f"Feed response: {response.status_code} OK")

    try:
        json_data = response.json()
    except (json.JSONDecodeError, ValueError) as err:
        raise NetworkError(
            f"Invalid JSON response from feed. Response: {response.text[:200]}"
        ) from err

    matches = version_expr.find(json_data)
    if not matches:
        raise ConfigError(
            f"versions_path {versions_path!r} did not match anything in feed response"
        )

    versions = [str(m.value) for m in matches]
    logger.debug("FRESHNESS", f"Feed lists {len(versions)} version(s)")
    return versions


def latest_version(
    candidates: list[str], *, parser: FlexibleVersionParser | None = None
) -> ParseResult | None:
    """Return the highest usable parsed candidate, or None."""
    parser = parser or FlexibleVersionParser()
    usable = [r for r in (parser.parse(c) for c in candidates) if r.is_usable]
    if not usable:
        return None
    return max(usable, key=version_key)


def check_freshness(
    package: str,
    installed: str,
    *,
    feed_url: str = DEFAULT_FEED_URL,
    versions_path: str = DEFAULT_VERSIONS_PATH,
    timeout: float = DEFAULT_TIMEOUT,
    headers: dict[str, Any] | None = None,
    parser: FlexibleVersionParser | None = None,
    logger: Logger | None = None,
) -> FreshnessResult:
    """Compare an installed version against the newest published one.

    Args:
        package: Package identifier substituted into feed_url.
        installed: Installed version string.
        feed_url: URL template with a {package} placeholder.
        versions_path: JSONPath expression selecting version strings.
        timeout: Request timeout in seconds.
        headers: Extra HTTP headers.
        parser: Parser to use for both sides. Defaults to a new parser.
        logger: Logger for diagnostics. Defaults to the global logger.

    Returns:
        Freshness result. is_outdated is False when the feed held no
            usable version.

    Raises:
        NetworkError: If the feed cannot be fetched or decoded.
        ConfigError: If versions_path is invalid or matches nothing.

    Example:
        >>> result = check_freshness("Pester", "5.5.0")
        >>> result.latest
        '5.6.1'

    """
    if logger is None:
        logger = get_global_logger()
    parser = parser or FlexibleVersionParser(logger=logger)

    candidates = fetch_published_versions(
        package,
        feed_url=feed_url,
        versions_path=versions_path,
        timeout=timeout,
        headers=headers,
        logger=logger,
    )
    current = parser.parse(installed)
    if not current.is_usable:
        logger.verbose("FRESHNESS", f"Installed version {installed!r} is unparseable")

    latest = latest_version(candidates, parser=parser)
    if latest is None:
        logger.verbose("FRESHNESS", f"No usable version published for {package}")
        is_outdated = False
    else:
        is_outdated = version_key(latest) > version_key(current)
        logger.verbose(
            "FRESHNESS",
            f"{package}: installed {installed!r}, latest {latest.raw!r}"
            f" ({'outdated' if is_outdated else 'up to date'})",
        )

    return FreshnessResult(
        package=package,
        installed=installed,
        installed_version=current.version,
        installed_outcome=current.outcome,
        latest=latest.raw if latest else None,
        latest_version=latest.version if latest else None,
        latest_outcome=latest.outcome if latest else None,
        is_outdated=is_outdated,
        candidate_count=len(candidates),
    )
