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
Configuration loading and merging for flexversion.

Settings come from up to three layers, merged in order:

1. **Built-in defaults** (DEFAULT_CONFIG)
   - Every numeric tier enabled
   - NuGet v3 flat-container feed for freshness checks

2. **User config** (path in the FLEXVERSION_CONFIG environment variable)
   - Optional; machine- or user-wide overrides

3. **Project config** (explicit path, or flexversion.yaml found by walking
   upward from the working directory)
   - Optional; overrides everything else

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Config File
-----------
    apiVersion: flexversion/v1
    parser:
      numeric_tiers:
        big_integer: true
        floating_point: true
    freshness:
      feed_url: "https://api.nuget.org/v3-flatcontainer/{package}/index.json"
      versions_path: "versions[*]"
      timeout: 30
      headers: {}

Functions
---------
load_effective_config : function
    Load and merge configuration (main public API).
capabilities_from_config : function
    Build NumericCapabilities from a merged config.

Error Handling
--------------
- ConfigError: missing file, invalid YAML, empty file, non-mapping
  document, unsupported apiVersion, wrongly typed settings
- All errors are chained with "from err" for better debugging

Examples
--------
    >>> from pathlib import Path
    >>> from flexversion.config import load_effective_config
    >>> cfg = load_effective_config(Path("flexversion.yaml"))
    >>> cfg["parser"]["numeric_tiers"]["big_integer"]
    True
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from flexversion.exceptions import ConfigError
from flexversion.freshness import (
    DEFAULT_FEED_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_VERSIONS_PATH,
)
from flexversion.versioning import NumericCapabilities

CONFIG_FILENAME = "flexversion.yaml"
CONFIG_ENV_VAR = "FLEXVERSION_CONFIG"
SUPPORTED_API_VERSIONS = ("flexversion/v1",)

DEFAULT_CONFIG: dict[str, Any] = {
    "apiVersion": "flexversion/v1",
    "parser": {
        "numeric_tiers": {
            "big_integer": True,
            "floating_point": True,
        },
    },
    "freshness": {
        "feed_url": DEFAULT_FEED_URL,
        "versions_path": DEFAULT_VERSIONS_PATH,
        "timeout": DEFAULT_TIMEOUT,
        "headers": {},
    },
}

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Loads a YAML file and returns the parsed Python object.

    Args:
        p: Path to the YAML file to load.

    Returns:
        The parsed Python object from the YAML file.

    Raises:
        ConfigError: When file does not exist, invalid YAML (parse error), or empty files.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merges two dicts with "overlay wins" semantics.

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            # Replace lists and scalars entirely
            result[k] = v
    return result


# -------------------------------
# Discovery and validation
# -------------------------------


def _find_project_config(start_dir: Path) -> Path | None:
    """Walks upward from start_dir looking for flexversion.yaml."""
    for parent in [start_dir] + list(start_dir.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _validate_config(cfg: dict[str, Any]) -> None:
    """Checks the merged config for a supported apiVersion and field types."""
    api_version = cfg.get("apiVersion")
    if api_version not in SUPPORTED_API_VERSIONS:
        raise ConfigError(
            f"unsupported apiVersion {api_version!r}; "
            f"expected one of {', '.join(SUPPORTED_API_VERSIONS)}"
        )

    parser_cfg = cfg.get("parser")
    if not isinstance(parser_cfg, dict):
        raise ConfigError("parser must be a mapping")
    tiers = parser_cfg.get("numeric_tiers")
    if not isinstance(tiers, dict):
        raise ConfigError("parser.numeric_tiers must be a mapping")
    for name in ("big_integer", "floating_point"):
        if not isinstance(tiers.get(name), bool):
            raise ConfigError(f"parser.numeric_tiers.{name} must be true or false")

    freshness = cfg.get("freshness")
    if not isinstance(freshness, dict):
        raise ConfigError("freshness must be a mapping")
    for name in ("feed_url", "versions_path"):
        value = freshness.get(name)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"freshness.{name} must be a non-empty string")
    timeout = freshness.get("timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("freshness.timeout must be a positive number")
    if not isinstance(freshness.get("headers"), dict):
        raise ConfigError("freshness.headers must be a mapping")


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(config_path: Path | None = None) -> dict[str, Any]:
    """Loads and merges the effective configuration.

    Performs the following operations:

    1. Start from DEFAULT_CONFIG
    2. Merge the user config named by FLEXVERSION_CONFIG, if set
    3. Merge the project config (config_path, or flexversion.yaml found
       by walking upward from the working directory)
    4. Validate the merged result

    Args:
        config_path: Explicit project config file. Must exist when given.

    Returns:
        A merged configuration dict.

    Raises:
        ConfigError: On YAML parse errors, empty files, invalid structure,
            invalid settings, or if an explicitly named file is missing.
    """
    from flexversion.logging import get_global_logger

    logger = get_global_logger()
    merged: dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
    layers_merged = 1

    user_path = os.environ.get(CONFIG_ENV_VAR)
    if user_path:
        logger.verbose("CONFIG", f"Loading user config: {user_path}")
        merged = _deep_merge_dicts(merged, _load_yaml_file(Path(user_path)))
        layers_merged += 1

    if config_path is None:
        config_path = _find_project_config(Path.cwd())
        if config_path is not None:
            logger.verbose("CONFIG", f"Found project config: {config_path}")

    if config_path is not None:
        logger.verbose("CONFIG", f"Loading: {config_path}")
        project = _load_yaml_file(Path(config_path))
        logger.debug("CONFIG", f"--- Content from {Path(config_path).name} ---")
        logger.debug("CONFIG", yaml.dump(project, default_flow_style=False).rstrip())
        merged = _deep_merge_dicts(merged, project)
        layers_merged += 1

    logger.verbose("CONFIG", f"Deep merging {layers_merged} layer(s)")
    _validate_config(merged)
    return merged


def capabilities_from_config(cfg: dict[str, Any]) -> NumericCapabilities:
    """Builds the parser's numeric capabilities from a merged config."""
    tiers = cfg["parser"]["numeric_tiers"]
    return NumericCapabilities(
        big_integer=tiers["big_integer"],
        floating_point=tiers["floating_point"],
    )
