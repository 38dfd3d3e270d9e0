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

"""Configuration loading for flexversion.

Settings are layered YAML:

  - Built-in defaults
  - User config (FLEXVERSION_CONFIG environment variable)
  - Project config (flexversion.yaml, or an explicit path)

Dicts are merged recursively; lists and scalars are replaced (last wins).

Public API:

- load_effective_config: Load and merge configuration
- capabilities_from_config: Numeric tier switches for the parser

Example:
    Basic usage:

        from flexversion.config import capabilities_from_config, load_effective_config
        from flexversion.versioning import FlexibleVersionParser

        cfg = load_effective_config()
        parser = FlexibleVersionParser(capabilities=capabilities_from_config(cfg))

"""

from .loader import DEFAULT_CONFIG, capabilities_from_config, load_effective_config

__all__ = ["DEFAULT_CONFIG", "capabilities_from_config", "load_effective_config"]
