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

"""Exception hierarchy for flexversion.

Malformed version strings are never reported through exceptions; the parser
expresses them as ParseOutcome codes. The exceptions below cover the
surrounding layers:

- ConfigError: Configuration-related errors (YAML parse, missing files,
  invalid fields, bad JSONPath expressions)
- NetworkError: Feed request errors (HTTP failures, invalid JSON)

All exceptions inherit from FlexVersionError, allowing users to catch every
library error with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from flexversion.freshness import check_freshness
        from flexversion.exceptions import ConfigError, NetworkError

        try:
            result = check_freshness("Pester", "5.5.0")
        except NetworkError as e:
            print(f"Network error: {e}")
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "FlexVersionError",
    "ConfigError",
    "NetworkError",
]


class FlexVersionError(Exception):
    """Base exception for all flexversion errors."""

    pass


class ConfigError(FlexVersionError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, empty documents, non-mapping documents)
    - Missing configuration files
    - Unsupported apiVersion or wrongly typed settings
    - JSONPath expressions that are invalid or match nothing
    """

    pass


class NetworkError(FlexVersionError):
    """Raised for network-related errors.

    This exception is raised when there are problems with:

    - HTTP errors and connection failures while querying a version feed
    - Feed responses that are not valid JSON
    """

    pass
