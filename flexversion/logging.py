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

"""Logging interface for flexversion.

Library modules write their output through this interface instead of
printing directly, so the CLI (or any embedding application) decides how
much is shown. A logger can be configured globally or passed to a function
as a parameter for better isolation.

The logger supports three output channels:

- Verbose: Only printed when verbose mode is enabled
- Debug: Only printed when debug mode is enabled (implies verbose)
- Warning: Always printed to stderr (internal-consistency violations)

Example:
    Configure global logger:
        ```python
        from flexversion.logging import get_logger, set_global_logger

        logger = get_logger(verbose=True, debug=False)
        set_global_logger(logger)
        ```

    Use in library code:
        ```python
        from flexversion.logging import get_global_logger

        logger = get_global_logger()
        logger.verbose("PARSE", "Direct conversion failed, repairing...")
        logger.debug("NUMERIC", "int32 overflow, trying int64")
        ```

    Use with dependency injection:

        def my_function(logger=None):
            if logger is None:
                logger = get_global_logger()
            logger.verbose("MODULE", "Processing...")

Note:
    The default global logger is a non-verbose DefaultLogger: verbose and
    debug messages are dropped, but warnings still reach stderr. Use
    SilentLogger to suppress warnings as well.
"""

from __future__ import annotations

import sys
from typing import Protocol


class Logger(Protocol):
    """Protocol for logger implementations."""

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "PARSE", "FRESHNESS").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "NUMERIC", "HTTP").
            message: Log message.
        """
        ...

    def warning(self, prefix: str, message: str) -> None:
        """Print a warning that operators should see regardless of verbosity.

        Args:
            prefix: Message prefix (e.g., "PARSE").
            message: Warning message.
        """
        ...


class DefaultLogger:
    """Default logger implementation that prints to stdout.

    This logger respects verbose and debug flags and formats output
    consistently with the CLI output format. Warnings go to stderr.
    """

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        """Initialize logger with verbosity settings.

        Args:
            verbose: If True, print verbose messages.
            debug: If True, print debug messages (implies verbose).
        """
        self._verbose = verbose or debug
        self._debug = debug

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message (only when verbose mode is active)."""
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message (only when debug mode is active)."""
        if self._debug:
            print(f"[{prefix}] {message}")

    def warning(self, prefix: str, message: str) -> None:
        """Print a warning to stderr."""
        print(f"[WARNING] [{prefix}] {message}", file=sys.stderr)


class SilentLogger:
    """Logger that suppresses all output.

    Useful for programmatic usage when output is not desired.
    """

    def verbose(self, prefix: str, message: str) -> None:
        """Suppress verbose output."""
        pass

    def debug(self, prefix: str, message: str) -> None:
        """Suppress debug output."""
        pass

    def warning(self, prefix: str, message: str) -> None:
        """Suppress warning output."""
        pass


# Global logger instance (warnings only)
_global_logger: Logger = DefaultLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Get a logger instance with specified verbosity.

    Args:
        verbose: If True, logger will print verbose messages.
        debug: If True, logger will print debug messages (implies verbose).

    Returns:
        A logger instance configured with the specified verbosity.

    Example:
        Get a debug logger:
            ```python
            logger = get_logger(debug=True)
            logger.debug("NUMERIC", "Tier: int64")
            ```
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Get the global logger instance.

    Returns:
        The current global logger instance.
    """
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger instance to use as the global logger.

    Note:
        This affects all library functions that fall back to
        get_global_logger() when no logger is passed. For better isolation,
        pass logger instances directly instead.
    """
    global _global_logger
    _global_logger = logger
