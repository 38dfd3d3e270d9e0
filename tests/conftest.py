"""
Pytest configuration and shared fixtures for flexversion tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from flexversion.logging import get_global_logger, set_global_logger
from flexversion.versioning import FlexibleVersionParser


class RecordingLogger:
    """Logger that keeps every message for later assertions."""

    def __init__(self) -> None:
        self.verbose_messages: list[tuple[str, str]] = []
        self.debug_messages: list[tuple[str, str]] = []
        self.warnings: list[tuple[str, str]] = []

    def verbose(self, prefix: str, message: str) -> None:
        self.verbose_messages.append((prefix, message))

    def debug(self, prefix: str, message: str) -> None:
        self.debug_messages.append((prefix, message))

    def warning(self, prefix: str, message: str) -> None:
        self.warnings.append((prefix, message))


@pytest.fixture(autouse=True)
def restore_global_logger():
    """Undo set_global_logger() calls made by a test (the CLI makes them)."""
    original = get_global_logger()
    yield
    set_global_logger(original)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Provide a fresh in-memory logger."""
    return RecordingLogger()


@pytest.fixture
def parser(recording_logger: RecordingLogger) -> FlexibleVersionParser:
    """Provide a parser with every numeric tier enabled and a recording logger."""
    return FlexibleVersionParser(logger=recording_logger)


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """
    Run the test from an empty directory with no user config set.

    Keeps a flexversion.yaml elsewhere on the machine from leaking in.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FLEXVERSION_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def create_yaml_file(tmp_path: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("flexversion.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def nuget_feed_response() -> dict[str, Any]:
    """Provide a flat-container style feed listing mixed-quality versions."""
    return {
        "versions": [
            "1.0.0",
            "1.2.0",
            "1.10.0-preview1",
            "garbage",
        ]
    }
