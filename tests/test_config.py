"""
Tests for flexversion.config.loader module.

Tests configuration loading and merging including:
- Built-in defaults
- Layering (defaults -> user -> project)
- Upward discovery of flexversion.yaml
- Validation and error handling
"""

from __future__ import annotations

import pytest

from flexversion.config import (
    DEFAULT_CONFIG,
    capabilities_from_config,
    load_effective_config,
)
from flexversion.exceptions import ConfigError
from flexversion.freshness import (
    DEFAULT_FEED_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_VERSIONS_PATH,
)
from flexversion.versioning import NumericCapabilities


class TestConfigLoading:
    """Tests for basic configuration loading."""

    def test_defaults_without_files(self, isolated_config):
        """Test that built-in defaults apply when no file exists."""
        config = load_effective_config()

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_freshness_defaults_match_fetch_defaults(self, isolated_config):
        freshness = load_effective_config()["freshness"]

        assert freshness["feed_url"] == DEFAULT_FEED_URL
        assert freshness["versions_path"] == DEFAULT_VERSIONS_PATH
        assert freshness["timeout"] == DEFAULT_TIMEOUT

    def test_explicit_project_file(self, isolated_config, create_yaml_file):
        path = create_yaml_file(
            "custom.yaml",
            {"parser": {"numeric_tiers": {"big_integer": False}}},
        )

        config = load_effective_config(path)

        assert config["parser"]["numeric_tiers"]["big_integer"] is False
        # Untouched keys keep their defaults
        assert config["parser"]["numeric_tiers"]["floating_point"] is True
        assert config["freshness"]["timeout"] == 30

    def test_project_file_found_upward(
        self, isolated_config, create_yaml_file, monkeypatch
    ):
        create_yaml_file("flexversion.yaml", {"freshness": {"timeout": 5}})
        nested = isolated_config / "a" / "b"
        nested.mkdir(parents=True)

        monkeypatch.chdir(nested)
        config = load_effective_config()

        assert config["freshness"]["timeout"] == 5

    def test_missing_explicit_file_raises(self, isolated_config):
        with pytest.raises(ConfigError, match="file not found"):
            load_effective_config(isolated_config / "missing.yaml")


class TestConfigMerging:
    """Tests for configuration layering."""

    def test_user_then_project(self, isolated_config, create_yaml_file, monkeypatch):
        user = create_yaml_file(
            "user.yaml",
            {"freshness": {"timeout": 10, "headers": {"X-Team": "ops"}}},
        )
        project = create_yaml_file("project.yaml", {"freshness": {"timeout": 20}})
        monkeypatch.setenv("FLEXVERSION_CONFIG", str(user))

        config = load_effective_config(project)

        assert config["freshness"]["timeout"] == 20
        assert config["freshness"]["headers"] == {"X-Team": "ops"}

    def test_dicts_deep_merge_across_layers(
        self, isolated_config, create_yaml_file, monkeypatch
    ):
        user = create_yaml_file(
            "user.yaml", {"freshness": {"headers": {"A": "1"}}}
        )
        project = create_yaml_file(
            "project.yaml", {"freshness": {"headers": {"B": "2"}}}
        )
        monkeypatch.setenv("FLEXVERSION_CONFIG", str(user))

        config = load_effective_config(project)

        # dicts deep-merge
        assert config["freshness"]["headers"] == {"A": "1", "B": "2"}


class TestConfigErrors:
    """Tests for invalid configuration."""

    def test_invalid_yaml(self, isolated_config):
        path = isolated_config / "bad.yaml"
        path.write_text("parser: [unclosed\n")
        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_effective_config(path)

    def test_empty_file(self, isolated_config):
        path = isolated_config / "empty.yaml"
        path.write_text("")
        with pytest.raises(ConfigError, match="empty"):
            load_effective_config(path)

    def test_non_mapping(self, isolated_config):
        path = isolated_config / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_effective_config(path)

    def test_unsupported_api_version(self, isolated_config, create_yaml_file):
        path = create_yaml_file("v2.yaml", {"apiVersion": "flexversion/v2"})
        with pytest.raises(ConfigError, match="unsupported apiVersion"):
            load_effective_config(path)

    @pytest.mark.parametrize(
        "overlay, match",
        [
            ({"parser": {"numeric_tiers": {"big_integer": "yes"}}}, "big_integer"),
            ({"freshness": {"timeout": 0}}, "timeout"),
            ({"freshness": {"timeout": True}}, "timeout"),
            ({"freshness": {"feed_url": ""}}, "feed_url"),
            ({"freshness": {"headers": ["a"]}}, "headers"),
        ],
    )
    def test_invalid_fields(self, isolated_config, create_yaml_file, overlay, match):
        path = create_yaml_file("bad-fields.yaml", overlay)
        with pytest.raises(ConfigError, match=match):
            load_effective_config(path)


class TestCapabilities:
    """Tests for capabilities_from_config."""

    def test_defaults(self):
        assert capabilities_from_config(DEFAULT_CONFIG) == NumericCapabilities()

    def test_disabled_tiers(self, isolated_config, create_yaml_file):
        path = create_yaml_file(
            "tiers.yaml",
            {"parser": {"numeric_tiers": {"big_integer": False, "floating_point": False}}},
        )
        caps = capabilities_from_config(load_effective_config(path))
        assert caps == NumericCapabilities(big_integer=False, floating_point=False)
