"""
Tests for flexversion.freshness module.

Tests the installed-vs-published check including:
- Feed URL construction and JSONPath extraction
- Picking the highest usable published version
- Header environment expansion
- Network and configuration error handling
"""

from __future__ import annotations

import pytest
import requests
import requests_mock

from flexversion.exceptions import ConfigError, NetworkError
from flexversion.freshness import (
    check_freshness,
    fetch_published_versions,
    latest_version,
)
from flexversion.results import FreshnessResult
from flexversion.versioning import ParseOutcome

NUGET_URL = "https://api.nuget.org/v3-flatcontainer/newtonsoft.json/index.json"
CUSTOM_FEED = "https://feed.example.com/{package}/releases.json"


class TestFetchPublishedVersions:
    """Tests for fetch_published_versions."""

    def test_default_feed_lowercases_package(self, nuget_feed_response, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json=nuget_feed_response)

            versions = fetch_published_versions(
                "Newtonsoft.Json", logger=recording_logger
            )

        assert versions == ["1.0.0", "1.2.0", "1.10.0-preview1", "garbage"]

    def test_nested_versions_path(self, recording_logger):
        payload = {"releases": [{"version": "2.0.1"}, {"version": "2.1.0"}]}
        with requests_mock.Mocker() as m:
            m.get("https://feed.example.com/tool/releases.json", json=payload)

            versions = fetch_published_versions(
                "Tool",
                feed_url=CUSTOM_FEED,
                versions_path="releases[*].version",
                logger=recording_logger,
            )

        assert versions == ["2.0.1", "2.1.0"]

    def test_headers_expand_environment(self, monkeypatch, recording_logger):
        monkeypatch.setenv("FEED_TOKEN", "secret")
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json={"versions": ["1.0"]})

            fetch_published_versions(
                "Newtonsoft.Json",
                headers={"Authorization": "${FEED_TOKEN}", "X-Client": "flexver"},
                logger=recording_logger,
            )

            sent = m.last_request.headers
        assert sent["Authorization"] == "secret"
        assert sent["X-Client"] == "flexver"

    def test_missing_environment_header_is_dropped(self, monkeypatch, recording_logger):
        monkeypatch.delenv("FEED_TOKEN", raising=False)
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json={"versions": ["1.0"]})

            fetch_published_versions(
                "Newtonsoft.Json",
                headers={"Authorization": "${FEED_TOKEN}"},
                logger=recording_logger,
            )

            assert "Authorization" not in m.last_request.headers

    def test_http_error_raises_network_error(self, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, status_code=404, reason="Not Found")

            with pytest.raises(NetworkError, match="404"):
                fetch_published_versions("Newtonsoft.Json", logger=recording_logger)

    def test_connection_error_raises_network_error(self, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, exc=requests.exceptions.ConnectTimeout)

            with pytest.raises(NetworkError, match="Failed to call feed"):
                fetch_published_versions("Newtonsoft.Json", logger=recording_logger)

    def test_invalid_json_raises_network_error(self, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, text="<html>not json</html>")

            with pytest.raises(NetworkError, match="Invalid JSON"):
                fetch_published_versions("Newtonsoft.Json", logger=recording_logger)

    def test_unmatched_path_raises_config_error(self, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json={"items": []})

            with pytest.raises(ConfigError, match="did not match"):
                fetch_published_versions("Newtonsoft.Json", logger=recording_logger)

    def test_invalid_path_raises_config_error(self, recording_logger):
        with pytest.raises(ConfigError, match="Invalid versions_path"):
            fetch_published_versions(
                "Newtonsoft.Json", versions_path="versions[", logger=recording_logger
            )


class TestLatestVersion:
    """Tests for latest_version."""

    def test_picks_highest_usable(self):
        latest = latest_version(["1.2.0", "1.10.0-preview1", "garbage", "1.9"])
        assert latest.raw == "1.10.0-preview1"
        assert latest.version == (1, 10, 0, -1)

    def test_none_when_nothing_usable(self):
        assert latest_version(["garbage", "x"]) is None
        assert latest_version([]) is None


class TestCheckFreshness:
    """Tests for check_freshness."""

    def test_outdated(self, nuget_feed_response, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json=nuget_feed_response)

            result = check_freshness(
                "Newtonsoft.Json", "1.2.0", logger=recording_logger
            )

        assert isinstance(result, FreshnessResult)
        assert result.is_outdated
        assert result.latest == "1.10.0-preview1"
        assert result.latest_version == (1, 10, 0, -1)
        assert result.latest_outcome is ParseOutcome.PARTIAL_BUILD
        assert result.installed_version == (1, 2, 0, -1)
        assert result.installed_outcome is ParseOutcome.FULL_SUCCESS
        assert result.candidate_count == 4

    def test_up_to_date(self, nuget_feed_response, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json=nuget_feed_response)

            result = check_freshness(
                "Newtonsoft.Json", "1.10.0.0", logger=recording_logger
            )

        assert not result.is_outdated

    def test_unparseable_installed_is_outdated(self, nuget_feed_response, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json=nuget_feed_response)

            result = check_freshness(
                "Newtonsoft.Json", "unknown", logger=recording_logger
            )

        assert result.installed_outcome is ParseOutcome.FAILURE
        assert result.is_outdated

    def test_feed_without_usable_versions(self, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json={"versions": ["garbage"]})

            result = check_freshness(
                "Newtonsoft.Json", "1.0", logger=recording_logger
            )

        assert result.latest is None
        assert result.latest_version is None
        assert not result.is_outdated

    def test_to_dict(self, nuget_feed_response, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json=nuget_feed_response)

            data = check_freshness(
                "Newtonsoft.Json", "1.2.0", logger=recording_logger
            ).to_dict()

        assert data["latest"] == "1.10.0-preview1"
        assert data["latest_outcome"] == "PARTIAL_BUILD"
        assert data["is_outdated"] is True

    def test_to_dict_full_success_latest(self, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json={"versions": ["5.5.0", "5.6.1"]})

            data = check_freshness(
                "Newtonsoft.Json", "5.5.0", logger=recording_logger
            ).to_dict()

        assert data["latest"] == "5.6.1"
        assert data["latest_outcome"] == "FULL_SUCCESS"
        assert data["installed_outcome"] == "FULL_SUCCESS"

    def test_to_dict_without_latest(self, recording_logger):
        with requests_mock.Mocker() as m:
            m.get(NUGET_URL, json={"versions": ["garbage"]})

            data = check_freshness(
                "Newtonsoft.Json", "1.0", logger=recording_logger
            ).to_dict()

        assert data["latest"] is None
        assert data["latest_outcome"] is None
