"""Pytest configuration and fixtures."""

import json

import pytest

from core.models import UNKNOWN


class StubOracle:
    """Version oracle returning canned versions without running composer."""

    def __init__(self, versions: dict[str, str]):
        self.versions = versions
        self.calls: list[str] = []

    def fetch_latest(self, package_name: str) -> str:
        self.calls.append(package_name)
        return self.versions.get(package_name, UNKNOWN)


@pytest.fixture
def sample_composer_json():
    """Sample composer.json content for testing."""
    return json.dumps({
        "name": "acme/shop",
        "require": {"vendor/a": "^1.0"},
        "require-dev": {"vendor/b": "^2.0"},
    })


@pytest.fixture
def sample_composer_lock():
    """Sample composer.lock content for testing."""
    return json.dumps({
        "content-hash": "0123456789abcdef",
        "packages": [
            {"name": "vendor/a", "version": "1.2.3"},
            {"name": "vendor/c", "version": "v0.4.0"},
        ],
        "packages-dev": [],
    })


@pytest.fixture
def project_dir(tmp_path, sample_composer_json, sample_composer_lock):
    """Create a temporary project with composer.json and composer.lock."""
    (tmp_path / "composer.json").write_text(sample_composer_json)
    (tmp_path / "composer.lock").write_text(sample_composer_lock)
    return tmp_path


@pytest.fixture
def stub_oracle():
    """Factory for oracles that answer from a name to version mapping."""
    return StubOracle
