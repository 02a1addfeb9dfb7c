"""composer.json and composer.lock parsing."""

import json
import logging
from pathlib import Path
from typing import Any

from .errors import ManifestError
from .models import (
    NOT_FOUND,
    REQUIRE,
    REQUIRE_DEV,
    ComposerLock,
    ComposerManifest,
    LockedPackage,
    PackageRef,
)

logger = logging.getLogger(__name__)


class ComposerParser:
    """Parser for composer.json and composer.lock documents."""

    def _load_document(self, content: str, source: str) -> dict[str, Any]:
        """Decode a JSON document that must be an object."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestError(f"{source} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(f"{source} must contain a JSON object")

        return data

    def _section_names(self, data: dict[str, Any], section: str, source: str) -> list[str]:
        """Return the package names declared in a manifest section."""
        value = data.get(section)
        if value is None:
            return []

        # An empty PHP array is written as [] rather than {}
        if isinstance(value, list) and not value:
            return []

        if not isinstance(value, dict):
            raise ManifestError(f"'{section}' in {source} must be an object")

        return list(value)

    def _locked_packages(self, records: Any, field_name: str, source: str) -> list[LockedPackage]:
        """Convert raw lock records into LockedPackage entries."""
        if records is None:
            return []

        if not isinstance(records, list):
            raise ManifestError(f"'{field_name}' in {source} must be a list")

        packages: list[LockedPackage] = []
        for record in records:
            if not isinstance(record, dict) or not isinstance(record.get("name"), str):
                logger.debug("Skipping malformed %s record: %r", field_name, record)
                continue

            version = record.get("version")
            packages.append(
                LockedPackage(
                    name=record["name"],
                    version=version if isinstance(version, str) else NOT_FOUND,
                )
            )

        return packages

    def parse_manifest(self, content: str, source: str = "composer.json") -> ComposerManifest:
        """Parse composer.json content into ComposerManifest."""
        data = self._load_document(content, source)
        return ComposerManifest(
            require=self._section_names(data, REQUIRE, source),
            require_dev=self._section_names(data, REQUIRE_DEV, source),
        )

    def parse_lock(self, content: str, source: str = "composer.lock") -> ComposerLock:
        """Parse composer.lock content into ComposerLock."""
        data = self._load_document(content, source)
        return ComposerLock(
            packages=self._locked_packages(data.get("packages"), "packages", source),
            packages_dev=self._locked_packages(data.get("packages-dev"), "packages-dev", source),
        )


def parse_composer_json(content: str) -> ComposerManifest:
    """Parse composer.json content into ComposerManifest.

    Args:
        content: The composer.json file content

    Returns:
        Parsed ComposerManifest object
    """
    return ComposerParser().parse_manifest(content)


def parse_composer_lock(content: str) -> ComposerLock:
    """Parse composer.lock content into ComposerLock.

    Args:
        content: The composer.lock file content

    Returns:
        Parsed ComposerLock object
    """
    return ComposerParser().parse_lock(content)


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise ManifestError(f"File {path} not found")

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Unable to read {path}: {e}") from e


def load_manifest(path: Path) -> ComposerManifest:
    """Read and parse a composer.json file."""
    return ComposerParser().parse_manifest(_read_text(path), str(path))


def load_lock(path: Path) -> ComposerLock:
    """Read and parse a composer.lock file."""
    return ComposerParser().parse_lock(_read_text(path), str(path))


def enumerate_packages(manifest: ComposerManifest) -> list[PackageRef]:
    """List declared packages in report order.

    Runtime requirements come first, then development requirements, each in
    declaration order. A name declared in both sections is reported once,
    under require.
    """
    refs = [PackageRef(name=name, section=REQUIRE) for name in manifest.require]
    seen = set(manifest.require)

    for name in manifest.require_dev:
        if name in seen:
            continue
        seen.add(name)
        refs.append(PackageRef(name=name, section=REQUIRE_DEV))

    return refs


def resolve_installed_version(
    package_name: str, lock: ComposerLock, include_dev: bool = False
) -> str:
    """Get the installed version of a package from composer.lock.

    Args:
        package_name: Exact (case-sensitive) package name
        lock: Parsed lock file
        include_dev: Also search the lock's packages-dev list

    Returns:
        Version of the package or 'Not found' if it is not locked
    """
    records = lock.packages + lock.packages_dev if include_dev else lock.packages
    for package in records:
        if package.name == package_name:
            return package.version

    return NOT_FOUND
