"""Latest version lookup for Composer packages."""

import logging
import re
import subprocess
from pathlib import Path
from typing import Any, Protocol

import httpx
from packaging.version import InvalidVersion, Version

from .models import UNKNOWN

logger = logging.getLogger(__name__)

LATEST_PATTERN = re.compile(r"latest\s*:\s*(\S+)")

DEFAULT_PACKAGIST_URL = "https://repo.packagist.org"


class VersionOracle(Protocol):
    """Anything that can name the latest released version of a package."""

    def fetch_latest(self, package_name: str) -> str:
        ...


def extract_latest(output: str | None) -> str:
    """Pull the latest version out of `composer show --latest` output.

    Args:
        output: Text printed by composer, possibly empty

    Returns:
        The version token following 'latest :' or 'Unknown' if absent
    """
    if not output:
        return UNKNOWN

    match = LATEST_PATTERN.search(output)
    if match:
        return match.group(1)

    return UNKNOWN


class ComposerShowOracle:
    """Version oracle backed by the composer executable."""

    def __init__(
        self,
        binary: str = "composer",
        timeout: float | None = None,
        cwd: Path | None = None,
    ):
        """Initialize the composer oracle.

        Args:
            binary: Composer executable name or path
            timeout: Seconds to wait for each call, None waits indefinitely
            cwd: Directory composer runs in (the project root)
        """
        self.binary = binary
        self.timeout = timeout
        self.cwd = cwd

    def build_command(self, package_name: str) -> list[str]:
        return [self.binary, "show", package_name, "--latest", "--no-ansi"]

    def fetch_latest(self, package_name: str) -> str:
        """Get the latest available version of a package using composer.

        Args:
            package_name: Name of the package

        Returns:
            Latest version of the package or 'Unknown' if unable to determine
        """
        command = self.build_command(package_name)
        logger.debug("Running %s", " ".join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                cwd=self.cwd,
            )
        except subprocess.TimeoutExpired:
            logger.warning("composer show %s timed out after %ss", package_name, self.timeout)
            return UNKNOWN
        except OSError as e:
            logger.warning("Unable to run %s: %s", self.binary, e)
            return UNKNOWN

        latest = extract_latest(result.stdout)
        if latest == UNKNOWN:
            logger.debug(
                "No latest version in composer output for %s (exit %s): %s",
                package_name,
                result.returncode,
                result.stderr.strip(),
            )
        return latest


class PackagistOracle:
    """Version oracle that queries the Packagist metadata API."""

    def __init__(
        self,
        base_url: str = DEFAULT_PACKAGIST_URL,
        timeout: float | None = 30.0,
        client: httpx.Client | None = None,
    ):
        """Initialize the Packagist oracle.

        Args:
            base_url: Repository root serving /p2/<vendor>/<package>.json
            timeout: Request timeout in seconds
            client: Pre-configured HTTP client, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def fetch_latest(self, package_name: str) -> str:
        """Get the latest stable version of a package from Packagist.

        Args:
            package_name: Name of the package

        Returns:
            Latest stable version or 'Unknown' if unable to determine
        """
        metadata = self._fetch_package_metadata(package_name)
        if not metadata:
            return UNKNOWN

        packages = metadata.get("packages")
        releases = packages.get(package_name) if isinstance(packages, dict) else None
        if not isinstance(releases, list):
            logger.debug("No releases listed for %s", package_name)
            return UNKNOWN

        return self._latest_stable(releases) or UNKNOWN

    def _latest_stable(self, releases: list[Any]) -> str | None:
        """Pick the highest non-prerelease version from a release list."""
        best: tuple[Version, str] | None = None

        for release in releases:
            if not isinstance(release, dict):
                continue

            pretty = release.get("version")
            normalized = release.get("version_normalized")
            if not isinstance(pretty, str) or not isinstance(normalized, str):
                continue

            try:
                version = Version(normalized)
            except InvalidVersion:
                continue  # dev branches and other non-release versions

            if version.is_prerelease:
                continue

            if best is None or version > best[0]:
                best = (version, pretty)

        return best[1] if best else None

    def _fetch_package_metadata(self, package_name: str) -> dict | None:
        """Fetch package metadata from Packagist.

        Args:
            package_name: Name of the package

        Returns:
            Package metadata dict or None if it could not be retrieved
        """
        url = f"{self.base_url}/p2/{package_name}.json"
        logger.debug("Fetching %s", url)

        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url)

            if response.status_code == 404:
                logger.debug("Package %s not found on Packagist", package_name)
                return None
            response.raise_for_status()

            metadata = response.json()
        except httpx.HTTPError as e:
            logger.warning("HTTP error fetching %s: %s", package_name, e)
            return None
        except ValueError as e:
            logger.warning("Invalid metadata for %s: %s", package_name, e)
            return None

        return metadata if isinstance(metadata, dict) else None
