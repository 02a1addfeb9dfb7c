"""Run configuration for composer-report."""

from dataclasses import dataclass
from pathlib import Path

from .resolve_composer import (
    DEFAULT_PACKAGIST_URL,
    ComposerShowOracle,
    PackagistOracle,
    VersionOracle,
)

SOURCES = ("composer", "packagist")


@dataclass(frozen=True)
class ReportContext:
    """Paths and lookup settings for a single report run."""

    manifest_path: Path
    lock_path: Path
    output_path: Path
    project_dir: Path = Path(".")
    composer_binary: str = "composer"
    timeout: float | None = None
    source: str = "composer"
    packagist_url: str = DEFAULT_PACKAGIST_URL
    include_dev_lock: bool = False

    @classmethod
    def from_directory(
        cls,
        project_dir: Path,
        manifest: str = "composer.json",
        lock: str = "composer.lock",
        output: str = "composer_package_versions.csv",
        **settings,
    ) -> "ReportContext":
        """Build a context with file names resolved against project_dir.

        Absolute file names are kept as given.
        """
        return cls(
            manifest_path=project_dir / manifest,
            lock_path=project_dir / lock,
            output_path=project_dir / output,
            project_dir=project_dir,
            **settings,
        )

    def build_oracle(self) -> VersionOracle:
        """Create the version oracle selected by `source`."""
        if self.source == "composer":
            return ComposerShowOracle(
                binary=self.composer_binary,
                timeout=self.timeout,
                cwd=self.project_dir,
            )
        if self.source == "packagist":
            return PackagistOracle(base_url=self.packagist_url, timeout=self.timeout)

        raise ValueError(f"Unsupported version source: {self.source}")
