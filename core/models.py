"""Core data models for composer-report."""

from dataclasses import dataclass, field

from .compare import upgrade_label as format_upgrade_flag

NOT_FOUND = "Not found"
UNKNOWN = "Unknown"

REQUIRE = "require"
REQUIRE_DEV = "require-dev"


@dataclass(frozen=True)
class ComposerManifest:
    """Direct dependencies declared in composer.json."""

    require: list[str] = field(default_factory=list)
    require_dev: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LockedPackage:
    """A single package record from composer.lock."""

    name: str
    version: str


@dataclass(frozen=True)
class ComposerLock:
    """Resolved packages recorded in composer.lock."""

    packages: list[LockedPackage] = field(default_factory=list)
    packages_dev: list[LockedPackage] = field(default_factory=list)


@dataclass(frozen=True)
class PackageRef:
    """A declared dependency and the manifest section it came from."""

    name: str
    section: str = REQUIRE


@dataclass(frozen=True)
class ReportRow:
    """One line of the version report."""

    name: str
    requires_upgrade: bool
    current_version: str
    latest_version: str
    section: str = REQUIRE

    @property
    def upgrade_label(self) -> str:
        return format_upgrade_flag(self.requires_upgrade)

    def as_csv(self) -> list[str]:
        return [self.name, self.upgrade_label, self.current_version, self.latest_version]
