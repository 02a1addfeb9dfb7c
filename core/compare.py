"""Installed versus latest version comparison."""


def requires_upgrade(current_version: str, latest_version: str) -> bool:
    """Return True when the two version strings differ.

    This is plain string inequality. Sentinel values such as "Not found" or
    "Unknown" are compared like any other version string.
    """
    return current_version != latest_version


def upgrade_label(upgrade_needed: bool) -> str:
    """Render an upgrade flag the way the report prints it."""
    return "Yes" if upgrade_needed else "No"


def needs_upgrade(current_version: str, latest_version: str) -> str:
    """Return 'Yes' if the package needs an upgrade, 'No' otherwise."""
    return upgrade_label(requires_upgrade(current_version, latest_version))
