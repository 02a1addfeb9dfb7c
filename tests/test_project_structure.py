"""Test that project structure is correct and modules can be imported."""

import core.compare
import core.config
import core.models
import core.parse_composer
import core.report
import core.resolve_composer
from core.models import ComposerManifest, PackageRef, ReportRow


def test_core_modules_importable():
    """Ensure core modules can be imported."""
    # This will fail if modules have syntax errors or missing dependencies

    # Basic smoke test - ensure key classes exist
    assert hasattr(core.models, "ComposerManifest")
    assert hasattr(core.models, "ComposerLock")
    assert hasattr(core.models, "ReportRow")
    assert hasattr(core.parse_composer, "resolve_installed_version")
    assert hasattr(core.resolve_composer, "ComposerShowOracle")
    assert hasattr(core.compare, "needs_upgrade")
    assert hasattr(core.report, "ReportWriter")
    assert hasattr(core.config, "ReportContext")


def test_model_creation():
    """Test that basic models can be instantiated."""
    manifest = ComposerManifest(require=["vendor/a"], require_dev=["vendor/b"])
    assert manifest.require == ["vendor/a"]
    assert manifest.require_dev == ["vendor/b"]

    ref = PackageRef(name="vendor/a")
    assert ref.section == "require"

    row = ReportRow(
        name="vendor/a",
        requires_upgrade=True,
        current_version="1.0.0",
        latest_version="1.1.0",
    )
    assert row.upgrade_label == "Yes"
    assert row.as_csv() == ["vendor/a", "Yes", "1.0.0", "1.1.0"]
