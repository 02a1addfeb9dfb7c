"""Exceptions raised by composer-report."""


class ComposerReportError(Exception):
    """Base class for fatal report errors."""


class ManifestError(ComposerReportError):
    """composer.json or composer.lock is missing or cannot be parsed."""


class ReportError(ComposerReportError):
    """The CSV report cannot be written."""
