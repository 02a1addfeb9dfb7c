"""Report generation: progress display and CSV output."""

import csv
import logging
import math
import os
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TextIO

import typer

from .compare import requires_upgrade
from .errors import ReportError
from .models import ComposerLock, PackageRef, ReportRow
from .parse_composer import resolve_installed_version
from .resolve_composer import VersionOracle

logger = logging.getLogger(__name__)

CSV_HEADER = ["Module", "Requires Upgrade", "Current Version", "Latest Version"]

BAR_WIDTH = 50

ProgressCallback = Callable[[int, int, str, str], None]


def render_progress(current: int, total: int, package_name: str, section: str) -> str:
    """Build the single-line progress indicator.

    The line starts with a carriage return so each update overwrites the
    previous one.
    """
    percentage = (current / total) * 100
    filled = min(BAR_WIDTH, math.floor(percentage / 2 + 0.5))
    bar = "=" * filled + " " * (BAR_WIDTH - filled)
    return f"\rProgress: [{bar}] {percentage:.2f}% - Checking: {package_name} ({section})"


def show_progress(current: int, total: int, package_name: str, section: str) -> None:
    """Display the progress in the console."""
    typer.echo(render_progress(current, total, package_name, section), nl=False)


def build_rows(
    refs: list[PackageRef],
    lock: ComposerLock,
    oracle: VersionOracle,
    include_dev: bool = False,
    progress: ProgressCallback | None = None,
) -> Iterator[ReportRow]:
    """Resolve current and latest versions for each package, in order.

    Args:
        refs: Packages in report order
        lock: Parsed lock file
        oracle: Source of latest versions
        include_dev: Also resolve installed versions from packages-dev
        progress: Called after each row with (index, total, name, section)

    Yields:
        One ReportRow per package
    """
    total = len(refs)

    for index, ref in enumerate(refs, start=1):
        current_version = resolve_installed_version(ref.name, lock, include_dev=include_dev)
        latest_version = oracle.fetch_latest(ref.name)
        logger.debug("%s: current=%s latest=%s", ref.name, current_version, latest_version)

        yield ReportRow(
            name=ref.name,
            requires_upgrade=requires_upgrade(current_version, latest_version),
            current_version=current_version,
            latest_version=latest_version,
            section=ref.section,
        )

        if progress:
            progress(index, total, ref.name, ref.section)


class ReportWriter:
    """Writes report rows to a CSV file.

    Rows go to a temporary file beside the target, which replaces the target
    only on a successful close(). A run that fails part way leaves any
    previous report untouched.
    """

    def __init__(self, path: Path):
        self.path = path
        self._file: TextIO | None = None
        self._writer = None
        self._temp_path: Path | None = None

    def open(self) -> None:
        """Start a temporary report file and write the header row."""
        if self.path.is_dir():
            raise ReportError(f"Unable to open file for writing: {self.path}: is a directory")

        try:
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
        except OSError as e:
            raise ReportError(f"Unable to open file for writing: {self.path}: {e}") from e

        self._temp_path = Path(temp_name)
        self._file = os.fdopen(fd, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file, lineterminator="\n")
        self._writer.writerow(CSV_HEADER)

    def write_row(self, row: ReportRow) -> None:
        if self._writer is None:
            raise ReportError(f"Report {self.path} is not open")
        self._writer.writerow(row.as_csv())

    def close(self) -> None:
        """Finish the report and move it into place."""
        if self._file is None:
            return

        self._file.close()
        self._file = None
        self._writer = None
        temp_path, self._temp_path = self._temp_path, None

        try:
            os.chmod(temp_path, _default_file_mode())
            os.replace(temp_path, self.path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise ReportError(f"Unable to write {self.path}: {e}") from e

    def discard(self) -> None:
        """Drop a partially written report."""
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None

        if self._temp_path is not None:
            logger.debug("Discarding partial report %s", self._temp_path)
            self._temp_path.unlink(missing_ok=True)
            self._temp_path = None

    def __enter__(self) -> "ReportWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.discard()
        else:
            self.close()


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; match what open(path, "w") would give
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_report(path: Path, rows: list[ReportRow]) -> None:
    """Write a complete report in one go."""
    with ReportWriter(path) as writer:
        for row in rows:
            writer.write_row(row)
