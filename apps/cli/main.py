"""CLI application for composer-report."""

import logging
from pathlib import Path

import typer
from rich.console import Console

from core.config import SOURCES, ReportContext
from core.errors import ComposerReportError
from core.logging_config import setup_logging
from core.parse_composer import enumerate_packages, load_lock, load_manifest
from core.report import ReportWriter, build_rows, show_progress
from core.resolve_composer import DEFAULT_PACKAGIST_URL

console = Console()
logger = logging.getLogger(__name__)


def run_report(context: ReportContext, quiet: bool = False) -> tuple[int, int]:
    """Generate the CSV report described by context.

    Both input files are loaded before the output file is touched, so a
    missing or broken input never truncates an existing report.

    Returns:
        (packages reported, packages requiring an upgrade)
    """
    manifest = load_manifest(context.manifest_path)
    lock = load_lock(context.lock_path)

    refs = enumerate_packages(manifest)
    oracle = context.build_oracle()
    logger.debug("Checking %d packages with %s", len(refs), type(oracle).__name__)

    upgrades = 0
    with ReportWriter(context.output_path) as writer:
        for row in build_rows(
            refs,
            lock,
            oracle,
            include_dev=context.include_dev_lock,
            progress=None if quiet else show_progress,
        ):
            writer.write_row(row)
            if row.requires_upgrade:
                upgrades += 1

    if refs and not quiet:
        # Finish the progress line
        typer.echo("")

    return len(refs), upgrades


app = typer.Typer(
    name="composer-report",
    help="composer-report - Compare installed Composer packages with their latest versions",
    add_completion=False,
)


@app.command()
def report(
    project_dir: str = typer.Argument(".", help="Directory containing composer.json and composer.lock"),
    manifest: str = typer.Option("composer.json", "--manifest", help="Manifest file, relative to the project directory"),
    lock: str = typer.Option("composer.lock", "--lock", help="Lock file, relative to the project directory"),
    output: str = typer.Option("composer_package_versions.csv", "--out", "-o", help="CSV report to write"),
    composer_binary: str = typer.Option("composer", "--composer", envvar="COMPOSER_BINARY", help="Composer executable"),
    timeout: float | None = typer.Option(None, "--timeout", help="Seconds to wait for each lookup (default: no limit)"),
    source: str = typer.Option("composer", "--source", help="Where latest versions come from: composer or packagist"),
    packagist_url: str = typer.Option(DEFAULT_PACKAGIST_URL, "--packagist-url", envvar="PACKAGIST_URL", help="Packagist repository URL"),
    lock_dev: bool = typer.Option(False, "--lock-dev", help="Also look up installed versions in packages-dev"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide the progress bar"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Write a CSV report of installed versus latest versions for composer.json dependencies."""
    setup_logging(verbose=verbose)

    try:
        if source not in SOURCES:
            console.print(f"Error: Unsupported version source: {source}", style="red")
            raise typer.Exit(1)

        context = ReportContext.from_directory(
            Path(project_dir),
            manifest=manifest,
            lock=lock,
            output=output,
            composer_binary=composer_binary,
            timeout=timeout,
            source=source,
            packagist_url=packagist_url,
            include_dev_lock=lock_dev,
        )

        total, upgrades = run_report(context, quiet=quiet)

        console.print(f"CSV file generated: {context.output_path}", soft_wrap=True, highlight=False, markup=False)
        console.print(f"{upgrades} of {total} packages require an upgrade", highlight=False)

    except typer.Exit:
        raise
    except ComposerReportError as e:
        console.print(f"Error: {e}", style="red", soft_wrap=True, markup=False)
        raise typer.Exit(1)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        console.print(f"Error: {e}", style="red", soft_wrap=True, markup=False)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
