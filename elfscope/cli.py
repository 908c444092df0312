"""
Elfscope CLI -- ELF File Inspector
===================================

Click-based command-line interface.  Displays the ELF file header, the
section header table, and hex dumps of named sections for one or more
files.

Usage::

    # File header
    elfscope -h /bin/ls

    # Section headers
    elfscope -t /bin/ls

    # Hex dump of two sections, for two files
    elfscope -x .text -x .rodata /bin/ls /bin/cat

    # Everything, as JSON
    elfscope -h -t -x .comment --json /bin/ls

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys

import click

from shared.config import ElfscopeConfig
from shared.console import ElfscopeConsole
from shared.logger import ElfscopeLogger

from elfscope import __version__
from elfscope.core.engine import InspectEngine
from elfscope.core.models import FileReport, InspectRequest
from elfscope.output.console import ElfConsoleOutput
from elfscope.output.report import generate_json, reports_to_json


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@click.command("elfscope", context_settings={"help_option_names": ["--help"]})
@click.argument("files", nargs=-1, type=click.Path(dir_okay=True))
@click.option(
    "--file-header", "-h",
    "file_header",
    is_flag=True,
    default=False,
    help="Display the ELF file header.",
)
@click.option(
    "--section-headers", "-t", "-S",
    "section_headers",
    is_flag=True,
    default=False,
    help="Display the section details.",
)
@click.option(
    "--hex-dump", "-x",
    "hex_dump",
    multiple=True,
    metavar="NAME",
    help="Dump the contents of section NAME as bytes.  Repeatable.",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON to stdout.",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write a JSON report to this path.",
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML configuration file.",
)
@click.option(
    "--workers", "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Inspect files on this many threads (default: from config).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose/debug logging on stderr.",
)
@click.version_option(__version__, "--version", prog_name="elfscope")
@click.pass_context
def elfscope_cli(
    ctx: click.Context,
    files: tuple[str, ...],
    file_header: bool,
    section_headers: bool,
    hex_dump: tuple[str, ...],
    json_output: bool,
    output_path: str | None,
    config_path: str | None,
    workers: int | None,
    verbose: bool,
) -> None:
    """Display information about the contents of ELF format files.

    FILES are one or more ELF files to inspect.  A file that cannot be
    parsed is reported and skipped; the remaining files are still
    processed, and the exit status is 1.

    Examples:

    \b
        elfscope -h /bin/ls
        elfscope -t -x .text a.out b.o
    """
    console = ElfscopeConsole()

    try:
        config = ElfscopeConfig.load(config_path)
    except (OSError, ValueError) as exc:
        if config_path is not None:
            console.error(f"Cannot load configuration: {exc}")
            sys.exit(2)
        console.warning(f"Ignoring default configuration: {exc}")
        config = ElfscopeConfig()

    if workers is not None:
        config.global_settings.max_workers = workers

    request = InspectRequest(
        show_file_header=file_header,
        show_section_headers=section_headers,
        dump_sections=hex_dump,
    )
    if request.is_empty or not files:
        console.warning("Nothing to do.")
        click.echo(ctx.get_usage(), err=True)
        sys.exit(1)

    settings = config.global_settings
    logger = ElfscopeLogger(
        "cli",
        log_level="DEBUG" if verbose or settings.debug else settings.log_level,
        log_file=settings.log_file or None,
        json_logs=settings.log_json,
    )

    engine = InspectEngine(config=config, logger=logger)
    reports = engine.inspect_many(list(files), request)

    if json_output:
        click.echo(reports_to_json(reports, settings.version))
    else:
        output = ElfConsoleOutput(
            console=console,
            bytes_per_line=config.inspect.hexdump_bytes_per_line,
            group_size=config.inspect.hexdump_group_size,
        )
        for report in reports:
            _display_report(console, output, report, request, multiple=len(reports) > 1)

    if output_path:
        report_path = generate_json(reports, output_path, settings.version)
        if not json_output:
            console.success(f"JSON report saved: {report_path}")

    if any(not report.ok for report in reports):
        sys.exit(1)


def _display_report(
    console: ElfscopeConsole,
    output: ElfConsoleOutput,
    report: FileReport,
    request: InspectRequest,
    multiple: bool,
) -> None:
    """Render one file's report, its error, or its missing-section warnings."""
    if multiple:
        console.blank()
        console.plain(f"File: {report.path}")

    if not report.ok:
        console.error(f"{report.path}: {report.error}")
        return

    for name in report.missing_sections:
        console.warning(
            f"{report.path}: Section '{name}' was not dumped because it does not exist!"
        )

    output.display(report, request)


# ---------------------------------------------------------------------------
# Module entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Entry point for the ``elfscope`` console script."""
    elfscope_cli()


if __name__ == "__main__":
    main()
