"""
Elfscope Inspection Engine
===========================

Runs one processing session per input file: open the file, normalise
the header, build and name the section table when it is needed, extract
the requested sections, close the file.

Every failure of a session is an :class:`~elfscope.core.errors.ElfError`
and ends that file's processing only.  :meth:`InspectEngine.inspect_many`
records it in the file's :class:`FileReport` and moves on to the next
file.

Session pipeline:
    1. Open the file read-only (``IOFailure`` on error)
    2. Parse and normalise the file header
    3. Build the section header table (if sections are requested)
    4. Resolve section names through ``e_shstrndx``
    5. Select the requested sections, recording absent names
    6. Extract the selected section bodies
"""

from __future__ import annotations

import concurrent.futures
from pathlib import Path
from typing import Sequence

from shared.config import ElfscopeConfig
from shared.logger import ElfscopeLogger

from elfscope.core.errors import ElfError
from elfscope.core.models import FileReport, InspectRequest
from elfscope.parsers.extract import dump_selected, select_sections
from elfscope.parsers.header import read_header
from elfscope.parsers.reader import ByteReader
from elfscope.parsers.sections import read_section_table


class InspectEngine:
    """Orchestrates inspection sessions over one or more ELF files.

    Usage::

        engine = InspectEngine()
        request = InspectRequest(show_section_headers=True, dump_sections=(".text",))
        report = engine.inspect("/bin/true", request)
        for dump in report.dumps:
            print(dump.name, dump.size)
    """

    def __init__(
        self,
        config: ElfscopeConfig | None = None,
        logger: ElfscopeLogger | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: Elfscope configuration.  Defaults are used if not provided.
            logger: Logger instance.  A new one is created if not provided.
        """
        self._config: ElfscopeConfig = config or ElfscopeConfig()
        self._logger: ElfscopeLogger = logger or ElfscopeLogger(
            "engine",
            log_level=self._config.global_settings.log_level,
            log_file=self._config.global_settings.log_file or None,
            json_logs=self._config.global_settings.log_json,
        )

    # ------------------------------------------------------------------ #
    #  Public interface
    # ------------------------------------------------------------------ #

    def inspect(self, path: str | Path, request: InspectRequest) -> FileReport:
        """Inspect a single file.

        Raises:
            ElfError: The first failure of the session.
        """
        report = FileReport(path=str(path))
        self._run_session(report, request)
        return report

    def inspect_file(self, path: str | Path, request: InspectRequest) -> FileReport:
        """Inspect a single file, recording a failure in the report.

        Whatever was parsed before the failure (e.g. the header) stays
        in the returned report.
        """
        report = FileReport(path=str(path))
        try:
            self._run_session(report, request)
        except ElfError as exc:
            report.error_kind = exc.kind
            report.error = str(exc)
            self._logger.info(
                "%s: %s: %s", report.path, exc.kind, exc, error_kind=exc.kind
            )
        return report

    def inspect_many(
        self,
        paths: Sequence[str | Path],
        request: InspectRequest,
    ) -> list[FileReport]:
        """Inspect every path; one failing file never stops the others.

        With ``global.max_workers > 1`` files are processed on a thread
        pool.  Each session owns its reader, header, and table; reports
        come back in input order either way.
        """
        workers = self._config.global_settings.max_workers
        if workers <= 1 or len(paths) <= 1:
            return [self.inspect_file(path, request) for path in paths]

        self._logger.debug("Inspecting %d files on %d workers", len(paths), workers)
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda p: self.inspect_file(p, request), paths))

    # ------------------------------------------------------------------ #
    #  Session implementation
    # ------------------------------------------------------------------ #

    def _run_session(self, report: FileReport, request: InspectRequest) -> None:
        """Populate *report* for one file; raises on the first failure."""
        inspect_cfg = self._config.inspect

        with self._logger.timed(f"inspect {report.path}"), \
                ByteReader.open(report.path) as reader:
            with self._logger.operation("parse_header"):
                report.header = read_header(reader)
                ident = report.header.identity
                self._logger.debug(
                    "%s: ELF%d %s-endian, %d section headers at %#x",
                    report.path, ident.bits, ident.byte_order,
                    report.header.shnum, report.header.shoff,
                )

            if not request.needs_sections:
                return

            with self._logger.operation("build_sections"):
                report.sections = read_section_table(
                    reader, report.header, inspect_cfg.max_name_length
                )

            if not request.dump_sections:
                return

            with self._logger.operation("extract"):
                selection = select_sections(report.sections, request.dump_sections)
                for name in selection.missing:
                    self._logger.info(
                        "%s: section '%s' does not exist", report.path, name
                    )
                report.missing_sections = selection.missing
                report.dumps = dump_selected(reader, report.sections, selection)
