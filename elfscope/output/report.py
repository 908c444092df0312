"""
Elfscope Report Generator
==========================

Machine-readable JSON rendering of inspection reports, for use with
``--json`` on the command line or for writing a report file.

Section contents are encoded as lowercase hex strings; every numeric
field carries its canonical (64-bit, host-order) value.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from elfscope.core.models import FileReport


def build_report(reports: Sequence[FileReport], version: str = "1.0.0") -> dict[str, Any]:
    """Assemble the JSON-ready report structure for *reports*."""
    return {
        "report_type": "elfscope_inspection",
        "version": version,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "files": [report.model_dump(mode="json") for report in reports],
    }


def reports_to_json(reports: Sequence[FileReport], version: str = "1.0.0") -> str:
    """Serialise *reports* as an indented JSON document."""
    return json.dumps(build_report(reports, version), indent=2)


def generate_json(
    reports: Sequence[FileReport],
    output_path: str | Path,
    version: str = "1.0.0",
) -> Path:
    """Write the JSON report to *output_path*.

    Returns:
        The absolute path of the written file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(reports_to_json(reports, version), encoding="utf-8")
    return path.resolve()
