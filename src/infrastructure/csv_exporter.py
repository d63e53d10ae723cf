"""
CSV Exporter Module

Serializes a weekly absentee report as comma-separated text.

Layout:
- Header row: student name | weekday of the missed day | localized date | localized week start
- One row per (student, missed day), students in report order, days ascending
- Every cell quoted, embedded quotes doubled, rows joined by "\\n"
"""

import csv
import io
from pathlib import Path
from typing import Dict, List, Optional

from domain.entities import AbsenteeReport, Student
from domain.locale_format import (
    DEFAULT_LOCALE, format_date_for_display, get_locale, weekday_label
)
from infrastructure.logger import get_logger

logger = get_logger("CsvExporter")


def export_filename(week_key: str, locale: str = DEFAULT_LOCALE) -> str:
    """
    File name offered for a week's export.

    The absentees label is localized; the week start stays a raw ISO date,
    e.g. ``غایبین-2024-03-23.csv``.
    """
    return f"{get_locale(locale).absentees_label}-{week_key}.csv"


class CsvExporter:
    """Builds and writes absentee CSV documents for one display locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE, encoding: str = "utf-8"):
        self.locale = get_locale(locale).code
        self.encoding = encoding

    @property
    def headers(self) -> List[str]:
        return list(get_locale(self.locale).export_headers)

    def build_rows(
        self,
        report: AbsenteeReport,
        students_by_id: Dict[str, Student],
        week_key: str
    ) -> List[List[str]]:
        """Data rows (without header) in report order."""
        week_label = format_date_for_display(week_key, self.locale)
        rows = []
        for student_id, missed_days in report.items():
            student = students_by_id.get(student_id)
            name = student.name if student else ""
            for day in missed_days:
                rows.append([
                    name,
                    weekday_label(day, self.locale),
                    format_date_for_display(day, self.locale),
                    week_label,
                ])
        return rows

    def export(
        self,
        report: AbsenteeReport,
        students_by_id: Dict[str, Student],
        week_key: str
    ) -> Optional[str]:
        """
        Render the report as CSV text.

        Returns:
            The document, or None when the report has no rows to export
        """
        rows = self.build_rows(report, students_by_id, week_key)
        if not rows:
            return None

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(self.headers)
        writer.writerows(rows)

        # Rows are joined by newlines, not terminated by one
        return buffer.getvalue()[:-1]

    def write(
        self,
        report: AbsenteeReport,
        students_by_id: Dict[str, Student],
        week_key: str,
        output_dir: Path,
        filename: Optional[str] = None
    ) -> Optional[Path]:
        """
        Write the export into ``output_dir``.

        Args:
            filename: File name to use instead of ``export_filename(week_key)``

        Returns:
            Path of the written file, or None when there was nothing to export

        Raises:
            OSError: If the file cannot be written
            UnicodeEncodeError: If the encoding cannot represent the content
            LookupError: If the encoding is unknown
        """
        content = self.export(report, students_by_id, week_key)
        if content is None:
            logger.info(f"No absences in week {week_key}, nothing to export")
            return None

        # Encoding happens before the file is opened so a failure leaves no partial file
        data = content.encode(self.encoding)

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / (filename or export_filename(week_key, self.locale))
        output_path.write_bytes(data)

        logger.info(f"Exported absentee CSV for week {week_key}: {output_path}")
        return output_path
