"""
Excel Writer Module

Writes one week of attendance to a styled Excel workbook.

Sheets:
- Presence grid: one row per student, one column per day of the week
- Absentees: the same rows as the CSV export
"""

from pathlib import Path
from typing import Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from domain.absentee_report import build_report
from domain.attendance_store import AttendanceStore
from domain.date_week import build_day_keys
from domain.locale_format import (
    DEFAULT_LOCALE, format_date_for_display, format_short_date, get_locale
)
from infrastructure.csv_exporter import CsvExporter
from infrastructure.logger import get_logger

logger = get_logger("ExcelWriter")


class ExcelWriter:
    """
    Generates the weekly attendance workbook.

    Styling:
    - Blue header row with white bold text
    - Green fill for present cells, red fill for absent cells
    - Sheet direction follows the locale (right-to-left for fa-IR)
    """

    COLORS = {
        'present': PatternFill(start_color='90EE90', end_color='90EE90', fill_type='solid'),
        'absent': PatternFill(start_color='FF6B6B', end_color='FF6B6B', fill_type='solid'),
        'header': PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid'),
    }

    MARKS = {True: '✓', False: '✗'}

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    HEADER_FONT = Font(bold=True, color='FFFFFF')
    CENTER = Alignment(horizontal='center', vertical='center', wrap_text=True)

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = get_locale(locale).code
        self.wb: Optional[Workbook] = None

    def create_weekly_report(
        self,
        store: AttendanceStore,
        week_key: str,
        output_path: Path
    ) -> Optional[Path]:
        """
        Create the workbook for one week.

        Args:
            store: Attendance store holding roster and matrix
            week_key: Normalized week-start date
            output_path: Destination .xlsx path

        Returns:
            Path to the created file, or None when the roster is empty

        Raises:
            PermissionError: If the file is open elsewhere or not writable
        """
        students = store.students
        if not students:
            logger.info("Roster is empty, skipping workbook export")
            return None

        self.wb = Workbook()
        grid_ws = self.wb.active
        grid_ws.title = "Attendance"
        self._write_grid(grid_ws, store, week_key)

        report = build_report(store.matrix, week_key, students)
        absentees_ws = self.wb.create_sheet(get_locale(self.locale).absentees_label)
        self._write_absentees(absentees_ws, report, store.students_by_id(), week_key)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(output_path)
        logger.info(f"Wrote attendance workbook for week {week_key}: {output_path}")
        return output_path

    def _style_header(self, cell) -> None:
        cell.fill = self.COLORS['header']
        cell.font = self.HEADER_FONT
        cell.alignment = self.CENTER
        cell.border = self.BORDER

    def _write_grid(self, ws, store: AttendanceStore, week_key: str) -> None:
        """Student names down column A, one presence column per day."""
        profile = get_locale(self.locale)
        ws.sheet_view.rightToLeft = profile.right_to_left
        day_keys = build_day_keys(week_key)

        name_header = ws.cell(row=1, column=1, value=profile.export_headers[0])
        self._style_header(name_header)
        ws.column_dimensions['A'].width = 24

        for offset, day in enumerate(day_keys):
            col = offset + 2
            label = format_date_for_display(day, self.locale)
            cell = ws.cell(row=1, column=col, value=f"{label}\n{format_short_date(day, self.locale)}")
            self._style_header(cell)
            ws.column_dimensions[get_column_letter(col)].width = 16
        ws.row_dimensions[1].height = 32

        for row_idx, student in enumerate(store.students, start=2):
            name_cell = ws.cell(row=row_idx, column=1, value=student.name)
            name_cell.border = self.BORDER

            for offset, day in enumerate(day_keys):
                present = store.get_presence(week_key, student.id, day)
                cell = ws.cell(row=row_idx, column=offset + 2, value=self.MARKS[present])
                cell.fill = self.COLORS['present' if present else 'absent']
                cell.alignment = self.CENTER
                cell.border = self.BORDER

        ws.freeze_panes = 'B2'

    def _write_absentees(
        self,
        ws,
        report: Dict[str, List[str]],
        students_by_id,
        week_key: str
    ) -> None:
        exporter = CsvExporter(self.locale)
        ws.sheet_view.rightToLeft = get_locale(self.locale).right_to_left

        for col, header in enumerate(exporter.headers, start=1):
            self._style_header(ws.cell(row=1, column=col, value=header))
            ws.column_dimensions[get_column_letter(col)].width = 22

        rows = exporter.build_rows(report, students_by_id, week_key)
        for row_idx, row in enumerate(rows, start=2):
            for col, value in enumerate(row, start=1):
                cell = ws.cell(row=row_idx, column=col, value=value)
                cell.border = self.BORDER
