"""
Attendance Service Module

Application layer service behind the dashboard window. Owns the attendance
store and the selected week, persists every committed change through the
gateway, and produces the weekly report and exports.
Separates business logic from UI concerns (PyQt).
"""

from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from config.config_manager import AppConfig, ConfigManager
from domain.absentee_report import build_report
from domain.attendance_store import AttendanceStore
from domain.date_week import build_day_keys, start_of_week
from domain.entities import AbsenteeReport, DEFAULT_WEEK_START, Student, StoreChange
from domain.locale_format import DEFAULT_LOCALE, get_locale
from infrastructure.csv_exporter import CsvExporter, export_filename
from infrastructure.logger import get_logger
from infrastructure.persistence import JsonFileStore, PersistenceGateway

logger = get_logger("AttendanceService")


class AttendanceService:
    """
    One class's attendance session.

    Every state change produces exactly one persist call reflecting the
    state at that point; nothing is batched. The absentee report is
    recomputed from current state on each request.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        week_start: int = DEFAULT_WEEK_START,
        locale: str = DEFAULT_LOCALE,
        today: Optional[date] = None,
        id_factory: Optional[Callable[[], str]] = None
    ):
        self.gateway = gateway
        self.week_start = week_start
        self.locale = get_locale(locale).code
        self._today = today

        self.store = AttendanceStore(
            students=gateway.load_students(),
            matrix=gateway.load_attendance(),
            week_start=week_start,
            id_factory=id_factory
        )
        self._selected_week = gateway.load_selected_week(today)
        self.store.subscribe(self._persist)

        logger.info(
            f"Session loaded: {len(self.store.students)} students, "
            f"selected week {self._selected_week}"
        )

    @classmethod
    def from_config(cls, config_manager: ConfigManager) -> "AttendanceService":
        """Build a file-backed session from application configuration."""
        config: AppConfig = config_manager.config
        store = JsonFileStore(config_manager.data_file_path())
        gateway = PersistenceGateway(store, week_start=config.calendar.week_start)
        return cls(
            gateway,
            week_start=config.calendar.week_start,
            locale=config.calendar.locale
        )

    def _persist(self, change: StoreChange) -> None:
        if change == StoreChange.ROSTER:
            self.gateway.save_students(self.store.students)
        elif change == StoreChange.ATTENDANCE:
            self.gateway.save_attendance(self.store.matrix)

    # ------------------------------------------------------------------
    # Week selection
    # ------------------------------------------------------------------

    @property
    def selected_week(self) -> str:
        return self._selected_week

    def select_week(self, value) -> str:
        """
        Select the week containing ``value`` (ISO string, date or datetime).

        Empty input is ignored. Returns the normalized selected week.
        """
        if value is None or value == "":
            return self._selected_week

        week = start_of_week(value, self.week_start, self._today)
        if week != self._selected_week:
            self._selected_week = week
            self.gateway.save_selected_week(week)
            logger.debug(f"Selected week {week}")
        return self._selected_week

    def day_keys(self) -> List[str]:
        return build_day_keys(self._selected_week)

    # ------------------------------------------------------------------
    # Roster and attendance
    # ------------------------------------------------------------------

    @property
    def students(self) -> List[Student]:
        return self.store.students

    def add_student(self, name: str) -> Optional[Student]:
        return self.store.add_student(name)

    def remove_student(self, student_id: str) -> bool:
        return self.store.remove_student(student_id)

    def toggle(self, student_id: str, day_key: str) -> bool:
        """Toggle a student's presence on a day of the selected week."""
        return self.store.toggle_attendance(self._selected_week, student_id, day_key)

    def is_present(self, student_id: str, day_key: str) -> bool:
        return self.store.get_presence(self._selected_week, student_id, day_key)

    # ------------------------------------------------------------------
    # Report and export
    # ------------------------------------------------------------------

    def report(self) -> AbsenteeReport:
        return build_report(self.store.matrix, self._selected_week, self.store.students)

    def can_export(self) -> bool:
        return bool(self.report())

    def export_filename(self) -> str:
        return export_filename(self._selected_week, self.locale)

    def export_csv_text(self) -> Optional[str]:
        exporter = CsvExporter(self.locale)
        return exporter.export(self.report(), self.store.students_by_id(), self._selected_week)

    def export_csv(
        self,
        output_dir: Path,
        filename: Optional[str] = None,
        encoding: str = "utf-8"
    ) -> Optional[Path]:
        """
        Write the selected week's absentee CSV into ``output_dir``.

        Returns:
            Written path, or None when nobody was absent

        Raises:
            OSError: If the file cannot be written
        """
        exporter = CsvExporter(self.locale, encoding=encoding)
        return exporter.write(
            self.report(), self.store.students_by_id(), self._selected_week,
            output_dir, filename
        )

    def export_xlsx(self, output_path: Path) -> Optional[Path]:
        """Write the selected week's attendance workbook."""
        from infrastructure.excel_writer import ExcelWriter

        writer = ExcelWriter(self.locale)
        return writer.create_weekly_report(self.store, self._selected_week, output_path)
