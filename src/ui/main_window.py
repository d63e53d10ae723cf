"""
Main Window Module

PyQt6 implementation of the weekly attendance dashboard.

Layout:
- Left: roster management and week selection
- Right: 7-day presence grid and the absentee summary
- Menu: export actions and theme switching
"""

import sys
from datetime import date
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QDate, Qt
from PyQt6.QtGui import QAction, QActionGroup, QColor
from PyQt6.QtWidgets import (
    QAbstractItemView, QApplication, QDateEdit, QFileDialog, QGroupBox,
    QHBoxLayout, QHeaderView, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QMainWindow, QMessageBox, QPushButton, QTableWidget, QTableWidgetItem,
    QVBoxLayout, QWidget
)

from application.attendance_service import AttendanceService
from config.config_manager import ConfigManager
from domain.absentee_report import count_absences
from domain.locale_format import (
    format_date_for_display, format_short_date, get_locale, localize_digits, weekday_label
)
from infrastructure.logger import get_logger
from ui.styles import ThemeManager

logger = get_logger("MainWindow")

# UI strings per locale; dates are rendered by domain.locale_format
UI_TEXT = {
    "fa-IR": {
        "title": "سامانه حضور و غیاب دانش‌آموزان",
        "students": "مدیریت دانش‌آموزان",
        "name_placeholder": "نام و نام خانوادگی",
        "add": "افزودن",
        "remove": "حذف",
        "no_students": "هنوز دانش‌آموزی اضافه نشده است.",
        "week": "انتخاب هفته",
        "week_hint": "هفته انتخابی از {label} آغاز می‌شود.",
        "grid": "جدول حضور",
        "student": "دانش‌آموز",
        "present": "حاضر",
        "absent": "غایب",
        "summary": "غایبین هفته",
        "no_absences": "در این هفته غیبتی ثبت نشده است.",
        "export_csv": "دریافت فایل CSV",
        "export_xlsx": "دریافت فایل Excel",
        "file_menu": "فایل",
        "theme_menu": "پوسته",
        "exit": "خروج",
        "export_done": "فایل ذخیره شد:\n{path}",
        "export_failed": "ذخیره فایل ناموفق بود:\n{error}",
        "success": "موفق",
        "error": "خطا",
    },
    "en-US": {
        "title": "Student Attendance Dashboard",
        "students": "Students",
        "name_placeholder": "Full name",
        "add": "Add",
        "remove": "Remove",
        "no_students": "No students added yet.",
        "week": "Week",
        "week_hint": "The selected week starts on {label}.",
        "grid": "Attendance",
        "student": "Student",
        "present": "Present",
        "absent": "Absent",
        "summary": "Absentees this week",
        "no_absences": "No absences recorded this week.",
        "export_csv": "Download CSV",
        "export_xlsx": "Download Excel",
        "file_menu": "File",
        "theme_menu": "Theme",
        "exit": "Exit",
        "export_done": "File saved:\n{path}",
        "export_failed": "Could not save the file:\n{error}",
        "success": "Done",
        "error": "Error",
    },
}


class MainWindow(QMainWindow):
    """
    Dashboard window bound to one AttendanceService.

    Every user action goes through the service and is followed by a full
    refresh; the report is recomputed on each refresh.
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        service: Optional[AttendanceService] = None
    ):
        super().__init__()
        self.config_manager = config_manager or ConfigManager()
        self.config = self.config_manager.load()
        self.service = service or AttendanceService.from_config(self.config_manager)

        self.locale = self.service.locale
        self.text = UI_TEXT.get(self.locale, UI_TEXT["fa-IR"])
        self.theme = ThemeManager.get_theme(self.config.ui_prefs.theme_name)

        self._init_ui()
        self._connect_signals()
        self.refresh()

    def _init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(self.text["title"])
        self.setMinimumSize(1100, 640)

        if get_locale(self.locale).right_to_left:
            self.setLayoutDirection(Qt.LayoutDirection.RightToLeft)

        self._create_menu_bar()

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(10, 10, 10, 10)
        main_layout.setSpacing(15)

        main_layout.addWidget(self._create_side_panel(), stretch=2)
        main_layout.addWidget(self._create_grid_panel(), stretch=3)

        self._apply_styles()

    def _create_menu_bar(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu(self.text["file_menu"])

        self.action_export_csv = QAction(self.text["export_csv"], self)
        self.action_export_csv.triggered.connect(self._on_export_csv)
        file_menu.addAction(self.action_export_csv)

        self.action_export_xlsx = QAction(self.text["export_xlsx"], self)
        self.action_export_xlsx.triggered.connect(self._on_export_xlsx)
        file_menu.addAction(self.action_export_xlsx)

        file_menu.addSeparator()

        exit_action = QAction(self.text["exit"], self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        theme_menu = menubar.addMenu(self.text["theme_menu"])
        theme_group = QActionGroup(self)
        theme_group.setExclusive(True)

        for theme_name in ThemeManager.get_available_themes():
            action = QAction(theme_name, self, checkable=True)
            if theme_name == self.config.ui_prefs.theme_name:
                action.setChecked(True)
            action.triggered.connect(lambda checked, name=theme_name: self._on_switch_theme(name))
            theme_menu.addAction(action)
            theme_group.addAction(action)

    def _create_side_panel(self) -> QWidget:
        """Roster management and week selection."""
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(10)

        students_group = QGroupBox(self.text["students"])
        students_layout = QVBoxLayout(students_group)

        input_row = QHBoxLayout()
        self.student_name_edit = QLineEdit()
        self.student_name_edit.setPlaceholderText(self.text["name_placeholder"])
        input_row.addWidget(self.student_name_edit, stretch=1)
        self.btn_add_student = QPushButton(self.text["add"])
        self.btn_add_student.setEnabled(False)
        input_row.addWidget(self.btn_add_student)
        students_layout.addLayout(input_row)

        self.student_list = QListWidget()
        self.student_list.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        students_layout.addWidget(self.student_list)
        layout.addWidget(students_group, stretch=1)

        week_group = QGroupBox(self.text["week"])
        week_layout = QVBoxLayout(week_group)
        self.week_edit = QDateEdit()
        self.week_edit.setCalendarPopup(True)
        self.week_edit.setDisplayFormat("yyyy-MM-dd")
        week_layout.addWidget(self.week_edit)
        self.lbl_week_hint = QLabel()
        self.lbl_week_hint.setWordWrap(True)
        week_layout.addWidget(self.lbl_week_hint)
        layout.addWidget(week_group)

        return panel

    def _create_grid_panel(self) -> QWidget:
        """Presence grid, absentee summary and export button."""
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(10)

        grid_group = QGroupBox(self.text["grid"])
        grid_layout = QVBoxLayout(grid_group)
        self.attendance_table = QTableWidget(0, 7)
        self.attendance_table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.attendance_table.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.attendance_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        grid_layout.addWidget(self.attendance_table)
        layout.addWidget(grid_group, stretch=3)

        summary_group = QGroupBox(self.text["summary"])
        summary_layout = QVBoxLayout(summary_group)
        self.absentee_list = QListWidget()
        summary_layout.addWidget(self.absentee_list)

        self.btn_export_csv = QPushButton(self.text["export_csv"])
        summary_layout.addWidget(self.btn_export_csv)
        layout.addWidget(summary_group, stretch=2)

        return panel

    def _apply_styles(self):
        """Apply the configured theme."""
        self.theme = ThemeManager.get_theme(self.config.ui_prefs.theme_name)
        self.setStyleSheet(self.theme.stylesheet)

    def _connect_signals(self):
        self.student_name_edit.textChanged.connect(
            lambda text: self.btn_add_student.setEnabled(bool(text.strip()))
        )
        self.student_name_edit.returnPressed.connect(self._on_add_student)
        self.btn_add_student.clicked.connect(self._on_add_student)
        self.week_edit.dateChanged.connect(self._on_week_changed)
        self.attendance_table.cellClicked.connect(self._on_cell_clicked)
        self.btn_export_csv.clicked.connect(self._on_export_csv)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def refresh(self):
        """Redraw every panel from current service state."""
        self._refresh_week()
        self._refresh_students()
        self._refresh_grid()
        self._refresh_summary()

    def _refresh_week(self):
        week = date.fromisoformat(self.service.selected_week)
        self.week_edit.blockSignals(True)
        self.week_edit.setDate(QDate(week.year, week.month, week.day))
        self.week_edit.blockSignals(False)
        label = format_date_for_display(self.service.selected_week, self.locale)
        self.lbl_week_hint.setText(self.text["week_hint"].format(label=label))

    def _refresh_students(self):
        self.student_list.clear()
        students = self.service.students
        if not students:
            self.student_list.addItem(QListWidgetItem(self.text["no_students"]))
            return

        for student in students:
            item = QListWidgetItem()
            row = QWidget()
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(6, 2, 6, 2)
            row_layout.addWidget(QLabel(student.name), stretch=1)

            btn_remove = QPushButton(self.text["remove"])
            btn_remove.setObjectName("removeButton")
            btn_remove.clicked.connect(lambda checked, sid=student.id: self._on_remove_student(sid))
            row_layout.addWidget(btn_remove)

            item.setSizeHint(row.sizeHint())
            self.student_list.addItem(item)
            self.student_list.setItemWidget(item, row)

    def _refresh_grid(self):
        students = self.service.students
        day_keys = self.service.day_keys()

        self.attendance_table.setRowCount(len(students))
        self.attendance_table.setColumnCount(len(day_keys))
        self.attendance_table.setHorizontalHeaderLabels([
            f"{weekday_label(day, self.locale)}\n{format_short_date(day, self.locale)}"
            for day in day_keys
        ])
        self.attendance_table.setVerticalHeaderLabels([s.name for s in students])

        for row, student in enumerate(students):
            for col, day in enumerate(day_keys):
                present = self.service.is_present(student.id, day)
                item = QTableWidgetItem(self.text["present"] if present else self.text["absent"])
                item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
                item.setFlags(Qt.ItemFlag.ItemIsEnabled)
                item.setBackground(QColor(
                    self.theme.present_color if present else self.theme.absent_color
                ))
                self.attendance_table.setItem(row, col, item)

    def _refresh_summary(self):
        self.absentee_list.clear()
        report = self.service.report()
        students_by_id = self.service.store.students_by_id()

        if not report:
            self.absentee_list.addItem(self.text["no_absences"])
        counts = count_absences(report)
        for student_id, missed_days in report.items():
            days = "، ".join(weekday_label(day, self.locale) for day in missed_days)
            count = localize_digits(str(counts[student_id]), self.locale)
            self.absentee_list.addItem(f"{students_by_id[student_id].name} ({count}): {days}")

        can_export = bool(report)
        self.btn_export_csv.setEnabled(can_export)
        self.action_export_csv.setEnabled(can_export)
        self.action_export_xlsx.setEnabled(bool(self.service.students))

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_add_student(self):
        self.service.add_student(self.student_name_edit.text())
        self.student_name_edit.clear()
        self.refresh()

    def _on_remove_student(self, student_id: str):
        self.service.remove_student(student_id)
        self.refresh()

    def _on_week_changed(self, qdate: QDate):
        self.service.select_week(qdate.toPyDate())
        self.refresh()

    def _on_cell_clicked(self, row: int, column: int):
        students = self.service.students
        day_keys = self.service.day_keys()
        if 0 <= row < len(students) and 0 <= column < len(day_keys):
            self.service.toggle(students[row].id, day_keys[column])
            self.refresh()

    def _on_switch_theme(self, theme_name: str):
        self.config.ui_prefs.theme_name = theme_name
        self.config_manager.save()
        self._apply_styles()
        self.refresh()

    def _on_export_csv(self):
        if not self.service.can_export():
            return

        default_path = self.config_manager.export_dir_path() / self.service.export_filename()
        file_path, _ = QFileDialog.getSaveFileName(
            self, self.text["export_csv"], str(default_path), "CSV (*.csv)"
        )
        if not file_path:
            return

        target = Path(file_path)
        try:
            written = self.service.export_csv(
                target.parent, target.name, self.config.output_settings.csv_encoding
            )
            if written and self.config.output_settings.generate_xlsx:
                self.service.export_xlsx(target.with_suffix(".xlsx"))
        except (OSError, UnicodeError, LookupError) as e:
            logger.exception("CSV export failed")
            QMessageBox.critical(self, self.text["error"], self.text["export_failed"].format(error=e))
            return

        if written:
            QMessageBox.information(self, self.text["success"], self.text["export_done"].format(path=written))

    def _on_export_xlsx(self):
        default_name = Path(self.service.export_filename()).with_suffix(".xlsx").name
        default_path = self.config_manager.export_dir_path() / default_name
        file_path, _ = QFileDialog.getSaveFileName(
            self, self.text["export_xlsx"], str(default_path), "Excel (*.xlsx)"
        )
        if not file_path:
            return

        try:
            written = self.service.export_xlsx(Path(file_path))
        except OSError as e:
            logger.exception("Workbook export failed")
            QMessageBox.critical(self, self.text["error"], self.text["export_failed"].format(error=e))
            return

        if written:
            QMessageBox.information(self, self.text["success"], self.text["export_done"].format(path=written))


def run_app():
    """Run the application."""
    app = QApplication(sys.argv)
    app.setStyle('Fusion')

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run_app()
