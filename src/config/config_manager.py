"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Provides bi-directional mapping between the dataclasses and JSON persistence.
"""

import codecs
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from domain.entities import DEFAULT_WEEK_START
from domain.locale_format import DEFAULT_LOCALE, available_locales
from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")

DEFAULT_DATA_FILE = "attendance_data.json"


@dataclass
class Paths:
    """File paths configuration."""
    data_file: str = ""  # Empty = attendance_data.json in the project root


@dataclass
class CalendarSettings:
    """Display locale and first day of the week."""
    locale: str = DEFAULT_LOCALE
    week_start: int = int(DEFAULT_WEEK_START)  # Sunday-first index, 6 = Saturday


@dataclass
class UIPrefs:
    """UI preferences."""
    theme_name: str = "Dark Mode"


@dataclass
class OutputSettings:
    """Export settings."""
    export_dir: str = ""        # Empty = current working directory
    csv_encoding: str = "utf-8"
    generate_xlsx: bool = False  # Also write the weekly workbook on export


@dataclass
class AppConfig:
    """Main application configuration container."""
    paths: Paths = field(default_factory=Paths)
    calendar: CalendarSettings = field(default_factory=CalendarSettings)
    ui_prefs: UIPrefs = field(default_factory=UIPrefs)
    output_settings: OutputSettings = field(default_factory=OutputSettings)


class ConfigManager:
    """
    Manages application configuration with JSON persistence.

    Responsibilities:
    - Load configuration from JSON file, field by field with defaults
    - Save configuration to JSON file
    - Resolve derived paths (data file, export directory)
    """

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.json"

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file, falling back to defaults."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("top-level value is not an object")
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, ValueError, AttributeError) as e:
                logger.warning(f"Failed to load config, using defaults. Error: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = self._config_to_dict(self._config)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def data_file_path(self) -> Path:
        """Resolved path of the attendance data file."""
        if self._config.paths.data_file:
            return Path(self._config.paths.data_file)
        return Path(__file__).parent.parent.parent / DEFAULT_DATA_FILE

    def export_dir_path(self) -> Path:
        """Resolved export directory."""
        if self._config.output_settings.export_dir:
            return Path(self._config.output_settings.export_dir)
        return Path.cwd()

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "paths": {
                "data_file": config.paths.data_file
            },
            "calendar": {
                "locale": config.calendar.locale,
                "week_start": config.calendar.week_start
            },
            "ui_prefs": {
                "theme_name": config.ui_prefs.theme_name
            },
            "output_settings": {
                "export_dir": config.output_settings.export_dir,
                "csv_encoding": config.output_settings.csv_encoding,
                "generate_xlsx": config.output_settings.generate_xlsx
            }
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        paths_data = data.get("paths", {})
        calendar_data = data.get("calendar", {})
        ui_prefs_data = data.get("ui_prefs", {})
        output_settings_data = data.get("output_settings", {})

        paths = Paths(
            data_file=paths_data.get("data_file", "")
        )

        # Unknown locales and out-of-range weekdays fall back to defaults
        locale = calendar_data.get("locale", DEFAULT_LOCALE)
        if locale not in available_locales():
            logger.warning(f"Unknown locale '{locale}', using {DEFAULT_LOCALE}")
            locale = DEFAULT_LOCALE

        week_start = calendar_data.get("week_start", int(DEFAULT_WEEK_START))
        if not isinstance(week_start, int) or isinstance(week_start, bool) or not 0 <= week_start <= 6:
            logger.warning(f"Invalid week_start {week_start!r}, using Saturday")
            week_start = int(DEFAULT_WEEK_START)

        calendar = CalendarSettings(locale=locale, week_start=week_start)

        ui_prefs = UIPrefs(
            theme_name=ui_prefs_data.get("theme_name", "Dark Mode")
        )

        csv_encoding = output_settings_data.get("csv_encoding", "utf-8")
        try:
            codecs.lookup(csv_encoding)
        except (LookupError, TypeError):
            logger.warning(f"Unknown csv_encoding {csv_encoding!r}, using utf-8")
            csv_encoding = "utf-8"

        output_settings = OutputSettings(
            export_dir=output_settings_data.get("export_dir", ""),
            csv_encoding=csv_encoding,
            generate_xlsx=output_settings_data.get("generate_xlsx", False)
        )

        return AppConfig(
            paths=paths,
            calendar=calendar,
            ui_prefs=ui_prefs,
            output_settings=output_settings
        )
