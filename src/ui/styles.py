"""
Style Management Module

Handles application theming and style definitions.
Every theme fills the same stylesheet template from its own palette and
supplies the cell colors of the attendance grid, so new themes can be
added without touching the window.
"""

from abc import ABC, abstractmethod
from string import Template
from typing import Dict, Type

_STYLESHEET = Template("""
    QMainWindow {
        background-color: $window;
    }
    QWidget {
        font-family: 'Vazirmatn', 'Segoe UI', system-ui, sans-serif;
        font-size: 13px;
        color: $text;
    }
    QGroupBox {
        font-weight: bold;
        border: 1px solid $border;
        border-radius: $radius;
        margin-top: 12px;
        padding-top: 16px;
        background-color: $panel;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        left: 12px;
        color: $accent_text;
    }
    QListWidget, QTableWidget {
        background-color: $base;
        border: 1px solid $border;
        gridline-color: $border;
    }
    QListWidget::item:selected, QMenuBar::item:selected, QMenu::item:selected {
        background-color: $selection;
    }
    QHeaderView::section {
        background-color: $header;
        border: none;
        border-bottom: 1px solid $border;
        padding: 6px;
    }
    QLineEdit, QDateEdit {
        background-color: $input;
        border: 1px solid $border;
        border-radius: $radius;
        padding: 4px 8px;
    }
    QLineEdit:focus, QDateEdit:focus {
        border-color: $accent;
    }
    QPushButton {
        background-color: $accent;
        color: white;
        border: none;
        border-radius: $radius;
        padding: 8px 16px;
    }
    QPushButton:hover {
        background-color: $accent_hover;
    }
    QPushButton:disabled {
        background-color: $disabled;
    }
    QPushButton#removeButton {
        background-color: transparent;
        color: $danger;
        padding: 4px 8px;
    }
    QMenuBar, QMenu {
        background-color: $panel;
        border-bottom: 1px solid $border;
    }
""")


class Theme(ABC):
    """Abstract base class for Themes."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def palette(self) -> Dict[str, str]:
        """Colors substituted into the shared stylesheet template."""
        pass

    @property
    @abstractmethod
    def present_color(self) -> str:
        """Background of a grid cell marked present."""
        pass

    @property
    @abstractmethod
    def absent_color(self) -> str:
        """Background of a grid cell marked absent."""
        pass

    @property
    def stylesheet(self) -> str:
        return _STYLESHEET.substitute(self.palette)


class DarkTheme(Theme):
    """The default dark theme for the application."""

    @property
    def name(self) -> str:
        return "Dark Mode"

    @property
    def present_color(self) -> str:
        return "#2d5a27"

    @property
    def absent_color(self) -> str:
        return "#8b2e2e"

    @property
    def palette(self) -> Dict[str, str]:
        return {
            "window": "#1e1e1e",
            "base": "#1e1e1e",
            "panel": "#252526",
            "header": "#2d2d30",
            "input": "#3c3c3c",
            "text": "#e0e0e0",
            "border": "#3e3e42",
            "selection": "#37373d",
            "accent": "#0078d4",
            "accent_hover": "#106ebe",
            "accent_text": "#4ec9b0",
            "disabled": "#4a4a4a",
            "danger": "#f48771",
            "radius": "4px",
        }


class ClassicWhiteTheme(Theme):
    """Light slate theme with soft red/green grid cells."""

    @property
    def name(self) -> str:
        return "Classic White"

    @property
    def present_color(self) -> str:
        return "#d1fae5"

    @property
    def absent_color(self) -> str:
        return "#fecaca"

    @property
    def palette(self) -> Dict[str, str]:
        return {
            "window": "#f1f5f9",
            "base": "#ffffff",
            "panel": "#ffffff",
            "header": "#f8fafc",
            "input": "#ffffff",
            "text": "#1e293b",
            "border": "#e2e8f0",
            "selection": "#e5f3ff",
            "accent": "#2563eb",
            "accent_hover": "#1d4ed8",
            "accent_text": "#334155",
            "disabled": "#94a3b8",
            "danger": "#ef4444",
            "radius": "6px",
        }


class ThemeManager:
    """
    Factory and manager for application themes.
    Stateless; themes are instantiated on demand.
    """

    _themes: Dict[str, Type[Theme]] = {
        "Dark Mode": DarkTheme,
        "Classic White": ClassicWhiteTheme
    }

    @classmethod
    def get_theme(cls, theme_name: str) -> Theme:
        """Factory method to get a theme instance by name."""
        theme_cls = cls._themes.get(theme_name)
        if not theme_cls:
            # Fallback to default if theme name not found
            return DarkTheme()
        return theme_cls()

    @classmethod
    def get_available_themes(cls) -> list[str]:
        """Returns a list of available theme names."""
        return list(cls._themes.keys())
