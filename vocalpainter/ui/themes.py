from PyQt5.QtWidgets import QApplication
from PyQt5.QtGui import QPalette, QColor
from dataclasses import dataclass

@dataclass
class Theme:
    palette_func: callable
    stylesheet: str = ""

def night_palette() -> QPalette:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor(0, 0, 0))
    palette.setColor(QPalette.WindowText, QColor(255, 255, 255))
    palette.setColor(QPalette.Base, QColor(17, 24, 39))
    palette.setColor(QPalette.AlternateBase, QColor(31, 41, 55))
    palette.setColor(QPalette.ToolTipBase, QColor(0, 0, 0))
    palette.setColor(QPalette.ToolTipText, QColor(255, 255, 255))
    palette.setColor(QPalette.Text, QColor(255, 255, 255))
    palette.setColor(QPalette.Button, QColor(17, 24, 39))
    palette.setColor(QPalette.ButtonText, QColor(255, 255, 255))
    palette.setColor(QPalette.BrightText, QColor(220, 38, 38))
    palette.setColor(QPalette.Link, QColor(156, 163, 175))
    palette.setColor(QPalette.Highlight, QColor(255, 255, 255))
    palette.setColor(QPalette.HighlightedText, QColor(0, 0, 0))
    return palette

def daylight_palette() -> QPalette:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor(250, 250, 250))
    palette.setColor(QPalette.WindowText, QColor(17, 24, 39))
    palette.setColor(QPalette.Base, QColor(255, 255, 255))
    palette.setColor(QPalette.AlternateBase, QColor(243, 244, 246))
    palette.setColor(QPalette.Text, QColor(17, 24, 39))
    palette.setColor(QPalette.Button, QColor(243, 244, 246))
    palette.setColor(QPalette.ButtonText, QColor(17, 24, 39))
    palette.setColor(QPalette.Highlight, QColor(30, 58, 138))
    palette.setColor(QPalette.HighlightedText, QColor(255, 255, 255))
    return palette

# Black background with thin gray outlines, light weight type
GLOBAL_STYLE_SHEET_NIGHT = """
QWidget {
    background-color: #000000;
    color: #ffffff;
    font-family: 'Helvetica Neue', 'Segoe UI', sans-serif;
    font-size: 10pt;
}

QLabel#hint {
    color: #9ca3af;
}

QLabel#recording {
    color: #f87171;
}

QPushButton {
    background-color: #000000;
    border: 1px solid #374151;
    border-radius: 6px;
    padding: 8px 16px;
}

QPushButton:hover {
    border-color: #6b7280;
}

QPushButton:checked {
    border-color: #ffffff;
    background-color: #111827;
}

QPushButton#primary {
    background-color: #ffffff;
    color: #000000;
}

QPushButton#record {
    background-color: #ffffff;
    color: #000000;
    border-radius: 32px;
    min-width: 64px;
    min-height: 64px;
}

QPushButton#record:checked {
    background-color: #dc2626;
    color: #ffffff;
}
"""

GLOBAL_STYLE_SHEET_DAYLIGHT = """
QLabel#hint {
    color: #6b7280;
}
QLabel#recording {
    color: #dc2626;
}
"""

THEMES = {
    "Night": Theme(night_palette, GLOBAL_STYLE_SHEET_NIGHT),
    "Daylight": Theme(daylight_palette, GLOBAL_STYLE_SHEET_DAYLIGHT),
}

def apply_theme(app: QApplication, name: str):
    theme = THEMES.get(name)
    if not theme:
        # Fallback to Night if theme not found
        theme = THEMES["Night"]

    palette = theme.palette_func()
    app.setPalette(palette)
    app.setStyleSheet(theme.stylesheet)
