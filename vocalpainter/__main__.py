"""Launch the memory studio window."""

import argparse
import logging
import sys
from typing import List, Optional

from vocalpainter.utils.settings_file import StudioSettings, load_settings


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="vocalpainter", description="Turn your voice into a visual memory.")
    parser.add_argument("--settings", help="Path to a settings JSON file")
    parser.add_argument("--theme", help="UI theme name (overrides settings)")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    settings = load_settings(args.settings) if args.settings else StudioSettings()
    if args.theme:
        settings.theme = args.theme

    from PyQt5.QtWidgets import QApplication

    from vocalpainter.audio.qt_input import QtAudioInputSource
    from vocalpainter.ui import themes
    from vocalpainter.ui.memory_window import MemoryWindow

    app = QApplication(sys.argv[:1])
    themes.apply_theme(app, settings.theme)

    source = QtAudioInputSource(settings.sample_rate, settings.channels)
    window = MemoryWindow(source, settings=settings)
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
