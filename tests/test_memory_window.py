from pathlib import Path
import sys
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    from PyQt5.QtWidgets import QApplication
except ImportError as exc:  # pragma: no cover - environment dependent
    pytest.skip(f"PyQt5 not available: {exc}", allow_module_level=True)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

pytest.importorskip("PyQt5.QtMultimedia")

from vocalpainter.audio.capture import SessionState
from vocalpainter.ui.memory_window import MemoryWindow
from vocalpainter_core import MemoryStudio
from vocalpainter_core.navigation import Screen


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


class DummyPlayer:
    def __init__(self, data):
        self.data = data
        self.playing = False
        self.stopped = False

    @property
    def is_playing(self):
        return self.playing

    def set_finished_callback(self, callback):
        self.callback = callback

    def toggle(self):
        self.playing = not self.playing
        return self.playing

    def stop(self):
        self.stopped = True
        self.playing = False


@pytest.fixture
def window(qapp, source, timers):
    studio = MemoryStudio(source, timer_factory=timers)
    players = []

    def factory(data):
        player = DummyPlayer(data)
        players.append(player)
        return player

    win = MemoryWindow(studio=studio, player_factory=factory)
    win.players = players
    return win


def test_record_then_create_memory(window, source):
    assert window.create_button.isHidden()

    window.record_button.setChecked(True)
    assert window.studio.session.state is SessionState.RECORDING
    assert window.record_button.text() == "Stop"

    window.record_button.setChecked(False)
    assert window.studio.session.state is SessionState.CAPTURED
    assert not window.create_button.isHidden()

    window.play_button.click()
    assert window.players[0].data == source.payload
    assert window.play_button.text() == "Pause"

    window.create_button.click()
    assert window.studio.flow.screen is Screen.CREATE
    assert window.players[0].stopped is True
    assert not window.pattern_label.pixmap().isNull()
    assert window.save_button.isEnabled()


def test_emotion_button_regenerates(window):
    window.record_button.setChecked(True)
    window.record_button.setChecked(False)
    window.create_button.click()

    window._emotion_buttons["joy"].click()
    assert window.studio.raster.source_color == "#eab308"
    assert window._emotion_buttons["joy"].isChecked()


def test_cap_expiry_resets_record_button(window, timers):
    window.record_button.setChecked(True)
    timers.last.fire()
    window._on_tick()

    assert window.studio.session.state is SessionState.CAPTURED
    assert window.record_button.isChecked() is False
    assert window.record_button.text() == "Record"


def test_start_over_returns_home(window):
    window.record_button.setChecked(True)
    window.record_button.setChecked(False)
    window.create_button.click()

    window._start_over()
    assert window.studio.flow.screen is Screen.HOME
    assert window.studio.session.state is SessionState.IDLE
    assert window.create_button.isHidden()
