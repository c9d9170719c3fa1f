"""Memory studio main window: record, choose a feeling, save the pattern."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QColor, QIcon, QPixmap
from PyQt5.QtWidgets import (
    QButtonGroup,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from vocalpainter.audio.capture import AudioInputSource, SessionState
from vocalpainter.audio.playback import VoicePlayer
from vocalpainter.audio.qt_input import QtCapTimer
from vocalpainter.errors import DeviceAccessError
from vocalpainter.utils.memory_file import to_png_bytes
from vocalpainter.utils.settings_file import StudioSettings
from vocalpainter_core.navigation import FlowEvent, Screen
from vocalpainter_core.studio import MemoryStudio

_TICK_MS = 100


def _swatch_icon(color: str, size: int = 24) -> QIcon:
    pixmap = QPixmap(size, size)
    pixmap.fill(QColor(color))
    return QIcon(pixmap)


def _pixmap_from_png(data: bytes) -> QPixmap:
    pixmap = QPixmap()
    pixmap.loadFromData(data, "PNG")
    return pixmap


class MemoryWindow(QMainWindow):
    """Three-page window following :class:`ScreenFlow`."""

    def __init__(
        self,
        source: Optional[AudioInputSource] = None,
        *,
        studio: Optional[MemoryStudio] = None,
        settings: Optional[StudioSettings] = None,
        player_factory: Optional[Callable[[bytes], VoicePlayer]] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        if studio is None:
            if source is None:
                raise ValueError("MemoryWindow needs an audio source or a studio")
            studio = MemoryStudio(
                source,
                settings=settings,
                timer_factory=lambda seconds, callback: QtCapTimer(seconds, callback, self),
            )
        self.studio = studio
        self._player_factory = player_factory or (lambda data: VoicePlayer(data, self))
        self._player: Optional[VoicePlayer] = None
        self._emotion_buttons: Dict[str, QPushButton] = {}

        self.setWindowTitle("VocalPainter")
        self._pages = QStackedWidget()
        self._page_index: Dict[Screen, int] = {}
        self._page_index[Screen.HOME] = self._pages.addWidget(self._build_home_page())
        self._page_index[Screen.CREATE] = self._pages.addWidget(self._build_create_page())
        self._page_index[Screen.OPTIONS] = self._pages.addWidget(self._build_options_page())
        self.setCentralWidget(self._pages)

        self._tick = QTimer(self)
        self._tick.setInterval(_TICK_MS)
        self._tick.timeout.connect(self._on_tick)

        self.studio.flow.add_listener(self._show_screen)
        self._show_screen(self.studio.flow.screen)
        self._refresh_home()

    # ------------------------------------------------------------------
    # Page construction
    # ------------------------------------------------------------------
    def _build_home_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignCenter)

        title = QLabel("VocalPainter")
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)
        hint = QLabel("Turn voice into memory.\nNot as data, but as emotion made visible.")
        hint.setObjectName("hint")
        hint.setAlignment(Qt.AlignCenter)
        layout.addWidget(hint)

        self.record_button = QPushButton("Record")
        self.record_button.setObjectName("record")
        self.record_button.setCheckable(True)
        self.record_button.toggled.connect(self._toggle_recording)
        layout.addWidget(self.record_button, alignment=Qt.AlignCenter)

        cap_seconds = self.studio.capture.cap_ms // 1000
        self.recording_label = QLabel(f"Recording... (up to {cap_seconds} seconds)")
        self.recording_label.setObjectName("recording")
        self.recording_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.recording_label)

        self.play_button = QPushButton("Your Voice")
        self.play_button.clicked.connect(self._toggle_playback)
        layout.addWidget(self.play_button, alignment=Qt.AlignCenter)

        self.create_button = QPushButton("Create Memory")
        self.create_button.setObjectName("primary")
        self.create_button.clicked.connect(self._open_memory)
        layout.addWidget(self.create_button)

        footer = QLabel("No login. No account. No tracking.")
        footer.setObjectName("hint")
        footer.setAlignment(Qt.AlignCenter)
        layout.addWidget(footer)
        return page

    def _build_create_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        heading = QLabel("Choose Your Feeling")
        heading.setAlignment(Qt.AlignCenter)
        layout.addWidget(heading)

        grid = QGridLayout()
        self._emotion_group = QButtonGroup(self)
        self._emotion_group.setExclusive(True)
        for i, choice in enumerate(self.studio.palette.choices()):
            button = QPushButton(f"{choice.key.capitalize()}\n{choice.display_name}")
            button.setCheckable(True)
            button.setIcon(_swatch_icon(choice.color))
            button.clicked.connect(lambda _checked=False, key=choice.key: self._select_emotion(key))
            self._emotion_group.addButton(button)
            self._emotion_buttons[choice.key] = button
            grid.addWidget(button, i // 2, i % 2)
        layout.addLayout(grid)

        self.pattern_label = QLabel()
        self.pattern_label.setAlignment(Qt.AlignCenter)
        self.pattern_label.setMinimumSize(400, 400)
        layout.addWidget(self.pattern_label)

        self.voice_link_label = QLabel()
        self.voice_link_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.voice_link_label)

        actions = QHBoxLayout()
        self.save_button = QPushButton("Save")
        self.save_button.clicked.connect(self._save_memory)
        actions.addWidget(self.save_button)
        self.print_button = QPushButton("3D Print")
        self.print_button.setObjectName("primary")
        self.print_button.clicked.connect(lambda: self.studio.flow.dispatch(FlowEvent.ORDER_PRINT))
        actions.addWidget(self.print_button)
        layout.addLayout(actions)

        start_over = QPushButton("Start Over")
        start_over.clicked.connect(self._start_over)
        layout.addWidget(start_over)
        return page

    def _build_options_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        heading = QLabel("Send Your Memory")
        heading.setAlignment(Qt.AlignCenter)
        layout.addWidget(heading)
        note = QLabel("QR code will be on the base.\nScan to hear the original voice.")
        note.setObjectName("hint")
        note.setAlignment(Qt.AlignCenter)
        layout.addWidget(note)

        confirm = QPushButton("Confirm && Send")
        confirm.setObjectName("primary")
        confirm.clicked.connect(lambda: self.studio.flow.dispatch(FlowEvent.CONFIRM_SEND))
        layout.addWidget(confirm)
        back = QPushButton("Back to Memory")
        back.clicked.connect(lambda: self.studio.flow.dispatch(FlowEvent.BACK_TO_MEMORY))
        layout.addWidget(back)
        return page

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def _toggle_recording(self, checked: bool) -> None:
        if checked:
            self._stop_player()
            try:
                self.studio.record()
            except DeviceAccessError as exc:
                self.record_button.blockSignals(True)
                self.record_button.setChecked(False)
                self.record_button.blockSignals(False)
                QMessageBox.warning(self, "Microphone", str(exc))
                self._refresh_home()
                return
            self._tick.start()
        else:
            self.studio.stop()
        self._refresh_home()

    def _on_tick(self) -> None:
        if self.studio.capture.state is SessionState.RECORDING:
            seconds = self.studio.capture.elapsed_ms() / 1000.0
            self.recording_label.setText(f"Recording... {seconds:.0f}s")
            return
        # Cap timer finished the recording.
        self._tick.stop()
        self.record_button.blockSignals(True)
        self.record_button.setChecked(False)
        self.record_button.blockSignals(False)
        self._refresh_home()

    def _toggle_playback(self) -> None:
        session = self.studio.session
        if not session.is_captured:
            return
        if self._player is None:
            self._player = self._player_factory(session.raw)
            self._player.set_finished_callback(self._refresh_home)
        self._player.toggle()
        self._refresh_home()

    def _open_memory(self) -> None:
        self._stop_player()
        self.studio.open_memory()

    def _select_emotion(self, key: str) -> None:
        self.studio.select_emotion(key)
        self._refresh_create()

    def _save_memory(self) -> None:
        path = self.studio.export()
        if path is not None:
            self.statusBar().showMessage(f"Saved {path}", 5000)

    def _start_over(self) -> None:
        self._stop_player()
        self.studio.restart()
        self._refresh_home()

    def _show_screen(self, screen: Screen) -> None:
        self._pages.setCurrentIndex(self._page_index[screen])
        if screen is Screen.CREATE:
            self._refresh_create()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _stop_player(self) -> None:
        if self._player is not None:
            self._player.stop()
            self._player = None

    def _refresh_home(self) -> None:
        state = self.studio.capture.state
        recording = state is SessionState.RECORDING
        captured = state is SessionState.CAPTURED
        self.record_button.setText("Stop" if recording else "Record")
        self.recording_label.setVisible(recording)
        self.play_button.setVisible(captured)
        self.create_button.setVisible(captured)
        playing = self._player is not None and self._player.is_playing
        self.play_button.setText("Pause" if playing else "Your Voice")

    def _refresh_create(self) -> None:
        current = self.studio.palette.current.key
        button = self._emotion_buttons.get(current)
        if button is not None:
            button.setChecked(True)
        raster = self.studio.raster
        has_raster = raster is not None
        if has_raster:
            self.pattern_label.setPixmap(_pixmap_from_png(to_png_bytes(raster)))
        else:
            self.pattern_label.clear()
        code = self.studio.voice_link() if has_raster else None
        if code is not None:
            self.voice_link_label.setPixmap(_pixmap_from_png(code))
        else:
            self.voice_link_label.clear()
        self.save_button.setEnabled(has_raster)
        self.print_button.setEnabled(has_raster)


__all__ = ["MemoryWindow"]
