"""Single-session voice capture with a hard duration cap."""

from __future__ import annotations

import functools
import hashlib
import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from vocalpainter.errors import DeviceAccessError

logger = logging.getLogger(__name__)

MAX_RECORDING_MS = 60_000


class SessionState(Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    RECORDING = "recording"
    CAPTURED = "captured"
    FAILED = "failed"


@dataclass
class AudioSession:
    """State of the one recording owned by :class:`AudioCaptureController`."""

    state: SessionState = SessionState.IDLE
    raw: Optional[bytes] = None
    reference: Optional[str] = None
    elapsed_ms: float = 0.0
    duration_cap_ms: int = MAX_RECORDING_MS
    error: Optional[DeviceAccessError] = None

    @property
    def is_captured(self) -> bool:
        return self.state is SessionState.CAPTURED


class AudioInputSource(ABC):
    """Platform audio-input capability.

    ``request_access`` may block while the platform asks for permission.
    The device counts as held from ``open_stream`` until ``finalize``.
    """

    @abstractmethod
    def request_access(self) -> bool:
        """Return ``True`` when the microphone may be used."""

    @abstractmethod
    def open_stream(self) -> object:
        """Start capturing and return an opaque stream handle."""

    @abstractmethod
    def finalize(self, stream: object) -> bytes:
        """Stop ``stream``, release the device and return the encoded clip."""


class CapTimer(ABC):
    """Single-shot timer returned by a timer factory.

    ``threading.Timer`` is registered as a virtual subclass.
    """

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...


CapTimer.register(threading.Timer)

TimerFactory = Callable[[float, Callable[[], None]], CapTimer]


def _thread_timer(seconds: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(seconds, callback)
    timer.daemon = True
    return timer


def _reference_for(raw: bytes) -> str:
    return "voice:" + hashlib.sha1(raw).hexdigest()[:16]


class AudioCaptureController:
    """Drive an :class:`AudioSession` through its lifecycle.

    The cap timer and a manual :meth:`stop` both funnel into the same guarded
    finalization, so a clip is finalized at most once.  Every session gets a
    generation number; callbacks carrying an older generation are ignored.
    """

    def __init__(
        self,
        source: AudioInputSource,
        *,
        cap_ms: int = MAX_RECORDING_MS,
        timer_factory: Optional[TimerFactory] = None,
        on_captured: Optional[Callable[[AudioSession], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._cap_ms = min(int(cap_ms), MAX_RECORDING_MS)
        self._timer_factory = timer_factory or _thread_timer
        self._on_captured = on_captured
        self._clock = clock

        self._lock = threading.Lock()
        self._session = AudioSession(duration_cap_ms=self._cap_ms)
        self._generation = 0
        self._stream: Optional[object] = None
        self._timer: Optional[CapTimer] = None
        self._started_at: Optional[float] = None

    @property
    def session(self) -> AudioSession:
        return self._session

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def cap_ms(self) -> int:
        return self._cap_ms

    def set_captured_callback(self, callback: Optional[Callable[[AudioSession], None]]) -> None:
        self._on_captured = callback

    def elapsed_ms(self) -> float:
        """Milliseconds recorded so far, never more than the cap."""
        if self._session.state is not SessionState.RECORDING or self._started_at is None:
            return self._session.elapsed_ms
        elapsed = (self._clock() - self._started_at) * 1000.0
        return min(max(elapsed, 0.0), float(self._cap_ms))

    def start(self) -> AudioSession:
        """Request the microphone and begin recording."""
        with self._lock:
            state = self._session.state
            if state in (SessionState.REQUESTING, SessionState.RECORDING):
                logger.debug("start() ignored while %s", state.value)
                return self._session
            if state is SessionState.CAPTURED:
                logger.debug("start() ignored; reset the captured session first")
                return self._session
            self._generation += 1
            generation = self._generation
            self._session = AudioSession(
                state=SessionState.REQUESTING, duration_cap_ms=self._cap_ms
            )

        try:
            granted = self._source.request_access()
            if not granted:
                raise DeviceAccessError("Microphone access was denied")
            stream = self._source.open_stream()
        except DeviceAccessError as exc:
            self._fail(generation, exc)
            raise
        except Exception as exc:
            error = DeviceAccessError(f"Could not open audio input: {exc}")
            self._fail(generation, error)
            raise error from exc

        with self._lock:
            if generation != self._generation:
                abandoned = True
            else:
                abandoned = False
                self._stream = stream
                self._started_at = self._clock()
                self._session.state = SessionState.RECORDING
                self._timer = self._timer_factory(
                    self._cap_ms / 1000.0, functools.partial(self._on_cap_expired, generation)
                )
                self._timer.start()
        if abandoned:
            # Reset while the permission request was pending.
            logger.debug("Discarding stream opened for an abandoned session")
            self._source.finalize(stream)
            return self._session
        logger.info("Recording started (cap %d ms)", self._cap_ms)
        return self._session

    def stop(self) -> AudioSession:
        """Finish the recording; no-op unless currently recording."""
        return self._finish(None)

    def reset(self) -> AudioSession:
        """Discard the current session and return to Idle.

        A pending permission request is abandoned; its stream, if one is
        opened later, is released immediately.
        """
        if self._session.state is SessionState.RECORDING:
            self.stop()
        with self._lock:
            self._generation += 1
            self._session = AudioSession(duration_cap_ms=self._cap_ms)
        return self._session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _finish(self, generation: Optional[int]) -> AudioSession:
        with self._lock:
            if generation is not None and generation != self._generation:
                logger.debug("Ignoring cap timer of an earlier session")
                return self._session
            if self._session.state is not SessionState.RECORDING:
                logger.debug("stop() ignored while %s", self._session.state.value)
                return self._session
            timer, self._timer = self._timer, None
            if timer is not None:
                timer.cancel()
            stream, self._stream = self._stream, None
            elapsed = self.elapsed_ms()
            self._started_at = None
            session = self._session
            try:
                raw = self._source.finalize(stream)
            except Exception as exc:
                error = DeviceAccessError(f"Could not finalize recording: {exc}")
                session.state = SessionState.FAILED
                session.error = error
                logger.warning("Audio capture failed: %s", error)
                raise error from exc
            session.raw = bytes(raw)
            session.reference = _reference_for(session.raw)
            session.elapsed_ms = elapsed
            session.state = SessionState.CAPTURED

        logger.info("Recording captured: %.0f ms, %d bytes", session.elapsed_ms, len(session.raw))
        if self._on_captured is not None:
            self._on_captured(session)
        return session

    def _on_cap_expired(self, generation: int) -> None:
        logger.info("Recording cap of %d ms reached", self._cap_ms)
        self._finish(generation)

    def _fail(self, generation: int, error: DeviceAccessError) -> None:
        with self._lock:
            if generation == self._generation:
                self._session.state = SessionState.FAILED
                self._session.error = error
        logger.warning("Audio capture failed: %s", error)


__all__ = [
    "AudioCaptureController",
    "AudioInputSource",
    "AudioSession",
    "CapTimer",
    "SessionState",
    "TimerFactory",
    "MAX_RECORDING_MS",
]
