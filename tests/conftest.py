from pathlib import Path
import io
import sys

import numpy as np
import pytest
import soundfile as sf

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from vocalpainter.audio.capture import AudioInputSource


def wav_bytes(seconds: float, sample_rate: int = 8000, value: float = 0.1) -> bytes:
    frames = int(seconds * sample_rate)
    audio = np.full((frames, 1), value, dtype=np.float32)
    out = io.BytesIO()
    sf.write(out, audio, sample_rate, format="WAV", subtype="PCM_16")
    return out.getvalue()


class FakeSource(AudioInputSource):
    def __init__(self, grant=True, payload=None, open_error=None, access_error=None, finalize_error=None):
        self.grant = grant
        self.payload = payload if payload is not None else wav_bytes(0.2)
        self.open_error = open_error
        self.access_error = access_error
        self.finalize_error = finalize_error
        self.requests = 0
        self.opened = 0
        self.finalized = []
        self.held = False

    def request_access(self):
        self.requests += 1
        if self.access_error is not None:
            raise self.access_error
        return self.grant

    def open_stream(self):
        if self.open_error is not None:
            raise self.open_error
        self.opened += 1
        self.held = True
        return {"stream": self.opened}

    def finalize(self, stream):
        self.finalized.append(stream)
        self.held = False
        if self.finalize_error is not None:
            raise self.finalize_error
        return self.payload


class FakeTimer:
    def __init__(self, seconds, callback):
        self.seconds = seconds
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # Fires even if cancelled, like a timer thread that already woke up.
        self.callback()


class FakeTimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, seconds, callback):
        timer = FakeTimer(seconds, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def timers():
    return FakeTimerFactory()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source_factory():
    return FakeSource


@pytest.fixture
def make_wav():
    return wav_bytes
