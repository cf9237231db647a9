"""Pytest fixtures for tests."""

from collections import deque
from pathlib import Path
from tempfile import TemporaryDirectory

import numpy as np
import pytest
import soundfile as sf

from padboard.audio import AudioData
from padboard.core import ClipLibrary
from padboard.exceptions import PlaybackError
from padboard.models import Clip

SAMPLE_RATE = 44100


class FakeTimer:
    """Cancellable timer handle returned by FakeScheduler.call_later."""

    def __init__(self, when: float, callback, args: tuple):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """
    Deterministic stand-in for an asyncio event loop.

    Queued callbacks run on run_pending(); timers run when advance() moves
    the manual clock past their deadline.
    """

    def __init__(self):
        self.now = 0.0
        self._ready: deque = deque()
        self._timers: list[FakeTimer] = []

    def call_soon_threadsafe(self, callback, *args):
        self._ready.append((callback, args))

    def call_later(self, delay: float, callback, *args) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback, args)
        self._timers.append(timer)
        return timer

    def run_pending(self) -> None:
        while self._ready:
            callback, args = self._ready.popleft()
            callback(*args)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in deadline order."""
        target = self.now + seconds
        self.run_pending()
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self._timers.remove(timer)
            self.now = timer.when
            timer.callback(*timer.args)
            self.run_pending()
        self.now = target

    @property
    def pending_callbacks(self) -> int:
        return len(self._ready)

    @property
    def live_timers(self) -> list[FakeTimer]:
        return [t for t in self._timers if not t.cancelled]


class FakePlayback:
    """Playback handle returned by FakeAudioOutput."""

    def __init__(self, playback_id: int, resource):
        self.playback_id = playback_id
        self.resource = resource
        self.stopped = False


class FakeAudioOutput:
    """Audio output that records calls and can be told to fail."""

    def __init__(self):
        self.started: list[FakePlayback] = []
        self.stopped: list[FakePlayback] = []
        self.fail_with: Exception | None = None
        self.device_name = "Fake Device"

    def start_playback(self, resource) -> FakePlayback:
        if self.fail_with is not None:
            raise self.fail_with
        playback = FakePlayback(len(self.started) + 1, resource)
        self.started.append(playback)
        return playback

    def stop_playback(self, handle: FakePlayback) -> None:
        handle.stopped = True
        self.stopped.append(handle)

    @property
    def live(self) -> list[FakePlayback]:
        return [p for p in self.started if not p.stopped]


class EventRecorder:
    """PadObserver that records every notification."""

    def __init__(self):
        self.events = []

    def on_pad_event(self, event) -> None:
        self.events.append(event)

    def for_pad(self, pad_id: int) -> list:
        return [e for e in self.events if e.pad_id == pad_id]

    def of_type(self, event_type) -> list:
        return [e for e in self.events if isinstance(e, event_type)]


def _clip(pad_id: int, duration_millis: float = 500.0) -> Clip:
    frames = max(1, int(SAMPLE_RATE * duration_millis / 1000))
    audio = AudioData.from_array(np.zeros(frames, dtype=np.float32), SAMPLE_RATE)
    return Clip(pad_id=pad_id, duration_millis=duration_millis, resource=audio)


def _write_tone(path: Path, duration: float, sample_rate: int = SAMPLE_RATE) -> Path:
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False, dtype=np.float32)
    sf.write(str(path), (0.5 * np.sin(2 * np.pi * 440 * t)).astype(np.float32), sample_rate)
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_audio_array():
    """100ms mono sine wave."""
    duration = 0.1
    t = np.linspace(0, duration, int(SAMPLE_RATE * duration), dtype=np.float32)
    return np.sin(2 * np.pi * 440 * t).astype(np.float32)


@pytest.fixture
def sample_audio_file(temp_dir):
    """A 100ms WAV file."""
    return _write_tone(temp_dir / "test.wav", 0.1)


@pytest.fixture
def assets_dir(temp_dir):
    """A directory with 16 clips, 0.wav .. 15.wav, pad i lasting (50 + 10*i) ms."""
    directory = temp_dir / "sounds"
    directory.mkdir()
    for pad_id in range(16):
        _write_tone(directory / f"{pad_id}.wav", (50 + 10 * pad_id) / 1000)
    return directory


@pytest.fixture
def write_tone():
    """Helper to write a sine tone WAV file: write_tone(path, seconds)."""
    return _write_tone


@pytest.fixture
def make_clip():
    """Factory for in-memory clips: make_clip(pad_id, duration_millis)."""
    return _clip


@pytest.fixture
def library():
    """16 in-memory clips; pad i lasts (500 + 100*i) ms."""
    return ClipLibrary([_clip(pad_id, 500.0 + 100 * pad_id) for pad_id in range(16)])


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def audio_output():
    return FakeAudioOutput()


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def playback_error():
    return PlaybackError("Audio output is not running.")
