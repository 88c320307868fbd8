"""Shared fixtures for the Fuzzle test suite."""

from types import MappingProxyType
from typing import Any, Callable, List, Tuple

import pytest

from fuzzle.dictionary import DictionaryEntry, Difficulty
from fuzzle.readalong.speech_engine import SpeechEngine, Utterance


class FakeSpeechEngine(SpeechEngine):
    """Speech engine that only records requests; tests finish utterances by hand."""

    def __init__(self, available: bool = True):
        super().__init__()
        self._available = available
        self.spoken: List[Utterance] = []
        self.outstanding: List[Utterance] = []
        self.cancel_count = 0

    @property
    def available(self) -> bool:
        return self._available

    def speak(self, text: str, rate: float, pitch: float, volume: float) -> Utterance:
        utterance = self._new_utterance(text, rate, pitch, volume)
        self.spoken.append(utterance)
        self.outstanding.append(utterance)
        return utterance

    def cancel_all(self) -> None:
        self.cancel_count += 1
        self.outstanding.clear()

    def finish(self, utterance: Utterance = None, completed: bool = True) -> None:
        """Deliver the finished notification for an utterance (default: the oldest)."""
        if utterance is None:
            utterance = self.outstanding[0]
        if utterance in self.outstanding:
            self.outstanding.remove(utterance)
        self._notify_finished(utterance, completed)

    @property
    def words(self) -> List[str]:
        return [u.text for u in self.spoken]


class _TimerHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """call_later scheduler driven by a fake clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: List[Tuple[float, _TimerHandle, Callable[..., Any], tuple]] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _TimerHandle:
        handle = _TimerHandle()
        self._timers.append((self.now + delay, handle, callback, args))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, handle, _, _ in self._timers if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward and run every timer that came due."""
        self.now += seconds
        due = [t for t in self._timers if t[0] <= self.now]
        self._timers = [t for t in self._timers if t[0] > self.now]
        for _, handle, callback, args in sorted(due, key=lambda t: t[0]):
            if not handle.cancelled:
                callback(*args)


@pytest.fixture
def dictionary():
    """A small dictionary shaped like the packaged one."""
    return MappingProxyType({
        "cognitive": DictionaryEntry(
            definition="Related to the mental processes of thinking, learning, and understanding",
            example="Cognitive development is important for academic success.",
            emoji="💭",
            difficulty=Difficulty.HARD,
        ),
        "technologies": DictionaryEntry(
            definition="Tools, machines, or systems that help solve problems or make tasks easier",
            example="Educational technologies are transforming how students learn.",
            emoji="💻",
            difficulty=Difficulty.EASY,
        ),
    })


@pytest.fixture
def engine() -> FakeSpeechEngine:
    return FakeSpeechEngine()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
