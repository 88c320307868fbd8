"""
Playback Synchronizer Module

Reads text aloud one word at a time and tracks which word is being spoken,
so the display can highlight exactly the word the reader hears.

Each word goes through two waits: the speech engine's "finished"
notification, then a short settling pause before the next word. Both are
scheduled continuations on an asyncio-compatible scheduler; nothing blocks.
Outside an event loop the continuations run on timer threads instead.
"""

import asyncio
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Tuple

from fuzzle.readalong.speech_engine import SpeechEngine, Utterance
from fuzzle.utils.config import config
from fuzzle.words import tokenize


class Scheduler(Protocol):
    """Anything with asyncio's ``call_later``; an event loop qualifies."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Any:
        ...


class ThreadingScheduler:
    """Scheduler for callers without an event loop: one timer thread per call."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> threading.Timer:
        timer = threading.Timer(delay, callback, args)
        timer.daemon = True
        timer.start()
        return timer


def default_scheduler() -> Scheduler:
    """The running event loop, or a ThreadingScheduler when there is none."""
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return ThreadingScheduler()


class PlaybackStatus(str, Enum):
    """Playback state machine states."""

    IDLE = "idle"
    PLAYING = "playing"
    STOPPED = "stopped"  # Stopped by request; passes straight back to idle


@dataclass(frozen=True)
class PlaybackState:
    """Snapshot of the synchronizer's state."""

    status: PlaybackStatus
    tokens: Tuple[str, ...]
    current_index: int  # -1 when no word is highlighted

    @property
    def current_word(self) -> Optional[str]:
        if 0 <= self.current_index < len(self.tokens):
            return self.tokens[self.current_index]
        return None


@dataclass(frozen=True)
class VoiceSettings:
    """How each word is spoken."""

    rate: float = 0.6
    pitch: float = 1.1
    volume: float = 0.9

    @classmethod
    def from_config(cls) -> "VoiceSettings":
        return cls(
            rate=config.voice_rate,
            pitch=config.voice_pitch,
            volume=config.voice_volume,
        )


StateListener = Callable[[PlaybackState], None]


class PlaybackSynchronizer:
    """
    Word-by-word narration state machine.

    Only one utterance is ever active. The next word is spoken only after
    the engine reports the current one finished and the settling delay has
    passed, so ``current_index`` always points at the word being heard.

    Every run gets a new run id. ``stop()`` bumps it, so a finished
    notification or settling timer left over from a stopped run is ignored
    and cannot restart narration.

    Finished notifications may arrive from a speech engine's own thread.
    They are handed to the scheduler's loop when it is an event loop, and
    every transition holds one reentrant lock otherwise.
    """

    def __init__(
        self,
        engine: SpeechEngine,
        scheduler: Optional[Scheduler] = None,
        voice: Optional[VoiceSettings] = None,
        settle_delay: Optional[float] = None,
    ):
        """
        Initialize the synchronizer.

        Args:
            engine: Speech engine to speak through
            scheduler: Provides call_later (default: the running event loop,
                or timer threads when constructed outside one)
            voice: Rate, pitch and volume (default: from config)
            settle_delay: Pause between words in seconds (default: from config)
        """
        self.engine = engine
        self.scheduler = scheduler if scheduler is not None else default_scheduler()
        self.voice = voice or VoiceSettings.from_config()
        self.settle_delay = config.settle_delay if settle_delay is None else settle_delay

        self._status = PlaybackStatus.IDLE
        self._tokens: List[str] = []
        self._index = -1
        self._run_id = 0
        self._active: Optional[Utterance] = None
        self._pending = None
        self._listeners: List[StateListener] = []
        self._lock = threading.RLock()

        self.engine.connect(self._on_utterance_finished)

    # ---- State ----

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def is_playing(self) -> bool:
        return self._status is PlaybackStatus.PLAYING

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(self._status, tuple(self._tokens), self._index)

    def add_listener(self, listener: StateListener) -> None:
        """Call ``listener`` with a state snapshot after every transition."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)

    # ---- Transitions ----

    def start(self, text: str) -> None:
        """
        Start reading text aloud.

        Does nothing for blank text or when the engine is unavailable. A run
        already in progress is stopped first.
        """
        if not text or not text.strip():
            return
        if not self.engine.available:
            return

        with self._lock:
            if self._status is PlaybackStatus.PLAYING:
                self.stop()

            self._run_id += 1
            self._tokens = tokenize(text)
            self._status = PlaybackStatus.PLAYING
            self._speak(0)

    def stop(self) -> None:
        """Stop reading immediately. Safe to call at any time."""
        with self._lock:
            if self._status is not PlaybackStatus.PLAYING:
                return

            self._run_id += 1
            run_id = self._run_id
            self._active = None
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self.engine.cancel_all()

            self._status = PlaybackStatus.STOPPED
            self._notify()
            if run_id == self._run_id:
                self._reset()

    def _reset(self) -> None:
        self._status = PlaybackStatus.IDLE
        self._index = -1
        self._notify()

    def _speak(self, index: int) -> None:
        # Called with the lock held, so a finished notification for this
        # word waits until _active is assigned
        run_id = self._run_id
        self._index = index
        self._notify()
        if run_id != self._run_id:
            # A listener stopped or restarted playback
            return
        self._active = self.engine.speak(
            self._tokens[index],
            rate=self.voice.rate,
            pitch=self.voice.pitch,
            volume=self.voice.volume,
        )

    def _on_utterance_finished(self, utterance: Utterance, completed: bool) -> None:
        with self._lock:
            if self._active is None or utterance.serial != self._active.serial:
                return

            self._active = None
            run_id = self._run_id
            if self._off_loop_thread():
                self.scheduler.call_soon_threadsafe(self._settle, run_id)
            else:
                self._settle(run_id)

    def _off_loop_thread(self) -> bool:
        """Whether the scheduler is an event loop running on another thread."""
        if not isinstance(self.scheduler, asyncio.AbstractEventLoop):
            return False
        try:
            return asyncio.get_running_loop() is not self.scheduler
        except RuntimeError:
            return True

    def _settle(self, run_id: int) -> None:
        with self._lock:
            if run_id != self._run_id:
                return
            self._pending = self.scheduler.call_later(self.settle_delay, self._advance, run_id)

    def _advance(self, run_id: int) -> None:
        with self._lock:
            if run_id != self._run_id or self._status is not PlaybackStatus.PLAYING:
                return

            self._pending = None
            next_index = self._index + 1
            if next_index >= len(self._tokens):
                self._reset()
                return

            self._speak(next_index)
