"""
Speech Engine Module

Speech engines speak one utterance at a time and report back when each
utterance has finished. The playback synchronizer only talks to the
abstract SpeechEngine; Pyttsx3SpeechEngine drives the system voice.
"""

import itertools
import queue
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

from rich.markup import escape

from fuzzle.utils.config import config
from fuzzle.utils import logger


class SpeechEngineError(Exception):
    """Raised when the speech engine cannot be started."""
    pass


@dataclass(frozen=True)
class Utterance:
    """Handle for one speak request."""

    serial: int
    text: str
    rate: float  # Multiplier of the engine's normal rate
    pitch: float  # Multiplier of the voice's normal pitch
    volume: float  # 0.0 to 1.0


# Called with (utterance, completed); completed is False for interrupted speech
FinishedCallback = Callable[[Utterance, bool], None]


class SpeechEngine(ABC):
    """Interface the playback synchronizer expects from a speech engine."""

    def __init__(self) -> None:
        self._callbacks: List[FinishedCallback] = []
        self._serials = itertools.count(1)

    def connect(self, callback: FinishedCallback) -> None:
        """Register a callback for finished utterances."""
        self._callbacks.append(callback)

    def disconnect(self, callback: FinishedCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _new_utterance(self, text: str, rate: float, pitch: float, volume: float) -> Utterance:
        return Utterance(next(self._serials), text, rate, pitch, volume)

    def _notify_finished(self, utterance: Utterance, completed: bool) -> None:
        for callback in list(self._callbacks):
            callback(utterance, completed)

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether the engine can speak at all."""

    @abstractmethod
    def speak(self, text: str, rate: float, pitch: float, volume: float) -> Utterance:
        """Queue text for speaking and return its handle."""

    @abstractmethod
    def cancel_all(self) -> None:
        """Drop every queued utterance and interrupt the current one."""

    def close(self) -> None:
        """Release engine resources."""


class Pyttsx3SpeechEngine(SpeechEngine):
    """
    Speak through the system voice using pyttsx3.

    pyttsx3 blocks while speaking, so utterances are spoken on a dedicated
    worker thread. Finished notifications are handed to ``loop`` with
    ``call_soon_threadsafe`` so listeners run on the caller's event loop;
    without a loop they run on the worker thread, and a callback that
    raises is logged without stopping the worker.

    On Windows: Uses SAPI5 voices
    On macOS: Uses NSSpeechSynthesizer
    On Linux: Uses espeak
    """

    INIT_TIMEOUT = 10.0

    def __init__(
        self,
        voice: Optional[str] = None,
        base_rate: Optional[int] = None,
        loop=None,
    ):
        """
        Initialize the pyttsx3 speech engine.

        Args:
            voice: Voice id or name fragment (system-specific)
            base_rate: Words per minute for a rate multiplier of 1.0
            loop: Event loop that receives finished notifications
        """
        super().__init__()
        self.voice = voice or config.voice
        self.base_rate = base_rate or config.voice_base_rate
        self.loop = loop

        self._engine = None
        self._queue: "queue.Queue[Optional[Utterance]]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._ready = threading.Event()
        self._lock = threading.Lock()
        self._cancelled_through = 0

    def _create_engine(self):
        """Create and configure the pyttsx3 engine."""
        try:
            import pyttsx3
        except ImportError as e:
            raise SpeechEngineError(
                "pyttsx3 not installed. Install with:\n"
                "  pip install pyttsx3"
            ) from e

        try:
            engine = pyttsx3.init()
        except Exception as e:
            raise SpeechEngineError(f"Failed to initialize pyttsx3: {e}") from e

        # Set voice if specified
        if self.voice:
            for v in engine.getProperty("voices"):
                if self.voice.lower() in v.id.lower() or self.voice.lower() in v.name.lower():
                    engine.setProperty("voice", v.id)
                    logger.info(f"Using voice: {v.name}")
                    break

        return engine

    def _ensure_worker(self) -> None:
        if self._worker is not None:
            return
        self._worker = threading.Thread(
            target=self._run, name="fuzzle-speech", daemon=True
        )
        self._worker.start()
        self._ready.wait(timeout=self.INIT_TIMEOUT)

    def _run(self) -> None:
        """Worker loop: create the engine, then speak queued utterances in order."""
        try:
            self._engine = self._create_engine()
        except SpeechEngineError as e:
            logger.warning(str(e))
            return
        finally:
            self._ready.set()

        while True:
            utterance = self._queue.get()
            if utterance is None:
                break
            if self._is_cancelled(utterance):
                continue

            self._engine.setProperty("rate", int(self.base_rate * utterance.rate))
            self._engine.setProperty("volume", utterance.volume)
            # pitch is not exposed by the pyttsx3 drivers
            self._engine.say(utterance.text)
            self._engine.runAndWait()

            self._deliver(utterance, not self._is_cancelled(utterance))

        self._engine.stop()

    def _is_cancelled(self, utterance: Utterance) -> bool:
        with self._lock:
            return utterance.serial <= self._cancelled_through

    def _deliver(self, utterance: Utterance, completed: bool) -> None:
        if self.loop is not None:
            self.loop.call_soon_threadsafe(self._notify_finished, utterance, completed)
            return
        try:
            self._notify_finished(utterance, completed)
        except Exception as e:
            logger.error(f"Speech callback failed for '{escape(utterance.text)}': {escape(str(e))}")

    @property
    def available(self) -> bool:
        self._ensure_worker()
        return self._engine is not None

    def speak(self, text: str, rate: float, pitch: float, volume: float) -> Utterance:
        self._ensure_worker()
        with self._lock:
            utterance = self._new_utterance(text, rate, pitch, volume)
        self._queue.put(utterance)
        return utterance

    def cancel_all(self) -> None:
        """
        Cancel everything spoken so far.

        Queued utterances are dropped; a word already being spoken is
        reported as not completed.
        """
        with self._lock:
            self._cancelled_through = self._peek_serial()

    def _peek_serial(self) -> int:
        # itertools.count has no peek; advance it and keep the value as a cut-off
        return next(self._serials) - 1

    def close(self) -> None:
        if self._worker is None:
            return
        self.cancel_all()
        self._queue.put(None)
        self._worker.join(timeout=self.INIT_TIMEOUT)
        self._worker = None
