"""Tests for the pyttsx3 speech engine adapter."""

import threading
from types import SimpleNamespace

import pytest
import pyttsx3

from fuzzle.readalong.playback import PlaybackStatus, PlaybackSynchronizer
from fuzzle.readalong.speech_engine import Pyttsx3SpeechEngine


class FakeDriverEngine:
    """Stands in for the object returned by pyttsx3.init()."""

    def __init__(self):
        self.properties = {
            "voices": [
                SimpleNamespace(id="voice.en-us.default", name="English (America)"),
                SimpleNamespace(id="voice.en-gb.alt", name="English (Great Britain)"),
            ],
            "rate": 200,
            "volume": 1.0,
        }
        self.said = []
        self.stopped = False

    def getProperty(self, name):
        return self.properties[name]

    def setProperty(self, name, value):
        self.properties[name] = value

    def say(self, text):
        self.said.append((text, self.properties["rate"], self.properties["volume"]))

    def runAndWait(self):
        pass

    def stop(self):
        self.stopped = True


@pytest.fixture
def driver(monkeypatch):
    fake = FakeDriverEngine()
    monkeypatch.setattr(pyttsx3, "init", lambda *args, **kwargs: fake)
    return fake


@pytest.fixture
def speech():
    engine = Pyttsx3SpeechEngine(base_rate=200)
    yield engine
    engine.close()


def _wait_for_finished(engine, count=1):
    finished = []
    done = threading.Event()

    def on_finished(utterance, completed):
        finished.append((utterance, completed))
        if len(finished) >= count:
            done.set()

    engine.connect(on_finished)
    return finished, done


class TestPyttsx3SpeechEngine:
    """Tests against a fake pyttsx3 driver."""

    def test_available(self, driver, speech):
        assert speech.available is True

    def test_speaks_with_rate_and_volume(self, driver, speech):
        finished, done = _wait_for_finished(speech)

        utterance = speech.speak("Hello", rate=0.6, pitch=1.1, volume=0.9)

        assert done.wait(timeout=5)
        assert driver.said == [("Hello", 120, 0.9)]
        assert finished == [(utterance, True)]

    def test_utterances_finish_in_order(self, driver, speech):
        finished, done = _wait_for_finished(speech, count=2)

        first = speech.speak("one", 1.0, 1.0, 1.0)
        second = speech.speak("two", 1.0, 1.0, 1.0)

        assert done.wait(timeout=5)
        assert [u for u, _ in finished] == [first, second]
        assert first.serial < second.serial

    def test_selects_configured_voice(self, driver):
        engine = Pyttsx3SpeechEngine(voice="great britain")
        try:
            assert engine.available
            assert driver.properties["voice"] == "voice.en-gb.alt"
        finally:
            engine.close()

    def test_cancelled_utterances_are_not_spoken(self, driver, speech):
        assert speech.available
        gate = threading.Event()
        speaking = threading.Event()

        def blocking_run():
            speaking.set()
            gate.wait(timeout=5)

        driver.runAndWait = blocking_run
        finished, done = _wait_for_finished(speech, count=2)

        blocking = speech.speak("first", 1.0, 1.0, 1.0)
        queued = speech.speak("second", 1.0, 1.0, 1.0)
        assert speaking.wait(timeout=5)
        speech.cancel_all()
        gate.set()
        after = speech.speak("third", 1.0, 1.0, 1.0)

        assert done.wait(timeout=5)
        assert [text for text, _, _ in driver.said] == ["first", "third"]
        assert finished == [(blocking, False), (after, True)]
        assert queued not in [u for u, _ in finished]

    def test_init_failure_means_unavailable(self, monkeypatch):
        def broken_init(*args, **kwargs):
            raise RuntimeError("no espeak")

        monkeypatch.setattr(pyttsx3, "init", broken_init)
        engine = Pyttsx3SpeechEngine()
        try:
            assert engine.available is False
        finally:
            engine.close()

    def test_close_stops_driver(self, driver):
        engine = Pyttsx3SpeechEngine()
        assert engine.available
        engine.close()
        assert driver.stopped is True

    def test_failing_callback_keeps_worker_running(self, driver, speech):
        finished, done = _wait_for_finished(speech, count=2)

        def broken(utterance, completed):
            raise RuntimeError("listener failed")

        speech.connect(broken)
        speech.speak("one", 1.0, 1.0, 1.0)
        speech.speak("two", 1.0, 1.0, 1.0)

        assert done.wait(timeout=5)
        assert [u.text for u, _ in finished] == ["one", "two"]


class TestWithoutEventLoop:
    """Narration driven by the worker thread alone, with no event loop."""

    def test_playback_reaches_idle(self, driver, speech):
        synchronizer = PlaybackSynchronizer(speech, settle_delay=0)
        done = threading.Event()
        highlighted = []

        def on_change(state):
            highlighted.append(state.current_index)
            if state.status is PlaybackStatus.IDLE:
                done.set()

        synchronizer.add_listener(on_change)
        synchronizer.start("one two three")

        assert done.wait(timeout=5)
        assert [text for text, _, _ in driver.said] == ["one", "two", "three"]
        assert highlighted == [0, 1, 2, -1]
        assert synchronizer.status is PlaybackStatus.IDLE

    def test_stop_from_caller_thread(self, driver, speech):
        gate = threading.Event()
        speaking = threading.Event()

        def blocking_run():
            speaking.set()
            gate.wait(timeout=5)

        driver.runAndWait = blocking_run
        synchronizer = PlaybackSynchronizer(speech, settle_delay=0)
        synchronizer.start("one two three")
        assert speaking.wait(timeout=5)

        synchronizer.stop()
        gate.set()
        speech.close()

        assert synchronizer.status is PlaybackStatus.IDLE
        assert [text for text, _, _ in driver.said] == ["one"]
