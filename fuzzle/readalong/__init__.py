"""
Read-Along Module

Word-by-word narration synchronized with on-screen highlighting.
"""

from fuzzle.readalong.display import render_text
from fuzzle.readalong.playback import (
    PlaybackState,
    PlaybackStatus,
    PlaybackSynchronizer,
    ThreadingScheduler,
    VoiceSettings,
)
from fuzzle.readalong.speech_engine import (
    Pyttsx3SpeechEngine,
    SpeechEngine,
    SpeechEngineError,
    Utterance,
)

__all__ = [
    "render_text",
    "PlaybackState",
    "PlaybackStatus",
    "PlaybackSynchronizer",
    "ThreadingScheduler",
    "VoiceSettings",
    "Pyttsx3SpeechEngine",
    "SpeechEngine",
    "SpeechEngineError",
    "Utterance",
]
