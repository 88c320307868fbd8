"""Tests for configuration."""

from fuzzle.utils.config import Config, config


class TestConfig:
    """Tests for the settings singleton."""

    def test_singleton(self):
        assert Config() is config

    def test_voice_settings(self):
        assert config.voice_rate == 0.6
        assert config.voice_pitch == 1.1
        assert config.voice_volume == 0.9
        assert config.voice_base_rate == 200

    def test_playback_and_vocabulary_settings(self):
        assert config.settle_delay == 0.4
        assert config.vocabulary_limit == 3
        assert config.syllable_min_length == 4

    def test_get_with_default(self):
        assert config.get("voice", "missing", default="x") == "x"
        assert config.get("voice", "rate", "deeper", default=1) == 1

    def test_packaged_data_paths(self):
        assert config.dictionary_path.name == "dictionary.yaml"
        assert config.dictionary_path.exists()
        assert config.simplifications_path.exists()
