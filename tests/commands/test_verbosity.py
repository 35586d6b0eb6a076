"""Tests for verbosity levels."""

import dataclasses

import pytest

from voicecommands.commands.verbosity import Verbosity, VerbosityConfig


class TestVerbosityConfig:
    def test_levels(self):
        minimal = VerbosityConfig.for_level("minimal")
        assert (minimal.max_spoken_words, minimal.max_detail_slots) == (12, 0)

        normal = VerbosityConfig.for_level(Verbosity.NORMAL)
        assert (normal.max_spoken_words, normal.max_detail_slots) == (25, 3)

        detailed = VerbosityConfig.for_level("detailed")
        assert detailed.max_spoken_words == 60
        assert detailed.max_detail_slots is None

    def test_only_limits_used_by_descriptions(self):
        names = [f.name for f in dataclasses.fields(VerbosityConfig)]
        assert names == ["level", "max_spoken_words", "max_detail_slots"]
        assert not hasattr(VerbosityConfig, "truncate_summary")

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            VerbosityConfig.for_level("loud")


class TestTruncateSpokenText:
    def test_long_text_is_cut_on_words(self):
        config = VerbosityConfig.for_level("minimal")
        text = " ".join(f"word{i}" for i in range(15))
        assert config.truncate_spoken_text(text) == " ".join(f"word{i}" for i in range(12)) + "..."

    def test_short_text_is_unchanged(self):
        config = VerbosityConfig.for_level("minimal")
        assert config.truncate_spoken_text("Create task: call mom") == "Create task: call mom"
        assert config.truncate_spoken_text("") == ""

    def test_description_length_follows_level(self):
        text = " ".join(f"w{i}" for i in range(40))
        assert len(VerbosityConfig.for_level("normal").truncate_spoken_text(text).split()) == 25
        assert VerbosityConfig.for_level("detailed").truncate_spoken_text(text) == text
