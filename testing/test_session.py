"""
Tests for ValidationSession, the state behind the result page.
"""

import json

import pytest

from character_validator.config import CharacterFileError, SystemConfig, ViewerConfig
from character_validator.services import ValidationInProgress, ValidationSession


class TestValidationSession:

    def test_starts_empty(self):
        session = ValidationSession()

        assert session.file_name is None
        assert session.outcome is None
        assert session.tree is None
        assert not session.is_loading
        assert not session.is_valid
        assert session.report == []
        assert session.summary is None

    def test_valid_load(self, full_character):
        session = ValidationSession()

        session.load_content("bot.json", json.dumps(full_character))

        assert session.file_name == "bot.json"
        assert session.is_valid
        assert session.errors == []
        assert session.tree is not None
        assert session.tree.data == full_character
        assert not session.tree.root.is_expanded

        summary = session.summary
        assert summary.name == "Bot"
        assert summary.model_provider == "openai"
        assert summary.model == "gpt-4o"
        assert summary.plugins == ["@plugin/image-generation"]
        assert summary.has_plugins

    def test_summary_without_plugins(self, character):
        session = ValidationSession()
        session.load_content("bot.json", json.dumps(character))

        assert session.summary.plugins == []
        assert not session.summary.has_plugins
        assert session.summary.model is None

    def test_initial_expanded_from_config(self, character):
        config = SystemConfig(viewer=ViewerConfig(initial_expanded=True))
        session = ValidationSession(config)

        session.load_content("bot.json", json.dumps(character))

        assert session.tree.root.is_expanded

    def test_invalid_load(self, character):
        character["clients"] = []
        session = ValidationSession()

        session.load_content("bot.json", json.dumps(character))

        assert not session.is_valid
        assert session.tree is None
        assert session.summary is None
        assert [error.path for error in session.errors] == ["clients"]
        assert session.report[0].field == "Clients"

    def test_malformed_load(self):
        session = ValidationSession()

        session.load_content("broken.json", b"{ not json")

        assert [error.path for error in session.errors] == ["file"]
        assert session.report[0].message == "Invalid JSON format"

    def test_new_load_replaces_state(self, character):
        session = ValidationSession()
        session.load_content("good.json", json.dumps(character))
        session.toggle("")

        session.load_content("bad.json", "[]")

        assert session.file_name == "bad.json"
        assert session.tree is None
        assert not session.is_valid

        session.load_content("good.json", json.dumps(character))
        assert not session.tree.root.is_expanded

    def test_loading_gate(self, character):
        session = ValidationSession()
        session.is_loading = True

        with pytest.raises(ValidationInProgress):
            session.load_content("bot.json", json.dumps(character))

    def test_loading_flag_reset_after_load(self, character):
        session = ValidationSession()
        session.load_content("bot.json", json.dumps(character))
        assert not session.is_loading

    def test_load_file(self, character, write_json):
        path = write_json(character, "my.character.json")
        session = ValidationSession()

        session.load_file(path)

        assert session.file_name == "my.character.json"
        assert session.is_valid

    def test_load_missing_file(self, tmp_path):
        session = ValidationSession()
        with pytest.raises(CharacterFileError):
            session.load_file(tmp_path / "nope.json")
        assert not session.is_loading

    def test_load_bundled_sample(self):
        session = ValidationSession()

        session.load_sample()

        assert session.file_name == "agent.character.json"
        assert session.is_valid

    def test_load_configured_sample(self, character, write_json):
        path = write_json(character, "custom.json")
        session = ValidationSession(SystemConfig(sample_path=path))

        session.load_sample()

        assert session.file_name == "custom.json"

    def test_toggle(self, character):
        session = ValidationSession()
        session.load_content("bot.json", json.dumps(character))

        assert session.toggle("") is True
        assert session.toggle("style") is True
        assert session.tree.find("style").is_expanded

    def test_toggle_without_tree(self):
        with pytest.raises(KeyError):
            ValidationSession().toggle("")
