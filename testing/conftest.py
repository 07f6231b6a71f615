"""Shared fixtures for the test suite."""

import copy
import json

import pytest


MINIMAL_CHARACTER = {
    "name": "Bot",
    "clients": ["discord"],
    "modelProvider": "openai",
    "bio": ["hi"],
    "lore": ["l"],
    "messageExamples": [[{"user": "a", "content": {"text": "hey"}}]],
    "postExamples": ["p"],
    "adjectives": ["kind"],
    "topics": ["t"],
    "style": {"all": ["x"], "chat": ["y"], "post": ["z"]},
}


@pytest.fixture
def character():
    """A fresh copy of the smallest valid character."""
    return copy.deepcopy(MINIMAL_CHARACTER)


@pytest.fixture
def full_character(character):
    """A valid character that also sets every optional field."""
    character.update({
        "plugins": ["@plugin/image-generation"],
        "settings": {
            "secrets": {"OPENAI_API_KEY": "sk-test"},
            "voice": {"model": "en_US-male-medium"},
            "model": "gpt-4o",
        },
        "system": "Stay in character.",
        "knowledge": ["likes tea"],
    })
    character["messageExamples"][0].append(
        {"user": "Bot", "content": {"text": "hello!", "action": "CONTINUE"}}
    )
    return character


@pytest.fixture
def write_json(tmp_path):
    """Write a value as JSON into tmp_path and return the file path."""

    def _write(value, name="agent.character.json"):
        path = tmp_path / name
        path.write_text(json.dumps(value), encoding="utf-8")
        return path

    return _write
