import json

import pytest

from detective_quest.config import GameConfig, bound_text


def test_defaults():
    config = GameConfig()
    assert config.hash_capacity == 7
    assert config.max_text_length == 50
    assert config.journal is None


def test_bound_text_keeps_one_byte_for_terminator():
    assert bound_text("x" * 80, 50) == "x" * 49
    assert bound_text("short", 50) == "short"
    assert bound_text("anything", None) == "anything"


def test_bound_text_counts_utf8_bytes_without_splitting_characters():
    # "\u00e7" takes two bytes in UTF-8.
    assert bound_text("\u00e7" * 30, 50) == "\u00e7" * 24
    assert bound_text("ab\u00e7", 4) == "ab"
    assert bound_text("ab\u00e7", 5) == "ab\u00e7"


def test_load_from_json(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"hash_capacity": 11, "journal": "out/events.jsonl"}), encoding="utf-8")
    config = GameConfig.load(path)
    assert config.name == "custom"
    assert config.hash_capacity == 11
    assert config.max_text_length == 50
    assert str(config.journal) == "out/events.jsonl"


def test_invalid_values_rejected():
    with pytest.raises(ValueError):
        GameConfig(hash_capacity=0)
    with pytest.raises(ValueError):
        GameConfig(max_text_length=1)
    with pytest.raises(ValueError):
        GameConfig.from_dict([])


def test_with_journal(tmp_path):
    config = GameConfig(name="x")
    assert config.with_journal(None) is config
    updated = config.with_journal(tmp_path / "j.jsonl")
    assert updated.journal == tmp_path / "j.jsonl"
    assert updated.name == "x"
