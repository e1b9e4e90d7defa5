"""Tests for the HighScoreStore module."""

import json

from retro_snake.highscore import DEFAULT_KEY, HighScoreStore


class TestInMemory:
    def test_empty_store(self):
        store = HighScoreStore()
        assert store.get() == 0
        assert store.to_dict() == {}

    def test_submit_record(self):
        store = HighScoreStore()
        assert store.submit(30)
        assert store.get(DEFAULT_KEY) == 30

    def test_lower_score_ignored(self):
        store = HighScoreStore()
        store.submit(50)
        assert not store.submit(40)
        assert not store.submit(50)
        assert store.get() == 50

    def test_zero_is_not_a_record(self):
        assert not HighScoreStore().submit(0)

    def test_keys_are_independent(self):
        store = HighScoreStore()
        store.submit(20, key="classic")
        store.submit(90, key="large")
        assert store.get("classic") == 20
        assert store.get("large") == 90


class TestPersistence:
    def test_written_and_reloaded(self, tmp_path):
        path = tmp_path / "scores.json"
        HighScoreStore(path).submit(70)
        assert json.loads(path.read_text()) == {DEFAULT_KEY: 70}
        assert HighScoreStore(path).get() == 70

    def test_corrupt_file_loads_empty(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("{not json")
        store = HighScoreStore(path)
        assert store.get() == 0
        assert store.submit(10)
        assert json.loads(path.read_text()) == {DEFAULT_KEY: 10}

    def test_malformed_entries_skipped(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"a": 10, "b": "high", "c": -5}))
        assert HighScoreStore(path).to_dict() == {"a": 10}

    def test_non_utf8_file_loads_empty(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_bytes(b"\xff\xfe\x00\x81")
        assert HighScoreStore(path).to_dict() == {}

    def test_unreadable_path_loads_empty(self, tmp_path):
        path = tmp_path / "scores.json"
        path.mkdir()
        assert HighScoreStore(path).get() == 0

    def test_booleans_are_not_scores(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"a": True, "b": 40}))
        assert HighScoreStore(path).to_dict() == {"b": 40}
