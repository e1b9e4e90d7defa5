"""Tests for the retro-snake CLI."""

import json

import pytest

from retro_snake.cli import _build_parser, main, parse_moves
from retro_snake.config import EngineConfig
from retro_snake.snake import Direction


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.seed is None
        assert args.moves == ""
        assert args.max_ticks == 1_000

    def test_parse_moves(self):
        assert parse_moves("Ur. d") == [
            Direction.UP, Direction.RIGHT, None, Direction.DOWN,
        ]

    def test_parse_moves_invalid(self):
        with pytest.raises(ValueError, match="Invalid move"):
            parse_moves("UX")


class TestCLISimulate:
    def test_runs_into_wall(self, capsys):
        result = main([
            "simulate", "--seed", "0",
            "--grid-width", "6", "--grid-height", "6",
        ])
        assert result == 0
        state = json.loads(capsys.readouterr().out)
        assert state["phase"] == "game_over"
        assert state["grid"] == {"width": 6, "height": 6}

    def test_max_ticks_limits_run(self, capsys):
        main(["simulate", "--seed", "0", "--moves", "U", "--max-ticks", "2"])
        state = json.loads(capsys.readouterr().out)
        assert state["phase"] == "running"
        assert state["ticks"] == 2
        assert state["snake"][0] == [10, 8]

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"
        EngineConfig(grid_width=8, grid_height=5).save(path)
        main(["simulate", "--config", str(path), "--seed", "1"])
        state = json.loads(capsys.readouterr().out)
        assert state["grid"] == {"width": 8, "height": 5}


class TestCLIConfig:
    def test_prints_defaults(self, capsys):
        assert main(["config"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data == EngineConfig().to_dict()
