"""配置测试"""
import pytest

from ai.strategies import Difficulty
from engine.config import GameConfig, EngineConfig


class TestGameConfig:
    """开局配置测试"""

    def test_defaults_valid(self):
        config = GameConfig()
        config.validate()
        assert config.difficulty == Difficulty.MEDIUM

    @pytest.mark.parametrize("kwargs", [
        {"player_name": ""},
        {"player_name": "   "},
        {"player_count": 1},
        {"player_count": 6},
        {"ai_difficulty": "expert"},
        {"max_rounds": 0},
        {"player_name": None},
        {"player_count": "3"},
        {"player_count": 3.0},
        {"max_rounds": True},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs).validate()

    def test_from_dict_camel_case(self):
        config = GameConfig.from_dict({
            "playerName": "Alice",
            "playerCount": 4,
            "aiDifficulty": "hard",
            "maxRounds": 5,
            "theme": "dark",
        })
        assert config == GameConfig("Alice", 4, "hard", 5)

    def test_round_trip(self):
        config = GameConfig("Bob", 2, "easy", 1)
        assert GameConfig.from_dict(config.to_dict()) == config


class TestEngineConfig:
    """引擎配置测试"""

    def test_defaults(self):
        config = EngineConfig()
        assert config.starting_coins == 100
        assert config.think_time_min == 1.0
        assert config.think_time_max == 3.0
        assert config.first_player_rule == "seat_zero"

    def test_unknown_rule(self):
        with pytest.raises(ValueError):
            EngineConfig(first_player_rule="dealer")

    def test_bad_think_time(self):
        with pytest.raises(ValueError):
            EngineConfig(think_time_min=2.0, think_time_max=1.0)

    def test_from_dict(self):
        config = EngineConfig.from_dict({"seed": 5, "first_player_rule": "cloud_three", "extra": 1})
        assert config.seed == 5
        assert config.first_player_rule == "cloud_three"
