"""
游戏配置

定义开局参数与引擎参数
"""
from dataclasses import dataclass, asdict
from typing import Optional

from core.cards import MIN_PLAYERS, MAX_PLAYERS
from core.state import STARTING_COINS
from ai.strategies import Difficulty

# 先手规则
FIRST_PLAYER_RULES = ("seat_zero", "cloud_three")


@dataclass
class GameConfig:
    """
    开局配置

    Attributes:
        player_name: 人类玩家名 (非空)
        player_count: 人数 (2~5)
        ai_difficulty: AI 难度
        max_rounds: 总局数
    """
    player_name: str = "Player"
    player_count: int = 3
    ai_difficulty: str = "medium"
    max_rounds: int = 3

    def validate(self):
        """
        校验配置

        Raises:
            ValueError: 任一参数非法
        """
        if not isinstance(self.player_name, str) or not self.player_name.strip():
            raise ValueError("player_name must be a non-empty string")
        for name in ("player_count", "max_rounds"):
            value = getattr(self, name)
            # bool 是 int 的子类，需单独排除
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an int, got {type(value).__name__}")
        if not MIN_PLAYERS <= self.player_count <= MAX_PLAYERS:
            raise ValueError(
                f"player_count must be in [{MIN_PLAYERS}, {MAX_PLAYERS}], got {self.player_count}"
            )
        Difficulty(self.ai_difficulty)
        if self.max_rounds < 1:
            raise ValueError(f"max_rounds must be >= 1, got {self.max_rounds}")

    @property
    def difficulty(self) -> Difficulty:
        return Difficulty(self.ai_difficulty)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> 'GameConfig':
        """从字典创建，接受 camelCase 键 (playerName 等)"""
        aliases = {
            "playerName": "player_name",
            "playerCount": "player_count",
            "aiDifficulty": "ai_difficulty",
            "maxRounds": "max_rounds",
        }
        normalized = {aliases.get(k, k): v for k, v in d.items()}
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in normalized.items() if k in valid_keys}
        return cls(**filtered)


@dataclass
class EngineConfig:
    """
    引擎配置

    Attributes:
        starting_coins: 初始金币
        think_time_min: AI 思考时间下限 (秒)
        think_time_max: AI 思考时间上限 (秒)
        first_player_rule: 先手规则，"seat_zero" 固定 0 号座位，
            "cloud_three" 由持有云 3 的玩家先手
        seed: 随机种子 (洗牌、思考时间、AI)
    """
    starting_coins: int = STARTING_COINS
    think_time_min: float = 1.0
    think_time_max: float = 3.0
    first_player_rule: str = "seat_zero"
    seed: Optional[int] = None

    def __post_init__(self):
        if self.first_player_rule not in FIRST_PLAYER_RULES:
            raise ValueError(f"Unknown first_player_rule: {self.first_player_rule!r}")
        if self.think_time_min < 0 or self.think_time_max < self.think_time_min:
            raise ValueError("think time range must satisfy 0 <= min <= max")

    @classmethod
    def from_dict(cls, d: dict) -> 'EngineConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)
