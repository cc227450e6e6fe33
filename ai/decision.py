"""
AI 决策入口

decide() 是 (状态快照, 行动玩家, 难度) 的纯函数 (除随机数外)；
AIPlayer 把一个难度策略绑定到某个 AI 座位上
"""
from typing import Optional
import numpy as np

from core.state import GameState
from .strategies import Decision, Difficulty, Strategy, make_strategy


class AIPlayer:
    """绑定到 AI 座位的决策者"""

    def __init__(self, difficulty, seed: Optional[int] = None):
        """
        Args:
            difficulty: 难度
            seed: 随机种子
        """
        self.strategy: Strategy = make_strategy(difficulty, seed=seed)

    @property
    def difficulty(self) -> Difficulty:
        return self.strategy.difficulty

    def decide(self, state: GameState, player_id: str) -> Decision:
        return self.strategy.decide(state, player_id)

    def __repr__(self) -> str:
        return f"AIPlayer(difficulty={self.difficulty.value})"


def decide(
    state: GameState,
    player_id: str,
    difficulty,
    rng: Optional[np.random.Generator] = None,
) -> Decision:
    """
    单次决策

    Args:
        state: 游戏状态快照
        player_id: 行动玩家 id
        difficulty: 难度
        rng: 随机数生成器

    Returns:
        决策 (永不抛异常于未知玩家，无牌可出即 PASS)
    """
    return make_strategy(difficulty, rng=rng).decide(state, player_id)
