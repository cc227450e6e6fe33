"""
AI 难度策略

每个难度一个策略对象，创建 AI 玩家时选定，统一实现
decide(state, player_id) -> Decision
"""
from typing import Dict, List, Optional, Tuple, Type
from dataclasses import dataclass
from enum import Enum
import logging
import math

import numpy as np

from core.cards import Card
from core.actions import Play, PlayType, PlayGenerator
from core.rules import RuleEngine
from core.state import GameState, Player

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """AI 难度"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Decision:
    """
    AI 决策

    Attributes:
        action: "play" 或 "pass"
        cards: 要出的牌 (PASS 时为空)
        play_type: 牌型 (PASS 时为 None)
    """
    action: str
    cards: Tuple[Card, ...] = ()
    play_type: Optional[PlayType] = None

    @classmethod
    def pass_decision(cls) -> 'Decision':
        """创建 PASS 决策"""
        return cls(action="pass")

    @classmethod
    def from_play(cls, play: Play) -> 'Decision':
        return cls(action="play", cards=play.cards, play_type=play.type)

    @property
    def is_pass(self) -> bool:
        return self.action == "pass"


@dataclass(frozen=True)
class PositionAnalysis:
    """局势分析结果 (困难难度使用)"""
    min_opponent_hand: float
    two_count: int
    penalty_risk: int
    conservative: bool
    aggressive: bool
    endgame: bool

    @property
    def should_pass(self) -> bool:
        return self.conservative and not self.aggressive and not self.endgame


def analyze_position(state: GameState, player: Player) -> PositionAnalysis:
    """
    分析局势

    Args:
        state: 游戏状态
        player: 行动玩家

    Returns:
        局势分析
    """
    opponent_sizes = [
        len(p.hand) for p in state.players
        if p.id != player.id and p.is_active
    ]
    # 没有在场对手时视为无穷大
    min_opponent = min(opponent_sizes) if opponent_sizes else math.inf
    hand_size = len(player.hand)

    twos = [card for card in player.hand if card.number == 2]
    penalty_risk = RuleEngine.penalty(twos)

    return PositionAnalysis(
        min_opponent_hand=min_opponent,
        two_count=len(twos),
        penalty_risk=penalty_risk,
        conservative=min_opponent <= 3 and hand_size > 5,
        aggressive=len(twos) >= 2 or penalty_risk > hand_size * 3,
        endgame=hand_size <= 4 or min_opponent <= 2,
    )


def weakest(plays: List[Play]) -> Play:
    """强度最小的出牌，相同时取先生成的"""
    return min(plays, key=lambda play: play.strength)


def with_twos(plays: List[Play]) -> List[Play]:
    """包含点数 2 的出牌"""
    return [play for play in plays if play.has_two]


class Strategy:
    """策略基类"""

    difficulty: Difficulty

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        """
        Args:
            rng: numpy 随机数生成器
            seed: 未提供 rng 时用于创建生成器的种子
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @property
    def name(self) -> str:
        return self.difficulty.value

    def candidates(self, state: GameState, player: Player) -> List[Play]:
        """能出在当前桌面上的所有候选"""
        generator = PlayGenerator(player.hand, player.id)
        return generator.generate_responses(state.last_play)

    def decide(self, state: GameState, player_id: str) -> Decision:
        """
        做出决策

        Args:
            state: 游戏状态快照
            player_id: 行动玩家 id

        Returns:
            决策，无牌可出或玩家未知时为 PASS
        """
        player = state.get_player(player_id)
        if player is None:
            logger.debug(f"Unknown player {player_id}, passing")
            return Decision.pass_decision()

        plays = self.candidates(state, player)
        if not plays:
            return Decision.pass_decision()

        play = self.choose(state, player, plays)
        if play is None:
            return Decision.pass_decision()
        return Decision.from_play(play)

    def choose(self, state: GameState, player: Player, plays: List[Play]) -> Optional[Play]:
        """从非空候选中选择，返回 None 表示 PASS"""
        raise NotImplementedError


class EasyStrategy(Strategy):
    """简单: 30% 直接 PASS，否则随机出牌"""

    difficulty = Difficulty.EASY
    pass_chance = 0.3

    def choose(self, state: GameState, player: Player, plays: List[Play]) -> Optional[Play]:
        if self.rng.random() < self.pass_chance:
            return None
        return plays[int(self.rng.integers(len(plays)))]


class MediumStrategy(Strategy):
    """
    中等: 基本策略

    - 手里有 2 张及以上的 2，或手牌 <= 5 张时更积极 (PASS 概率 10%，否则 20%)
    - 优先出含 2 的最弱组合，没有则出最弱的组合
    """

    difficulty = Difficulty.MEDIUM

    def choose(self, state: GameState, player: Player, plays: List[Play]) -> Optional[Play]:
        aggressive = RuleEngine.count_twos(player.hand) >= 2
        endgame = len(player.hand) <= 5

        pass_chance = 0.1 if aggressive or endgame else 0.2
        if self.rng.random() < pass_chance:
            return None

        plays_with_twos = with_twos(plays)
        if plays_with_twos:
            return weakest(plays_with_twos)
        return weakest(plays)


class HardStrategy(Strategy):
    """
    困难: 根据局势分析决策 (无随机)

    - 保守且既不激进也非残局时 PASS
    - 激进时优先出含 2 的最弱组合
    - 残局时出张数最多的组合
    - 否则出最弱的组合，保留强牌
    """

    difficulty = Difficulty.HARD

    def choose(self, state: GameState, player: Player, plays: List[Play]) -> Optional[Play]:
        analysis = analyze_position(state, player)

        if analysis.should_pass:
            return None

        plays_with_twos = with_twos(plays)
        if analysis.aggressive and plays_with_twos:
            return weakest(plays_with_twos)

        if analysis.endgame:
            return max(plays, key=len)

        return weakest(plays)


STRATEGIES: Dict[Difficulty, Type[Strategy]] = {
    Difficulty.EASY: EasyStrategy,
    Difficulty.MEDIUM: MediumStrategy,
    Difficulty.HARD: HardStrategy,
}


def make_strategy(
    difficulty,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> Strategy:
    """
    创建策略

    Args:
        difficulty: Difficulty 或 "easy"/"medium"/"hard"

    Raises:
        ValueError: 未知难度
    """
    return STRATEGIES[Difficulty(difficulty)](rng=rng, seed=seed)
