"""
游戏状态定义

GameState 由 GameEngine 独占并原地修改；
对外只暴露 snapshot() 生成的深拷贝，订阅者无法修改引擎内部状态
"""
from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum
import copy

from .cards import Card, DEFAULT_MAX_NUMBER
from .actions import Play

# 人类玩家 id
HUMAN_ID = "human"

# 初始金币
STARTING_COINS = 100


def ai_id(seat: int) -> str:
    """AI 玩家 id，如 "ai-1" """
    return f"ai-{seat}"


class Phase(Enum):
    """游戏阶段"""
    WAITING = "waiting"      # 未开始
    PLAYING = "playing"      # 出牌中
    ROUND_END = "roundEnd"   # 一局结束，等待下一局
    GAME_END = "gameEnd"     # 游戏结束


@dataclass
class Player:
    """
    玩家

    Attributes:
        id: 唯一标识
        name: 显示名
        hand: 手牌 (保持发牌顺序)
        coins: 金币
        is_ai: 是否电脑玩家
        is_active: 是否仍在场 (金币 <= 0 后淘汰)
        is_winner: 是否为最终赢家
    """
    id: str
    name: str
    hand: List[Card] = field(default_factory=list)
    coins: int = STARTING_COINS
    is_ai: bool = False
    is_active: bool = True
    is_winner: bool = False

    def has_cards(self, cards: List[Card]) -> bool:
        """手牌是否包含全部指定的牌"""
        return all(card in self.hand for card in cards)

    def remove_cards(self, cards: List[Card]):
        """从手牌中移除指定的牌"""
        removed = set(cards)
        self.hand = [card for card in self.hand if card not in removed]


@dataclass(frozen=True)
class TurnRecord:
    """一次行动记录，play 为 None 表示 PASS"""
    player: str
    play: Optional[Play] = None

    @property
    def is_pass(self) -> bool:
        return self.play is None


@dataclass
class GameState:
    """
    可变游戏状态

    Attributes:
        players: 玩家列表 (索引即座位顺序)
        current_player: 当前行动玩家的座位
        deck: 发牌后剩余的牌 (本规则下发完即为空)
        last_play: 桌面上最近一手牌，None 表示空桌
        phase: 游戏阶段
        round: 当前局数 (从 1 开始)
        max_rounds: 总局数
        player_count: 人数
        max_number: 最大点数
        winner: 赢家 id
        discards: 本局已出的牌
        history: 本局行动记录
        epoch: 局/游戏代数，每次开局或重置递增
    """
    players: List[Player] = field(default_factory=list)
    current_player: int = 0
    deck: List[Card] = field(default_factory=list)
    last_play: Optional[Play] = None
    phase: Phase = Phase.WAITING
    round: int = 1
    max_rounds: int = 3
    player_count: int = 3
    max_number: int = DEFAULT_MAX_NUMBER
    winner: Optional[str] = None
    discards: List[Card] = field(default_factory=list)
    history: List[TurnRecord] = field(default_factory=list)
    epoch: int = 0

    @classmethod
    def initial(cls, epoch: int = 0) -> 'GameState':
        """等待阶段的初始状态"""
        return cls(epoch=epoch)

    def snapshot(self) -> 'GameState':
        """深拷贝，供外部只读使用"""
        return copy.deepcopy(self)

    def get_player(self, player_id: str) -> Optional[Player]:
        """按 id 查找玩家"""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def seat_of(self, player_id: str) -> Optional[int]:
        """按 id 查找座位"""
        for seat, player in enumerate(self.players):
            if player.id == player_id:
                return seat
        return None

    @property
    def acting_player(self) -> Optional[Player]:
        """当前行动玩家"""
        if 0 <= self.current_player < len(self.players):
            return self.players[self.current_player]
        return None

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self.players if p.is_active]

    @property
    def is_open_table(self) -> bool:
        """是否空桌"""
        return self.last_play is None
