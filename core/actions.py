"""
牌型定义与候选出牌生成器

Lexio 共 8 种牌型，按固定顺序比较:
单张 < 对子 < 三张 < 顺子 < 同花 < 葫芦 < 四条 < 同花顺
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import List, Tuple, Optional, Dict
import itertools

from .cards import Card


class PlayType(IntEnum):
    """牌型 (值即牌型顺序)"""
    SINGLE = 1           # 单张
    PAIR = 2             # 对子
    TRIPLE = 3           # 三张
    STRAIGHT = 4         # 顺子
    FLUSH = 5            # 同花
    FULL_HOUSE = 6       # 葫芦 (3+2)
    FOUR_OF_A_KIND = 7   # 四条
    STRAIGHT_FLUSH = 8   # 同花顺

    @property
    def key(self) -> str:
        """外部使用的牌型名，如 "fullHouse" """
        return PLAY_TYPE_KEYS[self]

    @classmethod
    def from_key(cls, key: str) -> "PlayType":
        """从牌型名解析，接受 "fullHouse" 或 "full_house" """
        for play_type, name in PLAY_TYPE_KEYS.items():
            if key in (name, play_type.name.lower()):
                return play_type
        raise ValueError(f"Unknown play type: {key!r}")


PLAY_TYPE_KEYS: Dict[PlayType, str] = {
    PlayType.SINGLE: "single",
    PlayType.PAIR: "pair",
    PlayType.TRIPLE: "triple",
    PlayType.STRAIGHT: "straight",
    PlayType.FLUSH: "flush",
    PlayType.FULL_HOUSE: "fullHouse",
    PlayType.FOUR_OF_A_KIND: "fourOfAKind",
    PlayType.STRAIGHT_FLUSH: "straightFlush",
}

PLAY_TYPE_NAMES: Dict[PlayType, str] = {
    PlayType.SINGLE: "Single",
    PlayType.PAIR: "Pair",
    PlayType.TRIPLE: "Triple",
    PlayType.STRAIGHT: "Straight",
    PlayType.FLUSH: "Flush",
    PlayType.FULL_HOUSE: "Full House",
    PlayType.FOUR_OF_A_KIND: "Four of a Kind",
    PlayType.STRAIGHT_FLUSH: "Straight Flush",
}

# 五张牌型
FIVE_CARD_TYPES: Tuple[PlayType, ...] = (
    PlayType.STRAIGHT,
    PlayType.FLUSH,
    PlayType.FULL_HOUSE,
    PlayType.FOUR_OF_A_KIND,
    PlayType.STRAIGHT_FLUSH,
)


@dataclass(frozen=True)
class Play:
    """
    不可变的一手出牌

    Attributes:
        type: 牌型
        cards: 出的牌
        player: 出牌玩家 id
        strength: 强度 (同牌型内可比较)
    """
    type: PlayType
    cards: Tuple[Card, ...]
    player: str
    strength: int

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def has_two(self) -> bool:
        """是否包含点数 2"""
        return any(card.number == 2 for card in self.cards)


class PlayGenerator:
    """
    候选出牌生成器

    枚举手牌中所有可成型的组合:
    单张、同点对子、同点三张，以及所有 C(n, 5) 中可成型的五张组合
    """

    def __init__(self, hand: List[Card], player: str = ""):
        """
        Args:
            hand: 手牌 (保持原顺序)
            player: 出牌玩家 id，写入生成的 Play
        """
        self.hand = list(hand)
        self.player = player

    def _make_play(self, cards: Tuple[Card, ...]) -> Optional[Play]:
        from .rules import RuleEngine

        result = RuleEngine.classify(cards)
        if result is None:
            return None
        play_type, strength = result
        return Play(type=play_type, cards=cards, player=self.player, strength=strength)

    def gen_singles(self) -> List[Play]:
        """生成所有单张"""
        return [self._make_play((card,)) for card in self.hand]

    def gen_pairs(self) -> List[Play]:
        """生成所有对子"""
        return [
            self._make_play(combo)
            for combo in itertools.combinations(self.hand, 2)
            if combo[0].number == combo[1].number
        ]

    def gen_triples(self) -> List[Play]:
        """生成所有三张"""
        return [
            self._make_play(combo)
            for combo in itertools.combinations(self.hand, 3)
            if combo[0].number == combo[1].number == combo[2].number
        ]

    def gen_five_card(self) -> List[Play]:
        """暴力枚举所有五张组合 (手牌最多 15 张，C(15,5)=3003)"""
        plays = []
        for combo in itertools.combinations(self.hand, 5):
            play = self._make_play(combo)
            if play is not None and play.type in FIVE_CARD_TYPES:
                plays.append(play)
        return plays

    def generate_all(self) -> List[Play]:
        """
        生成所有可成型的出牌 (主动出牌)

        Returns:
            按 单张/对子/三张/五张 顺序的出牌列表
        """
        return (
            self.gen_singles()
            + self.gen_pairs()
            + self.gen_triples()
            + self.gen_five_card()
        )

    def generate_responses(self, last_play: Optional[Play]) -> List[Play]:
        """
        生成能压过上家的出牌

        Args:
            last_play: 桌面上的牌，None 表示空桌

        Returns:
            合法出牌列表 (不含 PASS)
        """
        from .rules import RuleEngine

        return [
            play for play in self.generate_all()
            if RuleEngine.can_follow(play, last_play)
        ]
