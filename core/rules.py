"""
规则引擎 - 牌力、牌型检测、大小比较、罚分与计分

所有方法都是纯函数，无状态
"""
from typing import List, Optional, Sequence, Tuple
from collections import Counter

from .cards import Card, Suit, SUIT_STRENGTH
from .actions import Play, PlayType

# 牌型基数，保证高牌型永远大于低牌型
TYPE_WEIGHT = 1_000_000
# 最大牌的牌力权重
CARD_WEIGHT = 1_000

# 合法出牌张数
VALID_SIZES = (1, 2, 3, 5)


class RuleEngine:
    """
    Lexio 规则引擎

    提供牌力计算、牌型检测、大小比较、罚分计分等功能
    所有方法都是静态方法，无状态
    """

    @staticmethod
    def card_strength(card: Card) -> int:
        """
        单张牌力: 2 最大 (100)，1 次之 (99)，其余等于点数
        """
        if card.number == 2:
            return 100
        if card.number == 1:
            return 99
        return card.number

    @staticmethod
    def suit_strength(suit: Suit) -> int:
        """花色强度: 云=1, 星=2, 月=3, 太阳=4"""
        return SUIT_STRENGTH[suit]

    @staticmethod
    def compare_cards(a: Card, b: Card) -> int:
        """
        比较两张牌

        Returns:
            1 if a > b, -1 if a < b, 0 仅当是同一张牌
        """
        diff = RuleEngine.card_strength(a) - RuleEngine.card_strength(b)
        if diff == 0:
            diff = RuleEngine.suit_strength(a.suit) - RuleEngine.suit_strength(b.suit)
        return (diff > 0) - (diff < 0)

    @staticmethod
    def card_key(card: Card) -> Tuple[int, int]:
        """用于排序的键，与 compare_cards 一致"""
        return RuleEngine.card_strength(card), RuleEngine.suit_strength(card.suit)

    @staticmethod
    def highest_card(cards: Sequence[Card]) -> Card:
        """按 compare_cards 取最大的牌"""
        return max(cards, key=RuleEngine.card_key)

    @staticmethod
    def is_straight(cards: Sequence[Card]) -> bool:
        """
        五张点数是否严格连续

        1 仅按点数参与连续 (如 1-2-3-4-5)，不作为 max_number 之后的高牌
        """
        numbers = sorted(card.number for card in cards)
        for i in range(len(numbers) - 1):
            if numbers[i + 1] - numbers[i] != 1:
                return False
        return True

    @staticmethod
    def is_flush(cards: Sequence[Card]) -> bool:
        """五张是否同花"""
        return len({card.suit for card in cards}) == 1

    @staticmethod
    def play_strength(play_type: PlayType, cards: Sequence[Card]) -> int:
        """
        出牌强度 = 牌型顺序 × 1e6 + 最大牌牌力 × 1e3 + 最大牌花色强度
        """
        highest = RuleEngine.highest_card(cards)
        return (
            int(play_type) * TYPE_WEIGHT
            + RuleEngine.card_strength(highest) * CARD_WEIGHT
            + RuleEngine.suit_strength(highest.suit)
        )

    @staticmethod
    def detect_play_type(cards: Sequence[Card]) -> Optional[PlayType]:
        """
        检测牌型

        Args:
            cards: 牌列表 (顺序无关)

        Returns:
            牌型，非法组合返回 None
        """
        n = len(cards)
        if n not in VALID_SIZES:
            return None

        counter = Counter(card.number for card in cards)

        if n == 1:
            return PlayType.SINGLE

        if n == 2:
            return PlayType.PAIR if len(counter) == 1 else None

        if n == 3:
            return PlayType.TRIPLE if len(counter) == 1 else None

        # 五张
        flush = RuleEngine.is_flush(cards)
        straight = RuleEngine.is_straight(cards)
        counts = sorted(counter.values(), reverse=True)

        if flush and straight:
            return PlayType.STRAIGHT_FLUSH
        if counts[0] == 4:
            return PlayType.FOUR_OF_A_KIND
        if counts == [3, 2]:
            return PlayType.FULL_HOUSE
        if flush:
            return PlayType.FLUSH
        if straight:
            return PlayType.STRAIGHT
        return None

    @staticmethod
    def classify(cards: Sequence[Card]) -> Optional[Tuple[PlayType, int]]:
        """
        牌型与强度

        Returns:
            (牌型, 强度)，非法组合返回 None
        """
        play_type = RuleEngine.detect_play_type(cards)
        if play_type is None:
            return None
        return play_type, RuleEngine.play_strength(play_type, cards)

    @staticmethod
    def compare_plays(a: Play, b: Play) -> int:
        """
        比较两手牌

        Returns:
            1 if a > b, -1 if a < b, 0 if 牌型不同 (不可比较) 或相等
        """
        if a.type != b.type:
            return 0
        diff = a.strength - b.strength
        return (diff > 0) - (diff < 0)

    @staticmethod
    def can_follow(play: Play, last_play: Optional[Play]) -> bool:
        """
        能否出在桌面上

        空桌接受任何合法牌型；否则必须同牌型且强度更大
        """
        if last_play is None:
            return True
        return play.type == last_play.type and play.strength > last_play.strength

    @staticmethod
    def preview(cards: Sequence[Card], last_play: Optional[Play]) -> Tuple[Optional[PlayType], bool]:
        """
        预览所选的牌

        Returns:
            (牌型或 None, 是否可以出)
        """
        result = RuleEngine.classify(cards)
        if result is None:
            return None, False
        play_type, strength = result
        candidate = Play(type=play_type, cards=tuple(cards), player="", strength=strength)
        return play_type, RuleEngine.can_follow(candidate, last_play)

    @staticmethod
    def count_twos(cards: Sequence[Card]) -> int:
        """点数 2 的张数"""
        return sum(1 for card in cards if card.number == 2)

    @staticmethod
    def penalty(cards: Sequence[Card]) -> int:
        """
        剩余手牌罚分 = 张数 × 2^(点数2的张数)
        """
        return len(cards) * 2 ** RuleEngine.count_twos(cards)

    @staticmethod
    def round_score(hands: Sequence[Sequence[Card]], index: int) -> int:
        """
        计算一局结束时某位玩家的得分

        所有玩家按罚分升序排名:
        - 第一名: 其余所有人罚分之和
        - 最后一名: 0
        - 中间名次: 对每个排名更低的玩家，累加 max(0, 对方罚分 - 自己罚分)

        Args:
            hands: 各玩家剩余手牌 (按座位)
            index: 目标玩家座位

        Returns:
            得分 (非负)
        """
        penalties: List[int] = [RuleEngine.penalty(hand) for hand in hands]
        # 稳定排序，罚分相同按座位先后
        order = sorted(range(len(hands)), key=lambda i: penalties[i])
        rank = order.index(index)
        own = penalties[index]

        if rank == 0:
            return sum(penalties[i] for i in order[1:])
        if rank == len(order) - 1:
            return 0
        return sum(max(0, penalties[i] - own) for i in order[rank + 1:])
