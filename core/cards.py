"""
牌的定义与编码

Lexio 使用 4 种花色 × N 个点数的牌:
- 花色强弱: 云 < 星 < 月 < 太阳
- 点数范围 1 ~ max_number，max_number 由人数决定 (2→5, 3→9, 4→13, 5→15)
- 点数强弱: 3 < 4 < ... < max_number < 1 < 2
"""
from enum import Enum
from dataclasses import dataclass
from typing import List, Dict, Optional, Sequence
import random


class Suit(Enum):
    """花色"""
    CLOUD = "cloud"
    STAR = "star"
    MOON = "moon"
    SUN = "sun"


# 花色强度 (1~4)
SUIT_STRENGTH: Dict[Suit, int] = {
    Suit.CLOUD: 1,
    Suit.STAR: 2,
    Suit.MOON: 3,
    Suit.SUN: 4,
}

# 花色显示名
SUIT_NAMES: Dict[Suit, str] = {
    Suit.CLOUD: "Cloud",
    Suit.STAR: "Star",
    Suit.MOON: "Moon",
    Suit.SUN: "Sun",
}

# 人数到最大点数的映射
MAX_NUMBER_BY_PLAYERS: Dict[int, int] = {
    2: 5,
    3: 9,
    4: 13,
    5: 15,
}

# 未知人数时的默认最大点数
DEFAULT_MAX_NUMBER = 9

MIN_PLAYERS = 2
MAX_PLAYERS = 5


@dataclass(frozen=True)
class Card:
    """
    不可变的牌

    Attributes:
        suit: 花色
        number: 点数 (1 ~ max_number)
    """
    suit: Suit
    number: int

    @property
    def id(self) -> str:
        """牌的唯一标识，如 "sun-2" """
        return f"{self.suit.value}-{self.number}"

    def __str__(self) -> str:
        return self.id


def get_max_number(player_count: int) -> int:
    """根据人数获取最大点数"""
    return MAX_NUMBER_BY_PLAYERS.get(player_count, DEFAULT_MAX_NUMBER)


def deck_size(player_count: int) -> int:
    """牌组大小 = 4 × max_number"""
    return len(Suit) * get_max_number(player_count)


def make_deck(player_count: int) -> List[Card]:
    """
    按人数生成有序牌组 (未洗牌)

    Args:
        player_count: 玩家人数

    Returns:
        牌列表，按花色再按点数排列
    """
    max_number = get_max_number(player_count)
    return [
        Card(suit, number)
        for suit in Suit
        for number in range(1, max_number + 1)
    ]


def shuffle_deck(deck: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    洗牌 (Fisher-Yates，返回新列表)

    Args:
        deck: 原牌组
        rng: 随机数生成器，None 使用全局 random

    Returns:
        洗好的新牌组
    """
    shuffled = list(deck)
    (rng or random).shuffle(shuffled)
    return shuffled


def deal_cards(deck: Sequence[Card], seat_count: int) -> List[List[Card]]:
    """
    轮流发牌，每次一张

    Args:
        deck: 牌组
        seat_count: 座位数

    Returns:
        每个座位的手牌，张数最多相差 1
    """
    hands: List[List[Card]] = [[] for _ in range(seat_count)]
    for index, card in enumerate(deck):
        hands[index % seat_count].append(card)
    return hands


def find_card_holder(hands: Sequence[Sequence[Card]], card: Card) -> Optional[int]:
    """返回持有指定牌的座位索引，没人持有返回 None"""
    for seat, hand in enumerate(hands):
        if card in hand:
            return seat
    return None


def str_to_card(s: str) -> Card:
    """
    将字符串转换为牌

    Args:
        s: 如 "sun-2" 或 "cloud-13"

    Returns:
        牌

    Raises:
        ValueError: 格式错误或花色未知
    """
    suit_str, sep, number_str = s.strip().lower().partition("-")
    if not sep or not number_str.isdigit():
        raise ValueError(f"Invalid card string: {s!r}")
    return Card(Suit(suit_str), int(number_str))


def parse_cards(s: str) -> List[Card]:
    """将空格或逗号分隔的字符串转换为牌列表"""
    tokens = s.replace(",", " ").split()
    return [str_to_card(token) for token in tokens]


def cards_to_str(cards: Sequence[Card]) -> str:
    """将牌列表转换为可读字符串"""
    return " ".join(card.id for card in cards)
