"""
Core Layer - 纯游戏逻辑

Modules:
    cards: 牌定义、牌组生成与发牌
    actions: 牌型与候选出牌生成
    rules: 规则引擎
    state: 游戏状态
"""
from .cards import (
    Suit,
    Card,
    SUIT_STRENGTH,
    SUIT_NAMES,
    MAX_NUMBER_BY_PLAYERS,
    MIN_PLAYERS,
    MAX_PLAYERS,
    get_max_number,
    deck_size,
    make_deck,
    shuffle_deck,
    deal_cards,
    find_card_holder,
    str_to_card,
    parse_cards,
    cards_to_str,
)

from .actions import (
    PlayType,
    Play,
    PlayGenerator,
    PLAY_TYPE_NAMES,
    FIVE_CARD_TYPES,
)

from .rules import RuleEngine

from .state import (
    Phase,
    Player,
    TurnRecord,
    GameState,
    HUMAN_ID,
    STARTING_COINS,
    ai_id,
)

__all__ = [
    # cards
    "Suit",
    "Card",
    "SUIT_STRENGTH",
    "SUIT_NAMES",
    "MAX_NUMBER_BY_PLAYERS",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "get_max_number",
    "deck_size",
    "make_deck",
    "shuffle_deck",
    "deal_cards",
    "find_card_holder",
    "str_to_card",
    "parse_cards",
    "cards_to_str",
    # actions
    "PlayType",
    "Play",
    "PlayGenerator",
    "PLAY_TYPE_NAMES",
    "FIVE_CARD_TYPES",
    # rules
    "RuleEngine",
    # state
    "Phase",
    "Player",
    "TurnRecord",
    "GameState",
    "HUMAN_ID",
    "STARTING_COINS",
    "ai_id",
]
