"""牌组生成/发牌/编码测试"""
import random
import pytest

from core.cards import (
    Suit,
    Card,
    SUIT_STRENGTH,
    MAX_NUMBER_BY_PLAYERS,
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


class TestSuit:
    """花色测试"""

    def test_suit_values(self):
        assert Suit.CLOUD.value == "cloud"
        assert Suit.SUN.value == "sun"

    def test_suit_strength_order(self):
        assert SUIT_STRENGTH[Suit.CLOUD] < SUIT_STRENGTH[Suit.STAR]
        assert SUIT_STRENGTH[Suit.STAR] < SUIT_STRENGTH[Suit.MOON]
        assert SUIT_STRENGTH[Suit.MOON] < SUIT_STRENGTH[Suit.SUN]
        assert sorted(SUIT_STRENGTH.values()) == [1, 2, 3, 4]


class TestCard:
    """Card 测试"""

    def test_id(self):
        assert Card(Suit.SUN, 2).id == "sun-2"
        assert str(Card(Suit.CLOUD, 13)) == "cloud-13"

    def test_immutable(self):
        card = Card(Suit.MOON, 5)
        with pytest.raises(Exception):
            card.number = 6

    def test_hashable(self):
        assert len({Card(Suit.MOON, 5), Card(Suit.MOON, 5), Card(Suit.SUN, 5)}) == 2


class TestMaxNumber:
    """人数与最大点数"""

    @pytest.mark.parametrize("players,expected", [(2, 5), (3, 9), (4, 13), (5, 15)])
    def test_mapping(self, players, expected):
        assert get_max_number(players) == expected
        assert MAX_NUMBER_BY_PLAYERS[players] == expected

    def test_unknown_count_defaults(self):
        assert get_max_number(7) == 9


class TestMakeDeck:
    """牌组生成测试"""

    @pytest.mark.parametrize("players", [2, 3, 4, 5])
    def test_deck_size(self, players):
        deck = make_deck(players)
        assert len(deck) == 4 * get_max_number(players)
        assert len(deck) == deck_size(players)

    @pytest.mark.parametrize("players", [2, 3, 4, 5])
    def test_cards_unique(self, players):
        deck = make_deck(players)
        assert len({(c.suit, c.number) for c in deck}) == len(deck)

    def test_number_range(self):
        deck = make_deck(2)
        assert {c.number for c in deck} == {1, 2, 3, 4, 5}


class TestShuffleDeck:
    """洗牌测试"""

    def test_is_permutation(self):
        deck = make_deck(4)
        shuffled = shuffle_deck(deck, random.Random(1))
        assert sorted(shuffled, key=lambda c: c.id) == sorted(deck, key=lambda c: c.id)

    def test_does_not_mutate_input(self):
        deck = make_deck(3)
        original = list(deck)
        shuffle_deck(deck, random.Random(1))
        assert deck == original

    def test_seed_reproducible(self):
        deck = make_deck(5)
        assert shuffle_deck(deck, random.Random(42)) == shuffle_deck(deck, random.Random(42))


class TestDealCards:
    """发牌测试"""

    @pytest.mark.parametrize("players", [2, 3, 4, 5])
    def test_hand_sizes_balanced(self, players):
        deck = shuffle_deck(make_deck(players), random.Random(players))
        hands = deal_cards(deck, players)
        sizes = [len(h) for h in hands]
        assert max(sizes) - min(sizes) <= 1

    def test_union_equals_deck(self):
        deck = shuffle_deck(make_deck(3), random.Random(0))
        hands = deal_cards(deck, 3)
        dealt = [card for hand in hands for card in hand]
        assert sorted(dealt, key=lambda c: c.id) == sorted(deck, key=lambda c: c.id)

    def test_uneven_deal(self):
        deck = make_deck(2)[:7]
        hands = deal_cards(deck, 3)
        assert [len(h) for h in hands] == [3, 2, 2]
        # 轮流一次一张
        assert hands[0][0] == deck[0]
        assert hands[1][0] == deck[1]
        assert hands[0][1] == deck[3]


class TestFindCardHolder:

    def test_found(self):
        hands = [[Card(Suit.SUN, 4)], [Card(Suit.CLOUD, 3)]]
        assert find_card_holder(hands, Card(Suit.CLOUD, 3)) == 1

    def test_missing(self):
        assert find_card_holder([[], []], Card(Suit.CLOUD, 3)) is None


class TestCardStrings:
    """字符串编码测试"""

    def test_str_to_card(self):
        assert str_to_card("sun-2") == Card(Suit.SUN, 2)
        assert str_to_card(" Cloud-13 ") == Card(Suit.CLOUD, 13)

    @pytest.mark.parametrize("bad", ["sun2", "sun-", "comet-3", "sun-x"])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            str_to_card(bad)

    def test_parse_cards(self):
        cards = parse_cards("cloud-3, star-3 moon-3")
        assert [c.id for c in cards] == ["cloud-3", "star-3", "moon-3"]

    def test_cards_to_str(self):
        assert cards_to_str([Card(Suit.SUN, 2), Card(Suit.MOON, 1)]) == "sun-2 moon-1"
