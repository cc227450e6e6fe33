#!/usr/bin/env python3
"""
对战脚本

Usage:
    python scripts/play.py --name Alice --players 3 --difficulty hard   # 与 AI 对战
    python scripts/play.py --mode watch --players 4                     # 观看 AI 对战
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from core.cards import Card, SUIT_NAMES, cards_to_str
from core.actions import Play, PLAY_TYPE_NAMES
from core.rules import RuleEngine
from core.state import GameState, Phase, HUMAN_ID
from ai.strategies import make_strategy
from engine import GameEngine, GameAction, EngineConfig, ManualScheduler

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Lexio Play")

    parser.add_argument(
        "--mode",
        type=str,
        default="play",
        choices=["play", "watch"],
        help="Mode: play against AI or watch AI",
    )
    parser.add_argument("--name", type=str, default="Player", help="Your display name")
    parser.add_argument("--players", type=int, default=3, choices=[2, 3, 4, 5])
    parser.add_argument(
        "--difficulty",
        type=str,
        default="medium",
        choices=["easy", "medium", "hard"],
        help="AI difficulty",
    )
    parser.add_argument("--rounds", type=int, default=3, help="Number of rounds")
    parser.add_argument("--delay", type=float, default=1.0, help="Minimum AI thinking time (seconds)")
    parser.add_argument(
        "--first-player",
        type=str,
        default="seat_zero",
        choices=["seat_zero", "cloud_three"],
        help="Who opens each round",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    return parser.parse_args()


def card_label(card: Card) -> str:
    """牌面显示，如 "Sun 2" """
    return f"{SUIT_NAMES[card.suit]} {card.number}"


def play_to_str(play: Optional[Play]) -> str:
    if play is None:
        return "(open table)"
    labels = ", ".join(card_label(c) for c in play.cards)
    return f"{PLAY_TYPE_NAMES[play.type]}: {labels}"


def sorted_hand(hand: List[Card]) -> List[Card]:
    """按牌力排序，便于选牌"""
    return sorted(hand, key=RuleEngine.card_key)


def print_game_state(state: GameState, reveal: bool = False):
    """打印游戏状态"""
    print("\n" + "=" * 60)
    print(f"Round {state.round}/{state.max_rounds}  |  Table: {play_to_str(state.last_play)}")
    print("-" * 60)

    for seat, player in enumerate(state.players):
        marker = ">" if seat == state.current_player else " "
        status = "" if player.is_active else " [out]"
        if player.id == HUMAN_ID or reveal:
            hand = " ".join(card_label(c) for c in sorted_hand(player.hand))
            print(f"{marker} {player.name} ({player.coins} coins){status}: {hand}")
        else:
            print(f"{marker} {player.name} ({player.coins} coins){status}: {len(player.hand)} cards")

    print("=" * 60)


def print_round_result(state: GameState):
    print("\nRound finished:")
    for player in state.players:
        print(f"  {player.name}: {player.coins} coins, {len(player.hand)} cards left "
              f"(penalty {RuleEngine.penalty(player.hand)})")


def prompt_human(engine: GameEngine, state: GameState) -> Optional[GameAction]:
    """
    读取人类玩家的指令

    Returns:
        指令，None 表示退出
    """
    player = state.get_player(HUMAN_ID)
    hand = sorted_hand(player.hand)
    for i, card in enumerate(hand):
        print(f"  {i}: {card_label(card)}")

    while True:
        choice = input("\nCard numbers to play, 'p' pass, 'h' hint, 'q' quit: ").strip().lower()
        if choice == "q":
            return None
        if choice == "p":
            return GameAction.pass_turn(HUMAN_ID)
        if choice == "h":
            plays = engine.legal_plays(HUMAN_ID)
            if not plays:
                print("No playable combination, you must pass")
            for play in sorted(plays, key=lambda p: p.strength)[:15]:
                print(f"  {play_to_str(play)}")
            continue

        try:
            cards = [hand[int(token)] for token in choice.replace(",", " ").split()]
        except (ValueError, IndexError):
            print("Please enter card numbers from the list")
            continue

        play_type, playable = RuleEngine.preview(cards, state.last_play)
        if play_type is None:
            print(f"Not a valid combination: {cards_to_str(cards)}")
            continue
        if not playable:
            print(f"{PLAY_TYPE_NAMES[play_type]} does not beat the table")
            continue
        return GameAction.play(cards, play_type, HUMAN_ID)


def run(args):
    scheduler = ManualScheduler(realtime=args.mode == "play")
    engine = GameEngine(
        EngineConfig(
            think_time_min=args.delay,
            think_time_max=args.delay + 2.0,
            first_player_rule=args.first_player,
            seed=args.seed,
        ),
        scheduler=scheduler,
    )

    # 观战模式下人类座位也由 AI 代打
    autopilot = make_strategy(args.difficulty, seed=args.seed) if args.mode == "watch" else None

    if not engine.start_new_game(args.name, args.players, args.difficulty, args.rounds):
        logger.error("Invalid game settings")
        return

    last_turns = 0
    while True:
        state = engine.get_state()

        for record in state.history[last_turns:]:
            name = state.get_player(record.player).name
            print(f"{name}: {'Pass' if record.is_pass else play_to_str(record.play)}")
        last_turns = len(state.history)

        if state.phase == Phase.GAME_END:
            winner = state.get_player(state.winner)
            print("\n" + "=" * 60)
            print(f"Game over! Winner: {winner.name} ({winner.coins} coins)")
            print("=" * 60)
            return

        if state.phase == Phase.ROUND_END:
            print_round_result(state)
            engine.handle_action(GameAction.new_round())
            last_turns = 0
            continue

        acting = state.acting_player
        if acting.is_ai:
            scheduler.run_next()
            continue

        print_game_state(state, reveal=args.mode == "watch")
        if autopilot is not None:
            action = GameAction.from_decision(autopilot.decide(state, acting.id), acting.id)
        else:
            action = prompt_human(engine, state)
            if action is None:
                print("Bye")
                engine.shutdown()
                return

        if not engine.handle_action(action):
            print(f"Rejected: {engine.last_result.reason.value}")


def main():
    args = parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    print("=" * 60)
    print("Lexio")
    print("=" * 60)

    run(args)


if __name__ == "__main__":
    main()
