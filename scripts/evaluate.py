#!/usr/bin/env python3
"""
评估脚本

Usage:
    python scripts/evaluate.py --difficulties easy medium hard --games 20
    python scripts/evaluate.py --difficulties hard hard --games 50 --output results.json
"""
import argparse
import logging
import sys
from pathlib import Path
import json

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from evaluation import Arena

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Lexio AI Evaluation")

    parser.add_argument(
        "--difficulties",
        nargs="+",
        type=str,
        default=["easy", "medium", "hard"],
        choices=["easy", "medium", "hard"],
        help="Difficulty per seat (2-5 seats)",
    )
    parser.add_argument("--games", type=int, default=10, help="Games per seating")
    parser.add_argument("--rounds", type=int, default=3, help="Rounds per game")
    parser.add_argument("--max-turns", type=int, default=5000, help="Turn limit per game")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=str, help="Output file for results")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    return parser.parse_args()


def main():
    args = parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not 2 <= len(args.difficulties) <= 5:
        logger.error("Need between 2 and 5 seats")
        sys.exit(1)

    arena = Arena(max_rounds=args.rounds, max_turns=args.max_turns, seed=args.seed)
    logger.info(f"Running round robin: {args.difficulties}, {args.games} games per seating")
    result = arena.round_robin(args.difficulties, games_per_seating=args.games)

    logger.info("=" * 50)
    logger.info("Tournament Results")
    logger.info("=" * 50)
    for name, win_rate in result.get_ranking():
        stats = result.standings[name]
        logger.info(
            f"{name}: win rate {win_rate:.2%}, "
            f"avg coins {stats['avg_coins']:.1f} ± {stats['std_coins']:.1f} "
            f"[{stats['min_coins']:.0f}, {stats['max_coins']:.0f}] "
            f"({int(stats['games'])} seats)"
        )
    truncated = sum(1 for m in result.matches if m.truncated)
    logger.info(f"Games: {result.total_games}, truncated: {truncated}")
    logger.info("=" * 50)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(
                {"standings": result.standings, "total_games": result.total_games},
                f,
                indent=2,
            )
        logger.info(f"Results saved to {args.output}")


if __name__ == "__main__":
    main()
