"""
对战竞技场

无界面地运行完整游戏，比较不同难度的 AI
人类座位 (0 号) 由同样的策略代为决策
"""
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass
from itertools import permutations
import logging

import numpy as np

from core.state import Phase
from ai.decision import AIPlayer
from ai.strategies import Difficulty, make_strategy
from engine.commands import GameAction
from engine.config import EngineConfig
from engine.game_engine import GameEngine
from engine.scheduler import ManualScheduler

from .metrics import MetricsCollector

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """对局结果"""
    seats: Tuple[str, ...]   # 各座位难度
    winner_seat: int
    coins: Tuple[int, ...]
    rounds: int
    turns: int
    truncated: bool

    @property
    def winner(self) -> str:
        return self.seats[self.winner_seat]


@dataclass
class TournamentResult:
    """锦标赛结果"""
    standings: Dict[str, Dict[str, float]]
    total_games: int
    matches: List[MatchResult]

    def get_ranking(self) -> List[Tuple[str, float]]:
        """获取排名"""
        return sorted(
            [(name, stats["win_rate"]) for name, stats in self.standings.items()],
            key=lambda x: x[1],
            reverse=True,
        )

    def __repr__(self) -> str:
        ranking = self.get_ranking()
        lines = [f"Tournament Results ({self.total_games} games):"]
        for i, (name, win_rate) in enumerate(ranking):
            avg_coins = self.standings[name].get("avg_coins", 0.0)
            lines.append(f"  {i+1}. {name}: {win_rate:.2%} (avg coins {avg_coins:.1f})")
        return "\n".join(lines)


class Arena:
    """
    对战竞技场

    使用手动调度器，AI 思考时间为 0，整局同步执行
    """

    def __init__(self, max_rounds: int = 3, max_turns: int = 5000, seed: Optional[int] = None):
        """
        Args:
            max_rounds: 每局游戏的局数
            max_turns: 单场游戏的行动上限，超过即截断
            seed: 随机种子
        """
        self.max_rounds = max_rounds
        self.max_turns = max_turns
        self._rng = np.random.default_rng(seed)

    def _next_seed(self) -> int:
        return int(self._rng.integers(2 ** 32))

    def play_game(self, difficulties: Sequence[str]) -> MatchResult:
        """
        进行一场游戏

        Args:
            difficulties: 各座位难度，长度即人数 (2~5)

        Returns:
            对局结果
        """
        seats = tuple(Difficulty(d).value for d in difficulties)
        scheduler = ManualScheduler()
        engine = GameEngine(
            EngineConfig(think_time_min=0.0, think_time_max=0.0, seed=self._next_seed()),
            scheduler=scheduler,
        )
        if not engine.start_new_game("Seat 0", len(seats), seats[0], self.max_rounds):
            raise ValueError(f"Invalid arena seating: {seats}")

        state = engine.get_state()
        for seat, player in enumerate(state.players):
            if player.is_ai:
                engine.set_ai_player(player.id, AIPlayer(seats[seat], seed=self._next_seed()))
        seat_zero = make_strategy(seats[0], seed=self._next_seed())

        turns = 0
        while turns < self.max_turns:
            state = engine.get_state()
            if state.phase == Phase.GAME_END:
                break
            if state.phase == Phase.ROUND_END:
                engine.handle_action(GameAction.new_round())
                continue

            acting = state.acting_player
            if acting.is_ai:
                scheduler.run_next()
            else:
                decision = seat_zero.decide(state, acting.id)
                engine.submit(GameAction.from_decision(decision, acting.id))
            turns += 1

        engine.shutdown()
        state = engine.get_state()
        truncated = state.phase != Phase.GAME_END
        coins = tuple(p.coins for p in state.players)
        if truncated:
            logger.warning(f"Game truncated after {turns} turns: {seats}")
            winner_seat = int(np.argmax(coins))
        else:
            winner_seat = state.seat_of(state.winner)

        return MatchResult(
            seats=seats,
            winner_seat=winner_seat,
            coins=coins,
            rounds=state.round,
            turns=turns,
            truncated=truncated,
        )

    def play_match(self, difficulties: Sequence[str], n_games: int = 1) -> List[MatchResult]:
        """同一座位安排进行多场"""
        return [self.play_game(difficulties) for _ in range(n_games)]

    def round_robin(
        self,
        difficulties: Sequence[str],
        games_per_seating: int = 1,
    ) -> TournamentResult:
        """
        循环赛

        每种座位排列各进行 games_per_seating 场

        Args:
            difficulties: 参赛难度 (长度即人数)
            games_per_seating: 每种排列的场数

        Returns:
            锦标赛结果
        """
        collector = MetricsCollector()
        all_matches: List[MatchResult] = []

        for seating in sorted(set(permutations(difficulties))):
            results = self.play_match(seating, games_per_seating)
            all_matches.extend(results)
            for result in results:
                collector.add_game(
                    list(result.seats),
                    list(result.coins),
                    result.winner_seat,
                    result.turns,
                    result.truncated,
                )
            logger.info(f"Seating {seating}: {len(all_matches)} games played")

        standings = {name: collector.compute_metrics(name) for name in collector.names}
        return TournamentResult(
            standings=standings,
            total_games=len(all_matches),
            matches=all_matches,
        )
