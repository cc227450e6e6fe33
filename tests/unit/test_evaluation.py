"""评估模块测试"""
import pytest
import numpy as np

from evaluation.metrics import CoinStats, MetricsCollector
from evaluation.arena import Arena, MatchResult, TournamentResult


class TestCoinStats:
    """CoinStats 测试"""

    def test_empty(self):
        stats = CoinStats()
        assert len(stats) == 0
        assert stats.summary() == {"mean": 0.0, "std": 0.0, "min": 0.0, "max": 0.0}

    def test_single_sample(self):
        stats = CoinStats()
        stats.add(104)
        assert stats.summary()["std"] == 0.0
        assert stats.summary()["mean"] == 104.0

    def test_matches_numpy(self):
        values = [100, 112, 95, 130, 101]
        stats = CoinStats()
        for v in values:
            stats.add(v)
        summary = stats.summary()
        assert len(stats) == 5
        assert summary["mean"] == pytest.approx(np.mean(values))
        assert summary["std"] == pytest.approx(np.std(values, ddof=1))
        assert summary["min"] == 95
        assert summary["max"] == 130


class TestMetricsCollector:
    """MetricsCollector 测试"""

    def test_per_difficulty(self):
        collector = MetricsCollector()
        collector.add_game(["easy", "hard"], [100, 120], winner_seat=1, turns=40)
        collector.add_game(["hard", "easy"], [110, 104], winner_seat=0, turns=60)

        hard = collector.compute_metrics("hard")
        assert hard["games"] == 2
        assert hard["wins"] == 2
        assert hard["win_rate"] == 1.0
        assert hard["avg_coins"] == pytest.approx(115.0)

        easy = collector.compute_metrics("easy")
        assert easy["win_rate"] == 0.0

    def test_global(self):
        collector = MetricsCollector()
        collector.add_game(["easy", "hard"], [100, 120], winner_seat=1, turns=40)
        collector.add_game(["easy", "hard"], [130, 100], winner_seat=0, turns=60, truncated=True)
        metrics = collector.compute_metrics()
        assert metrics["total_games"] == 2
        assert metrics["avg_turns"] == pytest.approx(50.0)
        assert metrics["truncated_rate"] == 0.5

    def test_same_difficulty_multiple_seats(self):
        collector = MetricsCollector()
        collector.add_game(["hard", "hard", "easy"], [100, 108, 101], winner_seat=1, turns=30)
        hard = collector.compute_metrics("hard")
        assert hard["games"] == 2
        assert hard["wins"] == 1

    def test_unknown(self):
        collector = MetricsCollector()
        assert collector.compute_metrics("medium") == {}
        assert collector.compute_metrics() == {}
        assert collector.names == []

    def test_coin_range(self):
        collector = MetricsCollector()
        collector.add_game(["easy", "hard"], [100, 120], winner_seat=1, turns=40)
        collector.add_game(["hard", "easy"], [110, 104], winner_seat=0, turns=60)
        hard = collector.compute_metrics("hard")
        assert hard["min_coins"] == 110
        assert hard["max_coins"] == 120
        assert hard["std_coins"] == pytest.approx(np.std([120, 110], ddof=1))


class TestTournamentResult:

    def test_ranking(self):
        result = TournamentResult(
            standings={
                "easy": {"win_rate": 0.2, "avg_coins": 101.0},
                "hard": {"win_rate": 0.8, "avg_coins": 120.0},
            },
            total_games=10,
            matches=[],
        )
        assert [name for name, _ in result.get_ranking()] == ["hard", "easy"]
        assert "hard" in repr(result)


class TestArena:
    """Arena 测试"""

    def test_play_game(self):
        arena = Arena(max_rounds=2, seed=0)
        result = arena.play_game(["easy", "hard"])

        assert isinstance(result, MatchResult)
        assert result.seats == ("easy", "hard")
        assert not result.truncated
        assert result.winner in ("easy", "hard")
        assert result.coins[result.winner_seat] == max(result.coins)
        assert len(result.coins) == 2
        # 得分非负，金币不会减少
        assert all(c >= 100 for c in result.coins)

    def test_truncation(self):
        arena = Arena(max_rounds=3, max_turns=3, seed=0)
        result = arena.play_game(["hard", "hard", "hard"])
        assert result.truncated
        assert result.turns == 3
        assert result.winner_seat == int(np.argmax(result.coins))

    def test_invalid_seating(self):
        with pytest.raises(ValueError):
            Arena().play_game(["hard"])

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            Arena().play_game(["hard", "expert"])

    def test_seeded_reproducible(self):
        a = Arena(max_rounds=1, seed=11).play_game(["medium", "hard", "easy"])
        b = Arena(max_rounds=1, seed=11).play_game(["medium", "hard", "easy"])
        assert a == b

    def test_round_robin(self):
        arena = Arena(max_rounds=1, seed=3)
        result = arena.round_robin(["easy", "hard"], games_per_seating=2)

        assert result.total_games == 4
        assert len(result.matches) == 4
        assert set(result.standings) == {"easy", "hard"}
        assert result.standings["easy"]["games"] == 4
        easy = result.standings["easy"]
        assert easy["min_coins"] <= easy["avg_coins"] <= easy["max_coins"]
        win_rates = sum(result.standings[n]["win_rate"] for n in result.standings)
        assert win_rates == pytest.approx(1.0)
