"""
评估指标

对局统计: 按难度汇总胜率与终局金币
"""
from typing import Dict, List, Optional
from collections import defaultdict
import numpy as np


class CoinStats:
    """
    某一难度的终局金币样本

    样本量为对局数级别，直接保存原始值，由 numpy 计算统计量
    """

    def __init__(self):
        self.values: List[int] = []

    def add(self, coins: int):
        self.values.append(coins)

    def __len__(self) -> int:
        return len(self.values)

    def summary(self) -> Dict[str, float]:
        """均值、样本标准差与极值，无样本时全为 0"""
        if not self.values:
            return {"mean": 0.0, "std": 0.0, "min": 0.0, "max": 0.0}
        arr = np.asarray(self.values, dtype=np.float64)
        return {
            "mean": float(arr.mean()),
            "std": float(arr.std(ddof=1)) if len(arr) > 1 else 0.0,
            "min": float(arr.min()),
            "max": float(arr.max()),
        }


class MetricsCollector:
    """
    按难度收集对局指标

    同一难度在一局中占多个座位时，每个座位各计一次出场
    """

    def __init__(self):
        self._coins: Dict[str, CoinStats] = defaultdict(CoinStats)
        self._wins: Dict[str, int] = defaultdict(int)
        self._turns: List[int] = []
        self._truncated = 0

    def add_game(self, seats: List[str], coins: List[int], winner_seat: int,
                 turns: int, truncated: bool = False):
        """
        记录一局

        Args:
            seats: 各座位的难度名
            coins: 各座位终局金币
            winner_seat: 赢家座位
            turns: 行动总数
            truncated: 是否因步数上限被截断
        """
        for seat, name in enumerate(seats):
            self._coins[name].add(coins[seat])
        self._wins[seats[winner_seat]] += 1
        self._turns.append(turns)
        if truncated:
            self._truncated += 1

    def compute_metrics(self, name: Optional[str] = None) -> Dict[str, float]:
        """
        计算指标

        Args:
            name: 难度名，None 表示全局

        Returns:
            指标字典
        """
        if name is not None:
            if name not in self._coins:
                return {}
            games = len(self._coins[name])
            coins = self._coins[name].summary()
            return {
                "games": games,
                "wins": self._wins.get(name, 0),
                "win_rate": self._wins.get(name, 0) / games,
                "avg_coins": coins["mean"],
                "std_coins": coins["std"],
                "min_coins": coins["min"],
                "max_coins": coins["max"],
            }

        if not self._turns:
            return {}
        return {
            "total_games": len(self._turns),
            "avg_turns": float(np.mean(self._turns)),
            "truncated_rate": self._truncated / len(self._turns),
        }

    @property
    def names(self) -> List[str]:
        return list(self._coins.keys())
