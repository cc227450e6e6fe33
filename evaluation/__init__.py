"""
Evaluation Layer - 评估框架

Modules:
    arena: 对战竞技场
    metrics: 评估指标
"""
from .arena import (
    MatchResult,
    TournamentResult,
    Arena,
)
from .metrics import (
    CoinStats,
    MetricsCollector,
)

__all__ = [
    # arena
    "MatchResult",
    "TournamentResult",
    "Arena",
    # metrics
    "CoinStats",
    "MetricsCollector",
]
