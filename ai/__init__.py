"""
AI Layer - 电脑玩家决策

Modules:
    strategies: 各难度策略
    decision: 决策入口与 AI 座位绑定
"""
from .strategies import (
    Difficulty,
    Decision,
    PositionAnalysis,
    Strategy,
    EasyStrategy,
    MediumStrategy,
    HardStrategy,
    STRATEGIES,
    analyze_position,
    make_strategy,
)

from .decision import AIPlayer, decide

__all__ = [
    # strategies
    "Difficulty",
    "Decision",
    "PositionAnalysis",
    "Strategy",
    "EasyStrategy",
    "MediumStrategy",
    "HardStrategy",
    "STRATEGIES",
    "analyze_position",
    "make_strategy",
    # decision
    "AIPlayer",
    "decide",
]
