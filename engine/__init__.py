"""
Engine Layer - 游戏状态机

Modules:
    game_engine: 游戏引擎
    commands: 指令与处理结果
    config: 开局与引擎配置
    events: 状态订阅
    scheduler: AI 延迟任务调度
"""
from .game_engine import GameEngine, EngineInvariantError

from .commands import (
    ActionKind,
    Rejection,
    GameAction,
    ActionResult,
)

from .config import GameConfig, EngineConfig

from .events import EventBus

from .scheduler import (
    ScheduledTask,
    Scheduler,
    ManualScheduler,
    ThreadingScheduler,
)

__all__ = [
    # game_engine
    "GameEngine",
    "EngineInvariantError",
    # commands
    "ActionKind",
    "Rejection",
    "GameAction",
    "ActionResult",
    # config
    "GameConfig",
    "EngineConfig",
    # events
    "EventBus",
    # scheduler
    "ScheduledTask",
    "Scheduler",
    "ManualScheduler",
    "ThreadingScheduler",
]
