"""
玩家指令与处理结果
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from core.cards import Card
from core.actions import PlayType
from ai.strategies import Decision


class ActionKind(Enum):
    """指令类型"""
    PLAY = "play"
    PASS = "pass"
    NEW_ROUND = "newRound"
    NEW_GAME = "newGame"


class Rejection(Enum):
    """拒绝原因"""
    PHASE = "phase"                    # 当前阶段不允许
    TURN = "turn"                      # 不是该玩家的回合
    OWNERSHIP = "ownership"            # 牌不在手中
    CLASSIFICATION = "classification"  # 不成牌型
    RANKING = "ranking"                # 压不过桌面
    UNKNOWN_COMMAND = "unknown_command"
    INVALID_CONFIG = "invalid_config"


@dataclass(frozen=True)
class GameAction:
    """
    玩家指令

    Attributes:
        type: 指令类型 (ActionKind 或其字符串值)
        cards: 出的牌 (仅 PLAY)
        play_type: 声明的牌型 (仅 PLAY，以规则引擎判定为准)
        player_id: 发出指令的玩家，None 表示当前行动玩家
    """
    type: Union[ActionKind, str]
    cards: Tuple[Card, ...] = ()
    play_type: Optional[PlayType] = None
    player_id: Optional[str] = None

    @classmethod
    def play(cls, cards: Sequence[Card], play_type: Optional[PlayType],
             player_id: Optional[str] = None) -> 'GameAction':
        return cls(ActionKind.PLAY, tuple(cards), play_type, player_id)

    @classmethod
    def pass_turn(cls, player_id: Optional[str] = None) -> 'GameAction':
        return cls(ActionKind.PASS, player_id=player_id)

    @classmethod
    def new_round(cls) -> 'GameAction':
        return cls(ActionKind.NEW_ROUND)

    @classmethod
    def new_game(cls) -> 'GameAction':
        return cls(ActionKind.NEW_GAME)

    @classmethod
    def from_decision(cls, decision: Decision, player_id: str) -> 'GameAction':
        """把 AI 决策转换为指令"""
        if decision.is_pass:
            return cls.pass_turn(player_id)
        return cls.play(decision.cards, decision.play_type, player_id)

    @property
    def kind(self) -> Optional[ActionKind]:
        """解析后的指令类型，未知返回 None"""
        if isinstance(self.type, ActionKind):
            return self.type
        try:
            return ActionKind(self.type)
        except ValueError:
            return None


@dataclass(frozen=True)
class ActionResult:
    """指令处理结果"""
    ok: bool
    reason: Optional[Rejection] = None

    @classmethod
    def accepted(cls) -> 'ActionResult':
        return cls(ok=True)

    @classmethod
    def rejected(cls, reason: Rejection) -> 'ActionResult':
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok
