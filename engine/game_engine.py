"""
游戏引擎 - 状态机

独占唯一的可变 GameState，校验并执行所有指令，驱动局/游戏生命周期；
轮到 AI 时经随机延迟后向 AI 请求决策，再作为指令提交

阶段转换: waiting → playing → (roundEnd → playing | gameEnd)
"""
from typing import Callable, Dict, List, Optional
from functools import partial
import threading
import copy
import logging
import random

from core.cards import (
    Card,
    Suit,
    get_max_number,
    make_deck,
    shuffle_deck,
    deal_cards,
    find_card_holder,
)
from core.actions import Play, PlayGenerator
from core.rules import RuleEngine
from core.state import GameState, Phase, Player, TurnRecord, HUMAN_ID, ai_id
from ai.decision import AIPlayer

from .commands import ActionKind, ActionResult, GameAction, Rejection
from .config import EngineConfig, GameConfig
from .events import EventBus, Listener
from .scheduler import ManualScheduler, ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

# 先手规则 "cloud_three" 使用的牌
CLOUD_THREE = Card(Suit.CLOUD, 3)


class EngineInvariantError(RuntimeError):
    """引擎内部不变量被破坏"""


class GameEngine:
    """
    Lexio 游戏引擎

    Usage:
        engine = GameEngine(scheduler=ManualScheduler())
        engine.subscribe(on_change)
        engine.start_new_game("Alice", 3, "medium", 3)
        engine.handle_action(GameAction.pass_turn())
        engine.scheduler.run_pending()   # 执行排队中的 AI 回合

    默认的 ManualScheduler 不会自行执行 AI 回合，需由调用方驱动队列；
    实时界面应传入 ThreadingScheduler
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        """
        Args:
            config: 引擎配置
            scheduler: AI 延迟任务调度器，默认手动调度
        """
        self.config = config or EngineConfig()
        self.scheduler = scheduler or ManualScheduler()

        self._rng = random.Random(self.config.seed)
        self._events = EventBus()
        self._lock = threading.RLock()

        self._ai_players: Dict[str, AIPlayer] = {}
        self._pending_task: Optional[ScheduledTask] = None
        self._epoch = 0
        self._state = GameState.initial()

        self.last_result: Optional[ActionResult] = None

    # ------------------------------------------------------------------
    # 观察接口
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """订阅状态变更，返回取消订阅函数"""
        return self._events.subscribe(listener)

    def unsubscribe(self, listener: Listener):
        self._events.unsubscribe(listener)

    def get_state(self) -> GameState:
        """当前状态的只读副本"""
        with self._lock:
            return self._state.snapshot()

    def get_player(self, player_id: str) -> Optional[Player]:
        """玩家信息副本，未知返回 None"""
        with self._lock:
            player = self._state.get_player(player_id)
            return None if player is None else copy.deepcopy(player)

    def is_active(self) -> bool:
        """游戏是否处于出牌阶段"""
        return self._state.phase == Phase.PLAYING

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def ai_players(self) -> Dict[str, AIPlayer]:
        return dict(self._ai_players)

    def legal_plays(self, player_id: Optional[str] = None) -> List[Play]:
        """
        某玩家当前可以出的所有组合

        Args:
            player_id: 玩家 id，None 表示当前行动玩家
        """
        with self._lock:
            player = (
                self._state.acting_player if player_id is None
                else self._state.get_player(player_id)
            )
            if player is None:
                return []
            generator = PlayGenerator(player.hand, player.id)
            return generator.generate_responses(self._state.last_play)

    # ------------------------------------------------------------------
    # 开局
    # ------------------------------------------------------------------

    def start_new_game(
        self,
        player_name: str,
        player_count: int,
        ai_difficulty,
        max_rounds: int,
    ) -> bool:
        """
        开始新游戏: 1 名人类 + (player_count - 1) 名 AI

        Returns:
            配置非法时返回 False，状态不变
        """
        difficulty = getattr(ai_difficulty, "value", ai_difficulty)
        config = GameConfig(
            player_name=player_name,
            player_count=player_count,
            ai_difficulty=difficulty,
            max_rounds=max_rounds,
        )
        return self.start_game(config)

    def start_game(self, config: GameConfig) -> bool:
        """按配置开始新游戏"""
        try:
            config.validate()
        except ValueError as e:
            logger.warning(f"Rejected game config: {e}")
            self.last_result = ActionResult.rejected(Rejection.INVALID_CONFIG)
            return False

        with self._lock:
            coins = self.config.starting_coins
            players = [Player(id=HUMAN_ID, name=config.player_name, coins=coins)]
            ai_players: Dict[str, AIPlayer] = {}

            for seat in range(1, config.player_count):
                pid = ai_id(seat)
                players.append(Player(id=pid, name=f"AI {seat}", coins=coins, is_ai=True))
                ai_players[pid] = AIPlayer(config.difficulty, seed=self._derive_seed())

            # 新游戏完整构建后才替换引擎状态
            self._ai_players = ai_players
            self._state = GameState(
                players=players,
                phase=Phase.PLAYING,
                round=1,
                max_rounds=config.max_rounds,
                player_count=config.player_count,
                epoch=self._epoch,
            )
            self._state.max_number = get_max_number(config.player_count)

            logger.info(
                f"New game: {config.player_count} players, "
                f"difficulty={config.ai_difficulty}, rounds={config.max_rounds}"
            )
            self.last_result = ActionResult.accepted()
            self._start_new_round()
            return True

    def set_ai_player(self, player_id: str, ai: AIPlayer) -> bool:
        """
        替换某个 AI 座位的决策者

        Returns:
            玩家不存在或不是 AI 时返回 False
        """
        with self._lock:
            player = self._state.get_player(player_id)
            if player is None or not player.is_ai:
                return False
            self._ai_players[player_id] = ai
            return True

    def _derive_seed(self) -> Optional[int]:
        """固定种子时为每个 AI 派生子种子"""
        if self.config.seed is None:
            return None
        return self._rng.randrange(2 ** 32)

    # ------------------------------------------------------------------
    # 指令处理
    # ------------------------------------------------------------------

    def handle_action(self, action: GameAction) -> bool:
        """处理指令，返回是否被接受"""
        return self.submit(action).ok

    def submit(self, action: GameAction) -> ActionResult:
        """
        处理指令

        所有拒绝都不修改状态

        Args:
            action: 指令

        Returns:
            处理结果 (含拒绝原因)
        """
        with self._lock:
            result = self._dispatch(action)
            self.last_result = result
            if not result.ok:
                logger.debug(f"Rejected {action.type}: {result.reason.value}")
            return result

    def _dispatch(self, action: GameAction) -> ActionResult:
        kind = action.kind
        if kind is None:
            return ActionResult.rejected(Rejection.UNKNOWN_COMMAND)

        if kind == ActionKind.NEW_GAME:
            self._reset()
            return ActionResult.accepted()

        if kind == ActionKind.NEW_ROUND:
            if self._state.phase != Phase.ROUND_END:
                return ActionResult.rejected(Rejection.PHASE)
            self._handle_new_round()
            return ActionResult.accepted()

        # PLAY / PASS
        if self._state.phase != Phase.PLAYING:
            return ActionResult.rejected(Rejection.PHASE)

        player = self._state.acting_player
        if player is None:
            return ActionResult.rejected(Rejection.PHASE)
        if action.player_id is not None and action.player_id != player.id:
            return ActionResult.rejected(Rejection.TURN)

        if kind == ActionKind.PLAY:
            return self._handle_play(action, player)
        return self._handle_pass(player)

    def _handle_play(self, action: GameAction, player: Player) -> ActionResult:
        cards = list(action.cards)
        if not cards or action.play_type is None:
            return ActionResult.rejected(Rejection.CLASSIFICATION)

        # 同一张牌不能出两次
        if len(set(cards)) != len(cards) or not player.has_cards(cards):
            return ActionResult.rejected(Rejection.OWNERSHIP)

        classified = RuleEngine.classify(cards)
        if classified is None:
            return ActionResult.rejected(Rejection.CLASSIFICATION)

        play_type, strength = classified
        play = Play(type=play_type, cards=tuple(cards), player=player.id, strength=strength)
        if not RuleEngine.can_follow(play, self._state.last_play):
            return ActionResult.rejected(Rejection.RANKING)

        player.remove_cards(cards)
        self._state.discards.extend(cards)
        self._state.history.append(TurnRecord(player=player.id, play=play))
        self._state.last_play = play

        if not player.hand:
            self._end_round()
        else:
            self._advance()
        return ActionResult.accepted()

    def _handle_pass(self, player: Player) -> ActionResult:
        next_index = self.next_active_player_index()
        last_play = self._state.last_play

        # 轮回到最后出牌者，桌面清空
        if last_play is not None and self._state.players[next_index].id == last_play.player:
            self._state.last_play = None

        self._state.history.append(TurnRecord(player=player.id))
        self._advance(next_index)
        return ActionResult.accepted()

    def _handle_new_round(self):
        if self._state.round >= self._state.max_rounds:
            self._end_game()
        else:
            self._state.round += 1
            self._start_new_round()

    def _reset(self):
        """回到等待阶段的初始状态"""
        self._cancel_pending()
        self._epoch += 1
        self._ai_players = {}
        self._state = GameState.initial(epoch=self._epoch)
        logger.info("Game reset")
        self._notify()

    # ------------------------------------------------------------------
    # 局/游戏生命周期
    # ------------------------------------------------------------------

    def _start_new_round(self):
        self._cancel_pending()
        self._epoch += 1

        state = self._state
        deck = shuffle_deck(make_deck(state.player_count), self._rng)
        # 所有座位都发牌，包括已淘汰的座位
        hands = deal_cards(deck, len(state.players))
        for player, hand in zip(state.players, hands):
            player.hand = hand

        state.deck = []
        state.discards = []
        state.history = []
        state.last_play = None
        state.phase = Phase.PLAYING
        state.epoch = self._epoch
        state.current_player = self._first_player_index(hands)

        logger.info(f"Round {state.round}/{state.max_rounds} started")
        self._notify()
        self._schedule_ai_turn()

    def _first_player_index(self, hands: List[List[Card]]) -> int:
        """本局先手座位，落在已淘汰座位时顺延到下一个在场玩家"""
        seat = 0
        if self.config.first_player_rule == "cloud_three":
            holder = find_card_holder(hands, CLOUD_THREE)
            seat = holder if holder is not None else 0

        if self._state.players[seat].is_active:
            return seat
        self._state.current_player = seat
        return self.next_active_player_index()

    def _end_round(self):
        state = self._state
        hands = [player.hand for player in state.players]
        scores = [RuleEngine.round_score(hands, i) for i in range(len(hands))]

        for player, score in zip(state.players, scores):
            player.coins += score
            if player.is_active and player.coins <= 0:
                player.is_active = False
                logger.info(f"{player.name} eliminated")

        logger.info(
            f"Round {state.round} finished, scores: "
            + ", ".join(f"{p.name}+{s}" for p, s in zip(state.players, scores))
        )

        if len(state.active_players) <= 1:
            self._end_game()
            return

        state.phase = Phase.ROUND_END
        self._notify()

    def _end_game(self):
        state = self._state
        # 所有玩家中金币最多者获胜 (含已淘汰)，并列取座位靠前者
        winner = max(state.players, key=lambda p: p.coins)
        winner.is_winner = True
        state.winner = winner.id
        state.phase = Phase.GAME_END
        logger.info(f"Game over, winner: {winner.name} ({winner.coins} coins)")
        self._notify()

    # ------------------------------------------------------------------
    # 轮转
    # ------------------------------------------------------------------

    def next_active_player_index(self) -> int:
        """
        从当前座位之后循环查找下一个在场玩家

        Raises:
            EngineInvariantError: 没有任何在场玩家
        """
        players = self._state.players
        n = len(players)
        candidate = (self._state.current_player + 1) % n if n else 0
        for _ in range(n):
            if players[candidate].is_active:
                return candidate
            candidate = (candidate + 1) % n
        raise EngineInvariantError("No active player to advance to")

    def _advance(self, next_index: Optional[int] = None):
        if next_index is None:
            next_index = self.next_active_player_index()
        self._state.current_player = next_index
        self._notify()
        self._schedule_ai_turn()

    def _notify(self):
        self._events.notify(self._state)

    # ------------------------------------------------------------------
    # AI 调度
    # ------------------------------------------------------------------

    def _schedule_ai_turn(self):
        """当前玩家是 AI 时，随机延迟后执行其决策；轮转后旧任务一律取消"""
        self._cancel_pending()
        player = self._state.acting_player
        if self._state.phase != Phase.PLAYING or player is None or not player.is_ai:
            return

        delay = self._rng.uniform(self.config.think_time_min, self.config.think_time_max)
        self._pending_task = self.scheduler.call_later(
            delay, partial(self._run_ai_turn, self._epoch, player.id)
        )

    def _cancel_pending(self):
        if self._pending_task is not None:
            self._pending_task.cancel()
            self._pending_task = None

    def _run_ai_turn(self, epoch: int, player_id: str):
        with self._lock:
            if epoch != self._epoch:
                logger.debug(f"Dropped stale AI turn for {player_id} (epoch {epoch} != {self._epoch})")
                return

            acting = self._state.acting_player
            if self._state.phase != Phase.PLAYING or acting is None or acting.id != player_id:
                logger.debug(f"Dropped AI turn for {player_id}: no longer acting")
                return

            self._pending_task = None
            ai = self._ai_players.get(player_id)
            if ai is None:
                action = GameAction.pass_turn(player_id)
            else:
                decision = ai.decide(self._state.snapshot(), player_id)
                action = GameAction.from_decision(decision, player_id)

            result = self.submit(action)
            if not result.ok:
                logger.warning(f"AI {player_id} action rejected ({result.reason.value}), passing")
                self.submit(GameAction.pass_turn(player_id))

    def shutdown(self):
        """取消所有未执行的 AI 任务"""
        with self._lock:
            self._cancel_pending()
            self.scheduler.shutdown()
