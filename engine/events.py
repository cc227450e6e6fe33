"""
状态订阅

引擎持有的回调注册表，按注册顺序同步通知
"""
from typing import Callable, List
import logging

from core.state import GameState

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class EventBus:
    """
    状态变更通知

    每个监听者收到各自独立的状态快照
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        注册监听者

        Args:
            listener: 回调，参数为状态快照

        Returns:
            取消订阅函数 (可重复调用)
        """
        self._listeners.append(listener)

        def unsubscribe():
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener):
        """取消订阅，未注册时无操作"""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, state: GameState):
        """
        通知所有监听者

        Args:
            state: 引擎内部状态 (每个监听者拿到一份深拷贝)
        """
        # 复制列表，回调内取消订阅不影响本轮通知
        for listener in list(self._listeners):
            listener(state.snapshot())
