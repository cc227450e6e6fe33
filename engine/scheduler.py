"""
延迟任务调度

AI 的"思考时间"是引擎唯一的异步边界:
下一位是 AI 时，其决策在随机延迟后才执行。任务可取消
"""
from typing import Callable, Deque, List, Optional
from collections import deque
import threading
import logging
import time

logger = logging.getLogger(__name__)


class ScheduledTask:
    """可取消的延迟任务"""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.done = False

    def cancel(self):
        self.cancelled = True

    def run(self):
        if self.cancelled or self.done:
            return
        self.done = True
        self.callback()

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)


class Scheduler:
    """调度器基类"""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """
        延迟执行回调

        Args:
            delay: 延迟 (秒)
            callback: 回调

        Returns:
            任务句柄
        """
        raise NotImplementedError

    def shutdown(self):
        """取消全部未执行任务"""
        pass


class ManualScheduler(Scheduler):
    """
    手动调度器

    任务按提交顺序排队，由调用方驱动执行；
    realtime=True 时执行前真实等待任务的延迟
    """

    def __init__(self, realtime: bool = False):
        self.realtime = realtime
        self._queue: Deque[ScheduledTask] = deque()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        # 丢弃已取消或已执行的任务，队列只保留待执行的
        if any(not t.pending for t in self._queue):
            self._queue = deque(t for t in self._queue if t.pending)
        task = ScheduledTask(delay, callback)
        self._queue.append(task)
        return task

    def run_next(self) -> bool:
        """
        执行下一个未取消的任务

        Returns:
            是否执行了任务
        """
        while self._queue:
            task = self._queue.popleft()
            if not task.pending:
                continue
            if self.realtime and task.delay > 0:
                time.sleep(task.delay)
            task.run()
            return True
        return False

    def run_pending(self, max_tasks: Optional[int] = None) -> int:
        """
        连续执行任务，包括执行过程中新提交的任务

        Args:
            max_tasks: 最多执行的任务数，None 表示直到队列为空

        Returns:
            执行的任务数
        """
        count = 0
        while max_tasks is None or count < max_tasks:
            if not self.run_next():
                break
            count += 1
        return count

    @property
    def pending(self) -> List[ScheduledTask]:
        return [task for task in self._queue if task.pending]

    def shutdown(self):
        for task in self._queue:
            task.cancel()
        self._queue.clear()


class ThreadingScheduler(Scheduler):
    """基于 threading.Timer 的实时调度器"""

    def __init__(self):
        self._timers: List[threading.Timer] = []
        self._lock = threading.Lock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(delay, callback)
        timer = threading.Timer(delay, task.run)
        timer.daemon = True
        with self._lock:
            # 清理已结束的计时器
            self._timers = [t for t in self._timers if t.is_alive()]
            self._timers.append(timer)
        timer.start()
        return task

    def shutdown(self):
        with self._lock:
            for timer in self._timers:
                timer.cancel()
            self._timers.clear()
