'''Callback context that holds callbacks until the owner drains them.'''

import queue
from collections.abc import Callable
from typing import Any

from reqcraft.context.base import CallbackContext


class QueueContext(CallbackContext):
    '''
    FIFO of pending callbacks, run only when the owning thread calls drain() or
    run_next(). Mirrors a UI main queue: results are delivered where the caller
    chooses, not on the network task. Safe to schedule from any thread.
    '''

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[tuple[Callable[..., Any], tuple[Any, ...]]] = queue.SimpleQueue()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        self._queue.put((callback, args))

    def run_next(self) -> bool:
        '''Run the oldest pending callback. Returns False if none was pending.'''
        try:
            callback, args = self._queue.get_nowait()
        except queue.Empty:
            return False
        callback(*args)
        return True

    def drain(self) -> int:
        '''Run pending callbacks in order until the queue is empty. Returns how many ran.'''
        count = 0
        while self.run_next():
            count += 1
        return count
