'''Callback context running callbacks on an asyncio event loop.'''

import asyncio
from collections.abc import Callable
from typing import Any

from reqcraft.context.base import CallbackContext


class LoopContext(CallbackContext):
    '''Schedules callbacks with loop.call_soon_threadsafe (FIFO).'''

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        '''
        loop: target loop. If omitted, the running loop is bound on first schedule().
        '''
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._loop.call_soon_threadsafe(callback, *args)
