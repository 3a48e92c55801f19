'''Callback context implementations. Swap via context= param.'''

from reqcraft.context.asyncio_loop import LoopContext
from reqcraft.context.base import CallbackContext
from reqcraft.context.fifo import QueueContext

__all__ = ['CallbackContext', 'LoopContext', 'QueueContext', 'get_context']


def get_context(kind: str = 'loop', **kwargs) -> CallbackContext:
    '''
    Factory for callback contexts. kind: loop (default), queue.
    '''
    if kind == 'loop':
        return LoopContext(**kwargs)
    if kind == 'queue':
        return QueueContext(**kwargs)
    raise ValueError(f'unknown context: {kind}')
