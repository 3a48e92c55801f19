'''Callback context abstraction. Implementations decide where relayed callbacks run.'''

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class CallbackContext(ABC):
    '''Abstract execution context. Callbacks run in the order they were scheduled.'''

    @abstractmethod
    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        '''Arrange for callback(*args) to run later, never inline.'''
