'''Transport abstraction: the HTTP client a built request is handed to.'''

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from reqcraft.builder import BuiltRequest


@dataclass
class TransportResult:
    '''Raw outcome of sending one request, before normalization.'''

    data: bytes | None = None
    response: Any = None
    error: BaseException | None = None


class Transport(ABC):
    '''Protocol for HTTP clients that can send a BuiltRequest.'''

    @abstractmethod
    async def send(self, request: BuiltRequest) -> TransportResult:
        '''
        Send request and report the outcome.

        Transport failures are reported in TransportResult.error, not raised.
        '''
