'''Transports that send built requests. Swap via transport= param.'''

from reqcraft.transport.base import Transport, TransportResult
from reqcraft.transport.httpx_impl import HttpxTransport

__all__ = ['HttpxTransport', 'Transport', 'TransportResult', 'create_transport']


def create_transport(kind: str = 'httpx', **kwargs) -> Transport:
    '''
    Factory for transports. kind: httpx (default).
    **kwargs are passed to the transport's constructor.
    '''
    if kind == 'httpx':
        return HttpxTransport(**kwargs)
    raise ValueError(f'unknown transport: {kind}')
