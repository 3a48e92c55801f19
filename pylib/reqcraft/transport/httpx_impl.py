'''httpx-backed transport.'''

import httpx
import structlog

from reqcraft.builder import BuiltRequest
from reqcraft.config import RequestConfig
from reqcraft.transport.base import Transport, TransportResult


logger = structlog.get_logger()


class HttpxTransport(Transport):
    '''
    Sends requests with an httpx.AsyncClient.

    Pass client= to reuse a caller-owned client (never closed here). Otherwise a
    client is opened and closed around each send.
    '''

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        follow_redirects: bool = True,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.follow_redirects = follow_redirects

    @classmethod
    def from_config(cls, config: RequestConfig) -> 'HttpxTransport':
        return cls(timeout=config.timeout, follow_redirects=config.follow_redirects)

    async def send(self, request: BuiltRequest) -> TransportResult:
        '''Send with client.send() so the client's cookie jar is never attached.'''
        try:
            if self.client is not None:
                response = await self.client.send(request.to_httpx())
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout,
                    follow_redirects=self.follow_redirects,
                ) as client:
                    response = await client.send(request.to_httpx())
        except httpx.HTTPError as e:
            logger.info('transport error', method=request.method, url=request.url, error=str(e))
            return TransportResult(error=e)

        logger.debug('response received', method=request.method, url=request.url, status=response.status_code)
        # Empty body counts as no data
        return TransportResult(data=response.content or None, response=response)
