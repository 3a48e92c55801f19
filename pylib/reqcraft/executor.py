'''
Request executor: build a request, send it through a transport, relay the
outcome onto a callback context. Never blocks; never raises for request errors.
'''

import asyncio
import json
from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

import structlog

from reqcraft.builder import BuiltRequest, build_request
from reqcraft.config import RequestConfig
from reqcraft.context import CallbackContext, LoopContext
from reqcraft.endpoint import Endpoint, RequestEncoding
from reqcraft.errors import APIError, InvalidJSONError, NoDataError, TransportError
from reqcraft.transport import HttpxTransport, Transport, TransportResult


CompletionHandler = Callable[[bytes | None, Any, APIError | None], Any]


class RequestResult(NamedTuple):
    '''Normalized outcome: exactly one of data or error is set.'''

    data: bytes | None
    response: Any
    error: APIError | None

    def json(self) -> Any:
        '''
        Decode data as JSON. Raises the carried error if there is one,
        InvalidJSONError if the data does not parse.
        '''
        if self.error is not None:
            raise self.error
        if self.data is None:
            raise NoDataError('No data was received from the server')
        try:
            return json.loads(self.data)
        except ValueError as e:
            raise InvalidJSONError(f'Response body is not valid JSON: {e}') from e


def normalize_result(raw: TransportResult) -> RequestResult:
    '''Map a raw transport outcome onto (data, response, error).'''
    if raw.error is not None:
        return RequestResult(None, raw.response, TransportError(raw.error))
    if raw.data is None:
        return RequestResult(None, raw.response, NoDataError('No data was received from the server'))
    return RequestResult(raw.data, raw.response, None)


async def _dispatch(
    request: BuiltRequest,
    transport: Transport,
    context: CallbackContext,
    on_complete: CompletionHandler | None,
) -> RequestResult:
    log = structlog.get_logger()
    try:
        raw = await transport.send(request)
    except Exception as e:
        log.exception('transport raised', method=request.method, url=request.url)
        raw = TransportResult(error=e)
    result = normalize_result(raw)
    if on_complete is not None:
        context.schedule(on_complete, *result)
        log.debug('result relayed', method=request.method, url=request.url, error=repr(result.error))
    return result


def execute_request(
    endpoint: Endpoint,
    parameters: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    content_encoding: RequestEncoding = RequestEncoding.JSON,
    accept_encoding: RequestEncoding = RequestEncoding.JSON,
    *,
    transport: Transport | None = None,
    context: CallbackContext | None = None,
    on_complete: CompletionHandler | None = None,
    report_build_errors: bool = False,
) -> 'asyncio.Future[RequestResult | None]':
    '''
    Build a request for endpoint and start sending it. Must be called with a
    running event loop; returns the in-flight task without waiting for it.

    Args:
        endpoint, parameters, headers, content_encoding, accept_encoding: see build_request
        transport: Sends the request. Defaults to a new HttpxTransport configured
            from RequestConfig.from_env()
        context: Where on_complete runs. Defaults to a LoopContext on the running loop
        on_complete: Optional callback(data, response, error), called exactly once
            per sent request, always through context
        report_build_errors: If the request cannot be built, schedule
            on_complete(None, None, error) instead of dropping the error

    Returns:
        An asyncio.Task resolving to the RequestResult, or, when the request
        could not be built, an already completed future resolving to None
    '''
    log = structlog.get_logger()
    loop = asyncio.get_running_loop()
    if context is None:
        context = LoopContext(loop)

    try:
        request = build_request(
            endpoint,
            parameters=parameters,
            headers=headers,
            content_encoding=content_encoding,
            accept_encoding=accept_encoding,
        )
    except APIError as e:
        log.warning('request build failed; nothing sent', base_url=endpoint.base_url_string, path=endpoint.path, error=str(e))
        if report_build_errors and on_complete is not None:
            context.schedule(on_complete, None, None, e)
        inert: asyncio.Future[RequestResult | None] = loop.create_future()
        inert.set_result(None)
        return inert

    if transport is None:
        transport = HttpxTransport.from_config(RequestConfig.from_env())
    log.debug('request started', method=request.method, url=request.url)
    return loop.create_task(_dispatch(request, transport, context, on_complete))
