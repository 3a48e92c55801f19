'''
Request builder: turn an Endpoint plus parameters into a fully-formed request.

Pure transform; inputs are never mutated.
'''

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from reqcraft.endpoint import Endpoint, HTTPMethod, RequestEncoding
from reqcraft.errors import FailedJSONConversionError, URLCreationError


logger = structlog.get_logger()


@dataclass(frozen=True)
class BuiltRequest:
    '''A request ready to hand to any HTTP client.'''

    url: str
    method: str
    headers: httpx.Headers = field(hash=False)
    body: bytes | None = None
    handle_cookies: bool = False

    def to_httpx(self) -> httpx.Request:
        '''Convert to an httpx.Request. Send it with client.send() so no cookie jar is applied.'''
        return httpx.Request(self.method, self.url, headers=self.headers, content=self.body)


def _query_value(value: Any) -> str | None:
    '''String form of a query parameter value, or None if it has none.'''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _query_items(parameters: Mapping[str, Any]) -> list[tuple[str, str]]:
    items: list[tuple[str, str]] = []
    for key, value in parameters.items():
        text = _query_value(value)
        if text is None:
            logger.debug('dropping query parameter', key=key, value_type=type(value).__name__)
            continue
        items.append((key, text))
    return items


def _parse_base_url(base_url_string: str) -> httpx.URL:
    try:
        url = httpx.URL(base_url_string)
    except (httpx.InvalidURL, TypeError) as e:
        raise URLCreationError(f'Invalid base URL: {base_url_string!r}') from e
    if not url.scheme or not url.host:
        raise URLCreationError(f'Base URL must be absolute: {base_url_string!r}')
    return url


def _check_port(port: Any) -> None:
    '''None, or an int in 0..65535.'''
    if port is None:
        return
    if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
        raise URLCreationError(f'Invalid port: {port!r}')


def build_request(
    endpoint: Endpoint,
    parameters: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    content_encoding: RequestEncoding = RequestEncoding.JSON,
    accept_encoding: RequestEncoding = RequestEncoding.JSON,
    *,
    lenient_json: bool = False,
) -> BuiltRequest:
    '''
    Construct a request for endpoint.

    Args:
        endpoint: Any object satisfying the Endpoint protocol
        parameters: Sent as the query string for GET, as a JSON body otherwise
        headers: Extra headers, applied after Accept/Content-Type (last write wins)
        content_encoding: Describes the body sent to the server. Defaults to JSON
        accept_encoding: Describes the response expected by the client. Defaults to JSON
        lenient_json: Send no body instead of raising when parameters are not JSON serializable

    Returns:
        BuiltRequest

    Raises:
        URLCreationError: the endpoint's fields (base URL, path, port, method) do not
            resolve to a valid absolute URL and request
        FailedJSONConversionError: parameters could not be serialized (unless lenient_json)
    '''
    try:
        method = HTTPMethod.parse(endpoint.http_method)
    except ValueError as e:
        raise URLCreationError(f'Unsupported HTTP method: {endpoint.http_method!r}') from e
    is_get = method is HTTPMethod.GET

    base = _parse_base_url(endpoint.base_url_string)
    _check_port(endpoint.port)

    # Path replaces whatever path the base URL carried; port None clears it
    components: dict[str, Any] = {'path': endpoint.path, 'port': endpoint.port}
    if parameters and is_get:
        components['params'] = _query_items(parameters)

    try:
        url = base.copy_with(**components)
    except (httpx.InvalidURL, TypeError) as e:
        raise URLCreationError(
            f'Could not resolve URL from {endpoint.base_url_string!r}, path={endpoint.path!r}, port={endpoint.port!r}'
        ) from e

    body = None
    if parameters and not is_get:
        try:
            body = json.dumps(parameters, separators=(',', ':'), allow_nan=False).encode('utf-8')
        except (TypeError, ValueError) as e:
            if not lenient_json:
                raise FailedJSONConversionError(f'Parameters are not JSON serializable: {e}') from e
            logger.warning('parameters not JSON serializable; sending no body', error=str(e))

    request_headers = httpx.Headers()
    request_headers['Accept'] = accept_encoding.header_string
    request_headers['Content-Type'] = content_encoding.header_string
    for key, value in (headers or {}).items():
        request_headers[key] = value

    return BuiltRequest(
        url=str(url),
        method=method.value,
        headers=request_headers,
        body=body,
        handle_cookies=False,
    )
