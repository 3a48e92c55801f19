'''
Endpoint descriptors and the small value types shared by builder and executor.
'''

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class HTTPMethod(str, Enum):
    '''HTTP methods used for requests, per RFC 2616 section 9.'''

    GET = 'GET'
    PUT = 'PUT'
    POST = 'POST'
    HEAD = 'HEAD'
    DELETE = 'DELETE'

    @classmethod
    def parse(cls, name: 'str | HTTPMethod') -> 'HTTPMethod':
        '''Case-insensitive lookup, e.g. 'get' -> HTTPMethod.GET.'''
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).upper())
        except ValueError:
            raise ValueError(f'Unknown HTTP method: {name}') from None


class RequestEncoding(Enum):
    '''Encodings usable for the Accept and Content-Type header fields.'''

    JSON = 'application/json; charset=utf-8; v=2'
    FORM = 'application/x-www-form-urlencoded; charset=utf-8; v=2'
    TEXT_HTML = 'text/html'

    @property
    def header_string(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: 'str | RequestEncoding') -> 'RequestEncoding':
        '''Lookup by member name, e.g. 'json' or 'text_html'.'''
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).upper().replace('-', '_')]
        except KeyError:
            raise ValueError(f'Unknown request encoding: {name}') from None


@runtime_checkable
class Endpoint(Protocol):
    '''
    A network destination plus method, independent of how the request is built.

    Anything exposing these four attributes can be passed to build_request.
    '''

    @property
    def base_url_string(self) -> str:
        '''Base URL (RFC 3986) the request is constructed from.'''
        ...

    @property
    def path(self) -> str:
        '''Path (RFC 3986). Replaces any path carried by base_url_string.'''
        ...

    @property
    def http_method(self) -> HTTPMethod:
        ...

    @property
    def port(self) -> int | None:
        '''Optional port, commonly used for testing against a local server.'''
        ...


@dataclass(frozen=True)
class StaticEndpoint:
    '''Plain value implementation of Endpoint.'''

    base_url_string: str
    path: str
    http_method: HTTPMethod = HTTPMethod.GET
    port: int | None = None
