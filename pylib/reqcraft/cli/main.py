'''CLI to preview and send requests built from an endpoint description.'''

import asyncio
import os
from typing import Any

import fire
import structlog
from dotenv import dotenv_values
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from reqcraft.builder import BuiltRequest, build_request
from reqcraft.config import RequestConfig
from reqcraft.context import QueueContext
from reqcraft.endpoint import HTTPMethod, RequestEncoding, StaticEndpoint
from reqcraft.executor import RequestResult, execute_request
from reqcraft.transport import HttpxTransport


def _configure_plain_tracebacks() -> None:
    '''Use standard Python tracebacks instead of Rich's fancy format.'''
    from structlog.contextvars import merge_contextvars
    from structlog.dev import ConsoleRenderer, plain_traceback, set_exc_info
    from structlog.processors import StackInfoRenderer, TimeStamper, add_log_level

    structlog.configure(
        processors=[
            merge_contextvars,
            add_log_level,
            StackInfoRenderer(),
            set_exc_info,
            TimeStamper(fmt='%Y-%m-%d %H:%M:%S', utc=False),
            ConsoleRenderer(exception_formatter=plain_traceback),
        ],
    )


def _parse_pairs(raw: Any) -> dict[str, str]:
    '''Parse "a=1,b=2" (or a list of "k=v" items, as Fire may pass) into a dict.'''
    if not raw:
        return {}
    items = raw if isinstance(raw, (list, tuple)) else str(raw).split(',')
    result: dict[str, str] = {}
    for item in items:
        item = str(item).strip()
        if not item:
            continue
        if '=' not in item:
            raise ValueError(f'Expected key=value, got {item!r}')
        k, v = item.split('=', 1)
        result[k.strip()] = v.strip()
    return result


def _load_config(env_file: str = '') -> RequestConfig:
    '''RequestConfig from os.environ, overlaid with env_file (dotenv format) if given.'''
    env: dict[str, str] = dict(os.environ)
    if env_file:
        env.update({k: str(v) for k, v in dotenv_values(env_file).items() if v is not None})
    return RequestConfig.from_env(env)


def _endpoint(base_url: str, path: str, method: str, port: int | None) -> StaticEndpoint:
    return StaticEndpoint(
        base_url_string=base_url,
        path=path,
        http_method=HTTPMethod.parse(method),
        port=int(port) if port not in (None, '') else None,
    )


def _request_panel(request: BuiltRequest) -> Panel:
    lines = [f'[bold]{request.method}[/bold] {escape(request.url)}', '']
    lines += [escape(f'{k}: {v}') for k, v in request.headers.items()]
    if request.body is not None:
        lines += ['', escape(request.body.decode('utf-8', errors='replace'))]
    return Panel('\n'.join(lines), title='Request')


def main() -> None:
    '''reqcraft: build and send HTTP requests from endpoint descriptions.'''
    _configure_plain_tracebacks()
    fire.Fire({
        'build': build,
        'send': send,
    })


def build(
    base_url: str,
    path: str = '',
    method: str = 'get',
    port: int | None = None,
    params: str = '',
    headers: str = '',
    content: str = 'json',
    accept: str = 'json',
) -> None:
    '''
    Print the request that would be sent, without sending it.
    base_url: base URL, e.g. https://api.example.com (its path is replaced by path)
    path: request path, e.g. /v1/users
    method: get | put | post | head | delete
    port: optional port
    params: comma-separated key=value parameters (query for GET, JSON body otherwise)
    headers: comma-separated Name=value headers
    content, accept: json | form | text_html
    '''
    request = build_request(
        _endpoint(base_url, path, method, port),
        parameters=_parse_pairs(params),
        headers=_parse_pairs(headers),
        content_encoding=RequestEncoding.parse(content),
        accept_encoding=RequestEncoding.parse(accept),
    )
    Console().print(_request_panel(request))


def send(
    base_url: str,
    path: str = '',
    method: str = 'get',
    port: int | None = None,
    params: str = '',
    headers: str = '',
    content: str = 'json',
    accept: str = 'json',
    env_file: str = '',
) -> None:
    '''
    Send the request and print the response status and body.
    Arguments as for build. env_file: optional .env with REQCRAFT_TIMEOUT etc.
    '''
    console = Console()
    config = _load_config(env_file)
    result = asyncio.run(_send(
        _endpoint(base_url, path, method, port),
        _parse_pairs(params),
        _parse_pairs(headers),
        RequestEncoding.parse(content),
        RequestEncoding.parse(accept),
        HttpxTransport.from_config(config),
    ))
    if result.error is not None:
        console.print(Panel(escape(f'{type(result.error).__name__}: {result.error}'), title='Error', style='red'))
        return
    response = result.response
    status = f'{response.status_code} {response.reason_phrase}' if response is not None else '(no response)'
    body = result.data.decode('utf-8', errors='replace') if result.data else ''
    console.print(Panel(escape(body), title=status))


async def _send(endpoint, parameters, headers, content_encoding, accept_encoding, transport) -> RequestResult:
    context = QueueContext()
    outcome: list[RequestResult] = []

    def on_complete(data, response, error):
        outcome.append(RequestResult(data, response, error))

    handle = execute_request(
        endpoint,
        parameters=parameters,
        headers=headers,
        content_encoding=content_encoding,
        accept_encoding=accept_encoding,
        transport=transport,
        context=context,
        on_complete=on_complete,
        report_build_errors=True,
    )
    await handle
    context.drain()
    return outcome[0]
