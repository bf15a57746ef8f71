# -*- coding: utf-8 -*-
"""
会话模块

BrowserSession 像浏览器一样在多次请求之间保存和回放Cookie，
请求在进程内直接交给被测服务器处理。
"""

import asyncio
import logging
from typing import Any, Mapping, Optional, Tuple

from multidict import CIMultiDict
from yarl import URL

from . import decoders
from .config import Config
from .cookies import CookieJar
from .exceptions import InvalidBaseUrlError, InvalidPathError, ServerError
from .logger import get_logger
from .models import Request, Response
from .servers import as_server

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://example.com/'


def _check_http_url(url: URL) -> bool:
    return url.is_absolute() and url.scheme in ('http', 'https') and bool(url.host)


def _encode_body(data, json_data, content_type: Optional[str]) -> Tuple[bytes, Optional[str]]:
    """编码请求体，返回 (请求体, Content-Type)"""
    if data is not None and json_data is not None:
        raise ValueError("data 和 json 不能同时指定")

    if json_data is not None:
        return decoders.encode_json(json_data), content_type or 'application/json'
    if data is None:
        return b'', content_type
    if isinstance(data, bytes):
        return data, content_type or 'application/octet-stream'
    if isinstance(data, str):
        return data.encode('utf-8'), content_type or 'text/plain; charset=utf-8'
    return decoders.encode_form(data), content_type or 'application/x-www-form-urlencoded'


class BrowserSession:
    """带Cookie罐的测试会话

    同一个会话不应被并发使用；respond 内部加锁，保证一次调用的
    附加Cookie、分发、合并Cookie三个步骤不会与另一次调用交错。

    注意：锁在等待服务器处理期间一直持有，服务器处理函数不能再通过
    同一个会话发请求，否则会一直等待下去(死锁)。需要时请另建会话。
    """

    def __init__(self, server, base_url: Optional[str] = None, config: Optional[Config] = None):
        self.config = config or Config()
        self.server = as_server(server)
        self.cookie_jar = CookieJar()
        self.headers = CIMultiDict(self.config.default_headers)
        self._base_url = URL(DEFAULT_BASE_URL)
        self._lock: Optional[asyncio.Lock] = None

        if self.config.log_level:
            get_logger('sessionharness', self.config.log_level)

        base_url = base_url or self.config.base_url
        if base_url:
            self.set_base_url(base_url)

    @property
    def base_url(self) -> URL:
        return self._base_url

    @property
    def cookies(self) -> CookieJar:
        return self.cookie_jar

    def set_base_url(self, url):
        """替换用于解析相对路径的基础URL"""
        try:
            parsed = URL(url)
        except (TypeError, ValueError) as e:
            raise InvalidBaseUrlError(url) from e
        if not _check_http_url(parsed):
            raise InvalidBaseUrlError(url)
        self._base_url = parsed

    def resolve(self, path) -> URL:
        """相对基础URL解析路径"""
        try:
            url = self._base_url.join(URL(path))
        except (TypeError, ValueError) as e:
            raise InvalidPathError(path, str(self._base_url), str(e)) from e
        if not _check_http_url(url):
            raise InvalidPathError(path, str(self._base_url), '结果不是绝对的http(s)地址')
        return url

    def clear_cookies(self):
        self.cookie_jar.clear()

    def build_request(self, method: str, path, *, headers: Optional[Mapping[str, str]] = None,
                      data=None, json: Any = None, content_type: Optional[str] = None) -> Request:
        url = self.resolve(path)
        body, body_type = _encode_body(data, json, content_type)

        request_headers = CIMultiDict(self.headers)
        if body_type:
            request_headers['Content-Type'] = body_type
        if headers:
            for name, value in headers.items():
                request_headers[name] = value
        return Request(method, url, request_headers, body)

    async def respond(self, request: Request) -> Response:
        """附加Cookie，分发请求，合并响应中的Set-Cookie，原样返回响应"""
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            cookie_header = self.cookie_jar.render_header_value()
            if cookie_header:
                request.set_header('Cookie', cookie_header)
            else:
                request.headers.popall('Cookie', None)

            try:
                response = await self.server.handle(request)
            except Exception as e:
                logger.debug(f"{request.method} {request.url} 服务器错误: {e!r}")
                raise ServerError(request, e) from e

            if not isinstance(response, Response):
                error = TypeError(f"服务器返回了 {type(response).__name__}，而不是 Response")
                raise ServerError(request, error) from error

            applied = self.cookie_jar.absorb(response.header_all('Set-Cookie'))
            logger.debug(f"{request.method} {request.url} -> {response.status} "
                         f"(Cookie指令 {applied} 条)")
            return response

    async def request(self, method: str, path, **kwargs) -> Response:
        return await self.respond(self.build_request(method, path, **kwargs))

    async def get(self, path, **kwargs) -> Response:
        return await self.request('GET', path, **kwargs)

    async def head(self, path, **kwargs) -> Response:
        return await self.request('HEAD', path, **kwargs)

    async def post(self, path, data=None, **kwargs) -> Response:
        return await self.request('POST', path, data=data, **kwargs)

    async def put(self, path, data=None, **kwargs) -> Response:
        return await self.request('PUT', path, data=data, **kwargs)

    async def patch(self, path, data=None, **kwargs) -> Response:
        return await self.request('PATCH', path, data=data, **kwargs)

    async def delete(self, path, **kwargs) -> Response:
        return await self.request('DELETE', path, **kwargs)

    async def options(self, path, **kwargs) -> Response:
        return await self.request('OPTIONS', path, **kwargs)

    async def trace(self, path, **kwargs) -> Response:
        return await self.request('TRACE', path, **kwargs)

    async def connect(self, path, **kwargs) -> Response:
        return await self.request('CONNECT', path, **kwargs)

    async def get_json(self, path, expect=None, **kwargs) -> Any:
        response = await self.get(path, **kwargs)
        return response.json(expect)

    async def get_string(self, path, **kwargs) -> str:
        response = await self.get(path, **kwargs)
        return response.text()

    async def get_html(self, path, **kwargs):
        response = await self.get(path, **kwargs)
        return response.html()

    async def post_json(self, path, json: Any = None, expect=None, **kwargs) -> Any:
        response = await self.post(path, json=json, **kwargs)
        return response.json(expect)

    def __repr__(self) -> str:
        return f"<BrowserSession {self._base_url} cookies={self.cookie_jar.names()}>"
