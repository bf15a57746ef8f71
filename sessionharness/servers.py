# -*- coding: utf-8 -*-
"""
被测服务器适配模块

会话只依赖 Server.handle(request) -> Response 这一个接口。
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional, Union

import aiohttp
from aiohttp import web
from aiohttp.test_utils import TestServer
from multidict import CIMultiDict

from .models import Request, Response

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Union[Response, Awaitable[Response]]]


class Server(ABC):
    """被测服务器接口"""

    @abstractmethod
    async def handle(self, request: Request) -> Response:
        """处理请求并返回响应"""
        pass


class FunctionServer(Server):
    """把普通函数或协程函数包装成服务器"""

    def __init__(self, func: Handler):
        self.func = func

    async def handle(self, request: Request) -> Response:
        result = self.func(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"<FunctionServer {getattr(self.func, '__qualname__', self.func)!r}>"


def as_server(obj) -> Server:
    """把服务器、带 handle 方法的对象或可调用对象统一成 Server"""
    if isinstance(obj, Server):
        return obj
    handle = getattr(obj, 'handle', None)
    if callable(handle):
        return FunctionServer(handle)
    if callable(obj):
        return FunctionServer(obj)
    raise TypeError(f"{obj!r} 不是有效的服务器: 需要 handle(request) 方法或可调用对象")


class AiohttpAppServer(Server):
    """在本地回环地址上运行 aiohttp 应用并转发请求"""

    def __init__(self, app: web.Application, host: str = '127.0.0.1'):
        self.app = app
        self.host = host
        self._server: Optional[TestServer] = None
        self._client: Optional[aiohttp.ClientSession] = None
        self._start_lock: Optional[asyncio.Lock] = None

    async def start(self):
        if self._start_lock is None:
            self._start_lock = asyncio.Lock()
        async with self._start_lock:
            if self._server is not None:
                return
            server = TestServer(self.app, host=self.host)
            try:
                await server.start_server()
            except Exception:
                if server.runner is not None:
                    await server.runner.cleanup()
                raise
            # 启动完成后才对外可见，启动失败时保持未启动状态
            self._server = server
            # Cookie由会话自己管理，这里的客户端不保存任何Cookie
            self._client = aiohttp.ClientSession(cookie_jar=aiohttp.DummyCookieJar())
            logger.debug(f"aiohttp应用已启动: {server.make_url('/')}")

    @property
    def started(self) -> bool:
        return self._server is not None

    async def close(self):
        if self._client is not None:
            await self._client.close()
            self._client = None
        if self._server is not None:
            await self._server.close()
            self._server = None

    async def __aenter__(self) -> 'AiohttpAppServer':
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def handle(self, request: Request) -> Response:
        await self.start()
        url = self._server.make_url(request.path_qs)
        headers = CIMultiDict(request.headers)
        async with self._client.request(request.method, url, headers=headers,
                                        data=request.body or None,
                                        allow_redirects=False) as response:
            body = await response.read()
            return Response(status=response.status,
                            headers=CIMultiDict(response.headers),
                            body=body,
                            reason=response.reason or '')
