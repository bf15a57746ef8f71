# -*- coding: utf-8 -*-
"""
异常模块
"""

from typing import Any, Optional


class SessionHarnessError(Exception):
    """所有会话测试错误的基类"""


class InvalidPathError(SessionHarnessError, ValueError):
    """路径无法相对基础URL解析"""

    def __init__(self, path: Any, base_url: str, reason: str = ""):
        self.path = path
        self.base_url = base_url
        message = f"无法解析路径 {path!r} (基础URL: {base_url})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidBaseUrlError(SessionHarnessError, ValueError):
    """基础URL不是合法的绝对http(s)地址"""

    def __init__(self, url: Any):
        self.url = url
        super().__init__(f"无效的基础URL: {url!r}")


class ServerError(SessionHarnessError):
    """被测服务器处理请求失败"""

    def __init__(self, request, original: BaseException):
        self.request = request
        self.original = original
        super().__init__(
            f"{request.method} {request.url} 处理失败: "
            f"{type(original).__name__}: {original}"
        )


class DecodeError(SessionHarnessError, ValueError):
    """响应体与期望的格式不符"""

    def __init__(self, expected: str, body: bytes, reason: str = ""):
        self.expected = expected
        self.body = body
        preview = body[:60]
        message = f"响应体不是有效的{expected}: {preview!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MissingCookieError(SessionHarnessError, KeyError):
    """Cookie罐中没有该名称的Cookie"""

    def __init__(self, name: str, available: Optional[list] = None):
        self.name = name
        self.available = available or []
        super().__init__(name)

    def __str__(self) -> str:
        return f"缺少Cookie {self.name!r}，当前Cookie: {self.available}"


class CookieParseError(SessionHarnessError, ValueError):
    """单个Set-Cookie条目格式错误"""

    def __init__(self, token: Any, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"无效的Cookie条目 {token!r}: {reason}")
