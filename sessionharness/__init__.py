# -*- coding: utf-8 -*-
"""
sessionharness包 - 带Cookie罐的进程内HTTP测试会话

此包模拟浏览器会话来测试进程内的HTTP服务器，不打开真实的网络连接。

主要功能：
- 自动保存响应中的Set-Cookie并在后续请求中回放
- 值为空的Cookie视为删除
- GET/POST等便捷方法及JSON、文本、HTML解码
- 支持普通函数、协程函数和aiohttp应用作为被测服务器

使用方法：
```python
from sessionharness import BrowserSession

session = BrowserSession(app)
data = await session.get_json('/')
```
"""

# 导入主要模块
from .models import Cookie, Request, Response
from .cookies import (
    CookieJar,
    parse_set_cookie_header,
    parse_set_cookie_token,
    parse_cookie_header,
    render_set_cookie_header,
)
from .session import BrowserSession, DEFAULT_BASE_URL
from .servers import Server, FunctionServer, AiohttpAppServer, as_server
from .config import Config
from .exceptions import (
    SessionHarnessError,
    InvalidPathError,
    InvalidBaseUrlError,
    ServerError,
    DecodeError,
    MissingCookieError,
    CookieParseError,
)

# 版本信息
__version__ = '1.0.0'

# 导出列表
__all__ = [
    # 会话
    'BrowserSession',
    'DEFAULT_BASE_URL',
    # 数据模型
    'Cookie',
    'Request',
    'Response',
    # Cookie罐
    'CookieJar',
    'parse_set_cookie_header',
    'parse_set_cookie_token',
    'parse_cookie_header',
    'render_set_cookie_header',
    # 服务器适配
    'Server',
    'FunctionServer',
    'AiohttpAppServer',
    'as_server',
    # 配置
    'Config',
    # 异常
    'SessionHarnessError',
    'InvalidPathError',
    'InvalidBaseUrlError',
    'ServerError',
    'DecodeError',
    'MissingCookieError',
    'CookieParseError',
]
