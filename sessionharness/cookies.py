# -*- coding: utf-8 -*-
"""
Cookie罐模块

响应中的 Set-Cookie 值是 Set-Cookie 条目组成的JSON列表，例如::

    ["sid=abc; Path=/", "theme=dark"]

不以 ``[`` 开头的值按单条原始协议格式读取。值为空的条目表示删除。
"""

import json
import logging
import re
from typing import Dict, Iterable, Iterator, List, Optional

from .exceptions import CookieParseError, MissingCookieError
from .models import Cookie

logger = logging.getLogger(__name__)

# RFC 6265 cookie-name (token)
_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def parse_set_cookie_token(token) -> Cookie:
    """解析单个Set-Cookie条目，格式错误时抛出 CookieParseError"""
    if not isinstance(token, str):
        raise CookieParseError(token, '条目不是字符串')

    head, *attrs = token.split(';')
    name, sep, value = head.partition('=')
    name = name.strip()
    if not sep:
        raise CookieParseError(token, '缺少 "="')
    if not _NAME_RE.match(name):
        raise CookieParseError(token, '无效的名称')

    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]

    attributes = tuple(a.strip() for a in attrs if a.strip())
    return Cookie(name, value, attributes)


def parse_set_cookie_header(raw_value: str) -> List[Cookie]:
    """解析一条Set-Cookie头的值

    单个错误条目会被跳过，整体无法解析时返回空列表。
    """
    if isinstance(raw_value, bytes):
        try:
            raw_value = raw_value.decode('utf-8')
        except UnicodeDecodeError:
            logger.debug(f"Set-Cookie头不是UTF-8: {raw_value!r}")
            return []
    if not isinstance(raw_value, str):
        return []

    raw_value = raw_value.strip()
    if not raw_value:
        return []

    if raw_value.startswith('['):
        try:
            tokens = json.loads(raw_value)
        except ValueError as e:
            logger.debug(f"无法解析Set-Cookie头 {raw_value!r}: {e}")
            return []
        if not isinstance(tokens, list):
            return []
    else:
        tokens = [raw_value]

    cookies = []
    for token in tokens:
        try:
            cookies.append(parse_set_cookie_token(token))
        except CookieParseError as e:
            logger.debug(f"跳过Cookie条目: {e}")
    return cookies


def render_set_cookie_header(cookies: Iterable[Cookie]) -> str:
    """生成结构化列表格式的Set-Cookie头值"""
    return json.dumps([cookie.to_set_cookie_token() for cookie in cookies])


def parse_cookie_header(header: Optional[str]) -> Dict[str, str]:
    """解析请求中的 Cookie 头，返回 名称 -> 值"""
    if not header:
        return {}
    cookies = {}
    for pair in header.split(';'):
        name, sep, value = pair.strip().partition('=')
        if sep and name.strip():
            cookies[name.strip()] = value.strip()
    return cookies


class CookieJar:
    """按名称索引的有序Cookie集合，每个名称最多一个Cookie"""

    def __init__(self, cookies: Optional[Iterable[Cookie]] = None):
        self._cookies: Dict[str, Cookie] = {}
        for cookie in cookies or ():
            self.add(cookie)

    from_response_header = staticmethod(parse_set_cookie_header)

    def add(self, cookie: Cookie):
        """添加Cookie，替换同名Cookie并移到末尾"""
        self._cookies.pop(cookie.name, None)
        self._cookies[cookie.name] = cookie

    def remove(self, name: str):
        self._cookies.pop(name, None)

    def merge(self, incoming: Iterable[Cookie]):
        """按顺序应用指令：空值删除，否则添加或替换"""
        for cookie in incoming:
            if cookie.is_deletion:
                if cookie.name in self._cookies:
                    logger.debug(f"删除Cookie: {cookie.name}")
                self.remove(cookie.name)
            else:
                logger.debug(f"设置Cookie: {cookie.name}={cookie.value}")
                self.add(cookie)

    def absorb(self, set_cookie_values: Iterable[str]) -> int:
        """解析并合并多条Set-Cookie头的值，返回应用的指令数"""
        applied = 0
        for raw_value in set_cookie_values:
            directives = parse_set_cookie_header(raw_value)
            self.merge(directives)
            applied += len(directives)
        return applied

    def render_header_value(self) -> str:
        return '; '.join(f'{c.name}={c.value}' for c in self._cookies.values())

    def lookup(self, name: str) -> Optional[Cookie]:
        return self._cookies.get(name)

    def names(self) -> List[str]:
        return list(self._cookies)

    def as_dict(self) -> Dict[str, str]:
        return {name: cookie.value for name, cookie in self._cookies.items()}

    def clear(self):
        self._cookies.clear()

    def __getitem__(self, name: str) -> Cookie:
        try:
            return self._cookies[name]
        except KeyError:
            raise MissingCookieError(name, self.names()) from None

    def __contains__(self, name) -> bool:
        return name in self._cookies

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies.values()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, CookieJar):
            return NotImplemented
        return self._cookies == other._cookies

    def __repr__(self) -> str:
        return f"<CookieJar {self.as_dict()}>"
