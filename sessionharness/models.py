# -*- coding: utf-8 -*-
"""
数据模型模块
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

from multidict import CIMultiDict
from yarl import URL

from . import decoders


@dataclass(frozen=True)
class Cookie:
    """Cookie数据类，属性原样保存不做解释"""
    name: str
    value: str
    attributes: Tuple[str, ...] = ()

    def attribute(self, key: str) -> Optional[str]:
        """按名称(不区分大小写)读取属性，标志类属性返回空字符串"""
        key = key.lower()
        for attr in self.attributes:
            attr_name, sep, attr_value = attr.partition('=')
            if attr_name.strip().lower() == key:
                return attr_value.strip() if sep else ''
        return None

    @property
    def is_deletion(self) -> bool:
        return self.value == ''

    def to_set_cookie_token(self) -> str:
        """转换为Set-Cookie条目"""
        return '; '.join([f'{self.name}={self.value}', *self.attributes])


@dataclass
class Request:
    """请求对象"""
    method: str
    url: URL
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: bytes = b''

    def __post_init__(self):
        self.method = self.method.upper()
        if not isinstance(self.url, URL):
            self.url = URL(self.url)
        if not isinstance(self.headers, CIMultiDict):
            self.headers = CIMultiDict(self.headers or {})

    @property
    def path(self) -> str:
        return self.url.path

    @property
    def path_qs(self) -> str:
        return self.url.path_qs

    @property
    def query(self):
        return self.url.query

    def set_header(self, name: str, value: str):
        """设置头信息，替换同名的已有值"""
        self.headers[name] = value

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name, default)

    def text(self) -> str:
        return decoders.decode_string(self.body)

    def json(self) -> Any:
        return decoders.decode_json(self.body)

    def form(self) -> dict:
        return decoders.parse_form(self.body)


@dataclass
class Response:
    """响应对象"""
    status: int = 200
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: bytes = b''
    reason: str = ''

    def __post_init__(self):
        if not isinstance(self.headers, CIMultiDict):
            self.headers = CIMultiDict(self.headers or {})
        if isinstance(self.body, str):
            self.body = self.body.encode('utf-8')

    @classmethod
    def from_text(cls, text: str, status: int = 200,
                  content_type: str = 'text/plain; charset=utf-8') -> 'Response':
        return cls(status=status, headers=CIMultiDict({'Content-Type': content_type}),
                   body=text.encode('utf-8'))

    @classmethod
    def from_json(cls, data: Any, status: int = 200) -> 'Response':
        return cls(status=status, headers=CIMultiDict({'Content-Type': 'application/json'}),
                   body=decoders.encode_json(data))

    @classmethod
    def from_html(cls, html: str, status: int = 200) -> 'Response':
        return cls.from_text(html, status, content_type='text/html; charset=utf-8')

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name, default)

    def header_all(self, name: str) -> List[str]:
        return self.headers.getall(name, [])

    def set_header(self, name: str, value: str):
        self.headers[name] = value

    def set_cookies(self, cookies: Iterable[Cookie]):
        """以结构化列表格式追加一条Set-Cookie头"""
        from .cookies import render_set_cookie_header
        self.headers.add('Set-Cookie', render_set_cookie_header(cookies))

    @property
    def content_type(self) -> str:
        return self.headers.get('Content-Type', '')

    def text(self, encoding: str = 'utf-8') -> str:
        return decoders.decode_string(self.body, encoding)

    def json(self, expect=None) -> Any:
        return decoders.decode_json(self.body, expect)

    def html(self):
        return decoders.decode_html(self.body)
