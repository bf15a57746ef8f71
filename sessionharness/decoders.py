# -*- coding: utf-8 -*-
"""
请求体编码与响应体解码辅助函数
"""

import json
import types
from typing import Any, Dict, Mapping, Sequence, Tuple, Union, get_args, get_origin
from urllib.parse import parse_qsl, urlencode

from bs4 import BeautifulSoup

from .exceptions import DecodeError

FormData = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]

_UnionType = getattr(types, 'UnionType', None)


def encode_form(data: FormData) -> bytes:
    """表单编码 (application/x-www-form-urlencoded)"""
    if isinstance(data, Mapping):
        data = list(data.items())
    return urlencode(data, doseq=True).encode('ascii')


def encode_json(data: Any) -> bytes:
    return json.dumps(data, ensure_ascii=False).encode('utf-8')


def parse_form(body: bytes) -> Dict[str, str]:
    """解析表单请求体，同名字段保留最后一个值"""
    return dict(parse_qsl(decode_string(body), keep_blank_values=True))


def decode_string(body: bytes, encoding: str = 'utf-8') -> str:
    try:
        return body.decode(encoding)
    except UnicodeDecodeError as e:
        raise DecodeError(f'{encoding}文本', body, str(e)) from e


def _type_name(expect) -> str:
    if isinstance(expect, type):
        return expect.__name__
    return str(expect).replace('typing.', '')


def _matches(data: Any, expect) -> bool:
    """检查JSON数据是否符合类型标注，支持 list/dict/Optional/Union 的下标形式"""
    if expect is Any:
        return True
    origin = get_origin(expect)
    args = get_args(expect)

    if origin is Union or (_UnionType is not None and origin is _UnionType):
        return any(_matches(data, arg) for arg in args)

    cls = origin or expect
    if not isinstance(cls, type):
        raise TypeError(f"expect 必须是类型或 List[...]/Dict[...]/Optional[...] 形式，而不是 {expect!r}")

    # bool 是 int 的子类，但 JSON 的 true/false 不算数字
    if isinstance(data, bool) and cls is not bool and cls in (int, float):
        return False
    if cls is float and isinstance(data, int):
        return True
    if not isinstance(data, cls):
        return False

    if args and cls is list:
        return all(_matches(item, args[0]) for item in data)
    if args and cls is dict and len(args) == 2:
        return all(_matches(k, args[0]) and _matches(v, args[1]) for k, v in data.items())
    return True


def decode_json(body: bytes, expect=None) -> Any:
    """解析JSON响应体

    expect 不为空时，解析结果必须符合该类型(可以是 List[str] 这样的下标形式)，
    否则抛出 DecodeError。
    """
    text = decode_string(body)
    try:
        data = json.loads(text)
    except ValueError as e:
        raise DecodeError('JSON', body, str(e)) from e
    if expect is not None and not _matches(data, expect):
        raise DecodeError(
            f'JSON {_type_name(expect)}', body,
            f'实际类型为 {type(data).__name__}'
        )
    return data


def decode_html(body: bytes) -> BeautifulSoup:
    return BeautifulSoup(decode_string(body), 'html.parser')
