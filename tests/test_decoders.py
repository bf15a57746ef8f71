# -*- coding: utf-8 -*-
"""编码解码辅助函数测试"""

from typing import Dict, List, Optional

import pytest

from sessionharness import DecodeError, Request, Response
from sessionharness.decoders import (
    decode_html,
    decode_json,
    decode_string,
    encode_form,
    encode_json,
    parse_form,
)


def test_encode_form_from_mapping_and_pairs():
    assert encode_form({'q': 'a b', 'n': 1}) == b'q=a+b&n=1'
    assert encode_form([('tag', 'x'), ('tag', 'y')]) == b'tag=x&tag=y'


def test_parse_form_keeps_blank_values():
    assert parse_form(b'guest=hello+world&empty=') == {'guest': 'hello world', 'empty': ''}


def test_encode_json_keeps_unicode():
    assert encode_json({'msg': '你好'}) == '{"msg": "你好"}'.encode('utf-8')


def test_decode_string_errors():
    assert decode_string(b'caf\xe9', 'latin-1') == 'café'
    with pytest.raises(DecodeError) as excinfo:
        decode_string(b'caf\xe9')
    assert excinfo.value.body == b'caf\xe9'


@pytest.mark.parametrize('body', [b'hello!', b'{"a": ', b''])
def test_decode_json_rejects_non_json(body):
    with pytest.raises(DecodeError) as excinfo:
        decode_json(body)
    assert excinfo.value.expected == 'JSON'


def test_decode_json_expected_type():
    assert decode_json(b'[1, 2]', expect=list) == [1, 2]
    with pytest.raises(DecodeError):
        decode_json(b'[1, 2]', expect=dict)


def test_decode_json_subscripted_types():
    assert decode_json(b'["a", "b"]', expect=List[str]) == ['a', 'b']
    assert decode_json(b'{"visits": 2}', expect=Dict[str, int]) == {'visits': 2}
    assert decode_json(b'null', expect=Optional[int]) is None
    with pytest.raises(DecodeError) as excinfo:
        decode_json(b'[1, 2]', expect=List[str])
    assert excinfo.value.expected == 'JSON List[str]'
    with pytest.raises(DecodeError):
        decode_json(b'{"visits": "2"}', expect=Dict[str, int])


def test_decode_json_booleans_are_not_numbers():
    with pytest.raises(DecodeError):
        decode_json(b'true', expect=int)
    with pytest.raises(DecodeError):
        decode_json(b'false', expect=float)
    assert decode_json(b'true', expect=bool) is True
    assert decode_json(b'3', expect=float) == 3


def test_decode_json_rejects_non_type_expect():
    with pytest.raises(TypeError):
        decode_json(b'1', expect='int')


def test_decode_html():
    soup = decode_html(b'<ul><li>a</li><li>b</li></ul>')
    assert [li.text for li in soup.find_all('li')] == ['a', 'b']


def test_response_helpers():
    response = Response.from_json({'visits': 1})
    assert response.content_type == 'application/json'
    assert response.json(dict) == {'visits': 1}
    assert Response(body='plain').body == b'plain'


def test_request_normalizes_fields():
    request = Request('post', 'http://example.com/echo?x=1', {'content-type': 'text/plain'}, b'hi')
    assert request.method == 'POST'
    assert request.path == '/echo'
    assert request.path_qs == '/echo?x=1'
    assert request.header('Content-Type') == 'text/plain'
    assert request.text() == 'hi'
