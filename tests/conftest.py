# -*- coding: utf-8 -*-
"""测试用的进程内服务器"""

import pytest

from sessionharness import BrowserSession, Cookie, Response, parse_cookie_header


class DemoServer:
    """按会话ID计数的简单服务器，并记录收到的每个请求"""

    def __init__(self):
        self.visits = {}
        self.requests = []
        self._next_id = 0

    def _new_session_id(self) -> str:
        self._next_id += 1
        return f"session-{self._next_id}"

    def handle(self, request):
        self.requests.append(request)
        cookies = parse_cookie_header(request.header('Cookie'))

        if request.path == '/':
            response = Response()
            sid = cookies.get('sid')
            if sid not in self.visits:
                sid = self._new_session_id()
                self.visits[sid] = 0
                response.set_cookies([Cookie('sid', sid, ('Path=/', 'HttpOnly'))])
            self.visits[sid] += 1
            response.set_header('Content-Type', 'application/json')
            response.body = b'{"visits":%d}' % self.visits[sid]
            return response

        if request.path == '/echo':
            return Response.from_json({
                'method': request.method,
                'content_type': request.header('Content-Type'),
                'body': request.text(),
                'cookie': request.header('Cookie'),
            })

        if request.path == '/cookies':
            return Response.from_json(cookies)

        if request.path == '/set':
            response = Response.from_text('ok')
            response.set_cookies([Cookie(k, v) for k, v in request.url.query.items()])
            return response

        if request.path == '/logout':
            response = Response.from_text('bye')
            response.set_cookies([Cookie('sid', '', ('Path=/',))])
            return response

        if request.path == '/mixed-batch':
            response = Response.from_text('mixed')
            response.headers.add('Set-Cookie', '["good=1", "=nameless", 42, "bad name=x", "also_good=2"]')
            return response

        if request.path == '/text':
            return Response.from_text('hello!')

        if request.path == '/page':
            return Response.from_html('<!doctype html><title>Guestbook</title><p class="entry">hi</p>')

        if request.path == '/latin1':
            return Response(body=b'caf\xe9')

        if request.path == '/boom':
            raise RuntimeError('handler exploded')

        return Response.from_text('not found', status=404)


@pytest.fixture
def server():
    return DemoServer()


@pytest.fixture
def session(server):
    return BrowserSession(server)
