import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from unittest.mock import MagicMock

import pytest
import requests

from moca_core.gateway_api import GatewayAPI

BASE_URL = "http://192.168.0.1/"


def make_response(status_code=200, body=None):
    """Собирает requests.Response без сети."""
    response = requests.Response()
    response.status_code = status_code
    if body is not None:
        text = body if isinstance(body, str) else json.dumps(body)
        response._content = text.encode('utf-8')
    else:
        response._content = b''
    response.encoding = 'utf-8'
    return response


@pytest.fixture
def session():
    """Настоящая Session с мокнутым send: куки и заголовки работают как в жизни."""
    s = requests.Session()
    s.send = MagicMock(return_value=make_response())
    return s


@pytest.fixture
def api(session):
    return GatewayAPI(BASE_URL, session=session)


@pytest.fixture
def logged_in(session):
    """Имитирует cookie, которые шлюз выставляет после успешного входа."""
    session.cookies.set('PHPSESSID', 'session-id', domain='192.168.0.1', path='/')
    session.cookies.set('csrfp_token', 'token-123', domain='192.168.0.1', path='/')
    return session


@pytest.fixture
def response_factory():
    return make_response


class GatewayHandler(BaseHTTPRequestHandler):
    """Минимальный шлюз: check.php выставляет cookie, остальные требуют заголовок csrfp_token."""
    token = "abc"

    def do_POST(self):
        length = int(self.headers.get('Content-Length') or 0)
        body = self.rfile.read(length).decode('utf-8') if length else ''
        self.server.seen.append((self.path, self.headers, body))

        if self.path == '/check.php':
            self._reply(200, '', cookies=[f"csrfp_token={self.token}; Path=/", "PHPSESSID=sess; Path=/"])
        elif self.headers.get('csrfp_token') != self.token:
            self._reply(403, 'csrf')
        elif self.path == '/actionHandler/ajaxSet_userbar.php':
            self._reply(200, json.dumps({"mainStatus": ["a", "b", self.server.moca_status]}))
        elif self.path == '/actionHandler/ajaxSet_moca_config.php':
            self._reply(200, '')
        else:
            self._reply(404, '')

    def _reply(self, code, text, cookies=()):
        payload = text.encode('utf-8')
        self.send_response(code)
        for cookie in cookies:
            self.send_header('Set-Cookie', cookie)
        self.send_header('Content-Length', str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def gateway_server():
    """Локальный HTTP-сервер, отвечающий как шлюз. seen - список (path, headers, body)."""
    server = HTTPServer(('127.0.0.1', 0), GatewayHandler)
    server.seen = []
    server.moca_status = "false"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
