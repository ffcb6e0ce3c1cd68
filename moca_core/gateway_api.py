import json

import requests
from requests.cookies import get_cookie_header

from .errors import CsrfTokenMissingError
from .log_utils import log
from .settings import DEFAULT_USER_AGENT
from .status import UserbarStatus

LOGIN_PATH = "check.php"
USERBAR_PATH = "actionHandler/ajaxSet_userbar.php"
MOCA_CONFIG_PATH = "actionHandler/ajaxSet_moca_config.php"

CSRF_TOKEN_NAME = "csrfp_token"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_ACCEPT = "application/json, text/javascript, */*; q=0.01"


def build_moca_config(username: str) -> dict:
    """
    Форма для ajaxSet_moca_config.php: JSON с настройками
    передается строкой в единственном поле configInfo.
    """
    config_info = {
        "moca_enable": "true",
        "thisUser": username,
    }
    return {"configInfo": json.dumps(config_info, separators=(',', ':'))}


class GatewayAPI:
    """
    Клиент веб-интерфейса шлюза. Одна requests.Session на все запросы,
    чтобы cookie сессии и csrfp_token, выставленные при входе,
    автоматически передавались дальше.
    """
    def __init__(self, base_url: str, user_agent: str = DEFAULT_USER_AGENT,
                 timeout: float | None = None, session: requests.Session | None = None):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.session.close()

    def _send(self, request: requests.Request) -> requests.Response:
        prepared = self.session.prepare_request(request)
        log.debug(f"{prepared.method} {prepared.url}")
        response = self.session.send(prepared, timeout=self.timeout)
        log.debug(f"{prepared.url} -> HTTP {response.status_code}")
        return response

    def find_cookie(self, name: str) -> str:
        """
        Ищет cookie, который сессия отправила бы на base_url.
        Подбор по домену и пути делает политика cookie-jar
        (localhost хранится как localhost.local), самый длинный путь идет первым.
        Пустая строка, если не найден.
        """
        header = get_cookie_header(self.session.cookies, requests.Request('GET', self.base_url))
        if not header:
            return ''

        for pair in header.split('; '):
            cookie_name, _, value = pair.partition('=')
            if cookie_name == name:
                return value
        return ''

    def attach_csrf_token(self, request: requests.Request) -> requests.Request:
        """
        Дублирует cookie csrfp_token в одноименный заголовок запроса.
        Без этого сервер отклоняет изменяющие запросы.
        """
        token = self.find_cookie(CSRF_TOKEN_NAME)
        if not token:
            raise CsrfTokenMissingError()
        request.headers[CSRF_TOKEN_NAME] = token
        return request

    def login(self, username: str, password: str) -> int:
        """Отправляет учетные данные на check.php и возвращает HTTP-код ответа."""
        request = requests.Request(
            'POST',
            self.base_url + LOGIN_PATH,
            data={"username": username, "password": password},
            headers={
                'User-Agent': self.user_agent,
                'Content-Type': FORM_CONTENT_TYPE,
            },
        )
        response = self._send(request)
        return response.status_code

    def get_userbar_status(self) -> UserbarStatus:
        request = requests.Request(
            'POST',
            self.base_url + USERBAR_PATH,
            headers={
                'User-Agent': self.user_agent,
                'Content-Type': FORM_CONTENT_TYPE,
                'Accept': JSON_ACCEPT,
            },
        )
        self.attach_csrf_token(request)

        response = self._send(request)
        return UserbarStatus.from_json(response.text)

    def is_moca_enabled(self) -> bool:
        return self.get_userbar_status().moca_enabled

    def enable_moca(self, username: str) -> int:
        """Включает MoCA. Возвращает HTTP-код ответа, 200 означает успех."""
        request = requests.Request(
            'POST',
            self.base_url + MOCA_CONFIG_PATH,
            data=build_moca_config(username),
            headers={
                'User-Agent': self.user_agent,
                'Content-Type': FORM_CONTENT_TYPE,
                'Accept': '*/*',
            },
        )
        self.attach_csrf_token(request)

        response = self._send(request)
        return response.status_code
