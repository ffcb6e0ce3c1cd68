import os
from dataclasses import dataclass

from .errors import MissingCredentialError

USERNAME_VAR = "GATEWAY_USERNAME"
PASSWORD_VAR = "GATEWAY_PASSWORD"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self):
        # Пароль не должен попадать в логи
        return f"Credentials(username={self.username!r}, password='***')"


def load_credentials(environ=None) -> Credentials:
    """
    Читает логин и пароль из окружения.
    Пустая строка допустима, отсутствие переменной - нет.
    """
    environ = os.environ if environ is None else environ

    for name in (USERNAME_VAR, PASSWORD_VAR):
        if name not in environ:
            raise MissingCredentialError(name)

    return Credentials(environ[USERNAME_VAR], environ[PASSWORD_VAR])
