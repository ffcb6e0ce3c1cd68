from enum import Enum

from .credentials import Credentials
from .gateway_api import GatewayAPI
from .log_utils import log


class Outcome(Enum):
    """Итог запуска и соответствующий код завершения процесса."""
    ENABLED = ("enabled", 0)
    ENABLE_FAILED = ("enable_failed", 0)
    ALREADY_ENABLED = ("already_enabled", 1)
    AUTH_FAILED = ("auth_failed", 1)
    ERROR = ("error", 1)

    def __init__(self, label, exit_code):
        self.label = label
        self.exit_code = exit_code


def run(api: GatewayAPI, credentials: Credentials) -> Outcome:
    """
    Вход -> проверка статуса -> включение MoCA.
    Ошибки шагов (GatewayError, requests.RequestException) пробрасываются
    наверх, код завершения выбирает вызывающий.
    """
    log.info("Acquiring authorization tokens...")
    status_code = api.login(credentials.username, credentials.password)
    if status_code != 200:
        log.error(f"Failed to acquire authorization tokens. (HTTP {status_code})")
        return Outcome.AUTH_FAILED

    log.info("Querying MoCA status...")
    if api.is_moca_enabled():
        log.error("MoCA is already enabled.")
        return Outcome.ALREADY_ENABLED

    log.info("Attempting to enable MoCA...")
    status_code = api.enable_moca(credentials.username)
    if status_code == 200:
        log.info("Successfully enabled MoCA.")
        return Outcome.ENABLED

    log.warning(f"Failed to enable MoCA. (HTTP {status_code})")
    return Outcome.ENABLE_FAILED
