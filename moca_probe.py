import configparser
import sys

import requests

from moca_core.credentials import load_credentials
from moca_core.errors import GatewayError, MissingCredentialError
from moca_core.flow import Outcome, run
from moca_core.gateway_api import GatewayAPI
from moca_core.log_utils import get_logger, log
from moca_core.settings import load_settings


def probe(environ=None) -> int:
    """Один запуск утилиты. Возвращает код завершения процесса."""
    try:
        settings = load_settings(environ=environ)
    except (ValueError, configparser.Error) as e:
        log.error(f"Invalid configuration: {e}")
        return 1

    logger = get_logger(debug=settings.debug, syslog=settings.syslog)

    # Учетные данные проверяются до любого сетевого запроса
    try:
        credentials = load_credentials(environ)
    except MissingCredentialError as e:
        logger.error(str(e))
        return 1

    logger.debug(f"Gateway: {settings.base_url}")

    with GatewayAPI(settings.base_url, user_agent=settings.user_agent, timeout=settings.timeout) as api:
        try:
            outcome = run(api, credentials)
        except GatewayError as e:
            logger.error(str(e))
            outcome = Outcome.ERROR
        except requests.exceptions.RequestException as e:
            logger.error(f"Error connecting to gateway: {e}")
            outcome = Outcome.ERROR

    logger.debug(f"Outcome: {outcome.label}")
    return outcome.exit_code


def main() -> None:
    sys.exit(probe())


if __name__ == '__main__':
    main()
