import os
from configparser import ConfigParser
from dataclasses import dataclass

DEFAULT_BASE_URL = "http://192.168.0.1/"
DEFAULT_USER_AGENT = "MoCA_Probe/0.1"

# moca.cfg лежит рядом с moca_probe.py
script_dir = os.path.dirname(os.path.abspath(__file__))
default_config_file = os.path.join(script_dir, '..', 'moca.cfg')


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float | None = None
    debug: bool = False
    syslog: bool = False


def normalize_base_url(url: str) -> str:
    url = url.strip()
    return url if url.endswith('/') else url + '/'


def load_settings(config_file: str | None = None, environ=None) -> Settings:
    """
    Собирает настройки из moca.cfg и окружения.
    Приоритет: 1. Переменные окружения 2. Конфиг-файл 3. Значения по умолчанию.
    Отсутствие файла не является ошибкой.
    """
    environ = os.environ if environ is None else environ
    config_file = config_file or environ.get('MOCA_CONFIG', default_config_file)

    config = ConfigParser()
    config.read(config_file, encoding='utf-8')

    base_url = config.get('gateway', 'base_url', fallback=DEFAULT_BASE_URL)
    base_url = environ.get('GATEWAY_BASE_URL', base_url)

    # Пустое значение означает "без таймаута"
    raw_timeout = config.get('gateway', 'timeout', fallback='').strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else None
    except ValueError:
        raise ValueError(f"[gateway] timeout must be a number, got {raw_timeout!r}") from None

    return Settings(
        base_url=normalize_base_url(base_url),
        user_agent=config.get('gateway', 'user_agent', fallback=DEFAULT_USER_AGENT),
        timeout=timeout,
        debug=config.getboolean('logging', 'debug', fallback=False),
        syslog=config.getboolean('logging', 'syslog', fallback=False),
    )
