import logging
import os
from logging.handlers import SysLogHandler

LOGGER_NAME = 'MoCA-Probe'


def _syslog_handler():
    """
    Приоритет: 1. Локальный сокет /dev/log 2. Сетевой UDP 514.
    Возвращает None, если syslog недоступен.
    """
    if os.path.exists('/dev/log'):
        try:
            return SysLogHandler(address='/dev/log', facility=SysLogHandler.LOG_USER)
        except OSError:
            pass

    try:
        return SysLogHandler(address=('127.0.0.1', 514), facility=SysLogHandler.LOG_USER)
    except OSError:
        return None


def get_logger(name=LOGGER_NAME, debug=False, syslog=False):
    """
    Настраивает логгер утилиты. По умолчанию пишет в stderr,
    при syslog=True пытается использовать системный журнал.
    Повторный вызов перенастраивает тот же логгер.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Очистка старых обработчиков (предотвращает дублирование логов)
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = _syslog_handler() if syslog else None
    log_format = '%(name)s: %(message)s'  # Стандарт для Syslog (время добавит система)
    fell_back = False

    if handler is None:
        handler = logging.StreamHandler()
        # Для консоли добавляем время и уровень
        log_format = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        fell_back = syslog

    formatter = logging.Formatter(log_format, datefmt='%Y-%m-%d %H:%M:%S')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if fell_back:
        logger.warning("Syslog is unavailable, falling back to stderr.")

    return logger


# В остальных модулях: from .log_utils import log
log = get_logger()
