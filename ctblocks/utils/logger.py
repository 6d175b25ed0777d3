"""
Logger — логирование по уровню и process-wide инициализация.

Библиотека не настраивает handlers при импорте: каждый модуль пишет в
logging.getLogger(__name__), конфигурация — задача приложения или тестов.
"""

import logging

# TRACE отсутствует в stdlib logging и маппится на DEBUG
_LEVEL_ALIASES: dict[str, int] = {
    "TRACE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

logger = logging.getLogger("ctblocks")


def resolve_level(level: int | str) -> int:
    """
    Уровень logging по int или имени (регистр не важен).

    Raises:
        ValueError: Для неизвестного имени уровня
    """
    if isinstance(level, int):
        return level

    try:
        return _LEVEL_ALIASES[level.upper()]
    except KeyError:
        raise ValueError(f"unknown log level: {level!r}") from None


def log_output(level: int | str, msg: str) -> None:
    """Записать msg с указанным уровнем в logger пакета."""
    logger.log(resolve_level(level), "%s", msg)


def init_logging(level: int | str = "WARNING", force: bool = False) -> None:
    """
    Process-wide инициализация логирования (идемпотентна).

    Повторный вызов ничего не меняет, если root logger уже настроен,
    кроме случая force=True.
    """
    logging.basicConfig(level=resolve_level(level), format=DEFAULT_FORMAT, force=force)
