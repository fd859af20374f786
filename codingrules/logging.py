"""Logger hierarchy and handlers for codingrules runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping, Tuple

ROOT_LOGGER = "codingrules"
CONSOLE_FORMAT = "[codingrules] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AreaLogger(logging.LoggerAdapter):
    """Prefixes every message with the project area it concerns.

    Areas are ``root`` for the project's own .editorconfig and the mapping
    names (``src``, ``test``, ``sample``) for mapped directories, giving
    messages such as ``src - Unable to fetch ...``.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"{self.extra['area']} - {msg}", kwargs

    def failure(self, exc: BaseException) -> None:
        """Log ``exc`` at error level, with its traceback when debug output is on."""
        if self.isEnabledFor(logging.DEBUG):
            self.error("%s", exc, exc_info=exc)
        else:
            self.error("%s", exc)


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER
    return logging.getLogger(full_name)


def area_logger(area: str, name: str | None = None) -> AreaLogger:
    return AreaLogger(get_logger(name), {"area": area})


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Route codingrules records to the console and, if configured, a log file.

    ``verbose`` lowers the threshold to DEBUG, which surfaces the new-key
    notices of a merge and full tracebacks for failed areas.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [_handler(logging.StreamHandler(), CONSOLE_FORMAT, level)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_handler(logging.FileHandler(log_file, encoding="utf-8"), FILE_FORMAT, level))
    for handler in handlers:
        logger.addHandler(handler)
    return logger


def _handler(handler: logging.Handler, fmt: str, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["AreaLogger", "area_logger", "configure_logging", "get_logger"]
