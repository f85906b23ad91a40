"""Error reporter adapter on top of stdlib logging."""

from __future__ import annotations

import logging
from typing import Optional


class LoggingErrorReporter:
    """Writes reported exceptions, with traceback, to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("transit.errors")

    def log_exception(self, exc: BaseException, context: str) -> None:
        self._logger.error(context, exc_info=(type(exc), exc, exc.__traceback__))
