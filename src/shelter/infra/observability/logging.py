"""structlog setup shared by structlog loggers and stdlib ``logging``.

Service code logs through ``logging.getLogger(__name__)`` with event names as
messages and fields in ``extra=``. :func:`configure_logging` routes those
records through the same processor chain as structlog's own loggers, so both
come out as one stream: JSON lines in production, coloured console output
everywhere else. Request-scoped context (``request_id``, ``trace_id``) is
merged from contextvars, and secret-looking fields are masked.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Literal

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from structlog.types import Processor

REDACTED_VALUE = "***REDACTED***"

# Exact (case-insensitive) keys; anything containing "password" or "token" too.
_SECRET_FIELDS = frozenset(
    {"authorization", "api_key", "apikey", "secret", "credential", "database_url"}
)
_SECRET_FRAGMENTS = ("password", "token")

_HANDLER_NAME = "shelter-structlog"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """``LOG_LEVEL`` and ``ENVIRONMENT``; ``production`` switches to JSON."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    log_level: LogLevel = Field(default="INFO", alias="LOG_LEVEL")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @property
    def use_json_logs(self) -> bool:
        return self.environment == "production"

    @property
    def log_level_int(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


class SensitiveDataProcessor:
    """Mask values whose key names look like credentials.

    >>> SensitiveDataProcessor()(None, "info", {"event": "x", "db_password": "p"})["db_password"]
    '***REDACTED***'
    """

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        for key in [k for k in event_dict if self._is_secret(k)]:
            event_dict[key] = REDACTED_VALUE
        return event_dict

    @staticmethod
    def _is_secret(key: str) -> bool:
        lowered = key.lower()
        return lowered in _SECRET_FIELDS or any(part in lowered for part in _SECRET_FRAGMENTS)


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        SensitiveDataProcessor(),
    ]


def _render(settings: LoggingSettings) -> Processor:
    if settings.use_json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def _install_root_handler(settings: LoggingSettings) -> None:
    # Replaces only our own handler, so repeated calls and pytest's
    # capture handler coexist.
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                *_pre_chain(),
                structlog.stdlib.add_logger_name,
                structlog.stdlib.ExtraAdder(),
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                _render(settings),
            ],
        )
    )
    root = logging.getLogger()
    for stale in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(stale)
    root.addHandler(handler)
    root.setLevel(settings.log_level_int)


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog and the stdlib root logger; safe to call again."""
    settings = settings or get_logging_settings()
    structlog.configure(
        processors=[*_pre_chain(), structlog.processors.format_exc_info, _render(settings)],
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_int),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _install_root_handler(settings)


def get_logger(name: str | None = None) -> Any:
    """structlog logger, tagged with ``logger=name`` when a name is given."""
    logger = structlog.get_logger()
    return logger.bind(logger=name) if name is not None else logger
