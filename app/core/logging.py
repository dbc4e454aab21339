import logging
import sys
import structlog
from typing import Any, Mapping

from app.core.config import settings

SENSITIVE_KEYS = {
    "authorization",
    "password",
    "hashed_password",
    "token",
    "access_token",
    "secret",
    "auth_jwt_secret",
}


def _mask(value: str) -> str:
    if not isinstance(value, str) or len(value) <= 8:
        return "***"
    return value[:2] + "***" + value[-2:]


def _redact(d: Mapping[str, Any]) -> dict:
    out = {}
    for k, v in d.items():
        if str(k).lower() in SENSITIVE_KEYS:
            out[k] = _mask(str(v))
        elif isinstance(v, Mapping):
            out[k] = _redact(v)
        else:
            out[k] = v
    return out


def redact_processor(logger, method_name, event_dict):  # type: ignore[no-untyped-def]
    # headers/payloads nested in the event are walked as well
    return _redact(event_dict)


def configure_logging(level: str | None = None) -> None:
    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    min_level = logging.getLevelName(level_name)
    if not isinstance(min_level, int):
        min_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_processor,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.getLogger("uvicorn.error").setLevel(min_level)
    logging.getLogger("uvicorn.access").setLevel(min_level)
