"""
Logging setup: dictConfig with a console handler, text or JSON formatting and a
request id stamped on every record.

``RequestIDMiddleware`` sets the request id per HTTP request (taken from
``X-Request-ID`` or freshly generated) and reports the response time.
"""

from __future__ import annotations

import contextvars
import json
import logging
import logging.config
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

_request_id: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")

NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "asyncio", "multipart")

logger = logging.getLogger(__name__)


def get_request_id() -> str:
    return _request_id.get()


def set_request_id(request_id: str) -> contextvars.Token:
    return _request_id.set(request_id)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def make_dict_config(level: str = "INFO", fmt: str = "text") -> dict:
    formatter = "json" if fmt == "json" else "text"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIdFilter},
        },
        "formatters": {
            "text": {
                "format": "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s",
            },
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "filters": ["request_id"],
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {name: {"level": "WARNING"} for name in NOISY_LOGGERS},
        "root": {"level": level, "handlers": ["console"]},
    }


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    logging.config.dictConfig(make_dict_config(level, fmt))


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = set_request_id(rid[:64])
        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            response.headers["X-Request-ID"] = rid[:64]
            response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"
            logger.debug("%s %s -> %d in %.1fms", request.method, request.url.path,
                         response.status_code, elapsed_ms)
            return response
        finally:
            _request_id.reset(token)
