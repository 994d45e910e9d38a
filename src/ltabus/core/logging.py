import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

EXTRA_FIELDS = ("path", "method", "status_code", "url", "stop_code", "skip")


class JsonLogFormatter(logging.Formatter):
    """Render logs as JSON strings with a minimal schema."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        request_id = request_id_ctx.get()
        if request_id:
            base["request_id"] = request_id

        for attr in EXTRA_FIELDS:
            value = getattr(record, attr, None)
            if value is not None:
                base[attr] = value

        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(base, ensure_ascii=True, default=str)


def setup_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    # httpx logs every request at INFO; the fetchers log their own progress
    logging.getLogger("httpx").setLevel(logging.WARNING)

    for name in ("uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False
