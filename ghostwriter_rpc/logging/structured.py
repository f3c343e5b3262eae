import json
import logging
from datetime import UTC, datetime

# Attributes callers may attach through ``extra=``
EXTRA_FIELDS = ("service", "request_id", "operation", "status_code", "attempt", "user_id")


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings for structured logging systems (ELK, Datadog, etc.)
    """

    def __init__(self, service_name: str | None = None):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "process_id": record.process,
        }
        if self.service_name:
            log_obj["service"] = self.service_name

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_obj[name] = getattr(record, name)

        return json.dumps(log_obj, default=str)


def setup_structured_logging(service_name: str, level: str = "INFO") -> None:
    """
    Configure the root logger to use JSON formatting
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter(service_name))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace handlers installed by uvicorn or basicConfig to avoid duplicates
    if root_logger.handlers:
        root_logger.handlers = []

    root_logger.addHandler(handler)


def setup_logging(service_name: str, level: str = "INFO", structured: bool = True) -> None:
    """Configure JSON logging, or plain text when structured output is disabled."""
    if structured:
        setup_structured_logging(service_name, level)
    else:
        logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s", force=True)
    logging.getLogger(__name__).info(
        "Logging configured for %s (structured=%s, level=%s)", service_name, structured, level
    )
