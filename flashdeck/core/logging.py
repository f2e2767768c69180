import json
import logging
from typing import Any, Dict

from .config import settings


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
        }

        if hasattr(record, "error_code"):
            log_data["error_code"] = record.error_code

        if hasattr(record, "details"):
            log_data["details"] = record.details

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging() -> None:
    logger = logging.getLogger()
    # Lifespan may run more than once per process (tests, reload)
    if any(getattr(h, "_flashdeck", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler()
    if settings.log_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    handler._flashdeck = True
    logger.addHandler(handler)
    logger.setLevel(settings.log_level)
