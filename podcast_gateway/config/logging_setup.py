import json
import logging
import sys
from datetime import datetime, timezone

from podcast_gateway.config.settings import Settings

SERVICE_NAME = "podcast-gateway"
LINE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "openai")


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def build_formatter(settings: Settings) -> logging.Formatter:
    if settings.log_json:
        return JsonLineFormatter()
    return logging.Formatter(LINE_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(settings: Settings) -> None:
    """Send gateway logs to stdout at LOG_LEVEL, replacing any earlier handlers.

    Safe to call again, e.g. from both app.py and the CLI in one process.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(settings))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
