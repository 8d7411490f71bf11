import logging
import logging.config
import os
from datetime import datetime

from pytz import timezone

APP_LOGGER_NAME = "marketplace_cms_bridge"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# third-party loggers that are only interesting when debugging
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class TimezoneFormatter(logging.Formatter):
    """Formats record timestamps in the configured timezone instead of server local time."""

    def __init__(self, tz_name: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tz = timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, self.tz)
        return dt.strftime(datefmt) if datefmt else dt.isoformat()


def build_logging_config(level: int, tz_name: str, log_file: str | None) -> dict:
    """
    Builds the dictConfig for the console handler and, if log_file is given, a file handler.

    Args:
        level (int): Level of the root logger and all handlers.
        tz_name (str): pytz timezone name used for timestamps.
        log_file (str | None): Path of the log file, None to log to the console only.

    Returns:
        dict: A logging.config.dictConfig compatible dict.
    """
    handlers: dict = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": level,
            "stream": "ext://sys.stdout",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "level": level,
            "filename": log_file,
            "encoding": "utf-8",
        }

    noisy_level = logging.DEBUG if level == logging.DEBUG else logging.WARNING
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": TimezoneFormatter,
                "format": LOG_FORMAT,
                "datefmt": DATE_FORMAT,
                "tz_name": tz_name,
            },
        },
        "handlers": handlers,
        "loggers": {name: {"level": noisy_level} for name in NOISY_LOGGERS},
        "root": {
            "handlers": list(handlers),
            "level": level,
        },
    }


def setup_logging() -> logging.Logger:
    """
    Configures logging from LOG_LEVEL, TIMEZONE, LOG_TO_FILE and ROOT_DIR.

    Returns:
        logging.Logger: The application logger.
    """
    level = logging.DEBUG if os.getenv("LOG_LEVEL", "info").lower() == "debug" else logging.INFO
    tz_name = os.getenv("TIMEZONE", "Europe/Berlin")

    log_file = None
    if os.getenv("LOG_TO_FILE", "true").lower() in ("true", "1", "yes"):
        log_dir = os.path.join(os.getenv("ROOT_DIR", os.getcwd()), "logs")
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, "app.log")

    logging.config.dictConfig(build_logging_config(level, tz_name, log_file))
    return logging.getLogger(APP_LOGGER_NAME)
