import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class Settings(BaseModel):
    log_dir: str = "logs"
    app_log_dir: str = "app_log"
    log_level: str = "INFO"
    page_size: int = 20
    workers: int = 1


def load_settings(**overrides) -> Settings:
    """Build settings from the environment (and .env), then apply overrides."""
    values = {
        "log_dir": os.getenv("LOGSIFT_LOG_DIR"),
        "app_log_dir": os.getenv("LOGSIFT_APP_LOG_DIR"),
        "log_level": os.getenv("LOGSIFT_LOG_LEVEL"),
        "page_size": os.getenv("LOGSIFT_PAGE_SIZE"),
        "workers": os.getenv("LOGSIFT_WORKERS"),
    }
    values.update(overrides)
    return Settings(**{key: value for key, value in values.items() if value is not None})


def configure_logging(settings: Settings) -> str:
    """
    Send LogSift's own log records to <app_log_dir>/logsift.log.

    The terminal belongs to the UI, so nothing is logged to stdout.
    Returns the log file path.
    """
    if not os.path.exists(settings.app_log_dir):
        os.makedirs(settings.app_log_dir)

    log_file = os.path.join(settings.app_log_dir, "logsift.log")
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    return log_file
