"""Process-wide logging configuration."""
import logging
from typing import Optional

from prompt_keeper.core.config import settings

HANDLER_NAME = "prompt_keeper"
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "multipart")


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a console handler to the root logger at the configured level."""
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(h.get_name() == HANDLER_NAME for h in root_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler.set_name(HANDLER_NAME)
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
