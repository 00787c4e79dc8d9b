"""
Logging configuration.

Responsibilities:
- Configure the root handler and format once per process
- Expose the shared application logger
"""

import logging
import sys

from config.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logger(level: str = settings.LOG_LEVEL) -> logging.Logger:
    """Configures the application logger."""
    global _configured
    app_logger = logging.getLogger("photo_ai_editor")

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)
        app_logger.propagate = False
        _configured = True

    app_logger.setLevel(level.upper())
    return app_logger


logger = setup_logger()
