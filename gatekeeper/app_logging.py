"""JSON log output for the application."""

import logging
from pythonjsonlogger.json import JsonFormatter


def setup_logger(level: int = logging.INFO) -> None:
    """Send root logger records to stderr as JSON lines."""
    logger = logging.getLogger()
    if any(getattr(handler, '_gatekeeper', False)
           for handler in logger.handlers):
        logger.setLevel(level)
        return
    logHandler = logging.StreamHandler()
    formatter = JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s',
                              rename_fields={'levelname': 'level', 'asctime': 'timestamp'})
    logHandler.setFormatter(formatter)
    logHandler._gatekeeper = True  # type: ignore
    logger.addHandler(logHandler)
    logger.setLevel(level)
