import logging
from pythonjsonlogger.json import JsonFormatter


def setup_logger(level: int = logging.INFO) -> None:
    """Send JSON log records to stderr, once per process."""
    logger = logging.getLogger()
    logger.setLevel(level)
    if any(getattr(h, '_loginserver', False) for h in logger.handlers):
        return
    logHandler = logging.StreamHandler()
    formatter = JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s',
                              rename_fields={'levelname': 'level',
                                             'asctime': 'timestamp'})
    logHandler.setFormatter(formatter)
    logHandler._loginserver = True  # type: ignore
    logger.addHandler(logHandler)
