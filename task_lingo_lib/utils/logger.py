import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def prepare_logger(
    logger_name: str,
    logger_file_name: Optional[str] = None,
    logger_level: str = "INFO",
) -> logging.Logger:
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.getLevelName(logger_level.upper()))

    # create_app may run more than once per process (tests, reloader)
    if getattr(logger, "_task_lingo_prepared", False):
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if logger_file_name:
        file_handler = logging.FileHandler(logger_file_name, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger._task_lingo_prepared = True
    return logger
