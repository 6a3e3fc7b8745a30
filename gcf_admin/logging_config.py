import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class InfoFilter(logging.Filter):
    """Filter to allow only records with level < WARNING (i.e., INFO and DEBUG)."""
    def filter(self, record):
        return record.levelno < logging.WARNING


def configure_logger(logger: logging.Logger,
                     log_file: Optional[Union[str, Path]] = None,
                     level: int = logging.INFO,
                     info_stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configures the logger to log:
    - info_stream (stdout by default): records below WARNING
    - stderr: WARNING and ERROR levels
    - file: everything at `level` and above, only when `log_file` is given

    Pass `info_stream=sys.stderr` when stdout carries program output.
    """
    # clear existing handlers to avoid duplicates when called twice
    if logger.handlers:
        logger.handlers.clear()

    logger.setLevel(level)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    info_handler = logging.StreamHandler(info_stream if info_stream is not None else sys.stdout)
    info_handler.setLevel(level)
    info_handler.setFormatter(formatter)
    info_handler.addFilter(InfoFilter())
    logger.addHandler(info_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
