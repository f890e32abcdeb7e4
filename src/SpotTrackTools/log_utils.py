import os
import logging
from typing import Optional

from SpotTrackTools.resource_management.memlogger import MemoryLogger

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str,
    output_path: Optional[str] = None,
    logger_id: str = "",
    print_output: bool = False,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up a logger for the tracking run.

    Args:
        name: Base name of the run, used for the logger and log file names
        output_path: Folder for the log file. No file handler when None.
        logger_id: Extra identifier, keeps loggers of parallel runs apart
        print_output: Also log to the console
        level: Logging level

    Returns:
        logging.Logger: A MemoryLogger instance
    """
    original_class = logging.getLoggerClass()
    logging.setLoggerClass(MemoryLogger)
    try:
        logger_name = f"{output_path}_{name}_{logger_id}"  # unique per run
        logger = logging.getLogger(logger_name)
    finally:
        logging.setLoggerClass(original_class)

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if output_path is not None:
        log_file = os.path.join(output_path, f"{name}_{logger_id}_tracking.log")
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if print_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def remove_logger(logger: logging.Logger) -> None:
    """Remove logger, useful for concurrent parallel processing."""
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    logging.Logger.manager.loggerDict.pop(logger.name, None)
