"""
Logging setup shared by the CLIs.
"""
import logging
import logging.handlers
import os
from typing import Any, Dict, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Configures the root logger from a dictionary.

    Recognised keys are "level", "format" and "log_file". Console output is
    always enabled; a rotating file handler is added when log_file is set.
    """
    log_config = config or {}
    log_level = str(log_config.get("level", "INFO")).upper()
    log_format = log_config.get("format", DEFAULT_FORMAT)
    log_file_path = log_config.get("log_file")

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        # Rotates at 1MB, keeps 5 backups.
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.debug(f"Log level set to {log_level}.")
    if log_file_path:
        logging.debug(f"Log file path: {log_file_path}")
