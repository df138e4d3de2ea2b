"""
Logging utilities for the pitch zone analysis engine.
Provides dictConfig-based setup, namespaced loggers and operation timing.
"""

import json
import logging
import logging.config
import os
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER = 'pitch_analysis'

DEFAULT_FORMAT = '%(asctime)s | %(levelname)8s | %(name)s | %(message)s'


def setup_logging(config_path: Optional[str] = None, log_dir: str = "logs") -> logging.Logger:
    """
    Setup logging from a JSON dictConfig file.

    Args:
        config_path: Path to logging configuration file
        log_dir: Directory for log files named in the configuration

    Returns:
        The package root logger
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent / "configs" / "logging_config.json"

    if Path(config_path).exists():
        with open(config_path, 'r') as f:
            config = json.load(f)

        handlers = config.get('handlers', {})
        if any('filename' in handler for handler in handlers.values()):
            Path(log_dir).mkdir(parents=True, exist_ok=True)
        for handler_config in handlers.values():
            if 'filename' in handler_config:
                filename = handler_config['filename']
                if not os.path.isabs(filename):
                    handler_config['filename'] = os.path.join(log_dir, os.path.basename(filename))

        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=logging.INFO, format=DEFAULT_FORMAT, datefmt='%H:%M:%S')

    return logging.getLogger(ROOT_LOGGER)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace."""
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')


@contextmanager
def log_operation(operation: str, logger: Optional[logging.Logger] = None):
    """Log start, duration and failure of an operation. Errors propagate."""
    if logger is None:
        logger = logging.getLogger(ROOT_LOGGER)

    start_time = datetime.now()
    logger.debug(f"Starting operation: {operation}")

    try:
        yield logger
    except Exception as e:
        duration = (datetime.now() - start_time).total_seconds()
        logger.error(f"Operation failed: {operation} ({duration:.3f}s) | Error: {e}", exc_info=True)
        raise

    duration = (datetime.now() - start_time).total_seconds()
    logger.debug(f"Operation completed: {operation} ({duration:.3f}s)")
