# svg2png/utils/logger.py
"""
Logging setup utility for the svg2png icon renderer.

Provides a standardized way to configure logging for console and file output.
"""

import logging
import os
import sys

# Define a mapping from string log levels to logging constants
LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(name)s] - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Keep track if logging has been configured to avoid issues with basicConfig
_logging_configured = False


def setup_logging(level='INFO', log_file=None, log_format=DEFAULT_LOG_FORMAT, date_format=DEFAULT_DATE_FORMAT):
    """
    Configures the root logger for the application.

    Sets up logging to stream to console (stderr) and optionally to a file.
    A second call only updates the level of the already configured root logger.

    Args:
        level (str): The desired logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
                     Defaults to 'INFO'. Case-insensitive. Unknown levels fall back to INFO.
        log_file (str, optional): Path to the file where logs should be saved.
                                  If None, logging will only go to the console.
        log_format (str, optional): The format string for log messages.
        date_format (str, optional): The format string for the timestamp in logs.

    Returns:
        int: The logging level that is now in effect.
    """
    global _logging_configured

    level_upper = str(level).upper()
    log_level_int = LOG_LEVEL_MAP.get(level_upper)
    if log_level_int is None:
        print(f"Warning: Invalid log level '{level}'. Defaulting to '{DEFAULT_LOG_LEVEL}'.", file=sys.stderr)
        level_upper = DEFAULT_LOG_LEVEL
        log_level_int = LOG_LEVEL_MAP[DEFAULT_LOG_LEVEL]

    if _logging_configured:
        root = logging.getLogger()
        if root.getEffectiveLevel() != log_level_int:
            root.setLevel(log_level_int)
            logging.info(f"Updated logging level to: {level_upper}")
        return log_level_int

    handlers = []

    # Console handler (always added), stderr keeps stdout free for progress output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    handlers.append(console_handler)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(log_format, date_format))
            handlers.append(file_handler)
        except OSError as e:
            # Use print as logging is not configured yet
            print(f"Error: Could not create or open log file '{log_file}': {e}. Logging to file disabled.", file=sys.stderr)

    logging.basicConfig(level=log_level_int, format=log_format, datefmt=date_format, handlers=handlers)
    _logging_configured = True
    logging.debug(f"Logging configured. Level: {level_upper}." + (f" Log file: {log_file}" if len(handlers) > 1 else ""))
    return log_level_int
