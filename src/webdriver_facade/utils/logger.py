import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from ..core.config_loader import ConfigLoader

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(message)s'


def setup_logger(config_loader: Optional[ConfigLoader] = None, logger_name: Optional[str] = None,
                 base_dir: Optional[Path] = None) -> logging.Logger:
    """
    Sets up a logger (root logger by default) based on the 'logging' block of settings.
    This function should ideally be called once at startup, e.g. from conftest.py.
    Relative log file paths are resolved against base_dir (the working directory by default).
    """
    if config_loader is None:
        config_loader = ConfigLoader()
    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    # --- General Logging Settings ---
    default_log_level_str = str(config_loader.get_logging_setting('level', 'INFO')).upper()
    default_log_format = config_loader.get_logging_setting('format', DEFAULT_LOG_FORMAT)
    log_level = getattr(logging, default_log_level_str, logging.INFO)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    # Drop handlers from an earlier call so repeated setup does not duplicate output
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if logger_name is not None:
        logger.propagate = bool(config_loader.get_logging_setting('propagate', False))

    # --- Console Handler Settings ---
    console_handler_config = config_loader.get_logging_setting('console_handler', {})
    if console_handler_config.get('enabled', True):
        console_log_level_str = str(console_handler_config.get('level', default_log_level_str)).upper()
        console_log_format = console_handler_config.get('format', default_log_format)
        console_log_level = getattr(logging, console_log_level_str, log_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_log_level)
        console_handler.setFormatter(logging.Formatter(console_log_format))
        logger.addHandler(console_handler)

    # --- File Handler Settings ---
    file_handler_config = config_loader.get_logging_setting('file_handler', {})
    if file_handler_config.get('enabled', False):
        log_file_path = base_dir / file_handler_config.get('path', 'logs/webdriver_facade.log')

        try:
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # The logger is not usable yet, so report on stderr
            print(f"Error: Could not create log directory {log_file_path.parent}. File logging disabled. Error: {e}", file=sys.stderr)
            return logger

        file_log_level_str = str(file_handler_config.get('level', default_log_level_str)).upper()
        file_log_format = file_handler_config.get('format', default_log_format)
        file_log_level = getattr(logging, file_log_level_str, log_level)

        rotation_type = file_handler_config.get('rotation_type', None)  # 'size', 'time' or None
        max_bytes = int(file_handler_config.get('max_bytes', 1024 * 1024 * 5))
        backup_count = int(file_handler_config.get('backup_count', 5))
        when = file_handler_config.get('when', 'midnight')
        interval = int(file_handler_config.get('interval', 1))

        if rotation_type == 'size':
            file_handler = logging.handlers.RotatingFileHandler(
                log_file_path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
            )
        elif rotation_type == 'time':
            file_handler = logging.handlers.TimedRotatingFileHandler(
                log_file_path, when=when, interval=interval, backupCount=backup_count, encoding='utf-8'
            )
        else:
            file_handler = logging.FileHandler(log_file_path, encoding='utf-8')

        file_handler.setLevel(file_log_level)
        file_handler.setFormatter(logging.Formatter(file_log_format))
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
