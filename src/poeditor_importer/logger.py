
import logging
from pathlib import Path

LOG_DIR = Path(__file__).parent.parent.parent / "logs"
LOG_FILE = LOG_DIR / "importer.log"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Cache for logging settings to avoid repeated config reads
_log_settings_cache = None


def _get_log_settings():
    """Get (log_mode, log_to_file) from configuration."""
    global _log_settings_cache
    if _log_settings_cache is not None:
        return _log_settings_cache

    try:
        from poeditor_importer.config import load_config
        config = load_config()
        settings = (config.get('log_mode', 'info'), bool(config.get('log_to_file', False)))
        _log_settings_cache = settings
        return settings
    except ImportError:
        # Config module is still importing; fall back to defaults without caching
        return 'info', False


def _level_for_mode(log_mode: str) -> int:
    if log_mode == 'debug':
        return logging.DEBUG
    if log_mode == 'off':
        # Higher than CRITICAL disables all output
        return logging.CRITICAL + 1
    return logging.INFO


def _configure_logger(logger: logging.Logger, log_mode: str, log_to_file: bool):
    level = _level_for_mode(log_mode)
    logger.setLevel(level)
    log_format = logging.Formatter(LOG_FORMAT)

    has_file_handler = any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    has_console_handler = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    )

    if log_to_file and log_mode != 'off' and not has_file_handler:
        LOG_DIR.mkdir(exist_ok=True)
        f_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        f_handler.setLevel(logging.DEBUG)
        f_handler.setFormatter(log_format)
        logger.addHandler(f_handler)
    elif (not log_to_file or log_mode == 'off') and has_file_handler:
        handlers_to_remove = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        for handler in handlers_to_remove:
            handler.close()
            logger.removeHandler(handler)

    if not has_console_handler:
        c_handler = logging.StreamHandler()
        c_handler.setFormatter(log_format)
        logger.addHandler(c_handler)

    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)


def clear_log_settings_cache():
    """Clear the cached settings and reconfigure existing loggers (call this when config is updated)."""
    global _log_settings_cache
    _log_settings_cache = None

    log_mode, log_to_file = _get_log_settings()

    # Only loggers that have handlers were created by get_logger
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        if logger.handlers:
            _configure_logger(logger, log_mode, log_to_file)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    log_mode, log_to_file = _get_log_settings()
    _configure_logger(logger, log_mode, log_to_file)
    return logger
