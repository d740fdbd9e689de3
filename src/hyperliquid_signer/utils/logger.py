import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Dict, List, Optional, Union

LOG_DIR_ENV = 'HYPERLIQUID_SIGNER_LOG_DIR'
LOG_LEVEL_ENV = 'HYPERLIQUID_SIGNER_LOG_LEVEL'
PACKAGE = __name__.split('.')[0]

# Settings applied by configure_logging, used by loggers created afterwards
_settings: Dict[str, Optional[Union[int, str]]] = {'level': None, 'log_dir': None}
# One handler pair per directory, shared by every logger writing there
_file_handlers: Dict[str, List[logging.Handler]] = {}

_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def level_value(level: Union[int, str, None]) -> Optional[int]:
    """Numeric logging level for a name like ``'DEBUG'``, or None if unknown"""
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if isinstance(value, int):
            return value
    return None


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    if _settings['level'] is not None:
        return _settings['level']
    return level_value(os.environ.get(LOG_LEVEL_ENV, 'INFO')) or logging.INFO


def _get_file_handlers(log_dir: Union[str, Path]) -> List[logging.Handler]:
    log_path = Path(log_dir)
    key = str(log_path.resolve())
    if key in _file_handlers:
        return _file_handlers[key]
    
    log_path.mkdir(parents=True, exist_ok=True)
    
    # File handler - rotating by size
    file_handler = RotatingFileHandler(
        log_path / 'signer.log',
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=10
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(_formatter)
    
    # Error file handler
    error_handler = RotatingFileHandler(
        log_path / 'errors.log',
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=5
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(_formatter)
    
    _file_handlers[key] = [file_handler, error_handler]
    return _file_handlers[key]


def _attach(logger: logging.Logger, handlers: List[logging.Handler]):
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)


def setup_logger(name: str = __name__, level: Optional[int] = None,
                 log_dir: Optional[str] = None) -> logging.Logger:
    """Set up logger with console and optional rotating file handlers"""
    
    # Create logger
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    
    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger
    
    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(_formatter)
    logger.addHandler(console_handler)
    
    log_dir = log_dir or _settings['log_dir'] or os.environ.get(LOG_DIR_ENV)
    if log_dir:
        _attach(logger, _get_file_handlers(log_dir))
    
    return logger


def configure_logging(level: Union[int, str, None] = None,
                      log_dir: Optional[str] = None) -> List[logging.Logger]:
    """
    Apply a level and log directory to every logger in the package.
    
    Loggers created later with ``setup_logger`` pick up the same settings.
    
    Args:
        level: Level name or number; unknown names are ignored
        log_dir: Directory for ``signer.log`` and ``errors.log``
        
    Returns:
        The package loggers that were updated
    """
    numeric = level_value(level)
    if numeric is not None:
        _settings['level'] = numeric
    if log_dir:
        _settings['log_dir'] = str(log_dir)
    
    handlers = _get_file_handlers(log_dir) if log_dir else []
    updated = []
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name != PACKAGE and not name.startswith(PACKAGE + '.'):
            continue
        if numeric is not None:
            logger.setLevel(numeric)
        _attach(logger, handlers)
        updated.append(logger)
    
    return updated


def mask_secret(secret: Optional[str], visible: int = 4) -> str:
    """Render a secret for log output, keeping only its last characters"""
    if not secret:
        return '<unset>'
    if len(secret) <= visible:
        return '*' * len(secret)
    return '*' * 8 + secret[-visible:]
