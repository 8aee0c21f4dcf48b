# Path: org_flow/core/logger/ipo_logging.py
"""
IPO-Aware Logging for org_flow (Organization Flowchart)

Input-Process-Output separated logging.

Log files written to the configured log directory:
- input_activity.log (unit file reader, unit store)
- process_activity.log (normalizer, hierarchy builder, index, service)
- output_activity.log (JSON and text exports)
- full_activity.log (everything combined)
"""

import logging
import sys
from pathlib import Path
from typing import Any


LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LAYER_FILES = {
    'input': 'input_activity.log',
    'process': 'process_activity.log',
    'output': 'output_activity.log',
}


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name == self.layer or record.name.startswith(f'{self.layer}.')


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_ipo_logging(
    log_dir: Path,
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Set up IPO-aware logging for org_flow.

    Replaces any handlers already attached to the root logger, so calling
    it twice does not duplicate output.

    Args:
        log_dir: Directory for log files (created if missing)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console

    Raises:
        ValueError: If log_level is not a logging level name

    Example:
        setup_ipo_logging(
            log_dir=Path('logs'),
            log_level='INFO',
            console_output=True
        )
    """
    level = _resolve_level(log_level)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    shutdown_ipo_logging()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    full_handler = logging.FileHandler(log_dir / 'full_activity.log', encoding='utf-8')
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(formatter)
    root_logger.addHandler(full_handler)

    for layer, filename in LAYER_FILES.items():
        handler = logging.FileHandler(log_dir / filename, encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        handler.addFilter(IPOFilter(layer))
        root_logger.addHandler(handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)


def setup_from_config(config: Any, log_level: str = None) -> None:
    """
    Set up logging from ConfigLoader values.

    Args:
        config: ConfigLoader (or any object with get())
        log_level: Overrides the configured level when given
    """
    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=log_level or config.get('log_level', 'INFO'),
        console_output=config.get('log_console', True),
    )


def shutdown_ipo_logging() -> None:
    """Close and detach every handler on the root logger."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'unit_file_reader', 'unit_ops')

    Returns:
        Logger under the 'input.' prefix
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer.

    Args:
        name: Logger name (e.g., 'hierarchy.builder')

    Returns:
        Logger under the 'process.' prefix

    Example:
        logger = get_process_logger('hierarchy.builder')
        logger.info("Resolving parents")
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """Get logger for OUTPUT layer ('output.' prefix)."""
    return logging.getLogger(f'output.{name}')


__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'setup_from_config',
    'shutdown_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
