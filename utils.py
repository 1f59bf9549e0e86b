# utils.py
"""
Utility functions for the simulator.

Config file handling and logging setup, shared by the entry point and the
tests. Nothing here knows about particles or windows.
"""
import logging
import logging.handlers
import json
import os
from typing import Any, Dict, List

from configuration import InvalidConfigurationError

# --- Data Contracts ---
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON document, which must be an object.
#   - Raises: FileNotFoundError, json.JSONDecodeError, or
#     InvalidConfigurationError if the top level is not an object. All are
#     logged before they propagate.
#
# config_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
#   - Outputs: config[name], or {} when the section is absent or null.
#   - Raises: InvalidConfigurationError if the section is not an object.
#
# setup_logging(config: Dict[str, Any]) -> logging.Logger:
#   - Inputs: The full config. Its "logging" section may set "level",
#     "format" and "log_file"; a null "log_file" turns file output off.
#   - Outputs: The configured root logger.
#   - Side Effects: Replaces every handler on the root logger. Creates
#     the log directory if needed.

LOG_DEFAULTS = {
    'level': 'INFO',
    'format': '%(asctime)s - %(levelname)s - %(message)s',
    'log_file': 'logs/simulation.log',
}
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 5


def load_config(path: str) -> Dict[str, Any]:
    """Reads the JSON config file at `path`."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Error decoding JSON from {path} (line {e.lineno}, column {e.colno}).")
        raise

    if not isinstance(config, dict):
        msg = f"Configuration error: {path} must hold a JSON object, not {type(config).__name__}."
        logging.error(msg)
        raise InvalidConfigurationError(msg)

    logging.info(f"Configuration loaded successfully ({', '.join(sorted(config)) or 'empty'}).")
    return config


def config_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        msg = f"Configuration error: section '{name}' must be an object."
        logging.error(msg)
        raise InvalidConfigurationError(msg)
    return section


def _build_handlers(log_format: str, log_file: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        ))

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: Dict[str, Any]) -> logging.Logger:
    """
    Points the root logger at the console and, optionally, a rotating file.

    Safe to call more than once: old handlers are dropped, so lines are
    never written twice.
    """
    settings = {**LOG_DEFAULTS, **config_section(config, 'logging')}
    level = str(settings['level']).upper()

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)

    root.setLevel(level)
    for handler in _build_handlers(settings['format'], settings['log_file']):
        root.addHandler(handler)

    logging.info("Logging system initialized.")
    logging.debug(
        f"Log level {level}, file output: {settings['log_file'] or 'disabled'}."
    )
    return root
