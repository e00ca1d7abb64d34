# moded/utils/logging_config.py
"""moded.utils.logging_config
============================

Logging configuration for the moded editor.

curses owns the terminal while the editor runs, so the primary sink is a
rotating log file; console output is off unless explicitly enabled.

Handlers:
    - Rotating editor.log (default ``~/.cache/moded/editor.log``).
    - Optional stderr console handler.
    - Optional error.log next to editor.log (ERROR and CRITICAL only).
    - Optional keytrace.log attached to ``moded.keyevents``, enabled by the
      ``MODED_KEYTRACE`` environment variable.

Globals:
    logger: Main application logger ("moded").
    KEY_LOGGER: Logger for key-event trace records ("moded.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional

# ======================== Global loggers ========================
logger = logging.getLogger("moded")
KEY_LOGGER = logging.getLogger("moded.keyevents")

KEYTRACE_ENV = "MODED_KEYTRACE"
DEFAULT_LOG_DIR = Path.home() / ".cache" / "moded"

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"


def _level(name: Any, default: int) -> int:
    return getattr(logging, str(name).upper(), default)


def resolve_log_file(logging_config: dict[str, Any]) -> str:
    """Return the editor.log path, creating its directory.

    Falls back to the system temp directory when the directory cannot be
    created.
    """
    log_filename = logging_config.get("log_file") or str(DEFAULT_LOG_DIR / "editor.log")
    log_filename = os.path.expanduser(log_filename)

    log_dir = os.path.dirname(log_filename)
    if log_dir and not os.path.isdir(log_dir):
        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            log_filename = os.path.join(tempfile.gettempdir(), "moded.log")
            print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
    return log_filename


def _rotating_handler(
    filename: str, max_bytes: int, backup_count: int
) -> logging.handlers.RotatingFileHandler:
    return logging.handlers.RotatingFileHandler(
        filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Only the ``["logging"]`` section of *config* is consulted:

    - ``log_file`` (str): Path of editor.log. Empty means
      ``~/.cache/moded/editor.log``.
    - ``file_level`` (str): Level for editor.log. Default ``"DEBUG"``.
    - ``log_to_console`` (bool): Attach a stderr handler. Default ``False``.
    - ``console_level`` (str): Level for the console. Default ``"WARNING"``.
    - ``separate_error_log`` (bool): Create error.log. Default ``False``.

    Existing root handlers are replaced, so calling this twice does not
    duplicate records. The function never raises; I/O problems are reported
    on stderr and logging continues with whatever handlers could be built.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})
    log_file_level = _level(logging_config.get("file_level", "DEBUG"), logging.DEBUG)

    log_filename = resolve_log_file(logging_config)
    log_dir = os.path.dirname(log_filename)
    file_formatter = logging.Formatter(FILE_FORMAT)

    file_handler = None
    try:
        file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)
    except OSError as e_fh:
        print(
            f"Error setting up file logger for '{log_filename}': {e_fh}. File logging may be impaired.",
            file=sys.stderr,
        )

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", False):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(
            _level(logging_config.get("console_level", "WARNING"), logging.WARNING)
        )

    # Optional Separate Error Log File
    error_file_handler = None
    error_log_filename = os.path.join(log_dir, "error.log")
    if logging_config.get("separate_error_log", False):
        try:
            error_file_handler = _rotating_handler(error_log_filename, 1024 * 1024, 3)
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except OSError as e_efh:
            print(
                f"Error setting up separate error log '{error_log_filename}': {e_efh}.",
                file=sys.stderr,
            )

    root_logger = logging.getLogger()
    for old_handler in list(root_logger.handlers):
        root_logger.removeHandler(old_handler)
        old_handler.close()

    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)

    root_logger.setLevel(log_file_level)

    _setup_key_trace(log_dir)

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(
            f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}."
        )
    if console_handler:
        logging.info(
            f"Console logging to stderr at level: {logging.getLevelName(console_handler.level)}."
        )
    if error_file_handler:
        logging.info(f"Error logging to '{error_log_filename}' at level: ERROR.")


def _setup_key_trace(log_dir: str) -> None:
    """Attach keytrace.log to ``moded.keyevents`` when MODED_KEYTRACE is set."""
    key_event_logger = logging.getLogger("moded.keyevents")
    key_event_logger.propagate = False
    key_event_logger.setLevel(logging.DEBUG)
    key_event_logger.disabled = False
    for old_handler in list(key_event_logger.handlers):
        key_event_logger.removeHandler(old_handler)
        old_handler.close()

    if os.environ.get(KEYTRACE_ENV, "").lower() in {"1", "true", "yes"}:
        key_trace_filename = os.path.join(log_dir, "keytrace.log")
        try:
            key_trace_handler = _rotating_handler(key_trace_filename, 1024 * 1024, 3)
            key_trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            key_event_logger.addHandler(key_trace_handler)
            logging.info("Key event tracing enabled, logging to '%s'.", key_trace_filename)
        except OSError as e_keytrace:
            logging.error(f"Failed to set up key trace logging: {e_keytrace}", exc_info=True)
            key_event_logger.addHandler(logging.NullHandler())
            key_event_logger.disabled = True
    else:
        key_event_logger.addHandler(logging.NullHandler())
        key_event_logger.disabled = True
        logging.debug("Key event tracing is disabled.")
