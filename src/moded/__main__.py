# src/moded/__main__.py
"""
moded entry point
=================

Startup sequence:
1) Environment: reads ~/.config/moded/.env (MODED_KEYTRACE and friends).
2) Configuration & logging: loads config and initializes logging before
   anything else can log.
3) Arguments: ``moded PATH [--mode {normal,insert}]``.
4) Curses wrapper: sets the terminal up, runs the editor, restores the
   terminal even when the editor fails.

Only this bootstrap may end the process with a non-zero exit code.
"""

from __future__ import annotations

import argparse
import curses
import locale
import logging
import signal
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from moded import __version__
from moded.core.EditorState import Mode
from moded.utils.logging_config import setup_logging
from moded.utils.utils import get_user_config_dir, load_config

logger = logging.getLogger("moded")

EXIT_OK = 0
EXIT_BOOTSTRAP_FAILURE = 1
EXIT_USAGE = 2


def build_parser(default_mode: str = "normal") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moded", description="A small modal text editor for the terminal."
    )
    parser.add_argument("filename", help="File to edit. It need not exist yet.")
    parser.add_argument(
        "--mode",
        choices=[Mode.NORMAL.value, Mode.INSERT.value],
        default=default_mode,
        help="Mode the editor starts in (default: %(default)s).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Optional[list[str]], config: dict[str, Any]) -> argparse.Namespace:
    default_mode = str(config.get("editor", {}).get("default_mode", "normal")).lower()
    if default_mode not in (Mode.NORMAL.value, Mode.INSERT.value):
        logger.warning(f"Ignoring unsupported editor.default_mode {default_mode!r}")
        default_mode = Mode.NORMAL.value
    return build_parser(default_mode).parse_args(argv)


def load_environment(config_dir: Optional[Path] = None) -> None:
    """Load ~/.config/moded/.env before logging is configured."""
    dotenv_path = (config_dir or get_user_config_dir()) / ".env"
    load_dotenv(dotenv_path=dotenv_path)


def main_app_runner(
    stdscr: curses.window, config: dict[str, Any], filename: str, mode: Mode
) -> None:
    """
    Target for `curses.wrapper`: acquire the terminal, open *filename* and run
    the editor loop. The terminal mode is released even if the editor raises.
    """
    # Imported once logging is configured
    from moded.core.Editor import Editor
    from moded.ui.TerminalAppMode import TerminalAppMode

    terminal = TerminalAppMode(escdelay=int(config.get("editor", {}).get("escdelay", 25)))
    terminal.enter(stdscr)
    try:
        editor = Editor(stdscr, config=config, initial_mode=mode, terminal=terminal)

        # Ctrl+Z would suspend a raw-mode terminal in an unusable state
        if hasattr(signal, "SIGTSTP"):
            signal.signal(signal.SIGTSTP, signal.SIG_IGN)

        editor.open_file(filename)
        editor.run()
    finally:
        terminal.exit()


def start(argv: Optional[list[str]] = None) -> int:
    """Bootstrap configuration and logging, parse arguments, run the editor.

    Returns:
        int: Process exit code.
    """
    try:
        load_environment()
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        # Logging is not ready; report on stderr.
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        return EXIT_BOOTSTRAP_FAILURE

    try:
        args = parse_args(argv, config)
    except SystemExit as e:
        # argparse exits for --help/--version (0) and usage errors (2)
        return int(e.code) if isinstance(e.code, int) else EXIT_USAGE

    mode = Mode.from_name(args.mode)
    filename = str(Path(args.filename).expanduser())
    logger.info(f"moded {__version__} starting up: file={filename!r}, mode={mode.name}")

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    try:
        # DECCKM + DECKPAM: application cursor keys and keypad before curses starts
        sys.stdout.write("\x1b[?1h\x1b=")
        sys.stdout.flush()

        curses.wrapper(main_app_runner, config, filename, mode)

        logger.info("moded shut down gracefully.")
        return EXIT_OK
    except Exception as e:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        print(f"moded: fatal error: {e}", file=sys.stderr)
        return EXIT_BOOTSTRAP_FAILURE
    finally:
        try:
            sys.stdout.write("\x1b[?1l\x1b>")
            sys.stdout.flush()
        except OSError:
            pass


def main() -> None:
    sys.exit(start())


if __name__ == "__main__":
    main()
