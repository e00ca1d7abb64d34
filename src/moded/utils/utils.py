# moded/utils/utils.py
"""
moded.utils.utils
=================

Configuration helpers for the moded editor.

- Automatic user configuration: creates `~/.config/moded/config.toml` (copied
  from the template shipped at the project root) and a `.env` template on
  first run.
- Layered loading: the embedded `DEFAULT_CONFIG` is recursively merged with
  the user's `config.toml`, so a missing or corrupted user file never stops
  the editor from starting.
- Small helpers for dictionary merging and colour conversion.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("moded")

APP_NAME = "moded"

# --- Constants ---
CALM_BG_IDX = 236
WHITE_FG_IDX = 255

ENV_TEMPLATE = """# Environment for the moded editor.
# Set to 1 to record every key event in keytrace.log (next to editor.log).
MODED_KEYTRACE=0
"""

# Mirror of the project-root config.toml; the fallback when no user file exists.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "default_mode": "normal",
        "enter_splits_line": False,
        "show_line_numbers": False,
        "escdelay": 25,
    },
    "colors": {"status_fg": "#eeeeee", "status_bg": "#303030"},
    "logging": {
        "log_file": "",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
}


# --- Helper Functions ---

def get_user_config_dir() -> Path:
    return Path.home() / ".config" / APP_NAME


def get_project_root() -> Path:
    """Determines the project's root directory for finding template files."""
    return Path(__file__).resolve().parents[3]


def ensure_user_config_exists(config_dir: Optional[Path] = None) -> None:
    """Checks for user config files in `~/.config/moded` and creates them if missing."""
    try:
        config_dir = config_dir or get_user_config_dir()
        user_config_path = config_dir / "config.toml"
        user_env_path = config_dir / ".env"

        config_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            source_config_path = get_project_root() / "config.toml"
            if source_config_path.exists():
                user_config_path.write_text(
                    source_config_path.read_text(encoding="utf-8"), encoding="utf-8"
                )
                logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except OSError as e:
        logger.error(f"Could not create user configuration files: {e}")


def load_config(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges the user's config.toml over them.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    config_dir = config_dir or get_user_config_dir()
    ensure_user_config_exists(config_dir)

    user_config_path = config_dir / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Loaded and merged user config from {user_config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    Dictionaries taken from `override` are copied, not shared.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(value, dict):
            current = result.get(key)
            result[key] = deep_merge(current if isinstance(current, dict) else {}, value)
        else:
            result[key] = value
    return result


def hex_to_xterm(hex_color: str, default: int = WHITE_FG_IDX) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return default
    try:
        r, g, b = (int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return default

    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )
