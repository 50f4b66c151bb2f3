import json
import logging
import os

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "csvgrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "csvgrid.log")

# default settings
UNDO_MAX_DEPTH_DEFAULT = 50
DEFAULT_FILE_NAME_DEFAULT = "data.csv"
DOWNLOAD_DIR_DEFAULT = os.path.join(HOME, "Downloads")
LOG_LEVEL_DEFAULT = "WARNING"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    try:
        os.makedirs(CONFIG_DIR, exist_ok=True)
    except OSError as exc:
        logger.warning("Could not create %s: %s", CONFIG_DIR, exc)


def load_config():
    cfg = {
        "UNDO_MAX_DEPTH": UNDO_MAX_DEPTH_DEFAULT,
        "DEFAULT_FILE_NAME": DEFAULT_FILE_NAME_DEFAULT,
        "DOWNLOAD_DIR": DOWNLOAD_DIR_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    history = data.get("history")
    depth = history.get("undo_max_depth") if isinstance(history, dict) else None
    if isinstance(depth, int) and not isinstance(depth, bool) and depth >= 1:
        cfg["UNDO_MAX_DEPTH"] = depth

    export = data.get("export")
    if isinstance(export, dict):
        name = export.get("default_file_name")
        if isinstance(name, str) and name.strip():
            cfg["DEFAULT_FILE_NAME"] = name.strip()
        download_dir = export.get("download_dir")
        if isinstance(download_dir, str) and download_dir.strip():
            cfg["DOWNLOAD_DIR"] = os.path.expanduser(download_dir.strip())

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
