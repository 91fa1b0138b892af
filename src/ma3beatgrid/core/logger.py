#!/usr/bin/env python3
"""
File logger for beat grid conversions.

Every conversion, export and config lookup appends one line to
beatgrid_system.log in /tmp (or $BEATGRID_LOG_DIR). Errors are always
recorded; debug and info lines only once --debug or the
enable_system_logging config key switches them on.
"""

import os
import sys
import time
from typing import Dict, Optional


LOG_DIR = os.environ.get("BEATGRID_LOG_DIR", "/tmp")
SYSTEM_LOG_PATH = os.path.join(LOG_DIR, "beatgrid_system.log")

# Switched on by cli.main()
_ENABLE_SYSTEM_LOGGING = False


def _ensure_log_dir() -> None:
    try:
        os.makedirs(LOG_DIR, exist_ok=True)
    except OSError:
        # Unwritable $BEATGRID_LOG_DIR; _write reports errors on stderr
        pass


def _should_log(level: str) -> bool:
    """Conversion errors are kept even when --debug is off"""
    return level == "ERROR" or _ENABLE_SYSTEM_LOGGING


def _write(level: str, message: str, component: Optional[str] = None) -> None:
    if not _should_log(level):
        return

    _ensure_log_dir()
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
    if component is None:
        component = os.path.basename(sys.argv[0]) or "beatgrid"
    line = f"[{timestamp}] [{level}] [{component}] (pid={os.getpid()}) {message}\n"
    try:
        with open(SYSTEM_LOG_PATH, "a", encoding="utf-8") as f:
            f.write(line)
    except OSError:
        # Never lose a failed conversion message
        if level == "ERROR":
            print(line, end="", file=sys.stderr)


def log_debug(message: str, component: Optional[str] = None) -> None:
    _write("DEBUG", message, component)


def log_info(message: str, component: Optional[str] = None) -> None:
    _write("INFO", message, component)


def log_warning(message: str, component: Optional[str] = None) -> None:
    _write("WARN", message, component)


def log_error(message: str, component: Optional[str] = None) -> None:
    _write("ERROR", message, component)


def enable_system_logging(enabled: bool = True) -> None:
    """Record debug/info/warning lines from the converter, not just errors"""
    global _ENABLE_SYSTEM_LOGGING
    _ENABLE_SYSTEM_LOGGING = enabled


def log_file_paths() -> Dict[str, str]:
    """Where the converter log lives, printed by ``beatgrid --debug``"""
    return {"system": SYSTEM_LOG_PATH}
