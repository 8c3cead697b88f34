# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system helpers with existence guards.

Nothing in this module overwrites an existing file: each helper reports
whether it changed anything so callers can build their step outcome.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from installer.config_models import AppSettings

from .command_utils import get_symbols, log_bootstrap

module_logger = logging.getLogger(__name__)


def ensure_directory(
    directory_path: Path,
    app_settings: Optional[AppSettings],
    mode: Optional[int] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Creates a directory (and its parents) if it does not exist yet.

    Parameters:
        directory_path (Path): Directory to create.
        app_settings (Optional[AppSettings]): Settings providing log symbols.
        mode (Optional[int]): When given, the directory is chmod-ed to this
            mode whether or not it already existed.
        current_logger (Optional[logging.Logger]): Logger to use.

    Returns:
        bool: True if the directory was created by this call.
    """
    logger_to_use = current_logger if current_logger else module_logger
    directory_path = Path(directory_path)
    created = not directory_path.is_dir()

    if mode is None:
        directory_path.mkdir(parents=True, exist_ok=True)
    else:
        directory_path.mkdir(mode=mode, parents=True, exist_ok=True)
        os.chmod(directory_path, mode)

    if created:
        log_bootstrap(
            f"{get_symbols(app_settings).get('success', '✅')} Created directory {directory_path}",
            "debug",
            logger_to_use,
            app_settings,
        )
    return created


def write_file_if_absent(
    file_path: Path,
    content: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Writes content to a file only when the file does not exist.

    The file is opened with exclusive-create mode, so a file that appears
    between the check and the write is still left untouched.

    Returns:
        bool: True if the file was written, False if it already existed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    file_path = Path(file_path)

    if file_path.exists():
        log_bootstrap(
            f"{symbols.get('info', 'ℹ️')} {file_path} already exists. Leaving it untouched.",
            "info",
            logger_to_use,
            app_settings,
        )
        return False

    file_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(file_path, "x", encoding="utf-8") as f:
            f.write(content)
    except FileExistsError:
        return False

    log_bootstrap(
        f"{symbols.get('success', '✅')} Wrote {file_path}",
        "info",
        logger_to_use,
        app_settings,
    )
    return True


def append_line_if_absent(
    file_path: Path,
    line: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Appends a line to a text file unless an identical line is already there.

    The file is created if missing. A trailing newline is added before the
    new line when the existing content does not end with one.

    Returns:
        bool: True if the line was appended.
    """
    logger_to_use = current_logger if current_logger else module_logger
    file_path = Path(file_path)
    line = line.rstrip("\n")

    existing = ""
    if file_path.exists():
        existing = file_path.read_text(encoding="utf-8")
        if line in existing.splitlines():
            log_bootstrap(
                f"'{line}' already present in {file_path}.",
                "debug",
                logger_to_use,
                app_settings,
            )
            return False

    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "a", encoding="utf-8") as f:
        if existing and not existing.endswith("\n"):
            f.write("\n")
        f.write(line + "\n")

    log_bootstrap(
        f"{get_symbols(app_settings).get('success', '✅')} Appended to {file_path}: {line}",
        "info",
        logger_to_use,
        app_settings,
    )
    return True
