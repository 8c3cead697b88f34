# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing external commands and logging their output.

Every package manager, git, ssh-keygen, python and ansible invocation goes
through run_command so failures are logged the same way before they
propagate to the orchestrator.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from installer.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)

CommandArg = Union[str, Path]


def log_bootstrap(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs a message at the named level.

    Args:
        message (str): The log message to be recorded.
        level (str): One of "debug", "info", "success", "warning", "error" or
            "critical". Unknown levels (including "success") log as info.
        current_logger (Optional[logging.Logger]): Logger to use. Defaults to
            the module logger.
        app_settings (Optional[AppSettings]): Accepted for call-site symmetry
            with the other helpers.
        exc_info (bool): Whether to attach exception information.
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    else:
        effective_logger.info(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Returns the symbol map from the settings, or the defaults."""
    if app_settings and app_settings.symbols:
        return app_settings.symbols
    return SYMBOLS_DEFAULT


def command_exists(command_name: str) -> bool:
    """
    Check if a command exists in the system's PATH.

    Parameters:
        command_name (str): The name of the command to check for existence.

    Returns:
        bool: True if the command is found in the system's PATH, False otherwise.
    """
    return shutil.which(command_name) is not None


def is_root() -> bool:
    return os.geteuid() == 0


def get_elevated_command_prefix() -> List[str]:
    """
    Determines the prefix that runs a command with elevated privileges.

    Returns an empty list when the process is already root. Otherwise
    returns ["sudo"] when sudo is installed, and an empty list when no
    escalation mechanism exists (the command then runs unprivileged and
    fails on its own terms if it needed root).
    """
    if is_root():
        return []
    if command_exists("sudo"):
        return ["sudo"]
    return []


def _stringify(command: Sequence[CommandArg]) -> List[str]:
    return [str(part) for part in command]


def run_command(
    command: Sequence[CommandArg],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    text: bool = True,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[CommandArg] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes an external command and logs the invocation and its result.

    Output is streamed to the terminal unless capture_output is set, in
    which case stdout and stderr are logged after the command exits.

    Args:
        command: The command and its arguments. Path objects are accepted.
        app_settings: Settings providing the logging symbols.
        check: Raise CalledProcessError on a non-zero exit code.
        capture_output: Capture stdout/stderr instead of streaming them.
        text: Decode the output streams as text.
        cmd_input: Data sent to the command's standard input.
        current_logger: Logger to use. Defaults to the module logger.
        cwd: Working directory for the command.
        env: Environment for the command. Defaults to the inherited one.

    Returns:
        subprocess.CompletedProcess: The completed process.

    Raises:
        subprocess.CalledProcessError: The command failed and check is True.
        FileNotFoundError: The executable does not exist.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    command_to_run = _stringify(command)
    command_to_log_str = subprocess.list2cmdline(command_to_run)

    log_bootstrap(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log_str} {f'(in {cwd})' if cwd else ''}".rstrip(),
        "info",
        effective_logger,
        app_settings,
    )
    try:
        result = subprocess.run(
            command_to_run,
            check=check,
            capture_output=capture_output,
            text=text,
            input=cmd_input,
            cwd=str(cwd) if cwd else None,
            env=env,
        )
        if capture_output:
            if result.stdout and result.stdout.strip():
                log_bootstrap(
                    f"   stdout: {result.stdout.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
            if result.stderr and result.stderr.strip():
                log_bootstrap(
                    f"   stderr: {result.stderr.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
        return result
    except subprocess.CalledProcessError as e:
        stdout_info = (
            e.stdout.strip()
            if e.stdout and hasattr(e.stdout, "strip")
            else "N/A"
        )
        stderr_info = (
            e.stderr.strip()
            if e.stderr and hasattr(e.stderr, "strip")
            else "N/A"
        )
        log_bootstrap(
            f"{symbols.get('error', '❌')} Command `{command_to_log_str}` failed (rc {e.returncode}).",
            "error",
            effective_logger,
            app_settings,
        )
        if stdout_info != "N/A":
            log_bootstrap(
                f"   stdout: {stdout_info}",
                "error",
                effective_logger,
                app_settings,
            )
        if stderr_info != "N/A":
            log_bootstrap(
                f"   stderr: {stderr_info}",
                "error",
                effective_logger,
                app_settings,
            )
        raise
    except FileNotFoundError as e:
        log_bootstrap(
            f"{symbols.get('error', '❌')} Command not found: {e.filename or command_to_run[0]}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise


def run_elevated_command(
    command: Sequence[CommandArg],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[CommandArg] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command with elevated privileges when they are available.

    The prefix comes from get_elevated_command_prefix(); all other
    arguments are passed through to run_command.
    """
    prefix = get_elevated_command_prefix()
    elevated_command_list = prefix + _stringify(command)
    return run_command(
        elevated_command_list,
        app_settings,
        check=check,
        capture_output=capture_output,
        text=True,
        cmd_input=cmd_input,
        current_logger=current_logger,
        cwd=cwd,
        env=env,
    )


def validate_elevation(
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Asks sudo for credentials once so later elevated commands do not prompt.

    Returns:
        bool: True if sudo credentials were validated, False when no
        escalation was needed or no mechanism is available.

    Raises:
        subprocess.CalledProcessError: The user failed to authenticate.
    """
    logger_to_use = current_logger if current_logger else module_logger
    if is_root():
        log_bootstrap(
            "Running as root; no privilege escalation needed.",
            "debug",
            logger_to_use,
            app_settings,
        )
        return False
    if not command_exists("sudo"):
        log_bootstrap(
            "'sudo' not found; continuing without privilege escalation.",
            "debug",
            logger_to_use,
            app_settings,
        )
        return False

    symbols = get_symbols(app_settings)
    log_bootstrap(
        f"{symbols.get('info', 'ℹ️')} Requesting sudo credentials (may prompt for your password)...",
        "info",
        logger_to_use,
        app_settings,
    )
    run_command(["sudo", "-v"], app_settings, current_logger=logger_to_use)
    return True
