# bootstrap_installer/bs_ssh.py
# -*- coding: utf-8 -*-
"""
Ensures the operator has an ed25519 SSH identity.

An existing private key is never replaced: it may already be registered
with a git host, and regenerating it would silently break that.
"""

import logging
from typing import Optional

from bootstrap_installer.bs_models import SshKeyNotice
from common.command_utils import get_symbols, log_bootstrap, run_command
from common.file_utils import ensure_directory
from common.step_models import Notice, StepOutcome, StepStatus
from installer.config import SSH_KEY_REGISTRATION_HINT, SSH_KEY_TYPE
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

STEP_NAME = "Ensure SSH key"
SSH_DIR_MODE = 0o700


def _restore_public_key(
    app_settings: AppSettings, logger_to_use: logging.Logger
) -> None:
    """Re-derives a missing .pub file from the existing private key."""
    result = run_command(
        ["ssh-keygen", "-y", "-f", app_settings.ssh_key_path],
        app_settings,
        capture_output=True,
        current_logger=logger_to_use,
    )
    app_settings.ssh_public_key_path.write_text(
        result.stdout.strip() + "\n", encoding="utf-8"
    )


def ensure_ssh_key(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> StepOutcome:
    """
    Generates ~/.ssh/id_ed25519 (no passphrase) unless it already exists.

    Returns:
        A changed outcome carrying an SshKeyNotice with the new public key,
        or an unchanged outcome when the key was already present.

    Raises:
        subprocess.CalledProcessError: ssh-keygen failed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    key_path = app_settings.ssh_key_path
    public_key_path = app_settings.ssh_public_key_path

    if key_path.exists():
        if not public_key_path.exists():
            log_bootstrap(
                f"{symbols.get('warning', '⚠️')} {public_key_path} is missing; re-deriving it from the private key.",
                "warning",
                logger_to_use,
                app_settings,
            )
            _restore_public_key(app_settings, logger_to_use)
            return StepOutcome(
                name=STEP_NAME,
                status=StepStatus.CHANGED,
                message=f"Restored public key {public_key_path}.",
            )
        return StepOutcome(
            name=STEP_NAME,
            status=StepStatus.UNCHANGED,
            message="SSH key already exists.",
        )

    log_bootstrap(
        f"{symbols.get('key', '🔑')} Generating SSH key ({SSH_KEY_TYPE})...",
        "info",
        logger_to_use,
        app_settings,
    )
    ensure_directory(
        app_settings.ssh_dir,
        app_settings,
        mode=SSH_DIR_MODE,
        current_logger=logger_to_use,
    )
    command = ["ssh-keygen", "-t", SSH_KEY_TYPE, "-q", "-N", "", "-f", key_path]
    if app_settings.ssh_key_comment:
        command += ["-C", app_settings.ssh_key_comment]
    run_command(command, app_settings, current_logger=logger_to_use)

    public_key = public_key_path.read_text(encoding="utf-8").strip()
    notice = SshKeyNotice(
        level="info",
        lines=("Public key:", public_key),
        public_key=public_key,
        key_path=key_path,
        registration_hint=SSH_KEY_REGISTRATION_HINT,
    )
    hint = Notice(level="warning", lines=(SSH_KEY_REGISTRATION_HINT,))
    context["ssh_public_key"] = public_key
    return StepOutcome(
        name=STEP_NAME,
        status=StepStatus.CHANGED,
        message=f"{symbols.get('success', '✅')} Generated {key_path}.",
        notices=(notice, hint),
    )
