# bootstrap_installer/bs_smoke.py
# -*- coding: utf-8 -*-
"""
Runs 'ansible all -m ping' against the scaffolded inventory.

The output is Ansible's own; it is streamed to the terminal, not parsed.
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_bootstrap, run_command
from common.step_models import Notice, StepOutcome, StepStatus
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

STEP_NAME = "Smoke test"


def next_steps_hint(app_settings: AppSettings) -> str:
    layout = app_settings.layout
    return (
        f"Now run: source {layout.venv_bin_dir / 'activate'} && "
        f"ansible-playbook -i {layout.inventory_file} {layout.playbook_file}"
    )


def run_smoke_test(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> StepOutcome:
    """
    Pings every inventory host with the provisioned Ansible.

    Raises:
        subprocess.CalledProcessError: At least one host was unreachable.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    layout = app_settings.layout

    if not app_settings.run_smoke_test:
        return StepOutcome(
            name=STEP_NAME,
            status=StepStatus.SKIPPED,
            message="Smoke test disabled.",
            notices=(Notice(lines=(next_steps_hint(app_settings),)),),
        )

    log_bootstrap(
        f"{symbols.get('rocket', '🚀')} Running a quick smoke test...",
        "info",
        logger_to_use,
        app_settings,
    )
    run_command(
        [layout.venv_bin_dir / "ansible", "-i", layout.inventory_file, "all", "-m", "ping"],
        app_settings,
        current_logger=logger_to_use,
    )
    return StepOutcome(
        name=STEP_NAME,
        status=StepStatus.UNCHANGED,
        notices=(Notice(lines=(next_steps_hint(app_settings),)),),
    )
