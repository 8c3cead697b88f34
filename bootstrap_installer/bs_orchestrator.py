# bootstrap_installer/bs_orchestrator.py
# -*- coding: utf-8 -*-
"""
Wires the bootstrap steps into their fixed order and runs them.
"""

import logging
from typing import Callable, List, Optional, Tuple

from bootstrap_installer.bs_clone import clone_repository
from bootstrap_installer.bs_platform import detect_platform
from bootstrap_installer.bs_prereqs import install_prerequisites
from bootstrap_installer.bs_scaffold import scaffold_project
from bootstrap_installer.bs_smoke import run_smoke_test
from bootstrap_installer.bs_ssh import ensure_ssh_key
from bootstrap_installer.bs_venv import provision_ansible_environment
from common.orchestrator import Orchestrator
from common.step_models import StepOutcome, StepStatus
from installer.config_models import AppSettings

# Platform detection must stay first: it is the only step allowed to run
# before anything on the machine is changed.
BOOTSTRAP_TASKS: List[Tuple[str, Callable[..., StepOutcome]]] = [
    ("Detect platform", detect_platform),
    ("Install prerequisites", install_prerequisites),
    ("Ensure SSH key", ensure_ssh_key),
    ("Clone companion repository", clone_repository),
    ("Scaffold project", scaffold_project),
    ("Provision Ansible environment", provision_ansible_environment),
    ("Smoke test", run_smoke_test),
]


def build_bootstrap_orchestrator(
    app_settings: AppSettings, logger: Optional[logging.Logger] = None
) -> Orchestrator:
    """Returns an Orchestrator loaded with the bootstrap sequence."""
    effective_logger = logger or logging.getLogger("ansible-bootstrap")
    orchestrator = Orchestrator(app_settings, effective_logger)
    for name, func in BOOTSTRAP_TASKS:
        orchestrator.add_task(
            name, func, kwargs={"current_logger": effective_logger}
        )
    return orchestrator


def run_bootstrap(
    app_settings: AppSettings, logger: Optional[logging.Logger] = None
) -> List[StepOutcome]:
    """
    Runs the whole bootstrap sequence.

    A failing step terminates the process with exit code 1 (see
    Orchestrator.run); on success the collected outcomes are returned.
    """
    effective_logger = logger or logging.getLogger("ansible-bootstrap")
    orchestrator = build_bootstrap_orchestrator(app_settings, effective_logger)
    orchestrator.run()

    outcomes = orchestrator.outcomes
    changed = [o.name for o in outcomes if o.status == StepStatus.CHANGED]
    warnings = [o.name for o in outcomes if o.status == StepStatus.WARNING]
    if warnings:
        effective_logger.warning(
            f"⚠️ Finished with warnings in: {', '.join(warnings)}"
        )
    effective_logger.debug(
        f"Steps that changed the machine: {', '.join(changed) or 'none'}"
    )
    effective_logger.info("Done ✅")
    return outcomes
