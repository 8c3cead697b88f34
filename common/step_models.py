# common/step_models.py
# -*- coding: utf-8 -*-
"""
Result types exchanged between steps and the orchestrator.

Steps return a StepOutcome instead of printing: the orchestrator decides
how to present the outcome and any notices it carries.
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class StepStatus(str, Enum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    # Best-effort work that did not complete; the run continues.
    WARNING = "warning"


class Notice(BaseModel):
    """A message a step wants shown to the operator."""

    model_config = ConfigDict(frozen=True)

    level: str = "info"
    lines: Tuple[str, ...] = ()


class StepOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    status: StepStatus
    message: str = ""
    notices: Tuple[Notice, ...] = ()

    @property
    def changed(self) -> bool:
        return self.status == StepStatus.CHANGED
