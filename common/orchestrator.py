# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Centralized orchestrator for running a fixed sequence of tasks.

Tasks run in the order they were added. The first task that raises stops
the whole run: nothing after it executes and the process exits with
status 1. No progress is recorded between runs; every task is expected to
be safe to repeat.
"""

import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from common.step_models import Notice, StepOutcome, StepStatus


class Orchestrator:
    """Runs bootstrap steps in order and stops at the first failure."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            app_settings: Frozen settings handed to every step.
            orchestrator_logger: Logger used for progress and for presenting
                step outcomes.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Dict[str, Any]] = []
        # Facts discovered by earlier steps (platform tag, layout, ...)
        self.context: Dict[str, Any] = {}
        self.outcomes: List[StepOutcome] = []

    def add_task(
        self,
        name: str,
        func: Callable,
        args: Optional[List[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
    ):
        """
        Queues a step. `context` and `app_settings` are injected as keyword
        arguments when it runs, on top of the given args/kwargs.
        """
        self.tasks.append({
            "name": name,
            "func": func,
            "args": args or [],
            "kwargs": kwargs or {},
        })
        self.logger.debug(f"Queued step '{name}'.")

    def present_notice(self, notice: Notice) -> None:
        log = self.logger.warning if notice.level == "warning" else self.logger.info
        for line in notice.lines:
            log(line)

    def present_outcome(self, outcome: StepOutcome) -> None:
        if outcome.message:
            if outcome.status == StepStatus.WARNING:
                self.logger.warning(f"⚠️ {outcome.message}")
            else:
                self.logger.info(outcome.message)
        for notice in outcome.notices:
            self.present_notice(notice)

    def run(self) -> bool:
        """
        Runs the queued steps in order, presenting each StepOutcome.

        Returns:
            True once every task has completed. A failing task terminates
            the process with exit code 1 instead of returning.
        """
        total = len(self.tasks)
        for i, task in enumerate(self.tasks, start=1):
            task_name = task["name"]
            self.logger.info(f"--- [{i}/{total}] {task_name} ---")

            try:
                task["kwargs"]["context"] = self.context
                task["kwargs"]["app_settings"] = self.app_settings

                result = task["func"](*task["args"], **task["kwargs"])
            except Exception as e:
                self.logger.critical(
                    f"🔥 Task '{task_name}' failed: {e}",
                    exc_info=self.logger.isEnabledFor(logging.DEBUG),
                )
                self.logger.error(
                    "A fatal error occurred. Fix the problem above and re-run; re-running is safe."
                )
                sys.exit(1)

            self.context[f"{task_name}_result"] = result
            if isinstance(result, StepOutcome):
                self.outcomes.append(result)
                self.present_outcome(result)

            self.logger.debug(f"Step '{task_name}' finished.")

        return True
