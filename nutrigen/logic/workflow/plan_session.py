"""Input -> generating -> result flow for the single plan shown by the app.

Every request started with ``begin`` gets a generation number. A result or
failure is applied only if it carries the current number; anything older was
superseded (by a newer request or by a reset) and is dropped. The object is
shared between request handlers and background tasks, so all state changes
go through one lock.
"""
from __future__ import annotations
import logging
from threading import Lock
from typing import Any, Callable, Dict, Optional

from nutrigen.domain.DietPlan import DietPlan
from nutrigen.domain.UserProfile import DEFAULT_PROFILE, UserProfile
from nutrigen.utilities.constants import PLAN_FAILED_MESSAGE

logger = logging.getLogger(__name__)

STEP_INPUT = "input"
STEP_GENERATING = "generating"
STEP_RESULT = "result"


class PlanWorkflow:
    def __init__(self, profile: UserProfile = DEFAULT_PROFILE):
        self._lock = Lock()
        self._generation = 0
        self.step = STEP_INPUT
        self.profile = profile
        self.plan: Optional[DietPlan] = None
        self.error: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, profile: UserProfile) -> int:
        with self._lock:
            self._generation += 1
            self.step = STEP_GENERATING
            self.profile = profile
            self.plan = None
            self.error = None
            logger.info("Plan generation %d started", self._generation)
            return self._generation

    def complete(self, generation: int, plan: DietPlan) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.info("Dropping plan from superseded generation %d (current %d)",
                            generation, self._generation)
                return False
            self.plan = plan
            self.step = STEP_RESULT
            logger.info("Plan generation %d finished", generation)
            return True

    def fail(self, generation: int, message: str = PLAN_FAILED_MESSAGE) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.info("Dropping failure from superseded generation %d (current %d)",
                            generation, self._generation)
                return False
            self.step = STEP_INPUT
            self.error = message
            return True

    def reset(self) -> None:
        """Back to the form; any request still in flight is superseded."""
        with self._lock:
            self._generation += 1
            self.step = STEP_INPUT
            self.error = None

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "step": self.step,
                "generation": self._generation,
                "error": self.error,
                "title": self.plan.title if self.plan is not None else None,
            }


def run_generation(workflow: PlanWorkflow, generation: int, profile: UserProfile,
                   generate: Callable[[UserProfile], DietPlan]) -> None:
    """Run one generation to completion and record its outcome.

    This is the top of the plan workflow: every error ends up here, is logged
    and becomes the user-facing alert.
    """
    try:
        plan = generate(profile)
    except Exception:
        logger.exception("Plan generation %d failed", generation)
        workflow.fail(generation)
        return
    workflow.complete(generation, plan)


__all__ = ["PlanWorkflow", "run_generation", "STEP_INPUT", "STEP_GENERATING", "STEP_RESULT"]
