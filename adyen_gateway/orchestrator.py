"""
Multi-step transaction orchestration.

A run is an ordered list of steps. Each step receives the Outcome of the step
before it (None for the first) and returns a new Outcome. The run stops at the
first failed Outcome and hands that Outcome back untouched, so a dependent
step (e.g. a capture) is never issued against a failed predecessor.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Sequence

import structlog

from .models import Outcome

logger = structlog.get_logger(__name__)

Step = Callable[[Optional[Outcome]], Outcome]


class RunState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OrchestrationRun:
    """Fail-fast execution of a fixed sequence of steps. Single use."""

    def __init__(self, steps: Sequence[Step]):
        if not steps:
            raise ValueError("An orchestration run needs at least one step")
        self.steps: List[Step] = list(steps)
        self.state = RunState.PENDING
        self.current_step: Optional[int] = None
        self.outcomes: List[Outcome] = []

    @property
    def failed_step(self) -> Optional[int]:
        return self.current_step if self.state is RunState.FAILED else None

    def run(self) -> Outcome:
        if self.state is not RunState.PENDING:
            raise RuntimeError(f"Run already {self.state.value}")

        self.state = RunState.RUNNING
        outcome: Optional[Outcome] = None

        for index, step in enumerate(self.steps):
            self.current_step = index
            try:
                outcome = step(outcome)
            except Exception:
                self.state = RunState.FAILED
                raise
            self.outcomes.append(outcome)

            if not outcome.success:
                self.state = RunState.FAILED
                logger.info(
                    "Orchestration stopped",
                    step=index,
                    total_steps=len(self.steps),
                    message=outcome.message,
                )
                return outcome

        self.state = RunState.SUCCEEDED
        return outcome


def run_sequence(steps: Sequence[Step]) -> Outcome:
    """Run steps in order and return the final or first failing Outcome."""
    return OrchestrationRun(steps).run()
