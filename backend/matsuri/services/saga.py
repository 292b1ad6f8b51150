"""Saga Runner — ordered, independently committing steps with stated compensations.

Invariants:
    - Steps run strictly in order; each step sees the results of earlier steps
      in the shared context under the earlier step's name
    - The first failing step aborts every remaining step
    - Compensations are STATED, never executed: nothing is rolled back
    - Failure in the first step re-raises the original error unchanged
    - Failure after a committed step raises PartialWriteInconsistency whose
      message is the failing step's message, unmodified

Design Decisions:
    - Compensation is a description template formatted with the step's result,
      so the orphaned resource (row id, stored path) is named in logs and errors
    - Only MatsuriError is intercepted; programming errors propagate as-is
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from matsuri.core.errors import (
    ErrorContext, MatsuriError, PartialWriteInconsistency,
)

logger = logging.getLogger(__name__)


StepAction = Callable[[dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class SagaStep:
    """One independently committing sub-operation."""
    name: str
    action: StepAction
    compensation: str | None = None

    def describe_orphan(self, result: Any) -> str | None:
        if self.compensation is None:
            return None
        return self.compensation.format(result=result)


class Saga:
    """A named, ordered list of SagaSteps."""

    def __init__(self, name: str, steps: list[SagaStep]):
        if not steps:
            raise ValueError("a saga needs at least one step")
        self.name = name
        self.steps = steps

    async def run(self, context: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run every step; returns the context holding each step's result."""
        ctx: dict[str, Any] = dict(context or {})
        committed: list[SagaStep] = []
        for step in self.steps:
            logger.debug(
                "Saga step starting", extra={"saga": self.name, "step": step.name},
            )
            try:
                ctx[step.name] = await step.action(ctx)
            except MatsuriError as exc:
                self._abort(step, committed, ctx, exc)
            committed.append(step)
        logger.info(
            f"Saga completed ({len(committed)} steps)", extra={"saga": self.name},
        )
        return ctx

    def _abort(
        self,
        failed: SagaStep,
        committed: list[SagaStep],
        ctx: dict[str, Any],
        exc: MatsuriError,
    ) -> None:
        if not committed:
            logger.warning(
                f"Saga aborted at first step: {exc.message}",
                extra={"saga": self.name, "step": failed.name, "error_code": exc.code},
            )
            raise exc

        orphaned = [
            description for step in committed
            if (description := step.describe_orphan(ctx.get(step.name))) is not None
        ]
        logger.error(
            f"Saga aborted after partial write: {exc.message}; "
            f"left in place: {orphaned}",
            extra={"saga": self.name, "step": failed.name, "error_code": exc.code},
        )
        raise PartialWriteInconsistency(
            exc.message,
            failed_step=failed.name,
            committed_steps=[s.name for s in committed],
            orphaned=orphaned,
            context=ErrorContext(
                festival_id=_festival_id_from(ctx),
                debug_info={"cause_code": exc.code},
            ),
        ) from exc


def _festival_id_from(ctx: dict[str, Any]) -> str | None:
    value = ctx.get("festival_id")
    return str(value) if value is not None else None
