from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .context import InstallContext

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single installer step."""

    step_id: str

    def run(self, ctx: InstallContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ctx: InstallContext
    ran_steps: List[str]


def run_pipeline(*, ctx: InstallContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order. The first exception aborts the run."""

    ran: List[str] = []
    for step in steps:
        logger.debug("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)

    return PipelineResult(ctx=ctx, ran_steps=ran)
