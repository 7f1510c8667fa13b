from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .errors import CollaboratorFailure
from .lib.prompt import Prompter, confirm
from .logging_utils import log_success
from .run_config import RunConfig

logger = logging.getLogger(__name__)

SUCCEEDED = "succeeded"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass
class StageResult:
    stage_id: str
    status: str = SUCCEEDED
    message: str = ""
    installed: List[str] = field(default_factory=list)
    already_installed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RunContext:
    """Everything a stage may read. ``prompter`` is None for unattended runs."""

    config: RunConfig
    prompter: Optional[Prompter] = None
    dry_run: bool = False

    @property
    def interactive(self) -> bool:
        return self.prompter is not None


class Stage(Protocol):
    """One orchestrated phase of the run."""

    stage_id: str
    gate: str
    title: str
    # A fatal stage's CollaboratorFailure stops the whole run.
    fatal: bool

    def run(self, ctx: RunContext) -> StageResult:
        ...


@dataclass(frozen=True)
class PipelineResult:
    results: List[StageResult]
    fatal_error: Optional[BaseException] = None

    def _ids(self, status: str) -> List[str]:
        return [r.stage_id for r in self.results if r.status == status]

    @property
    def ran_stages(self) -> List[str]:
        return self._ids(SUCCEEDED)

    @property
    def skipped_stages(self) -> List[str]:
        return self._ids(SKIPPED)

    @property
    def failed_stages(self) -> List[str]:
        return self._ids(FAILED)

    @property
    def exit_code(self) -> int:
        return 1 if self.fatal_error is not None else 0


def stage_enabled(stage: Stage, ctx: RunContext) -> bool:
    decided = ctx.config.stage_enabled(stage.gate)
    if decided is not None:
        return decided
    if ctx.prompter is None:
        return True
    return confirm(ctx.prompter, f"{stage.title}?", default=True)


def run_pipeline(*, ctx: RunContext, stages: Sequence[Stage]) -> PipelineResult:
    """Run stages strictly in order.

    Non-fatal stages log their failure and the run continues. A
    CollaboratorFailure in a fatal stage ends the run; any other exception
    propagates to the caller.
    """

    results: List[StageResult] = []

    for stage in stages:
        if not stage_enabled(stage, ctx):
            logger.info("Skipping stage %s", stage.stage_id)
            results.append(StageResult(stage_id=stage.stage_id, status=SKIPPED, message="declined"))
            continue

        logger.info("Running stage %s: %s", stage.stage_id, stage.title)
        try:
            result = stage.run(ctx)
        except CollaboratorFailure as e:
            results.append(StageResult(stage_id=stage.stage_id, status=FAILED, message=str(e)))
            if stage.fatal:
                logger.error("Stage %s failed: %s", stage.stage_id, e)
                return PipelineResult(results=results, fatal_error=e)
            logger.warning("Stage %s failed: %s (continuing)", stage.stage_id, e)
            continue
        except Exception as e:
            if stage.fatal:
                raise
            logger.warning("Stage %s failed: %s (continuing)", stage.stage_id, e)
            results.append(StageResult(stage_id=stage.stage_id, status=FAILED, message=str(e)))
            continue

        results.append(result)
        if result.status == SUCCEEDED:
            log_success(logger, "Stage %s completed", stage.stage_id)
        elif result.status == SKIPPED:
            logger.info("Stage %s skipped: %s", stage.stage_id, result.message)
        else:
            logger.warning("Stage %s finished with errors: %s", stage.stage_id, result.message)

    return PipelineResult(results=results)
