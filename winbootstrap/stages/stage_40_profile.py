from __future__ import annotations

import logging
from pathlib import Path

from ..lib.profile import install_profile, powershell_profile_path
from ..pipeline import SKIPPED, RunContext, StageResult

logger = logging.getLogger(__name__)


class ProfileStage:
    stage_id = "40_profile"
    gate = "profile"
    title = "Install PowerShell profile"
    fatal = False

    def run(self, ctx: RunContext) -> StageResult:
        source = ctx.config.profile_source_path
        if not Path(source).is_file():
            return StageResult(stage_id=self.stage_id, status=SKIPPED, message=f"no profile template at {source}")

        if ctx.dry_run:
            logger.info("Would install %s as the PowerShell profile", source)
            return StageResult(stage_id=self.stage_id, details={"source": source})

        target = powershell_profile_path()
        backup = install_profile(source, target)
        logger.info("PowerShell profile installed at %s", target)
        return StageResult(
            stage_id=self.stage_id,
            details={"source": source, "target": str(target), "backup": str(backup) if backup else None},
        )
