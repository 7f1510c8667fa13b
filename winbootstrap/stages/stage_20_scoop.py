from __future__ import annotations

import logging

from ..catalog import DEFAULT_SCOOP_CATALOG, load_catalog_or_default
from ..lib import scoop
from ..menu import select_apps
from ..pipeline import RunContext, StageResult
from .common import install_selection

logger = logging.getLogger(__name__)


class ScoopStage:
    stage_id = "20_scoop"
    gate = "scoop"
    title = "Install CLI apps with Scoop"
    fatal = True

    def run(self, ctx: RunContext) -> StageResult:
        result = StageResult(stage_id=self.stage_id)
        cfg = ctx.config

        catalog = load_catalog_or_default(cfg.scoop_apps_path, DEFAULT_SCOOP_CATALOG)
        selection = select_apps(catalog, ctx.prompter, preselected=cfg.preselected("scoop"))
        if not selection:
            result.message = "nothing selected"
            logger.info("No Scoop apps selected")
            return result

        scoop.ensure_scoop(dry_run=ctx.dry_run)
        for bucket in cfg.scoop_buckets:
            scoop.add_bucket(bucket, dry_run=ctx.dry_run)

        return install_selection(
            result,
            selection,
            is_installed=scoop.is_app_installed,
            install=scoop.install_app,
            dry_run=ctx.dry_run,
        )
