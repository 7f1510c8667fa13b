from __future__ import annotations

import logging

from ..catalog import DEFAULT_WINGET_CATALOG, load_catalog_or_default
from ..lib import winget
from ..menu import select_apps
from ..pipeline import RunContext, StageResult
from .common import install_selection

logger = logging.getLogger(__name__)


class WingetStage:
    stage_id = "30_winget"
    gate = "winget"
    title = "Install GUI apps with WinGet"
    fatal = True

    def run(self, ctx: RunContext) -> StageResult:
        result = StageResult(stage_id=self.stage_id)
        cfg = ctx.config

        catalog = load_catalog_or_default(cfg.winget_apps_path, DEFAULT_WINGET_CATALOG)
        selection = select_apps(catalog, ctx.prompter, preselected=cfg.preselected("winget"))
        if not selection:
            result.message = "nothing selected"
            logger.info("No WinGet apps selected")
            return result

        winget.ensure_winget(dry_run=ctx.dry_run)

        return install_selection(
            result,
            selection,
            is_installed=winget.is_package_installed,
            install=winget.install_package,
            dry_run=ctx.dry_run,
        )
