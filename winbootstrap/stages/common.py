from __future__ import annotations

import logging
from typing import Any, Callable

from ..catalog import Selection
from ..errors import CollaboratorFailure
from ..logging_utils import log_success
from ..pipeline import FAILED, StageResult

logger = logging.getLogger(__name__)


def install_selection(
    result: StageResult,
    selection: Selection,
    *,
    is_installed: Callable[..., bool],
    install: Callable[..., Any],
    dry_run: bool = False,
) -> StageResult:
    """Install every selected entry, category by category, in catalog order.

    A failing app is recorded and logged; the remaining apps still install.
    """

    for category, entries in selection.items():
        logger.info("Installing category %s (%d apps)", category, len(entries))
        for entry in entries:
            app_id = entry.install_id
            if is_installed(app_id, dry_run=dry_run):
                logger.info("%s is already installed", entry.display_name)
                result.already_installed.append(app_id)
                continue
            try:
                install(app_id, dry_run=dry_run)
            except CollaboratorFailure as e:
                logger.warning("Failed to install %s: %s", entry.display_name, e)
                result.failed.append(app_id)
                continue
            log_success(logger, "Installed %s", entry.display_name)
            result.installed.append(app_id)

    if result.failed:
        result.status = FAILED
        result.message = f"{len(result.failed)} app(s) failed: {', '.join(result.failed)}"
    logger.info(
        "Installed=%d already-present=%d failed=%d",
        len(result.installed),
        len(result.already_installed),
        len(result.failed),
    )
    return result
