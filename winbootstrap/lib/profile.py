from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path

from ..errors import CollaboratorFailure, ConfigNotFound
from .command import run_powershell

logger = logging.getLogger(__name__)


def powershell_profile_path() -> Path:
    r = run_powershell("$PROFILE")
    path = r.stdout.strip()
    if not path:
        raise CollaboratorFailure("PowerShell did not report a $PROFILE path")
    return Path(path)


def install_profile(source: str, target: Path) -> Path | None:
    """Copy ``source`` over ``target``, keeping a timestamped backup.

    Returns the backup path when an existing profile was preserved.
    """

    src = Path(source)
    if not src.is_file():
        raise ConfigNotFound(str(src))

    backup = None
    if target.exists():
        if target.read_bytes() == src.read_bytes():
            logger.info("Profile %s is already up to date", target)
            return None
        backup = target.with_name(f"{target.name}.bak-{datetime.now().strftime('%Y%m%d-%H%M%S')}")
        shutil.copy2(target, backup)
        logger.info("Backed up existing profile to %s", backup)

    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, target)
    return backup
