from __future__ import annotations

import logging
import shutil

from ..errors import CollaboratorFailure
from .command import CmdResult, run_cmd, run_powershell

logger = logging.getLogger(__name__)

# Registers the App Installer package that ships winget.
REGISTER_SCRIPT = "Add-AppxPackage -RegisterByFamilyName -MainPackage Microsoft.DesktopAppInstaller_8wekyb3d8bbwe"

AGREEMENT_FLAGS = ["--accept-package-agreements", "--accept-source-agreements"]


def _winget() -> str:
    return shutil.which("winget") or "winget"


def is_winget_available() -> bool:
    if shutil.which("winget") is None:
        return False
    r = run_cmd([_winget(), "--version"], check=False)
    return r.ok


def ensure_winget(*, dry_run: bool = False) -> None:
    """Make sure winget is usable; raises CollaboratorFailure otherwise."""

    if is_winget_available():
        logger.info("WinGet is available")
        return

    logger.info("WinGet not found, registering App Installer")
    run_powershell(REGISTER_SCRIPT, dry_run=dry_run)
    if dry_run:
        return
    if not is_winget_available():
        raise CollaboratorFailure(
            "winget is not available; install 'App Installer' from the Microsoft Store and re-run"
        )


def is_package_installed(package_id: str, *, dry_run: bool = False) -> bool:
    if dry_run:
        return False
    r = run_cmd(
        [_winget(), "list", "--id", package_id, "-e", "--accept-source-agreements"],
        check=False,
    )
    return r.ok


def install_package(package_id: str, *, dry_run: bool = False) -> CmdResult:
    return run_cmd(
        [_winget(), "install", "--id", package_id, "-e", "--silent", *AGREEMENT_FLAGS],
        dry_run=dry_run,
    )
