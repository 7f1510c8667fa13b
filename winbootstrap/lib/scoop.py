from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from ..errors import CollaboratorFailure
from .command import CmdResult, run_cmd, run_powershell

logger = logging.getLogger(__name__)

INSTALL_SCRIPT = (
    "Set-ExecutionPolicy -ExecutionPolicy RemoteSigned -Scope CurrentUser -Force; "
    "iex \"& {$(irm get.scoop.sh)} -RunAsAdmin\""
)


def _shims_dir() -> Path:
    root = os.environ.get("SCOOP") or str(Path.home() / "scoop")
    return Path(root) / "shims"


def _scoop() -> str:
    # scoop is a .cmd/.ps1 shim; CreateProcess needs the resolved path.
    return shutil.which("scoop") or "scoop"


def is_scoop_installed() -> bool:
    return shutil.which("scoop") is not None


def install_scoop(*, dry_run: bool = False) -> None:
    logger.info("Installing Scoop")
    run_powershell(INSTALL_SCRIPT, dry_run=dry_run)
    if dry_run:
        return

    # The installer only updates PATH for new shells.
    shims = str(_shims_dir())
    if shims not in os.environ.get("PATH", "").split(os.pathsep):
        os.environ["PATH"] = os.environ.get("PATH", "") + os.pathsep + shims


def ensure_scoop(*, dry_run: bool = False) -> None:
    """Make sure scoop is usable; raises CollaboratorFailure otherwise."""

    if is_scoop_installed():
        logger.info("Scoop is already installed")
        return

    install_scoop(dry_run=dry_run)
    if not dry_run and not is_scoop_installed():
        raise CollaboratorFailure("Scoop installation finished but 'scoop' is not on PATH")


def add_bucket(name: str, *, dry_run: bool = False) -> bool:
    """Add a bucket; an already-added bucket counts as success."""

    r = run_cmd([_scoop(), "bucket", "add", name], check=False, dry_run=dry_run)
    if r.ok or "already exists" in (r.stdout + r.stderr).lower():
        return True
    logger.warning("Could not add scoop bucket %s (exit %s)", name, r.returncode)
    return False


def is_app_installed(name: str, *, dry_run: bool = False) -> bool:
    if dry_run:
        return False
    r = run_cmd([_scoop(), "prefix", name], check=False)
    return r.ok


def install_app(name: str, *, dry_run: bool = False) -> CmdResult:
    return run_cmd([_scoop(), "install", name], dry_run=dry_run)
