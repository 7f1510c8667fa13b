from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .errors import ConfigParseError
from .lib.prompt import ConsolePrompter, Prompter
from .logging_utils import DEFAULT_LOG_DIR, close_logging, configure_logging, log_success
from .pipeline import PipelineResult, RunContext, run_pipeline
from .run_config import DEFAULT_RUN_CONFIG, RunConfig, load_run_config
from .stages import NetworkStage, ProfileStage, ScoopStage, WingetStage

logger = logging.getLogger(__name__)


def build_stages():
    return [
        NetworkStage(),
        ScoopStage(),
        WingetStage(),
        ProfileStage(),
    ]


def run(config: RunConfig, *, prompter: Optional[Prompter] = None) -> PipelineResult:
    """Run every stage once. Pass ``prompter=None`` for an unattended run."""

    ctx = RunContext(config=config, prompter=prompter, dry_run=config.dry_run)
    if config.dry_run:
        logger.info("Dry run: commands are logged, not executed")

    result = run_pipeline(ctx=ctx, stages=build_stages())

    logger.info(
        "Summary: ran=%s skipped=%s failed=%s",
        ",".join(result.ran_stages) or "-",
        ",".join(result.skipped_stages) or "-",
        ",".join(result.failed_stages) or "-",
    )
    for r in result.results:
        if r.failed:
            logger.warning("%s: failed apps: %s", r.stage_id, ", ".join(r.failed))
        if r.details.get("reboot_required"):
            logger.warning("Reboot required for the new hostname to take effect")
    return result


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    stages: Dict[str, Any] = {}
    if args.skip_network:
        stages["network"] = False
    if args.skip_scoop:
        stages["scoop"] = False
    if args.skip_winget:
        stages["winget"] = False
    if args.with_profile:
        stages["profile"] = True

    return {
        "paths": {
            "scoop_apps": args.scoop_apps,
            "winget_apps": args.winget_apps,
            "network": args.network_config,
            "profile": args.profile,
            "log_dir": args.log_dir,
        },
        "stages": stages,
        "assume_yes": True if args.yes else None,
        "dry_run": True if args.dry_run else None,
    }


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="win-bootstrap", description="Bootstrap a fresh Windows machine")
    p.add_argument("--config", default=DEFAULT_RUN_CONFIG, help="Run configuration (yaml|json)")
    p.add_argument("--scoop-apps", default=None, help="Scoop app list (default config/scoop-apps.json)")
    p.add_argument("--winget-apps", default=None, help="WinGet app list (default config/winget-apps.json)")
    p.add_argument("--network-config", default=None, help="Network settings (default config/network-config.json)")
    p.add_argument("--profile", default=None, help="PowerShell profile template (default config/profile.ps1)")
    p.add_argument("--log-dir", default=None, help="Directory for the run transcript")
    p.add_argument("--yes", "-y", action="store_true", help="Unattended: accept every stage, select everything")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--skip-network", action="store_true")
    p.add_argument("--skip-scoop", action="store_true")
    p.add_argument("--skip-winget", action="store_true")
    p.add_argument("--with-profile", action="store_true", help="Install the PowerShell profile without asking")
    return p


def main(argv: Optional[list[str]] = None, *, prompter: Optional[Prompter] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_run_config(args.config).with_overrides(_cli_overrides(args))
    except ConfigParseError as e:
        try:
            configure_logging(log_dir=args.log_dir or DEFAULT_LOG_DIR)
        except OSError as log_err:
            logger.error("Cannot open transcript: %s", log_err)
        logger.error("%s", e)
        close_logging()
        return 1

    try:
        # no transcript yet; errors reach stderr through logging's last resort handler
        configure_logging(log_dir=config.log_dir)
        if config.assume_yes:
            prompter = None
        elif prompter is None:
            prompter = ConsolePrompter()

        result = run(config, prompter=prompter)
        if result.exit_code == 0:
            log_success(logger, "Bootstrap finished")
        else:
            logger.error("Bootstrap stopped: %s", result.fatal_error)
        return result.exit_code
    except KeyboardInterrupt:
        logger.error("Aborted by user")
        return 1
    except Exception as e:
        logger.error("Bootstrap failed: %s", e)
        logger.debug("Traceback", exc_info=True)
        return 1
    finally:
        close_logging()


if __name__ == "__main__":
    raise SystemExit(main())
