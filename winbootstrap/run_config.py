from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import ConfigNotFound, ConfigParseError
from .lib.config_files import load_mapping

logger = logging.getLogger(__name__)

DEFAULT_RUN_CONFIG = "bootstrap.yaml"

STAGE_NAMES = ("network", "scoop", "winget", "profile")


@dataclass(frozen=True)
class RunConfig:
    raw: Dict[str, Any]

    def _paths(self) -> Dict[str, Any]:
        return self.raw.get("paths") or {}

    @property
    def scoop_apps_path(self) -> str:
        return str(self._paths().get("scoop_apps") or "config/scoop-apps.json")

    @property
    def winget_apps_path(self) -> str:
        return str(self._paths().get("winget_apps") or "config/winget-apps.json")

    @property
    def network_config_path(self) -> str:
        return str(self._paths().get("network") or "config/network-config.json")

    @property
    def profile_source_path(self) -> str:
        return str(self._paths().get("profile") or "config/profile.ps1")

    @property
    def log_dir(self) -> str:
        return str(self._paths().get("log_dir") or "logs")

    @property
    def assume_yes(self) -> bool:
        return bool(self.raw.get("assume_yes", False))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    def stage_enabled(self, name: str) -> Optional[bool]:
        """True/False when the run config decides the gate, None to ask."""
        stages = self.raw.get("stages") or {}
        value = stages.get(name)
        return None if value is None else bool(value)

    @property
    def scoop_buckets(self) -> List[str]:
        buckets = (self.raw.get("scoop") or {}).get("buckets")
        if buckets is None:
            return ["extras"]
        return [str(b).strip() for b in buckets if str(b).strip()]

    def preselected(self, manager: str) -> Optional[Dict[str, Any]]:
        """Non-interactive selection for 'scoop' or 'winget', if configured."""
        selection = self.raw.get("selection") or {}
        value = selection.get(manager)
        if value is None:
            return None
        if not isinstance(value, dict):
            raise ConfigParseError("run config", f"selection.{manager} must be a mapping")
        return value

    def with_overrides(self, overrides: Dict[str, Any]) -> "RunConfig":
        """Return a copy with nested ``overrides`` applied (None values skipped)."""
        raw = copy.deepcopy(self.raw)
        _deep_update(raw, overrides)
        return RunConfig(raw=raw)


def _deep_update(target: Dict[str, Any], updates: Dict[str, Any]) -> None:
    for key, value in updates.items():
        if value is None:
            continue
        if isinstance(value, dict):
            node = target.get(key)
            if not isinstance(node, dict):
                node = {}
                target[key] = node
            _deep_update(node, value)
        else:
            target[key] = value


def load_run_config(path: str) -> RunConfig:
    try:
        raw = load_mapping(path)
    except ConfigNotFound:
        logger.debug("No run config at %s, using defaults", path)
        return RunConfig(raw={})

    for section in ("paths", "stages", "scoop", "selection"):
        if raw.get(section) is not None and not isinstance(raw[section], dict):
            raise ConfigParseError(path, f"'{section}' must be a mapping")
    buckets = (raw.get("scoop") or {}).get("buckets")
    if buckets is not None and not isinstance(buckets, list):
        raise ConfigParseError(path, "'scoop.buckets' must be a list")
    return RunConfig(raw=raw)
