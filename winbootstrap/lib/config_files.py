from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from ..errors import ConfigNotFound, ConfigParseError


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"yaml", "yml"}:
        return "yaml"
    # Default to JSON for unknown extensions.
    return "json"


def load_mapping(path: str) -> Dict[str, Any]:
    """Load a JSON or YAML config file that must contain a top-level object.

    Raises ConfigNotFound when the file is absent and ConfigParseError when it
    cannot be parsed or is not a mapping.
    """

    p = Path(path)
    if not p.is_file():
        raise ConfigNotFound(str(p))

    try:
        text = p.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(str(p), str(e)) from e

    if _detect_format(p) == "yaml":
        try:
            import yaml  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("PyYAML is required to read YAML config files") from e
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(str(p), str(e)) from e
        if data is None:
            data = {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(str(p), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigParseError(str(p), f"expected an object, got {type(data).__name__}")
    return data


def strip_metadata(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys starting with '_' (comments / metadata)."""
    return {k: v for k, v in raw.items() if not str(k).startswith("_")}
