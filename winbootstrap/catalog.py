from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .errors import ConfigNotFound, ConfigParseError
from .lib.config_files import load_mapping, strip_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimpleApp:
    """CLI-form entry: the name is also what the package manager installs."""

    name: str

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def install_id(self) -> str:
        return self.name


@dataclass(frozen=True)
class IdentifiedApp:
    """GUI-form entry: a package id plus a human readable name."""

    id: str
    name: str

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def install_id(self) -> str:
        return self.id


AppEntry = Union[SimpleApp, IdentifiedApp]

# Category name -> entries. dict keeps insertion order, which drives menu
# numbering and install order.
AppCatalog = Dict[str, List[AppEntry]]
Selection = Dict[str, List[AppEntry]]


DEFAULT_SCOOP_CATALOG: AppCatalog = {
    "essential": [SimpleApp(n) for n in ("git", "7zip", "curl", "wget", "aria2")],
    "development": [SimpleApp(n) for n in ("python", "nodejs-lts", "gh", "make")],
    "utilities": [SimpleApp(n) for n in ("ripgrep", "fd", "fzf", "jq", "bat")],
    "terminal": [SimpleApp(n) for n in ("starship", "neovim")],
}

DEFAULT_WINGET_CATALOG: AppCatalog = {
    "browsers": [
        IdentifiedApp("Mozilla.Firefox", "Firefox"),
        IdentifiedApp("Google.Chrome", "Google Chrome"),
    ],
    "development": [
        IdentifiedApp("Microsoft.VisualStudioCode", "Visual Studio Code"),
        IdentifiedApp("Microsoft.WindowsTerminal", "Windows Terminal"),
        IdentifiedApp("Git.Git", "Git for Windows"),
    ],
    "utilities": [
        IdentifiedApp("7zip.7zip", "7-Zip"),
        IdentifiedApp("Microsoft.PowerToys", "PowerToys"),
        IdentifiedApp("voidtools.Everything", "Everything"),
    ],
    "communication": [
        IdentifiedApp("SlackTechnologies.Slack", "Slack"),
        IdentifiedApp("Zoom.Zoom", "Zoom"),
    ],
}


def copy_catalog(catalog: Mapping[str, Sequence[AppEntry]]) -> AppCatalog:
    return {name: list(entries) for name, entries in catalog.items()}


def _parse_entry(path: str, category: str, item: Any) -> Optional[AppEntry]:
    if isinstance(item, str):
        name = item.strip()
        return SimpleApp(name) if name else None

    if isinstance(item, dict):
        app_id = str(item.get("id") or "").strip()
        if not app_id:
            raise ConfigParseError(path, f"category {category!r}: entry without 'id': {item!r}")
        name = str(item.get("name") or "").strip() or app_id
        return IdentifiedApp(app_id, name)

    raise ConfigParseError(
        path, f"category {category!r}: entries must be strings or {{id, name}} objects, got {item!r}"
    )


def parse_catalog(raw: Mapping[str, Any], *, source: str = "<memory>") -> AppCatalog:
    catalog: AppCatalog = {}
    for category, items in strip_metadata(dict(raw)).items():
        if not isinstance(items, list):
            raise ConfigParseError(source, f"category {category!r} must be a list")
        entries: List[AppEntry] = []
        for item in items:
            entry = _parse_entry(source, str(category), item)
            if entry is not None:
                entries.append(entry)
        catalog[str(category)] = entries
    return catalog


def load_catalog(path: str) -> AppCatalog:
    """Load an app catalog (category -> apps) from a JSON or YAML file."""

    return parse_catalog(load_mapping(path), source=path)


def load_catalog_or_default(path: str, default: Mapping[str, Sequence[AppEntry]]) -> AppCatalog:
    try:
        catalog = load_catalog(path)
    except ConfigNotFound:
        logger.info("No app list at %s, using built-in defaults", path)
        return copy_catalog(default)
    except ConfigParseError as e:
        logger.warning("%s; using built-in defaults", e)
        return copy_catalog(default)

    logger.info(
        "Loaded %d categories (%d apps) from %s",
        len(catalog),
        sum(len(v) for v in catalog.values()),
        path,
    )
    return catalog


def _find_entry(entries: Sequence[AppEntry], token: str) -> Optional[AppEntry]:
    wanted = token.strip().lower()
    for entry in entries:
        if wanted in {entry.install_id.lower(), entry.display_name.lower()}:
            return entry
    return None


def merge_overrides(
    catalog: Mapping[str, Sequence[AppEntry]],
    overrides: Mapping[str, Any],
) -> Selection:
    """Resolve a pre-supplied selection against the catalog.

    ``overrides`` maps category -> list of app names/ids, or ``"all"`` / None
    for the whole category. Anything not present in the catalog is dropped
    with a warning; the result only ever contains catalog entries.
    """

    selection: Selection = {}
    for category, wanted in overrides.items():
        if category not in catalog:
            logger.warning("Pre-selected category %r is not in the catalog; ignoring", category)
            continue

        entries = list(catalog[category])
        if wanted is None or (isinstance(wanted, str) and wanted.strip().lower() == "all"):
            chosen = entries
        else:
            if isinstance(wanted, str):
                wanted = [wanted]
            chosen = []
            for token in wanted:
                entry = _find_entry(entries, str(token))
                if entry is None:
                    logger.warning("Pre-selected app %r is not in category %r; ignoring", token, category)
                elif entry not in chosen:
                    chosen.append(entry)
            # Keep catalog order regardless of override order.
            chosen = [e for e in entries if e in chosen]

        if chosen:
            selection[category] = chosen
    return selection
