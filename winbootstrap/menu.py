from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from .catalog import AppCatalog, AppEntry, Selection, merge_overrides
from .errors import ValidationError
from .lib.prompt import Prompter, prompt_until, prompt_validated
from .lib.validators import is_valid_hostname, is_valid_ipv4, is_valid_subnet_mask
from .network_config import NetworkSettings

logger = logging.getLogger(__name__)

HOSTNAME_RULES = "1-15 letters, digits or hyphens, not starting or ending with a hyphen"
# answers that drop a configured value instead of keeping it
CLEAR_IP_WORDS = ("dhcp", "-")
CLEAR_DNS_WORDS = ("auto", "-")


def parse_indices(text: str, upper: int, *, allow_zero: bool = False) -> List[int]:
    """Parse ``"1, 3,2"`` into sorted distinct indices in ``[1, upper]``.

    A single bad token rejects the whole input. ``0`` is only accepted when
    ``allow_zero`` and only on its own.
    """

    tokens = [t.strip() for t in text.split(",")]
    if not text.strip():
        raise ValidationError("Please enter at least one number")

    chosen: List[int] = []
    for token in tokens:
        if not (token.isascii() and token.isdigit()):
            raise ValidationError(f"Invalid selection {token!r}: expected numbers separated by commas")
        n = int(token)
        if n == 0 and allow_zero:
            if len(tokens) > 1:
                raise ValidationError("0 (skip all) cannot be combined with other choices")
        elif not 1 <= n <= upper:
            raise ValidationError(f"Selection {n} is out of range (1-{upper})")
        if n not in chosen:
            chosen.append(n)
    return sorted(chosen)


def select_categories(catalog: Mapping[str, Sequence[AppEntry]], prompter: Prompter) -> List[str]:
    names = list(catalog)
    if not names:
        return []

    prompter.show("Available categories:")
    for i, name in enumerate(names, start=1):
        prompter.show(f"  {i}. {name} ({len(catalog[name])} apps)")
    prompter.show("  0. Skip all")

    indices = prompt_until(
        prompter,
        "Select categories (comma-separated numbers):",
        lambda answer: parse_indices(answer, len(names), allow_zero=True),
    )
    if indices == [0]:
        return []
    return [names[i - 1] for i in indices]


def refine_category(name: str, entries: Sequence[AppEntry], prompter: Prompter) -> List[AppEntry]:
    """Let the user exclude items from one category.

    Enter or ``all`` keeps everything, ``skip`` drops the category, numbers
    are the items to leave out.
    """

    entries = list(entries)
    prompter.show(f"Apps in '{name}':")
    for i, entry in enumerate(entries, start=1):
        prompter.show(f"  {i}. {entry.display_name}")

    def parse(answer: str) -> List[AppEntry]:
        word = answer.lower()
        if word in {"", "all"}:
            return list(entries)
        if word == "skip":
            return []
        excluded = set(parse_indices(answer, len(entries)))
        return [e for i, e in enumerate(entries, start=1) if i not in excluded]

    return prompt_until(
        prompter,
        "Numbers to exclude (comma-separated), Enter/'all' to keep all, 'skip' to skip the category:",
        parse,
    )


def select_apps(
    catalog: AppCatalog,
    prompter: Optional[Prompter],
    *,
    preselected: Optional[Mapping[str, Any]] = None,
) -> Selection:
    """Two-level selection: categories first, then per-category exclusions.

    With ``preselected`` nothing is asked; the override is resolved against
    the catalog instead. Without a prompter (non-interactive run) the whole
    catalog is selected.
    """

    if preselected is not None:
        return merge_overrides(catalog, preselected)
    if prompter is None:
        return {name: list(entries) for name, entries in catalog.items() if entries}

    selection: Selection = {}
    for name in select_categories(catalog, prompter):
        kept = refine_category(name, catalog[name], prompter)
        if kept:
            selection[name] = kept
        else:
            logger.info("Skipping category %s", name)
    return selection


def prompt_network_settings(
    current: NetworkSettings,
    prompter: Prompter,
    *,
    gateway_max_attempts: Optional[int] = None,
) -> NetworkSettings:
    """Fill in / confirm network settings; config values become the defaults."""

    prompter.show(f"Current hostname: {current.hostname or '(unchanged)'}")
    hostname = prompt_validated(
        prompter,
        "New hostname (Enter to keep):",
        is_valid_hostname,
        allow_skip=True,
        default=current.hostname,
        invalid_message="Invalid hostname {value!r}: " + HOSTNAME_RULES,
    )

    ip_address = prompt_validated(
        prompter,
        f"Static IP address (Enter for {current.ip_address or 'DHCP'}, 'dhcp' to clear):",
        is_valid_ipv4,
        allow_skip=True,
        default=current.ip_address,
        invalid_message="Invalid IP address {value!r}",
        clear_words=CLEAR_IP_WORDS,
    )

    subnet_mask = current.subnet_mask
    gateway = None
    if ip_address is not None:
        subnet_mask = prompt_validated(
            prompter,
            f"Subnet mask (Enter for {current.subnet_mask}):",
            is_valid_subnet_mask,
            default=current.subnet_mask,
            invalid_message="Invalid subnet mask {value!r}: ones must be contiguous, e.g. 255.255.255.0",
        )
        gateway = prompt_validated(
            prompter,
            "Default gateway" + (f" (Enter for {current.gateway}):" if current.gateway else ":"),
            is_valid_ipv4,
            default=current.gateway,
            invalid_message="Invalid gateway {value!r}",
            required_message="A gateway is required when a static IP address is set",
            max_attempts=gateway_max_attempts,
        )

    dns_server = prompt_validated(
        prompter,
        f"DNS server (Enter for {current.dns_server or 'automatic'}, 'auto' to clear):",
        is_valid_ipv4,
        allow_skip=True,
        default=current.dns_server,
        invalid_message="Invalid DNS server {value!r}",
        clear_words=CLEAR_DNS_WORDS,
    )

    return NetworkSettings(
        hostname=hostname,
        ip_address=ip_address,
        subnet_mask=subnet_mask or current.subnet_mask,
        gateway=gateway,
        dns_server=dns_server,
    )
