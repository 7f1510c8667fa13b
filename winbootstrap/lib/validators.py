from __future__ import annotations

import re
from typing import Any

# NetBIOS limit; Rename-Computer rejects longer names.
MAX_HOSTNAME_LENGTH = 15

_HOSTNAME_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?")
_OCTET_RE = re.compile(r"[0-9]{1,3}")


def is_valid_hostname(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    if not 1 <= len(value) <= MAX_HOSTNAME_LENGTH:
        return False
    return _HOSTNAME_RE.fullmatch(value) is not None


def is_valid_ipv4(value: Any) -> bool:
    """Dotted-quad check: four decimal octets 0-255, no whitespace."""
    if not isinstance(value, str):
        return False
    parts = value.split(".")
    if len(parts) != 4:
        return False
    for part in parts:
        if not _OCTET_RE.fullmatch(part):
            return False
        if int(part) > 255:
            return False
    return True


def is_valid_subnet_mask(value: Any) -> bool:
    """Dotted-quad mask with contiguous one bits and a prefix of 1-32."""
    if not is_valid_ipv4(value):
        return False
    bits = "".join(f"{int(octet):08b}" for octet in value.split("."))
    return bits.startswith("1") and "01" not in bits
