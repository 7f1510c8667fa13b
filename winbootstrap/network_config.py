from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from .lib.config_files import load_mapping, strip_metadata
from .lib.validators import is_valid_hostname, is_valid_ipv4, is_valid_subnet_mask

logger = logging.getLogger(__name__)

DEFAULT_SUBNET_MASK = "255.255.255.0"


@dataclass(frozen=True)
class NetworkSettings:
    hostname: Optional[str] = None
    ip_address: Optional[str] = None
    subnet_mask: str = DEFAULT_SUBNET_MASK
    gateway: Optional[str] = None
    dns_server: Optional[str] = None

    @property
    def wants_static_ip(self) -> bool:
        return self.ip_address is not None

    @property
    def is_static_complete(self) -> bool:
        """A static address is only applied together with a gateway."""
        return self.ip_address is not None and self.gateway is not None

    @property
    def is_empty(self) -> bool:
        return self.hostname is None and self.ip_address is None and self.dns_server is None


# config key -> (dataclass field, validator)
FIELDS: Dict[str, Tuple[str, Callable[[Any], bool]]] = {
    "hostname": ("hostname", is_valid_hostname),
    "ipAddress": ("ip_address", is_valid_ipv4),
    "subnetMask": ("subnet_mask", is_valid_subnet_mask),
    "gateway": ("gateway", is_valid_ipv4),
    "dnsServer": ("dns_server", is_valid_ipv4),
}


def parse_network_settings(raw: Dict[str, Any], *, source: str = "<memory>") -> NetworkSettings:
    """Build NetworkSettings, dropping (with a warning) every invalid field."""

    values: Dict[str, Any] = {}
    for key, value in strip_metadata(raw).items():
        if key not in FIELDS:
            logger.debug("Ignoring unknown network setting %r in %s", key, source)
            continue
        if value is None or (isinstance(value, str) and not value.strip()):
            continue

        field_name, validator = FIELDS[key]
        candidate = value.strip() if isinstance(value, str) else value
        if not validator(candidate):
            logger.warning("Invalid %s %r in %s; ignoring it", key, value, source)
            continue
        values[field_name] = candidate

    return NetworkSettings(**values)


def load_network_settings(path: str) -> NetworkSettings:
    """Load network settings from a flat JSON/YAML object.

    Raises ConfigNotFound / ConfigParseError like the catalog loader.
    """

    return parse_network_settings(load_mapping(path), source=path)
