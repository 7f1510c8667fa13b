from __future__ import annotations

import logging
import platform

from ..errors import CollaboratorFailure, ValidationError
from .command import ps_quote, run_powershell
from .validators import is_valid_ipv4

logger = logging.getLogger(__name__)

DRY_RUN_ADAPTER = "Ethernet"


def mask_to_prefix_length(mask: str) -> int:
    """``255.255.255.0`` -> 24. Non-contiguous masks are rejected."""

    if not is_valid_ipv4(mask):
        raise ValidationError(f"Invalid subnet mask {mask!r}")
    value = 0
    for octet in mask.split("."):
        value = (value << 8) | int(octet)
    bits = f"{value:032b}"
    if "01" in bits:
        raise ValidationError(f"Subnet mask {mask!r} is not contiguous")
    return bits.count("1")


def get_primary_adapter(*, dry_run: bool = False) -> str:
    """Name of the first connected adapter (lowest ifIndex)."""

    if dry_run:
        return DRY_RUN_ADAPTER
    r = run_powershell(
        "Get-NetAdapter | Where-Object Status -eq 'Up' | Sort-Object ifIndex "
        "| Select-Object -First 1 -ExpandProperty Name"
    )
    name = r.stdout.strip()
    if not name:
        raise CollaboratorFailure("No connected network adapter found")
    return name


def current_hostname() -> str:
    return platform.node()


def rename_computer(hostname: str, *, dry_run: bool = False) -> bool:
    """Rename the machine; returns True when a reboot is needed."""

    if hostname.lower() == current_hostname().lower():
        logger.info("Hostname is already %s", hostname)
        return False
    run_powershell(f"Rename-Computer -NewName {ps_quote(hostname)} -Force", dry_run=dry_run)
    logger.info("Computer renamed to %s (takes effect after reboot)", hostname)
    return True


def set_static_ip(
    adapter: str,
    ip_address: str,
    prefix_length: int,
    gateway: str,
    *,
    dry_run: bool = False,
) -> None:
    alias = ps_quote(adapter)
    script = "; ".join(
        [
            f"Set-NetIPInterface -InterfaceAlias {alias} -Dhcp Disabled",
            f"Remove-NetIPAddress -InterfaceAlias {alias} -AddressFamily IPv4 -Confirm:$false "
            "-ErrorAction SilentlyContinue",
            f"Remove-NetRoute -InterfaceAlias {alias} -AddressFamily IPv4 -DestinationPrefix '0.0.0.0/0' "
            "-Confirm:$false -ErrorAction SilentlyContinue",
            f"New-NetIPAddress -InterfaceAlias {alias} -IPAddress {ps_quote(ip_address)} "
            f"-PrefixLength {int(prefix_length)} -DefaultGateway {ps_quote(gateway)} | Out-Null",
        ]
    )
    run_powershell(script, dry_run=dry_run)


def set_dns_server(adapter: str, dns_server: str, *, dry_run: bool = False) -> None:
    run_powershell(
        f"Set-DnsClientServerAddress -InterfaceAlias {ps_quote(adapter)} "
        f"-ServerAddresses {ps_quote(dns_server)}",
        dry_run=dry_run,
    )
