from __future__ import annotations

import logging

from ..errors import ConfigNotFound, ConfigParseError
from ..lib.netadapter import (
    get_primary_adapter,
    mask_to_prefix_length,
    rename_computer,
    set_dns_server,
    set_static_ip,
)
from ..menu import prompt_network_settings
from ..network_config import NetworkSettings, load_network_settings
from ..pipeline import RunContext, StageResult

logger = logging.getLogger(__name__)


class NetworkStage:
    stage_id = "10_network"
    gate = "network"
    title = "Configure network settings (hostname, static IP, DNS)"
    fatal = False

    def _load(self, path: str) -> NetworkSettings:
        try:
            return load_network_settings(path)
        except ConfigNotFound:
            logger.info("No network config at %s", path)
        except ConfigParseError as e:
            logger.warning("%s; ignoring network config", e)
        return NetworkSettings()

    def run(self, ctx: RunContext) -> StageResult:
        result = StageResult(stage_id=self.stage_id)
        dry_run = ctx.dry_run

        settings = self._load(ctx.config.network_config_path)
        if ctx.prompter is not None:
            settings = prompt_network_settings(settings, ctx.prompter)
        elif settings.wants_static_ip and not settings.is_static_complete:
            logger.warning("ipAddress %s has no gateway; static IP will not be applied", settings.ip_address)

        if settings.is_empty:
            result.message = "no network changes requested"
            logger.info("No network changes requested")
            return result

        # bad masks fail here, before anything on the machine changes
        prefix = mask_to_prefix_length(settings.subnet_mask) if settings.is_static_complete else None

        if settings.hostname:
            result.details["reboot_required"] = rename_computer(settings.hostname, dry_run=dry_run)
            result.details["hostname"] = settings.hostname

        adapter = None
        if prefix is not None:
            adapter = get_primary_adapter(dry_run=dry_run)
            set_static_ip(adapter, settings.ip_address, prefix, settings.gateway, dry_run=dry_run)
            logger.info(
                "Static IP %s/%d via %s set on %s", settings.ip_address, prefix, settings.gateway, adapter
            )
            result.details.update(
                {"adapter": adapter, "ip_address": settings.ip_address, "gateway": settings.gateway}
            )

        if settings.dns_server:
            adapter = adapter or get_primary_adapter(dry_run=dry_run)
            set_dns_server(adapter, settings.dns_server, dry_run=dry_run)
            logger.info("DNS server %s set on %s", settings.dns_server, adapter)
            result.details["dns_server"] = settings.dns_server

        return result
