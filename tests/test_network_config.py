import logging

import pytest

from winbootstrap.errors import ConfigNotFound, ConfigParseError
from winbootstrap.network_config import DEFAULT_SUBNET_MASK, NetworkSettings, load_network_settings


def test_full_config(write_json):
    path = write_json(
        "net.json",
        {
            "_comment": "lab machine",
            "hostname": "web-01",
            "ipAddress": "192.168.1.10",
            "subnetMask": "255.255.0.0",
            "gateway": "192.168.1.1",
            "dnsServer": "1.1.1.1",
        },
    )

    s = load_network_settings(path)

    assert s == NetworkSettings("web-01", "192.168.1.10", "255.255.0.0", "192.168.1.1", "1.1.1.1")
    assert s.is_static_complete


def test_invalid_gateway_dropped_with_one_warning(write_json, caplog):
    path = write_json(
        "net.json",
        {"hostname": "web-01", "ipAddress": "10.0.0.5", "gateway": "10.0.0.300", "dnsServer": "8.8.8.8"},
    )

    s = load_network_settings(path)

    assert s.gateway is None
    assert (s.hostname, s.ip_address, s.dns_server) == ("web-01", "10.0.0.5", "8.8.8.8")
    assert s.wants_static_ip and not s.is_static_complete
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "gateway" in warnings[0].message


def test_empty_values_and_unknown_keys_ignored(write_json, caplog):
    path = write_json("net.json", {"hostname": "", "gateway": None, "mtu": 1500})

    s = load_network_settings(path)

    assert s == NetworkSettings()
    assert s.subnet_mask == DEFAULT_SUBNET_MASK
    assert s.is_empty
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_invalid_hostname_and_non_string_dropped(write_json):
    s = load_network_settings(write_json("net.json", {"hostname": "-bad", "dnsServer": 8}))

    assert s.hostname is None
    assert s.dns_server is None


def test_missing_and_malformed(tmp_path):
    with pytest.raises(ConfigNotFound):
        load_network_settings(str(tmp_path / "none.json"))

    p = tmp_path / "net.json"
    p.write_text('"just a string"', encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_network_settings(str(p))


@pytest.mark.parametrize("mask", ["255.0.255.0", "0.0.0.0", "255.255.255.1"])
def test_non_contiguous_mask_dropped(write_json, caplog, mask):
    s = load_network_settings(write_json("net.json", {"ipAddress": "10.0.0.5", "subnetMask": mask}))

    assert s.subnet_mask == DEFAULT_SUBNET_MASK
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "subnetMask" in warnings[0].message
