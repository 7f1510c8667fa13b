import pytest

from winbootstrap.errors import ConfigParseError
from winbootstrap.run_config import RunConfig, load_run_config


def test_defaults(tmp_path):
    cfg = load_run_config(str(tmp_path / "missing.yaml"))

    assert cfg.scoop_apps_path == "config/scoop-apps.json"
    assert cfg.winget_apps_path == "config/winget-apps.json"
    assert cfg.network_config_path == "config/network-config.json"
    assert cfg.log_dir == "logs"
    assert cfg.scoop_buckets == ["extras"]
    assert cfg.stage_enabled("network") is None
    assert cfg.preselected("scoop") is None
    assert not cfg.assume_yes and not cfg.dry_run


def test_yaml_file(tmp_path):
    p = tmp_path / "bootstrap.yaml"
    p.write_text(
        "paths:\n  log_dir: out\nstages:\n  profile: false\nscoop:\n  buckets: []\n"
        "selection:\n  scoop:\n    essential: [git]\n",
        encoding="utf-8",
    )

    cfg = load_run_config(str(p))

    assert cfg.log_dir == "out"
    assert cfg.stage_enabled("profile") is False
    assert cfg.scoop_buckets == []
    assert cfg.preselected("scoop") == {"essential": ["git"]}


@pytest.mark.parametrize("text", ["- a\n- b\n", "stages: [network]\n", "scoop:\n  buckets: extras\n", "a: [b\n"])
def test_malformed(tmp_path, text):
    p = tmp_path / "bootstrap.yaml"
    p.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigParseError):
        load_run_config(str(p))


def test_overrides_skip_none_and_keep_file_values():
    cfg = RunConfig(raw={"paths": {"log_dir": "out", "network": "n.json"}, "stages": {"scoop": True}})

    merged = cfg.with_overrides({"paths": {"log_dir": None, "network": "other.json"}, "stages": {"scoop": False}})

    assert merged.log_dir == "out"
    assert merged.network_config_path == "other.json"
    assert merged.stage_enabled("scoop") is False
    # source config untouched
    assert cfg.stage_enabled("scoop") is True


def test_preselected_must_be_mapping():
    with pytest.raises(ConfigParseError):
        RunConfig(raw={"selection": {"winget": ["Mozilla.Firefox"]}}).preselected("winget")
