import logging

import pytest

from winbootstrap.catalog import (
    DEFAULT_SCOOP_CATALOG,
    IdentifiedApp,
    SimpleApp,
    load_catalog,
    load_catalog_or_default,
    merge_overrides,
)
from winbootstrap.errors import ConfigNotFound, ConfigParseError


def test_load_cli_form_keeps_order(write_json):
    path = write_json("scoop.json", {"essential": ["git", "curl"], "dev": ["docker"]})

    catalog = load_catalog(path)

    assert list(catalog) == ["essential", "dev"]
    assert catalog["essential"] == [SimpleApp("git"), SimpleApp("curl")]


def test_load_gui_form(write_json):
    path = write_json(
        "winget.json",
        {"browsers": [{"id": "Mozilla.Firefox", "name": "Firefox"}, {"id": "Google.Chrome"}]},
    )

    catalog = load_catalog(path)

    firefox, chrome = catalog["browsers"]
    assert firefox == IdentifiedApp("Mozilla.Firefox", "Firefox")
    assert firefox.display_name == "Firefox"
    assert firefox.install_id == "Mozilla.Firefox"
    # name falls back to the id
    assert chrome.display_name == "Google.Chrome"


def test_metadata_keys_and_blank_entries_are_ignored(write_json):
    path = write_json("scoop.json", {"_comment": "hi", "tools": ["jq", " ", ""]})

    assert load_catalog(path) == {"tools": [SimpleApp("jq")]}


def test_load_yaml(tmp_path):
    p = tmp_path / "apps.yaml"
    p.write_text("essential:\n  - git\n  - curl\n", encoding="utf-8")

    assert load_catalog(str(p)) == {"essential": [SimpleApp("git"), SimpleApp("curl")]}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigNotFound):
        load_catalog(str(tmp_path / "nope.json"))


def test_malformed_json(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_catalog(str(p))


@pytest.mark.parametrize(
    "data",
    [
        ["git"],
        {"essential": "git"},
        {"essential": [1]},
        {"essential": [{"name": "no id"}]},
    ],
)
def test_wrong_shape(write_json, data):
    with pytest.raises(ConfigParseError):
        load_catalog(write_json("bad.json", data))


def test_utf8_bom_is_accepted(tmp_path):
    p = tmp_path / "bom.json"
    p.write_bytes(b"\xef\xbb\xbf" + b'{"a": ["b"]}')

    assert load_catalog(str(p)) == {"a": [SimpleApp("b")]}


def test_fallback_to_defaults_when_missing(tmp_path, caplog):
    caplog.set_level(logging.INFO)

    catalog = load_catalog_or_default(str(tmp_path / "missing.json"), DEFAULT_SCOOP_CATALOG)

    assert catalog == DEFAULT_SCOOP_CATALOG
    assert catalog is not DEFAULT_SCOOP_CATALOG
    assert any(r.levelno == logging.INFO and "built-in defaults" in r.message for r in caplog.records)


def test_fallback_to_defaults_when_malformed(tmp_path, caplog):
    p = tmp_path / "bad.json"
    p.write_text("[]", encoding="utf-8")

    catalog = load_catalog_or_default(str(p), DEFAULT_SCOOP_CATALOG)

    assert catalog == DEFAULT_SCOOP_CATALOG
    assert [r.levelno for r in caplog.records if "built-in defaults" in r.message] == [logging.WARNING]


class TestMergeOverrides:
    catalog = {
        "essential": [SimpleApp("git"), SimpleApp("curl"), SimpleApp("wget")],
        "browsers": [IdentifiedApp("Mozilla.Firefox", "Firefox")],
    }

    def test_names_resolve_in_catalog_order(self):
        selection = merge_overrides(self.catalog, {"essential": ["wget", "git"]})

        assert selection == {"essential": [SimpleApp("git"), SimpleApp("wget")]}

    def test_match_by_id_or_display_name(self):
        assert merge_overrides(self.catalog, {"browsers": ["firefox"]}) == {
            "browsers": [IdentifiedApp("Mozilla.Firefox", "Firefox")]
        }
        assert merge_overrides(self.catalog, {"browsers": ["Mozilla.Firefox"]})["browsers"]

    def test_all_and_none_select_whole_category(self):
        assert merge_overrides(self.catalog, {"essential": "all"})["essential"] == self.catalog["essential"]
        assert merge_overrides(self.catalog, {"essential": None})["essential"] == self.catalog["essential"]

    def test_unknown_entries_are_dropped(self, caplog):
        selection = merge_overrides(self.catalog, {"essential": ["git", "htop"], "games": ["steam"]})

        assert selection == {"essential": [SimpleApp("git")]}
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2

    def test_empty_result_omits_category(self):
        assert merge_overrides(self.catalog, {"essential": ["htop"]}) == {}
