# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from markup_scout.config import PING_URL, CrawlOptions, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("site: http://example.com/\nnot_found: true", ".yaml", None),
        (json.dumps({"site": "http://example.com/", "not_found": True}), ".json", None),
        ("mode: spider", ".yaml", ValidationError),
        ("not: a: mapping", ".yml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("{not json", ".json", ValueError),
        ("site = 1", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlOptions)
        assert cfg.site_url == "http://example.com/"
        assert cfg.not_found is True


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_overrides_win_and_none_is_ignored(tmp_path):
    cfg_path = write_file(tmp_path, "site: http://example.com/\nverbose: true", ".yaml")
    cfg = load_config(cfg_path, site="http://other.org/", verbose=None, mode="static")
    assert cfg.site_url == "http://other.org/"
    assert cfg.verbose is True
    assert cfg.mode == "static"


def test_defaults():
    cfg = CrawlOptions()
    assert cfg.mode == "crawl"
    assert cfg.site_url == "http://localhost:3000/"
    assert cfg.markup is True and cfg.not_found is False
    assert cfg.ping_url == PING_URL
    assert cfg.schema_dir is None


def test_unknown_mode_fails_at_construction():
    with pytest.raises(ValueError):
        CrawlOptions(mode="spider")


@pytest.mark.parametrize("field", ["exclude", "ignore"])
def test_invalid_regex_rejected(field):
    with pytest.raises(ValidationError):
        CrawlOptions(**{field: "(unclosed"})


def test_unknown_field_rejected():
    with pytest.raises(ValidationError):
        CrawlOptions(colour=False)


def test_options_are_frozen():
    cfg = CrawlOptions()
    with pytest.raises(ValidationError):
        cfg.markup = False


def test_empty_ping_url_disables_probe():
    assert CrawlOptions(ping_url="").ping_url is None


def test_missing_schema_dir_rejected(tmp_path):
    with pytest.raises(ValidationError):
        CrawlOptions(schema_dir=tmp_path / "missing")


def test_cookie_jar_and_patterns():
    cfg = CrawlOptions(cookies="tz=Europe%2FBerlin; guid=ZcpBsh; junk", exclude=r"/private/", ignore="xmlns")
    assert cfg.cookie_jar() == {"tz": "Europe%2FBerlin", "guid": "ZcpBsh"}
    assert cfg.exclude_re.search("http://example.com/private/x")
    assert cfg.ignore_re.search("attribute xmlns")
