# File: tests/test_cli.py
"""Tests for the command line (`markup_scout.cli`) using click.testing.CliRunner.
They cover `crawl`, `static`, `--version`, option files and error handling.
"""
import importlib
import json

import pytest
from click.testing import CliRunner

cli_module = importlib.import_module("markup_scout.cli")
from markup_scout.accountant import ExitStatus
from markup_scout.cli import cli
from markup_scout.logger import configure as configure_logging

from samples import HTML5_VALID


class FakeEngine:
    """Stands in for Engine: records options, returns a canned status."""

    instances: list = []
    status = ExitStatus.SUCCESS

    def __init__(self, options):
        self.options = options
        FakeEngine.instances.append(self)

    def run(self):
        return FakeEngine.status


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging()


@pytest.fixture()
def fake_engine(monkeypatch):
    FakeEngine.instances = []
    FakeEngine.status = ExitStatus.SUCCESS
    monkeypatch.setattr(cli_module, "Engine", FakeEngine)
    return FakeEngine


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "MarkupScout" in result.output


def test_crawl_passes_options(fake_engine):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "crawl",
            "--site", "http://example.com/",
            "--exclude", "/private/",
            "--not-found",
            "--no-color",
            "--verbose",
            "--user-agent", "Agent/1.0",
            "--cookies", "a=1; b=2",
            "--no-ping",
        ],
    )
    assert result.exit_code == 0, result.output
    options = fake_engine.instances[0].options
    assert options.mode == "crawl"
    assert options.site_url == "http://example.com/"
    assert options.exclude == "/private/"
    assert options.not_found is True
    assert options.color is False
    assert options.verbose is True
    assert options.user_agent == "Agent/1.0"
    assert options.cookie_jar() == {"a": "1", "b": "2"}
    assert options.ping_url is None


@pytest.mark.parametrize("status", list(ExitStatus))
def test_exit_code_is_engine_status(fake_engine, status):
    fake_engine.status = status
    result = CliRunner().invoke(cli, ["crawl", "--site", "http://example.com/"])
    assert result.exit_code == int(status)


def test_config_file_is_merged(tmp_path, fake_engine):
    cfg_file = tmp_path / "markup.json"
    cfg_file.write_text(
        json.dumps({"site": "http://example.com/", "not_found": True, "pattern": "docs/*.html"}),
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "static", "--site", "http://other.org/"])
    assert result.exit_code == 0, result.output
    options = fake_engine.instances[0].options
    assert options.mode == "static"
    assert options.site_url == "http://other.org/"
    assert options.not_found is True
    assert options.pattern == "docs/*.html"


def test_invalid_configuration_exits_with_error(fake_engine):
    result = CliRunner().invoke(cli, ["crawl", "--site", "not a url"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert fake_engine.instances == []


def test_static_command_end_to_end(tmp_path):
    (tmp_path / "index.html").write_text(
        HTML5_VALID.replace("<p>fine</p>", '<a href="/missing.html">gone</a>'), encoding="utf-8"
    )
    result = CliRunner().invoke(
        cli,
        [
            "static",
            "--site", "http://example.com/",
            "--pattern", str(tmp_path / "*.html"),
            "--root", str(tmp_path),
            "--not-found",
            "--no-color",
        ],
    )
    assert result.exit_code == ExitStatus.FAILURE_NOT_FOUND
    assert "missing.html linked but not exist" in result.output
    assert "1 visited, 0 failures, 1 not founds, 0 errors" in result.output


def test_log_file_option(tmp_path, fake_engine):
    log_file = tmp_path / "run.log"
    result = CliRunner().invoke(
        cli, ["--log-level", "DEBUG", "--log-file", str(log_file), "crawl", "--site", "http://example.com/"]
    )
    assert result.exit_code == 0, result.output
    assert log_file.exists()
