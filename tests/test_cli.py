# tests/test_cli.py
"""Tests for the command-line interface."""

import json

import pytest

from seo_analyzer import cli
from seo_analyzer.analyzer import SEOAnalyzer
from seo_analyzer.database import InMemoryDatabase

from conftest import raise_connect_error

PAGE = '<html lang="en"><head><title>CLI Test Page</title></head><body></body></html>'


@pytest.fixture
def cli_env(monkeypatch, site):
    """Route the CLI through the fake site and a shared in-memory store."""
    site.add_page("https://example.com/", PAGE)
    db = InMemoryDatabase()
    monkeypatch.setattr(cli, "SEOAnalyzer", lambda config: SEOAnalyzer(config, transport=site.transport))
    monkeypatch.setattr(cli, "get_db_client", lambda: db)
    return db


class TestCli:
    """Test suite for the CLI commands."""

    def test_analyze_json(self, cli_env, capsys):
        cli.main(["analyze", "example.com", "--output", "json"])

        data = json.loads(capsys.readouterr().out)
        assert data["url"] == "https://example.com"
        assert data["metaTags"]["title"] == "CLI Test Page"
        assert 0 <= data["overallScore"] <= 100

    def test_analyze_text(self, cli_env, capsys):
        cli.main(["analyze", "https://example.com/"])

        out = capsys.readouterr().out
        assert "SEO Analysis for: https://example.com/" in out
        assert "Overall Score:" in out
        assert "Recommendations:" in out

    def test_analyze_to_file(self, cli_env, tmp_path, capsys):
        target = tmp_path / "result.json"

        cli.main(["analyze", "https://example.com/", "-o", "json", "-f", str(target)])

        assert json.loads(target.read_text())["url"] == "https://example.com/"
        assert str(target) in capsys.readouterr().out

    def test_save_show_history(self, cli_env, capsys):
        cli.main(["analyze", "https://example.com/", "--save"])
        assert "Saved as analysis #1" in capsys.readouterr().out

        cli.main(["show", "1", "-o", "json"])
        assert json.loads(capsys.readouterr().out)["url"] == "https://example.com/"

        cli.main(["history", "https://example.com/"])
        out = capsys.readouterr().out
        assert "Analysis history for: https://example.com/" in out
        assert "score" in out

    def test_show_unknown_id(self, cli_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["show", "42"])

        assert exc_info.value.code == 1
        assert "No analysis found" in capsys.readouterr().err

    def test_history_empty(self, cli_env, capsys):
        cli.main(["history", "https://nowhere.example/"])

        assert "No stored analyses" in capsys.readouterr().out

    def test_fetch_failure_exits(self, cli_env, site, capsys):
        site.add_handler("https://down.example/", raise_connect_error)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["analyze", "https://down.example/"])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_url_exits(self, cli_env, capsys):
        with pytest.raises(SystemExit):
            cli.main(["analyze", "ftp://example.com/"])

        assert "Invalid URL" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys):
        cli.main([])

        assert "usage" in capsys.readouterr().out.lower()
