# File: tests/test_cli.py
"""Тесты для CLI (`robots_protocol/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `txt`, `tag`, `config`, `--version`, а также обработку ошибок.
"""
import json

from click.testing import CliRunner

from robots_protocol.cli import cli


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "robots-protocol" in result.output


def test_show_default_config():
    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["ignore_allow_directive"] is False
    assert data["match_timeout"] == 5.0


def test_show_config_from_file(sample_files):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(sample_files["config"]), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["custom_fields"] == ["host"]
    assert data["misspelled_fields"] == {"dissalow": "Disallow", "useragent": "User-agent"}


def test_invalid_config_exits_with_error(tmp_path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text("not: a: mapping", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1


def test_txt_with_config(sample_files):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--config", str(sample_files["config"]), "txt", str(sample_files["robots"]), "-p", "/path"],
    )
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "host: example.com" in lines
    assert "Crawl-delay (my-bot): -" in lines
    assert "Crawl-delay (your-bot): 5" in lines
    assert "Crawl-delay (other-bot): 2" in lines
    assert "'/path' disallowed for 'my-bot' (Disallow: /)" in lines
    assert "'/path' allowed for 'other-bot' (no matching rule)" in lines
    assert "Sitemap: http://www.example.com/sitemap.xml" in lines
    assert "Sitemap: http://www.example.com/sitemap2.xml" in lines


def test_txt_reports_errors_and_agents(tmp_path):
    robots = tmp_path / "robots.txt"
    robots.write_text("Disallow: /x\nUser-agent: bot\nDisallow: /private/\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        cli, ["txt", str(robots), "-u", "bot", "-p", "/private/a", "-p", "/public"]
    )
    assert result.exit_code == 0
    assert "Error at 1: Disallow: /x: Rule found before any User-agent field." in result.output
    assert "'/private/a' disallowed for 'bot' (Disallow: /private/)" in result.output
    assert "'/public' allowed for 'bot' (no matching rule)" in result.output


def test_txt_ignore_allow_flag(tmp_path):
    robots = tmp_path / "robots.txt"
    robots.write_text("User-agent: *\nAllow: /open\nDisallow: /\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["txt", str(robots), "-p", "/open", "--ignore-allow"])
    assert result.exit_code == 0
    assert "'/open' disallowed for '*' (Disallow: /)" in result.output


def test_txt_from_stdin():
    runner = CliRunner()
    result = runner.invoke(cli, ["txt", "-", "-u", "bot"], input="User-agent: *\nDisallow: /\n")
    assert result.exit_code == 0
    assert "'/' disallowed for 'bot' (Disallow: /)" in result.output


def test_tag_command(sample_files):
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--config", str(sample_files["config"]), "tag", str(sample_files["tags"])]
    )
    assert result.exit_code == 0
    assert result.output.splitlines() == ["robots: max-snippet: 50"]

    result = runner.invoke(cli, ["tag", str(sample_files["tags"]), "-u", "bot"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["bot: nofollow", "bot: noindex"]


def test_tag_command_filters_directive(sample_files):
    runner = CliRunner()
    result = runner.invoke(cli, ["tag", str(sample_files["tags"]), "-u", "BOT", "-d", "noindex"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["bot: noindex"]


def test_txt_file_with_byte_order_mark(tmp_path):
    robots = tmp_path / "robots.txt"
    robots.write_text("\ufeffUser-agent: *\nDisallow: /private\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["txt", str(robots), "-u", "bot", "-p", "/private"])
    assert result.exit_code == 0
    assert "Error at" not in result.output
    assert "'/private' disallowed for 'bot' (Disallow: /private)" in result.output
