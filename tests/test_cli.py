"""
CLI Tests
"""

import json

import pytest
from click.testing import CliRunner

from gauge.cli import EXIT_DIGEST_FAILURE, cli
from gauge.core.engine import EMPTY_WARNING, GaugeEngine
from gauge.core.errors import DigestUnavailableError


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    """Tests for the click command group."""

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("analyze", "estimate", "breach", "breakdown"):
            assert command in result.output

    def test_estimate_json(self, runner):
        result = runner.invoke(cli, ["-o", "json", "estimate", "password"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["charset_size"] == 26
        assert payload["heuristics"][0]["name"] == "common_password"
        assert payload["crack_times_display"]["offlineFast"] == "instant"

    def test_estimate_rejects_empty(self, runner):
        result = runner.invoke(cli, ["-q", "estimate", ""])
        assert result.exit_code != 0

    def test_analyze_json_without_breach_check(self, runner):
        result = runner.invoke(
            cli, ["-o", "json", "analyze", "password", "--no-breach-check"]
        )

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert report["tool"] == "gauge"
        assert report["result"]["score"] == 0
        assert report["result"]["isPwned"] is None
        assert report["result"]["pwnedCount"] is None
        assert "password" not in json.dumps(report["result"]["crackTimesSeconds"])

    def test_analyze_empty_password(self, runner):
        result = runner.invoke(cli, ["-o", "json", "analyze", ""])

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert report["result"]["warning"] == EMPTY_WARNING
        assert report["result"]["breachStatus"] == "skipped"

    def test_analyze_prompts_when_password_omitted(self, runner):
        result = runner.invoke(
            cli, ["-o", "json", "analyze", "--no-breach-check"], input="password\n"
        )
        assert result.exit_code == 0, result.output
        assert '"score": 0' in result.stdout

    def test_json_written_to_file(self, runner, tmp_path):
        target = tmp_path / "out" / "report.json"
        result = runner.invoke(
            cli,
            ["-o", "json", "-f", str(target), "analyze", "hello", "--no-breach-check"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(target.read_text(encoding="utf-8"))["result"]["score"] >= 0

    def test_console_output(self, runner):
        result = runner.invoke(cli, ["-q", "analyze", "password", "--no-breach-check"])

        assert result.exit_code == 0, result.output
        assert "Crack Time Estimates" in result.output
        assert "Breach check skipped" in result.output

    def test_digest_failure_exit_status(self, runner, monkeypatch):
        async def broken(self, password):
            raise DigestUnavailableError("sha1")

        monkeypatch.setattr(GaugeEngine, "check_breach", broken)
        result = runner.invoke(cli, ["-q", "breach", "password"])

        assert result.exit_code == EXIT_DIGEST_FAILURE
        assert "Digest algorithm unavailable" in result.output

    def test_breakdown(self, runner):
        result = runner.invoke(cli, ["breakdown", "90061"])
        assert result.exit_code == 0
        assert result.output.strip() == "1 day, 1 hour, 1 minute, 1 second"

    def test_breakdown_rejects_infinity(self, runner):
        result = runner.invoke(cli, ["breakdown", "inf"])

        assert result.exit_code == 2
        assert "Invalid value" in result.output
        assert "Traceback" not in result.output

    def test_banner_shown_for_console_analysis(self, runner):
        result = runner.invoke(cli, ["analyze", "password", "--no-breach-check"])

        assert result.exit_code == 0, result.output
        assert "Password Strength & Breach Exposure" in result.output

    def test_config_file(self, runner, tmp_path):
        path = tmp_path / "gauge.toml"
        path.write_text("[gauge]\nbreach_check_enabled = false\n", encoding="utf-8")

        result = runner.invoke(cli, ["-c", str(path), "-o", "json", "analyze", "hello"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["result"]["breachStatus"] == "skipped"
