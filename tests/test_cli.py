"""
Tests for the geolog CLI with a fake IP resolver.
"""

import pytest
from click.testing import CliRunner

from geolog import cli as cli_module
from geolog.services.ip_lookup import IPLocation
from geolog.shared.exceptions import InputError


LOG = """\
2015/03
  alice@example.com
       100 198.51.100.10
         1 203.0.113.7
  bob@example.com
        12 192.0.2.5
         3 10.9.9.9
"""

TABLE = {
    "198.51.100.10": IPLocation(37.77, -122.4, "San Francisco, United States"),
    "203.0.113.7": IPLocation(48.85, 2.35, "Paris, France"),
    "192.0.2.5": IPLocation(52.52, 13.40, "Berlin, Germany"),
}


class FakeResolver:

    def __init__(self, db_path):
        self.db_path = db_path

    def resolve(self, ip):
        if ip not in TABLE:
            raise InputError(f"ip {ip} not found")
        return TABLE[ip]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return None


@pytest.fixture
def logfile(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_module, "IPResolver", FakeResolver)
    path = tmp_path / "logfile.txt"
    path.write_text(LOG, encoding="utf-8")
    return path


class TestAnalyzeCommand:

    def test_reports_paris(self, logfile):
        result = CliRunner().invoke(cli_module.cli, ["analyze", "-i", str(logfile), "-d", "5000"])

        assert result.exit_code == 0, result.output
        assert "alice@example.com connected from Paris, France 1 times" in result.output
        assert "San Francisco, United States 100 times" not in result.output

    def test_large_distance_no_alert(self, logfile):
        result = CliRunner().invoke(cli_module.cli, ["analyze", "-i", str(logfile), "-d", "20000"])
        assert result.exit_code == 0
        assert "connected from" not in result.output

    def test_json_output(self, logfile, tmp_path):
        out_dir = tmp_path / "reports"
        result = CliRunner().invoke(cli_module.cli, [
            "analyze", "-i", str(logfile), "--output", "json", "--output-dir", str(out_dir),
        ])
        assert result.exit_code == 0, result.output
        assert len(list(out_dir.glob("geolog_*.json"))) == 1

    def test_missing_log_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(cli_module, "IPResolver", FakeResolver)
        result = CliRunner().invoke(cli_module.cli, ["analyze", "-i", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1

    def test_bad_distance(self, logfile):
        result = CliRunner().invoke(cli_module.cli, ["analyze", "-i", str(logfile), "-d", "-5"])
        assert result.exit_code != 0

    def test_alerts_printed_once_before_summary(self, logfile):
        result = CliRunner().invoke(cli_module.cli, ["analyze", "-i", str(logfile)])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        alert_idx = [i for i, line in enumerate(lines) if "connected from Paris" in line]
        summary_idx = [i for i, line in enumerate(lines) if line.startswith("Alerts:")]
        assert len(alert_idx) == 1
        assert alert_idx[0] < summary_idx[0]

    def test_json_only_prints_no_alert_lines(self, logfile, tmp_path):
        result = CliRunner().invoke(cli_module.cli, [
            "analyze", "-i", str(logfile), "--output", "json", "--output-dir", str(tmp_path),
        ])
        assert result.exit_code == 0, result.output
        assert "connected from" not in result.output
