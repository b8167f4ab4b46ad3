"""Unit tests for the jamort-sinking command."""

import json

import pytest

from jamort.cli import build_parser, main

pytestmark = pytest.mark.usefixtures("restore_logging")

ARGS = ["2024-01-15", "5Y", "annual", "0.05", "1000"]


class TestMain:
    """Test the command entry point."""

    def test_table(self, capsys):
        assert main(ARGS) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == [
            "date",
            "notional",
            "interest",
            "principal",
            "redemption_pct",
            "total",
        ]
        assert len(lines) == 6
        assert lines[1].startswith("2025-01-15")
        assert lines[-1].split()[-1] == "230.97"

    def test_json(self, capsys):
        assert main([*ARGS, "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["maturity_date"] == "2029-01-15"
        assert data["frequency"] == "ANNUAL"
        assert data["notionals"][-1] == 0.0

    def test_options(self, capsys):
        argv = [
            "2024-06-15",
            "2Y",
            "semiannual",
            "0.04",
            "500",
            "--calendar",
            "MONDAY_TO_FRIDAY",
            "--payment-convention",
            "F",
            "--day-count",
            "A365",
        ]
        assert main(argv) == 0
        # 2024-12-15 is a Sunday
        assert capsys.readouterr().out.splitlines()[1].startswith("2024-12-16")

    def test_incompatible_frequency(self, capsys):
        assert main(["2024-01-15", "5Y", "weekly", "0.05", "1000"]) == 2
        assert "incompatible" in capsys.readouterr().err

    def test_zero_coupon(self, capsys):
        assert main(["2024-01-15", "5Y", "annual", "0", "1000"]) == 2
        assert capsys.readouterr().err.startswith("error:")

    def test_invalid_log_level(self, capsys):
        assert main([*ARGS, "--log-level", "LOUD"]) == 2
        assert "Invalid logging configuration" in capsys.readouterr().err


class TestParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(ARGS)
        assert args.day_count == "30360"
        assert args.calendar == "NO_CALENDAR"
        assert args.payment_convention == "UNADJUSTED"
        assert args.coupon == 0.05
        assert args.face == 1000.0
        assert args.json is False

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "jamort-sinking" in capsys.readouterr().out
