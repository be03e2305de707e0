"""Tests for the command line interface."""

import json

import pytest
import yaml

from dispatchkit.cli.formatters import format_output
from dispatchkit.cli.main import main, parse_args
from dispatchkit.config.manager import get_config_manager


class TestArgumentParsing:
    """Test argument parsing."""

    def test_payment_process_arguments(self):
        args = parse_args(["--format", "table", "payments", "process", "upi", "100", "--currency", "USD"])

        assert args.format == "table"
        assert args.resource == "payments"
        assert args.action == "process"
        assert args.key == "upi"
        assert args.amount == "100"
        assert args.currency == "USD"

    def test_defaults(self):
        args = parse_args(["bonuses", "list"])

        assert args.format == "json"
        assert args.config is None
        assert args.log_level is None


class TestMain:
    """Test command execution end to end through the CLI."""

    def test_process_payment(self, capsys):
        assert main(["payments", "process", "upi", "100"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["method"] == "upi"
        assert output["message"] == "Amount paid via UPI: Rs.100"

    def test_list_payments(self, capsys):
        assert main(["payments", "list"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output == {"family": "payment", "strategies": ["upi", "card", "netbanking", "paypal"]}

    def test_calculate_bonus_yaml(self, capsys):
        assert main(["--format", "yaml", "bonuses", "calculate", "manager", "80000"]) == 0

        output = yaml.safe_load(capsys.readouterr().out)
        assert output["role"] == "manager"
        assert output["bonus"] == "24000.00"

    def test_send_notification_table(self, capsys):
        assert main(["--format", "table", "notifications", "send", "sms", "Disk full"]) == 0

        out = capsys.readouterr().out
        assert "rendered" in out
        assert "[SMS] Sending: Disk full" in out

    def test_unknown_strategy(self, capsys):
        assert main(["payments", "process", "bitcoin", "100"]) == 1

        assert "Error: Strategy 'bitcoin' is not registered" in capsys.readouterr().out

    def test_invalid_payload(self, capsys):
        assert main(["payments", "process", "card", "-5"]) == 1

        assert "Error: Invalid payment payload" in capsys.readouterr().out

    @pytest.mark.parametrize("argv", [
        ["payments", "process", "upi", "1E+30"],
        ["bonuses", "calculate", "developer", "1E+30"],
    ])
    def test_huge_amount_reported_as_error(self, argv, capsys):
        assert main(argv) == 1

        assert "Error: Invalid" in capsys.readouterr().out

    def test_quiet_suppresses_error_details(self, capsys):
        assert main(["--quiet", "payments", "process", "bitcoin", "1"]) == 1

        assert capsys.readouterr().out == ""

    def test_missing_resource(self, capsys):
        assert main([]) == 1

        assert "No resource specified" in capsys.readouterr().out

    def test_missing_action(self, capsys):
        assert main(["payments"]) == 1

        assert "No action specified for payments" in capsys.readouterr().out

    def test_log_level_override_applied_to_config(self, capsys):
        assert main(["--log-level", "WARNING", "payments", "list"]) == 0

        assert get_config_manager().app_config.logging.level == "WARNING"

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "config.yaml"
        path.write_text("payment:\n  currency: USD\n")

        assert main(["--config", str(path), "payments", "process", "card", "7"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["currency"] == "USD"
        assert output["message"] == "Amount paid via Credit Card: USD 7"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "1.0.0" in capsys.readouterr().out


class TestFormatters:
    """Test output formatting."""

    def test_json_default(self):
        assert json.loads(format_output({"a": 1}, "json")) == {"a": 1}

    def test_strategies_table(self):
        out = format_output({"family": "bonus", "strategies": ["developer", "hr"]}, "table")

        assert "bonus strategies" in out
        assert "developer" in out

    def test_empty_strategies_table(self):
        assert format_output({"family": "bonus", "strategies": []}, "table") == "No bonus strategies registered."

    def test_non_dict_table_falls_back_to_json(self):
        assert json.loads(format_output([1, 2], "table")) == [1, 2]
