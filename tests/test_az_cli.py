"""Tests for azlogin.az_cli — az resolution and process execution.

All subprocess and shutil.which calls are mocked — no real tool invocations.
"""

from unittest.mock import MagicMock, patch

import pytest

from azlogin.az_cli import AzCli, find_az, redact_args, report_stderr
from azlogin.errors import CommandFailure, ToolNotFound


class TestFindAz:

    @patch("shutil.which", return_value="/usr/bin/az")
    def test_found(self, mock_which):
        assert find_az() == "/usr/bin/az"
        mock_which.assert_called_once_with("az")

    @patch("shutil.which", return_value=None)
    def test_missing_raises(self, _mock_which):
        with pytest.raises(ToolNotFound, match="not found in the runner"):
            find_az()


class TestAzCliRun:

    @patch("subprocess.run")
    def test_silent_captures_output(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="azure-cli 2.61.0", stderr="")

        result = AzCli("/usr/bin/az").run(["--version"], silent=True)

        assert result.stdout == "azure-cli 2.61.0"
        mock_run.assert_called_once_with(
            ["/usr/bin/az", "--version"], capture_output=True, text=True, check=False
        )

    @patch("subprocess.run")
    def test_streaming_does_not_capture(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=None, stderr=None)

        AzCli("/usr/bin/az").run(["cloud", "set", "-n", "azurecloud"])

        mock_run.assert_called_once_with(
            ["/usr/bin/az", "cloud", "set", "-n", "azurecloud"], text=True, check=False
        )

    @patch("subprocess.run")
    def test_nonzero_exit_raises(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2, stdout="", stderr="ERROR: bad")

        with pytest.raises(CommandFailure) as exc_info:
            AzCli("/usr/bin/az").run(["account", "set", "--subscription", "x"], silent=True)

        err = exc_info.value
        assert err.returncode == 2
        assert err.stderr == "ERROR: bad"
        assert err.cmd == ["/usr/bin/az", "account", "set", "--subscription", "x"]
        assert str(err) == "The process '/usr/bin/az' failed with exit code 2"

    @patch("subprocess.run")
    def test_streaming_failure_has_empty_output(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout=None, stderr=None)

        with pytest.raises(CommandFailure) as exc_info:
            AzCli("/usr/bin/az").run(["cloud", "set", "-n", "nowhere"])

        assert exc_info.value.stdout == ""
        assert exc_info.value.stderr == ""

    @patch("subprocess.run")
    def test_failure_message_omits_password(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="")

        with pytest.raises(CommandFailure) as exc_info:
            AzCli("/usr/bin/az").run(["login", "--password=hunter2"], silent=True)

        assert "hunter2" not in str(exc_info.value)

    @patch("subprocess.run")
    def test_debug_log_redacts_secrets(self, mock_run, caplog):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")

        with caplog.at_level("DEBUG", logger="azlogin.az_cli"):
            AzCli("/usr/bin/az").run(["login", "--federated-token", "tok-abc"], silent=True)

        assert "tok-abc" not in caplog.text
        assert "--federated-token ***" in caplog.text

    @patch("subprocess.run")
    def test_silent_reports_stderr(self, mock_run, caplog):
        mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="ERROR: AADSTS700016 app not found")

        with caplog.at_level("ERROR", logger="azlogin.az_cli"):
            with pytest.raises(CommandFailure):
                AzCli("/usr/bin/az").run(["login"], silent=True)

        assert "AADSTS700016 app not found" in caplog.text


class TestRedactArgs:

    def test_equals_form(self):
        assert redact_args(["login", "--password=abc"]) == ["login", "--password=***"]

    def test_separate_value(self):
        assert redact_args(["--federated-token", "abc", "--tenant", "t"]) == [
            "--federated-token", "***", "--tenant", "t",
        ]

    def test_untouched(self):
        args = ["login", "--identity", "--username", "client"]
        assert redact_args(args) == args


class TestReportStderr:

    def test_warning_dropped(self, caplog):
        with caplog.at_level("DEBUG", logger="azlogin.az_cli"):
            report_stderr("WARNING: The default kind for created storage account will change")
        assert caplog.records == []

    def test_blank_dropped(self, caplog):
        with caplog.at_level("DEBUG", logger="azlogin.az_cli"):
            report_stderr("   \n")
        assert caplog.records == []

    def test_error_prefix_removed(self, caplog):
        with caplog.at_level("ERROR", logger="azlogin.az_cli"):
            report_stderr("ERROR: Subscription not found")
        assert [r.getMessage() for r in caplog.records] == ["Subscription not found"]

    def test_other_output_logged(self, caplog):
        with caplog.at_level("ERROR", logger="azlogin.az_cli"):
            report_stderr("Please run 'az login' to setup account.")
        assert [r.getMessage() for r in caplog.records] == ["Please run 'az login' to setup account."]
