"""Tests for external command execution."""

import subprocess
import sys
from unittest.mock import MagicMock, patch

from sysreport.hardware.commands import (
    EXIT_CANNOT_EXECUTE,
    EXIT_NOT_FOUND,
    EXIT_TIMEOUT,
    CommandResult,
    SubprocessRunner,
)


class TestCommandResult:
    def test_ok(self):
        assert CommandResult(0, "out").ok
        assert not CommandResult(1, "").ok


class TestSubprocessRunner:
    def test_missing_executable(self):
        runner = SubprocessRunner()
        result = runner.run(["definitely-not-a-real-binary-xyz", "--version"])
        assert result.returncode == EXIT_NOT_FOUND
        assert result.stdout == ""

    @patch("sysreport.hardware.commands.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="ASUSTeK\n", stderr="")
        result = SubprocessRunner(timeout=2).run(["powershell", "-Command", "x"])
        assert result.ok
        assert result.stdout == "ASUSTeK\n"
        _, kwargs = mock_run.call_args
        assert kwargs["timeout"] == 2
        assert kwargs["capture_output"] is True

    @patch("sysreport.hardware.commands.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="dmidecode", timeout=5)
        result = SubprocessRunner().run(["dmidecode"])
        assert result.returncode == EXIT_TIMEOUT
        assert "timed out" in result.stderr

    @patch("sysreport.hardware.commands.subprocess.run")
    def test_permission_error(self, mock_run):
        mock_run.side_effect = PermissionError(13, "Permission denied")
        result = SubprocessRunner().run(["dmidecode"])
        assert result.returncode == EXIT_CANNOT_EXECUTE

    @patch("sysreport.hardware.commands.subprocess.run")
    def test_nonzero_exit_passed_through(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout=None, stderr="denied")
        result = SubprocessRunner().run(["dmidecode"])
        assert result.returncode == 1
        assert result.stdout == ""
        assert result.stderr == "denied"

    def test_non_utf8_output_decoded_lossily(self):
        script = "import sys; sys.stdout.buffer.write(b'ASUSTeK Caf\\xe9\\n')"
        result = SubprocessRunner().run([sys.executable, "-c", script])
        assert result.ok
        assert result.stdout.startswith("ASUSTeK Caf")

    @patch("sysreport.hardware.commands.subprocess.run")
    def test_decoding_errors_replaced(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="x", stderr="")
        SubprocessRunner().run(["dmidecode"])
        _, kwargs = mock_run.call_args
        assert kwargs["errors"] == "replace"
