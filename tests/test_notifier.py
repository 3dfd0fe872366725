"""Unit tests for the notifier module."""

import subprocess
import sys
import pytest
from pathlib import Path
from unittest.mock import patch

pytest.importorskip("PyQt6.QtWidgets")

from cli_reminder import notifier
from cli_reminder.errors import NotificationError
from cli_reminder.notifier import (
    TRAY_UNAVAILABLE,
    QtTrayNotifier,
    display_available,
    helper_command,
    main,
)


class TestDisplayAvailable:
    """Tests for display_available function."""

    def test_no_display_on_linux(self, monkeypatch):
        monkeypatch.setattr(notifier.sys, "platform", "linux")
        monkeypatch.delenv("DISPLAY", raising=False)
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)

        assert not display_available()

    def test_x11_display(self, monkeypatch):
        monkeypatch.setattr(notifier.sys, "platform", "linux")
        monkeypatch.setenv("DISPLAY", ":0")

        assert display_available()

    def test_wayland_display(self, monkeypatch):
        monkeypatch.setattr(notifier.sys, "platform", "linux")
        monkeypatch.delenv("DISPLAY", raising=False)
        monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")

        assert display_available()

    def test_other_platforms(self, monkeypatch):
        monkeypatch.setattr(notifier.sys, "platform", "darwin")
        monkeypatch.delenv("DISPLAY", raising=False)

        assert display_available()


class TestQtTrayNotifier:
    """Tests for QtTrayNotifier class."""

    def test_default_timeout(self):
        assert QtTrayNotifier().timeout == 10000
        assert QtTrayNotifier(timeout=500).timeout == 500

    def test_send_without_display(self, monkeypatch):
        """Test that sending fails cleanly when there is no display."""
        monkeypatch.setattr(notifier.sys, "platform", "linux")
        monkeypatch.delenv("DISPLAY", raising=False)
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)

        with pytest.raises(NotificationError, match="No graphical display"):
            QtTrayNotifier().send("Reminder", "stand-up", Path("icon.png"))

    def _send_with_helper_result(self, monkeypatch, returncode, stdout="", stderr=""):
        monkeypatch.setenv("DISPLAY", ":0")
        completed = subprocess.CompletedProcess([], returncode, stdout, stderr)
        with patch("cli_reminder.notifier.subprocess.run", return_value=completed) as run:
            QtTrayNotifier(timeout=500).send("Reminder", "stand-up", Path("icon.png"))
        return run

    def test_send_runs_helper(self, monkeypatch):
        """Test that the balloon is shown by the helper process."""
        run = self._send_with_helper_result(monkeypatch, 0)

        args, kwargs = run.call_args
        assert args[0] == helper_command("Reminder", "stand-up", Path("icon.png"), 500)
        assert kwargs["timeout"] == pytest.approx(0.5 + QtTrayNotifier.GRACE_PERIOD)

    def test_send_helper_aborted(self, monkeypatch):
        """Test that a helper killed by Qt is reported as a notification failure."""
        with pytest.raises(NotificationError, match=r"status -6.*platform plugin"):
            self._send_with_helper_result(
                monkeypatch, -6,
                stderr="qt.qpa.xcb: could not connect to display :93\n"
                       "This application failed to start because no Qt platform plugin could be initialized.\n",
            )

    def test_send_tray_unavailable(self, monkeypatch):
        """Test that the helper's tray error is passed on."""
        with pytest.raises(NotificationError, match="System tray is not available"):
            self._send_with_helper_result(
                monkeypatch, TRAY_UNAVAILABLE, stdout="System tray is not available\n"
            )

    def test_send_helper_timeout(self, monkeypatch):
        """Test that a hung helper is reported as a notification failure."""
        monkeypatch.setenv("DISPLAY", ":0")
        with patch("cli_reminder.notifier.subprocess.run",
                   side_effect=subprocess.TimeoutExpired("helper", 1)):
            with pytest.raises(NotificationError, match="did not finish"):
                QtTrayNotifier().send("Reminder", "x", Path("icon.png"))

    @pytest.mark.skipif(not sys.platform.startswith("linux"), reason="X11 display check")
    def test_send_to_unreachable_display(self, monkeypatch):
        """Test that a display nobody answers on fails cleanly instead of aborting."""
        monkeypatch.setenv("DISPLAY", ":93")
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)

        with pytest.raises(NotificationError):
            QtTrayNotifier(timeout=100).send("Reminder", "stand-up", Path("icon.png"))


class TestHelperMain:
    """Tests for the display helper entry point."""

    def test_wrong_argument_count(self, capsys):
        assert main(["only", "two"]) == 1
        assert "Usage:" in capsys.readouterr().out

    def test_tray_error_status(self, capsys):
        """Test that a tray error exits with its own status."""
        with patch("cli_reminder.notifier.show_tray_message",
                   side_effect=NotificationError("System tray is not available")):
            assert main(["Reminder", "x", "icon.png", "100"]) == TRAY_UNAVAILABLE
        assert "System tray is not available" in capsys.readouterr().out
