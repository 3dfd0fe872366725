"""Desktop notifications through the Qt system tray."""

import os
import subprocess
import sys
from pathlib import Path

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QApplication, QSystemTrayIcon

from .errors import NotificationError


# Exit status of the display helper when the tray refuses the message
TRAY_UNAVAILABLE = 4


def display_available() -> bool:
    """Check whether a graphical session is configured for this process."""
    if sys.platform.startswith(("linux", "freebsd", "openbsd", "netbsd")):
        return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))
    return True


def show_tray_message(title: str, message: str, icon_path: Path, timeout: int) -> None:
    """
    Show a tray balloon and run the Qt event loop until it times out.

    Qt aborts the whole process when it cannot reach the display, so this
    runs in a helper process started by QtTrayNotifier.send().
    """
    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("cli-reminder")

    if not QSystemTrayIcon.isSystemTrayAvailable():
        raise NotificationError("System tray is not available")
    if not QSystemTrayIcon.supportsMessages():
        raise NotificationError("System tray does not support messages")

    icon = QIcon(str(icon_path))
    if icon.isNull():
        print(f"Warning: Could not load icon: {icon_path}")

    tray_icon = QSystemTrayIcon(icon)
    tray_icon.setToolTip(title)
    tray_icon.show()
    tray_icon.showMessage(title, message, icon, timeout)

    QTimer.singleShot(timeout, app.quit)
    app.exec()
    tray_icon.hide()


def helper_command(title: str, message: str, icon_path: Path, timeout: int) -> list:
    """Command line for the display helper process."""
    return [
        sys.executable, "-m", "cli_reminder.notifier",
        title, message, str(icon_path), str(timeout),
    ]


class QtTrayNotifier:
    """
    Shows a reminder as a system tray balloon message.

    The balloon is shown by a short-lived helper process, so a display
    that has gone away is reported as a NotificationError instead of
    taking the waiter down with it.
    """

    # Extra time the helper gets on top of the balloon timeout
    GRACE_PERIOD = 30.0

    def __init__(self, timeout: int = 10000):
        """
        Initialize the notifier.

        Args:
            timeout: How long the message stays up, in milliseconds
        """
        self.timeout = timeout

    def send(self, title: str, message: str, icon_path: Path) -> None:
        """Display a notification, raising NotificationError if it cannot be shown."""
        if not display_available():
            raise NotificationError("No graphical display available")

        try:
            result = subprocess.run(
                helper_command(title, message, icon_path, self.timeout),
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout / 1000 + self.GRACE_PERIOD,
            )
        except subprocess.TimeoutExpired as e:
            raise NotificationError("Notification helper did not finish") from e
        except OSError as e:
            raise NotificationError(f"Failed to start notification helper: {e}") from e

        if result.returncode == TRAY_UNAVAILABLE:
            raise NotificationError(last_line(result.stdout) or "System tray is not available")
        if result.returncode != 0:
            detail = last_line(result.stderr)
            raise NotificationError(
                f"Notification helper failed (status {result.returncode})"
                + (f": {detail}" if detail else "")
            )
        if result.stdout:
            print(result.stdout, end="")


def last_line(text: str) -> str:
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    return lines[-1] if lines else ""


def main(argv=None) -> int:
    """Entry point of the display helper process."""
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 4:
        print("Usage: python -m cli_reminder.notifier <title> <message> <icon> <timeout-ms>")
        return 1

    title, message, icon_path, timeout = argv
    try:
        show_tray_message(title, message, Path(icon_path), int(timeout))
    except NotificationError as e:
        print(e)
        return TRAY_UNAVAILABLE
    return 0


if __name__ == "__main__":
    sys.exit(main())
