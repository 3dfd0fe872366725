"""Reminder runner: resolve the target time, then launch a waiter or notify."""

import os
import signal
import threading
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Callable, List, Mapping, Optional

from .config import ReminderConfig
from .errors import NotificationError, SpawnError, TimeParseError
from .scheduler import MAX_DELAY, PendingReminder
from .spawner import waiter_command, waiter_environment
from .timeparse import TimeParser


class ExitCode(IntEnum):
    """Process exit status for each way an invocation can end."""
    SUCCESS = 0
    USAGE = 1  # also used for parser errors
    UNPARSEABLE = 2
    PAST = 3
    NOTIFY_FAILED = 4
    SPAWN_FAILED = 5


def round_duration(duration: timedelta) -> timedelta:
    """Round a duration to the nearest whole second."""
    return timedelta(seconds=round(duration.total_seconds()))


class ReminderRunner:
    """
    Runs one invocation of the reminder.

    The first process to run is the launcher. It checks the input and
    starts a detached copy of the program with the role marker set in
    its environment. That copy is the waiter. It sleeps until the target
    time and shows the notification.

    Collaborators:
    - parser: .parse(expression, now) -> Optional[datetime]
    - notifier: .send(title, message, icon_path)
    - spawner: .spawn(argv, env) -> pid
    """

    def __init__(
        self,
        config: ReminderConfig,
        parser: TimeParser,
        notifier,
        spawner,
        environ: Optional[Mapping[str, str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        prog: str = "cli-reminder",
    ):
        self.config = config
        self.parser = parser
        self.notifier = notifier
        self.spawner = spawner
        self.environ = os.environ if environ is None else environ
        self.clock = clock or datetime.now
        self.prog = prog
        self.pending: Optional[PendingReminder] = None

    def is_waiter(self) -> bool:
        """Check whether this process was started as the waiter."""
        return self.environ.get(self.config.marker_name) == self.config.marker_value

    def run(self, args: List[str]) -> int:
        """
        Run the reminder for the arguments after the program name.

        Returns:
            An ExitCode value
        """
        if len(args) < 2:
            print(f"Usage: {self.prog} <time> <text message>")
            return ExitCode.USAGE

        expression = args[0]
        message = " ".join(args[1:])
        now = self.clock()

        try:
            target = self.parser.parse(expression, now)
        except TimeParseError as e:
            print(f"Error: {e}")
            return ExitCode.USAGE

        if target is None:
            print("Unable to parse time!")
            return ExitCode.UNPARSEABLE

        if target <= now:
            print("Set a future time!")
            return ExitCode.PAST

        wait = target - now
        if wait > MAX_DELAY:
            print("Unable to wait that long!")
            return ExitCode.UNPARSEABLE

        if self.is_waiter():
            return self._wait_and_notify(message, wait)
        return self._launch(args, target, wait)

    def _launch(self, args: List[str], target: datetime, wait: timedelta) -> int:
        """Start the waiter process and report the pending reminder."""
        env = waiter_environment(
            self.config.marker_name,
            self.config.marker_value,
            base=dict(self.environ),
        )
        try:
            pid = self.spawner.spawn(waiter_command(args), env)
        except SpawnError as e:
            print(e)
            return ExitCode.SPAWN_FAILED

        print(f"Reminder set! {round_duration(wait)} "
              f"(at {target.strftime('%H:%M:%S')}, pid {pid})")
        return ExitCode.SUCCESS

    def _wait_and_notify(self, message: str, wait: timedelta) -> int:
        """Block until the target time, then show the notification."""
        self.pending = PendingReminder(wait)
        restore = self._install_cancel_handlers()
        try:
            self.pending.start()
            due = self.pending.wait()
        finally:
            restore()

        if not due:
            print("Reminder cancelled")
            return ExitCode.SUCCESS

        try:
            self.notifier.send(self.config.title, message, self.config.icon_path)
        except NotificationError as e:
            print(f"Error: {e}")
            return ExitCode.NOTIFY_FAILED

        return ExitCode.SUCCESS

    def _install_cancel_handlers(self) -> Callable[[], None]:
        """Cancel the pending reminder on SIGTERM/SIGINT; returns a restore function."""
        if threading.current_thread() is not threading.main_thread():
            return lambda: None

        def cancel(signum, frame):
            if self.pending is not None:
                self.pending.cancel()

        previous = {}
        for signum in (signal.SIGTERM, signal.SIGINT):
            previous[signum] = signal.signal(signum, cancel)

        def restore():
            for signum, handler in previous.items():
                # None means the handler was not installed from Python
                signal.signal(signum, handler if handler is not None else signal.SIG_DFL)

        return restore
