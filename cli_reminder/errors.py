"""Exceptions raised by the reminder's collaborators."""


class ReminderError(Exception):
    """Base class for errors that end a reminder invocation."""


class TimeParseError(ReminderError):
    """The parser rejected the time expression."""


class NotificationError(ReminderError):
    """The desktop notification could not be shown."""


class SpawnError(ReminderError):
    """The background waiter process could not be started."""
