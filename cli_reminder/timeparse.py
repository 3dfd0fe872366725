"""Natural-language time parsing."""

from datetime import datetime
from typing import List, Optional, Protocol

import dateparser

from .errors import TimeParseError


def to_reference_zone(moment: datetime, now: datetime) -> datetime:
    """Express a parsed instant in the same kind of time as the reference instant."""
    if moment.tzinfo is None:
        return moment
    if now.tzinfo is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(now.tzinfo)


class TimeParser(Protocol):
    def parse(self, expression: str, now: datetime) -> Optional[datetime]:
        ...


class DateparserTimeParser:
    """
    Resolves expressions such as "5pm", "14:00" or "in 10 minutes".

    Expressions are resolved relative to the instant passed in, so the
    same expression and instant always give the same result. Missing
    date parts are taken from that instant rather than from the clock.
    """

    def __init__(self, languages: Optional[List[str]] = None):
        self.languages = list(languages) if languages else ["en"]

    def parse(self, expression: str, now: datetime) -> Optional[datetime]:
        """
        Resolve an expression against a reference instant.

        Args:
            expression: The time expression typed by the user
            now: Reference instant for relative expressions

        Returns:
            The resolved instant, or None if nothing could be recognised

        Raises:
            TimeParseError: If the parser itself fails on the input
        """
        if not expression.strip():
            raise TimeParseError("empty time expression")

        # Always parse zone-aware so an explicit zone such as "14:00 UTC" is
        # converted rather than dropped; zone-less input is taken as local.
        settings = {
            "RELATIVE_BASE": now,
            "RETURN_AS_TIMEZONE_AWARE": True,
        }
        try:
            result = dateparser.parse(
                expression,
                languages=self.languages,
                settings=settings,
            )
        except (ValueError, TypeError, OverflowError) as e:
            raise TimeParseError(str(e)) from e

        if result is None:
            return None
        return to_reference_zone(result, now)
