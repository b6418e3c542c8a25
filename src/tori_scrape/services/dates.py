"""Normalization of tori.fi listing timestamps.

The site shows when a listing was posted in one of three forms, always in
the site's local time (Europe/Helsinki):

- ``tänään 12:34`` (today)
- ``eilen 12:34`` (yesterday)
- ``15 huh 12:45`` (day, abbreviated month, no year)

None of them can be turned into an instant without knowing when the page
was fetched, so :class:`TimestampNormalizer` is bound to a reference
instant. Nothing here reads the system clock or the host timezone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, Optional, Tuple, Union

from dateutil import tz

from tori_scrape.errors import TimestampError
from tori_scrape.utils.text import reformat_ws

SITE_TIMEZONE = "Europe/Helsinki"

_UTC = timezone.utc


@dataclass(frozen=True)
class Locale:
    """Words the site uses for relative days and month abbreviations."""

    code: str
    today: Tuple[str, ...]
    yesterday: Tuple[str, ...]
    # January first
    months: Tuple[str, ...]

    def month_number(self, abbrev: str) -> Optional[int]:
        try:
            return self.months.index(abbrev) + 1
        except ValueError:
            return None


FINNISH = Locale(
    code="fi",
    today=("tänään",),
    yesterday=("eilen",),
    months=("tam", "hel", "maa", "huh", "tou", "kes", "hei", "elo", "syy", "lok", "mar", "jou"),
)
SWEDISH = Locale(
    code="sv",
    today=("idag", "i dag"),
    yesterday=("igår", "i går"),
    months=("jan", "feb", "mar", "apr", "maj", "jun", "jul", "aug", "sep", "okt", "nov", "dec"),
)
ENGLISH = Locale(
    code="en",
    today=("today",),
    yesterday=("yesterday",),
    months=("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"),
)

LOCALES: Dict[str, Locale] = {loc.code: loc for loc in (FINNISH, SWEDISH, ENGLISH)}

_HHMM = r"(\d{1,2}):(\d{2})"
ABS_TIME = re.compile(r"(\d{1,2}) ([^\W\d_]+) " + _HHMM)


def get_locale(code: str) -> Locale:
    try:
        return LOCALES[code.lower()]
    except KeyError:
        raise ValueError(
            f"unknown locale {code!r}, expected one of {sorted(LOCALES)}"
        ) from None


def resolve_timezone(zone: Union[str, tzinfo]) -> tzinfo:
    """Resolve an IANA zone name; never falls back to the host zone."""
    if isinstance(zone, tzinfo):
        return zone
    # gettz("") would silently return the local zone
    resolved = tz.gettz(zone) if zone else None
    if resolved is None:
        raise ValueError(f"unknown timezone {zone!r}")
    return resolved


def _words(words: Tuple[str, ...]) -> str:
    return "|".join(re.escape(w) for w in words)


class TimestampNormalizer:
    """Turn the site's timestamp text into UTC instants relative to ``reference``."""

    def __init__(
        self,
        reference: datetime,
        timezone: Union[str, tzinfo] = SITE_TIMEZONE,
        locale: Locale = FINNISH,
    ) -> None:
        if reference.tzinfo is None or reference.utcoffset() is None:
            raise ValueError("reference instant must be timezone-aware")
        self.reference = reference.astimezone(_UTC)
        self.tz = resolve_timezone(timezone)
        self.zone_name = timezone if isinstance(timezone, str) else str(timezone)
        self.locale = locale
        self._local = self.reference.astimezone(self.tz)
        self._today_re = re.compile(rf"({_words(locale.today)}) {_HHMM}")
        self._yesterday_re = re.compile(rf"({_words(locale.yesterday)}) {_HHMM}")

    def normalize(self, text: str) -> datetime:
        """Parse ``text`` into a UTC datetime or raise :class:`TimestampError`.

        Forms are tried in order: today, yesterday, ``DD kk HH:MM``.
        """
        clean = reformat_ws(text).lower()

        m = self._today_re.fullmatch(clean)
        if m:
            return self._relative(text, self._local.date(), m.group(2), m.group(3))
        m = self._yesterday_re.fullmatch(clean)
        if m:
            day = self._local.date() - timedelta(days=1)
            return self._relative(text, day, m.group(2), m.group(3))
        m = ABS_TIME.fullmatch(clean)
        if m:
            return self._absolute(text, *m.groups())
        raise TimestampError(
            "unrecognized", text, f"unrecognized timestamp {text!r}"
        )

    __call__ = normalize

    def _relative(self, text: str, day: date, hh: str, mm: str) -> datetime:
        hour, minute = self._parse_hhmm(text, hh, mm)
        return self._localize(text, day, hour, minute)

    def _absolute(self, text: str, day_s: str, month_s: str, hh: str, mm: str) -> datetime:
        day = int(day_s)
        if not 1 <= day <= 31:
            raise TimestampError(
                "invalid-day", text, f"day {day_s!r} out of range in timestamp {text!r}"
            )
        month = self.locale.month_number(month_s)
        if month is None:
            raise TimestampError(
                "invalid-month",
                text,
                f"unknown month {month_s!r} in timestamp {text!r}",
            )
        hour, minute = self._parse_hhmm(text, hh, mm)

        # No year on the page: assume the most recent occurrence not after
        # the reference, i.e. listings are never more than a year old.
        year = self._local.year
        posted: Optional[datetime] = None
        try:
            posted = self._localize(text, date(year, month, day), hour, minute)
        except ValueError:
            # no such day this year (29 February)
            pass
        except TimestampError:
            # skipped by this year's spring jump; wall clock order is
            # unambiguous around a gap, so compare naive local times
            if datetime(year, month, day, hour, minute) < self._local.replace(tzinfo=None):
                raise
        if posted is None or posted > self.reference:
            try:
                candidate = date(year - 1, month, day)
            except ValueError:
                raise TimestampError(
                    "invalid-day",
                    text,
                    f"day {day_s!r} out of range for month {month_s!r} in timestamp {text!r}",
                ) from None
            posted = self._localize(text, candidate, hour, minute)
        return posted

    def _parse_hhmm(self, text: str, hh: str, mm: str) -> Tuple[int, int]:
        hour, minute = int(hh), int(mm)
        if hour > 23 or minute > 59:
            raise TimestampError(
                "invalid-time",
                text,
                f"time '{hh}:{mm}' out of range in timestamp {text!r}",
            )
        return hour, minute

    def _localize(self, text: str, day: date, hour: int, minute: int) -> datetime:
        local = datetime(day.year, day.month, day.day, hour, minute, tzinfo=self.tz)
        if not tz.datetime_exists(local):
            raise TimestampError(
                "nonexistent-time",
                text,
                f"local time {local:%Y-%m-%d %H:%M} does not exist in {self.zone_name} "
                f"(timestamp {text!r})",
            )
        # ambiguous wall times keep fold=0, the earlier instant
        return local.astimezone(_UTC)


def normalize_timestamp(
    text: str,
    reference: datetime,
    timezone: Union[str, tzinfo] = SITE_TIMEZONE,
    locale: Locale = FINNISH,
) -> datetime:
    """One-off convenience wrapper around :class:`TimestampNormalizer`."""
    return TimestampNormalizer(reference, timezone, locale).normalize(text)
