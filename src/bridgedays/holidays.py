"""Built-in holiday presets.

The planner itself only consumes ``Holiday`` records; these presets are a
local stand-in for a holiday data provider.

* ``us``: US federal holidays, *observed* (Sat -> Fri, Sun -> Mon).
* ``de``: German nationwide holidays plus the holidays of one federal state
  when a region is given.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable

from bridgedays.models import Holiday

HolidayProvider = Callable[[int], list[Holiday]]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> datetime.date:
    """Return the *n*-th occurrence of *weekday* in *month* of *year*.

    *weekday* follows ``datetime`` convention: 0 = Monday … 6 = Sunday.
    *n* is 1-based (1 = first, 2 = second, …).
    """
    first = datetime.date(year, month, 1)
    delta = (weekday - first.weekday()) % 7
    return first + datetime.timedelta(days=delta, weeks=n - 1)


def _last_weekday(year: int, month: int, weekday: int) -> datetime.date:
    """Return the last occurrence of *weekday* in *month* of *year*."""
    if month == 12:
        last = datetime.date(year, 12, 31)
    else:
        last = datetime.date(year, month + 1, 1) - datetime.timedelta(days=1)
    return last - datetime.timedelta(days=(last.weekday() - weekday) % 7)


def _observed(d: datetime.date) -> datetime.date:
    """Shift a holiday to its *observed* date (Sat→Fri, Sun→Mon)."""
    if d.weekday() == 5:
        return d - datetime.timedelta(days=1)
    if d.weekday() == 6:
        return d + datetime.timedelta(days=1)
    return d


def easter_sunday(year: int) -> datetime.date:
    """Gregorian Easter Sunday (anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return datetime.date(year, month, day + 1)


def _repentance_day(year: int) -> datetime.date:
    """Buß- und Bettag: the Wednesday before November 23."""
    nov22 = datetime.date(year, 11, 22)
    return nov22 - datetime.timedelta(days=(nov22.weekday() - 2) % 7)


# ---------------------------------------------------------------------------
# Country presets
# ---------------------------------------------------------------------------

PRESETS: dict[str, str] = {
    "us": "United States federal holidays",
    "de": "German public holidays",
}


def us_holidays(year: int, region: str | None = None) -> list[Holiday]:
    """US federal holidays (observed) for *year*. *region* is ignored."""
    return sorted(
        [
            Holiday(_observed(datetime.date(year, 1, 1)), "New Year's Day"),
            Holiday(_nth_weekday(year, 1, 0, 3), "Martin Luther King Jr. Day"),
            Holiday(_nth_weekday(year, 2, 0, 3), "Presidents' Day"),
            Holiday(_last_weekday(year, 5, 0), "Memorial Day"),
            Holiday(_observed(datetime.date(year, 6, 19)), "Juneteenth"),
            Holiday(_observed(datetime.date(year, 7, 4)), "Independence Day"),
            Holiday(_nth_weekday(year, 9, 0, 1), "Labor Day"),
            Holiday(_nth_weekday(year, 11, 3, 4), "Thanksgiving"),
            Holiday(_observed(datetime.date(year, 12, 25)), "Christmas Day"),
        ]
    )


REGIONS: dict[str, str] = {
    "baden-wurttemberg": "Baden-Württemberg",
    "bavaria": "Bavaria",
    "berlin": "Berlin",
    "brandenburg": "Brandenburg",
    "bremen": "Bremen",
    "hamburg": "Hamburg",
    "hesse": "Hesse",
    "lower-saxony": "Lower Saxony",
    "mecklenburg-vorpommern": "Mecklenburg-Vorpommern",
    "north-rhine-westphalia": "North Rhine-Westphalia",
    "rhineland-palatinate": "Rhineland-Palatinate",
    "saarland": "Saarland",
    "saxony": "Saxony",
    "saxony-anhalt": "Saxony-Anhalt",
    "schleswig-holstein": "Schleswig-Holstein",
    "thuringia": "Thuringia",
}

_EPIPHANY = "Epiphany"
_CORPUS_CHRISTI = "Corpus Christi"
_ASSUMPTION = "Assumption Day"
_ALL_SAINTS = "All Saints' Day"
_REFORMATION = "Reformation Day"
_WOMENS_DAY = "Women's Day"
_REPENTANCE = "Day of Repentance"

_STATE_HOLIDAYS: dict[str, tuple[str, ...]] = {
    "baden-wurttemberg": (_EPIPHANY, _CORPUS_CHRISTI, _ALL_SAINTS),
    "bavaria": (_EPIPHANY, _CORPUS_CHRISTI, _ASSUMPTION, _ALL_SAINTS),
    "berlin": (_WOMENS_DAY,),
    "brandenburg": (_REFORMATION,),
    "bremen": (_REFORMATION,),
    "hamburg": (_REFORMATION,),
    "hesse": (_CORPUS_CHRISTI,),
    "lower-saxony": (_REFORMATION,),
    "mecklenburg-vorpommern": (_REFORMATION,),
    "north-rhine-westphalia": (_CORPUS_CHRISTI, _ALL_SAINTS),
    "rhineland-palatinate": (_CORPUS_CHRISTI, _ALL_SAINTS),
    "saarland": (_CORPUS_CHRISTI, _ASSUMPTION, _ALL_SAINTS),
    "saxony": (_REFORMATION, _REPENTANCE),
    "saxony-anhalt": (_EPIPHANY, _REFORMATION),
    "schleswig-holstein": (_REFORMATION,),
    "thuringia": (_REFORMATION,),
}


def de_holidays(year: int, region: str | None = None) -> list[Holiday]:
    """German holidays for *year*, including those of state *region*.

    Raises ``KeyError`` for an unknown region.
    """
    easter = easter_sunday(year)

    def after_easter(days: int) -> datetime.date:
        return easter + datetime.timedelta(days=days)

    result = [
        Holiday(datetime.date(year, 1, 1), "New Year's Day"),
        Holiday(after_easter(-2), "Good Friday"),
        Holiday(after_easter(1), "Easter Monday"),
        Holiday(datetime.date(year, 5, 1), "Labor Day"),
        Holiday(after_easter(39), "Ascension Day"),
        Holiday(after_easter(50), "Whit Monday"),
        Holiday(datetime.date(year, 10, 3), "German Unity Day"),
        Holiday(datetime.date(year, 12, 25), "Christmas Day"),
        Holiday(datetime.date(year, 12, 26), "Second Day of Christmas"),
    ]

    if region is not None:
        if region not in _STATE_HOLIDAYS:
            supported = ", ".join(sorted(REGIONS))
            msg = f"Unknown region {region!r}. Supported: {supported}"
            raise KeyError(msg)
        dates = {
            _EPIPHANY: datetime.date(year, 1, 6),
            _WOMENS_DAY: datetime.date(year, 3, 8),
            _CORPUS_CHRISTI: after_easter(60),
            _ASSUMPTION: datetime.date(year, 8, 15),
            _REFORMATION: datetime.date(year, 10, 31),
            _ALL_SAINTS: datetime.date(year, 11, 1),
            _REPENTANCE: _repentance_day(year),
        }
        result.extend(Holiday(dates[name], name) for name in _STATE_HOLIDAYS[region])

    return sorted(result)


_PRESET_FNS: dict[str, Callable[[int, str | None], list[Holiday]]] = {
    "us": us_holidays,
    "de": de_holidays,
}


def get_holidays(country: str, year: int, region: str | None = None) -> list[Holiday]:
    """Return the holidays of the given *country* preset for *year*.

    Raises ``KeyError`` if the country (or region) is not supported.
    """
    fn = _PRESET_FNS.get(country)
    if fn is None:
        supported = ", ".join(sorted(PRESETS))
        msg = f"Unknown country preset {country!r}. Supported: {supported}"
        raise KeyError(msg)
    return fn(year, region)


def preset_provider(country: str, region: str | None = None) -> HolidayProvider:
    """A ``year -> holidays`` callable for the planner's lookahead."""

    def provider(year: int) -> list[Holiday]:
        return get_holidays(country, year, region)

    return provider
