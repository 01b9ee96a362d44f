from dataclasses import dataclass

from baseball_analytics.domain.win_expectancy import Era
from baseball_analytics.exceptions import UnknownEraError


@dataclass(frozen=True)
class NamedEra:
    name: str
    short_name: str
    start_year: int
    end_year: int
    notes: str = ""

    @property
    def era(self) -> Era:
        return Era(start_year=self.start_year, end_year=self.end_year)


NAMED_ERAS: tuple[NamedEra, ...] = (
    NamedEra("Federal League Era", "fed", 1914, 1915, "Federal League games (third major league)"),
    NamedEra("Negro Leagues Era", "nlg", 1935, 1949, "Negro Leagues games available in Retrosheet"),
    NamedEra("1970s", "1970s", 1970, 1979, "Expansion era and free agency begins"),
    NamedEra("1980s", "1980s", 1980, 1989, "Rise of power hitting and offensive explosion"),
    NamedEra("Steroid Era", "steroid", 1990, 2010, "Enhanced performance and home run records"),
    NamedEra("Modern Era", "modern", 2011, 2025, "Analytics-driven baseball and pitch clock"),
)


def get_named_era(short_name: str) -> NamedEra | None:
    return next((e for e in NAMED_ERAS if e.short_name == short_name), None)


def parse_era(value: str) -> Era:
    """Interpret a named era (``steroid``), a season (``2019``) or a year range (``1990-2010``)."""
    named = get_named_era(value)
    if named is not None:
        return named.era
    start, sep, end = value.partition("-")
    try:
        if not sep:
            return Era.for_season(int(start))
        era = Era(start_year=int(start) if start else None, end_year=int(end) if end else None)
    except ValueError as exc:
        raise UnknownEraError(value) from exc
    if era.start_year is not None and era.end_year is not None and era.start_year > era.end_year:
        raise UnknownEraError(value)
    return era
