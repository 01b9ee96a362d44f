import pytest

from baseball_analytics.domain.era import NAMED_ERAS, get_named_era, parse_era
from baseball_analytics.domain.win_expectancy import Era
from baseball_analytics.exceptions import BaseballAnalyticsException, UnknownEraError


class TestNamedEras:
    def test_short_names_are_unique(self) -> None:
        names = [e.short_name for e in NAMED_ERAS]
        assert len(names) == len(set(names))

    def test_get_named_era(self) -> None:
        steroid = get_named_era("steroid")
        assert steroid is not None
        assert steroid.era == Era(1990, 2010)
        assert get_named_era("deadball") is None


class TestParseEra:
    def test_named(self) -> None:
        assert parse_era("1980s") == Era(1980, 1989)

    def test_season(self) -> None:
        assert parse_era("2019") == Era(2019, 2019)

    def test_range(self) -> None:
        assert parse_era("1990-2010") == Era(1990, 2010)

    def test_open_range(self) -> None:
        assert parse_era("2011-") == Era(start_year=2011)

    @pytest.mark.parametrize("value", ["", "deadball", "2010-1990", "19x0"])
    def test_unknown_raises(self, value: str) -> None:
        with pytest.raises(UnknownEraError):
            parse_era(value)

    def test_unknown_era_is_package_exception(self) -> None:
        assert issubclass(UnknownEraError, BaseballAnalyticsException)
