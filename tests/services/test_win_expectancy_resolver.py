import pytest

from baseball_analytics.domain.errors import WinExpectancyNotFound
from baseball_analytics.domain.result import Err, Ok
from baseball_analytics.domain.win_expectancy import Era, WinExpectancy
from baseball_analytics.services.game_state_codec import canonicalize
from baseball_analytics.services.win_expectancy import WinExpectancyResolver
from tests.fakes.repos import FakeWinExpectancyRepo


def _make_record(**overrides: object) -> WinExpectancy:
    defaults: dict[str, object] = {
        "inning": 1,
        "is_bottom": False,
        "outs": 0,
        "runners_code": "___",
        "score_diff": 0,
        "win_probability": 0.54,
        "sample_size": 5000,
    }
    defaults.update(overrides)
    return WinExpectancy(**defaults)  # type: ignore[arg-type]


class TestResolve:
    def test_hit(self) -> None:
        record = _make_record(id=1)
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo([record]))
        result = resolver.resolve(canonicalize(1, False, 0))
        assert result == Ok(record)

    def test_miss_returns_not_found(self) -> None:
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo())
        result = resolver.resolve(canonicalize(5, True, 1, "1__", 2))
        assert isinstance(result, Err)
        assert isinstance(result.error, WinExpectancyNotFound)
        assert (result.error.inning, result.error.runners_code, result.error.score_diff) == (5, "1__", 2)
        assert "bottom 5" in result.error.message

    def test_era_scoping(self) -> None:
        steroid = _make_record(id=1, start_year=1990, end_year=2010, win_probability=0.51)
        modern = _make_record(id=2, start_year=2011, end_year=2025, win_probability=0.55)
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo([steroid, modern]))
        assert resolver.resolve(canonicalize(1, False, 0), Era.for_season(2001)) == Ok(steroid)
        assert resolver.resolve(canonicalize(1, False, 0)) == Ok(modern)
        assert isinstance(resolver.resolve(canonicalize(1, False, 0), Era.for_season(1975)), Err)

    def test_resolve_is_idempotent(self) -> None:
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo([_make_record(id=1)]))
        state = canonicalize(1, False, 0)
        assert resolver.resolve(state) == resolver.resolve(state)


class TestResolveOrDefault:
    def test_neutral_default_on_miss(self) -> None:
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo())
        record = resolver.resolve_or_default(canonicalize(3, False, 1), Era.for_season(2019))
        assert record.win_probability == 0.5
        assert record.sample_size == 0
        assert (record.start_year, record.end_year) == (2019, 2019)


class TestResolveBatch:
    def test_preserves_order_and_duplicates(self) -> None:
        a = _make_record(id=1, inning=1)
        b = _make_record(id=2, inning=2)
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo([a, b]))
        states = [canonicalize(inning, False, 0) for inning in (2, 7, 1, 2)]
        assert resolver.resolve_batch(states) == [b, None, a, b]

    def test_matches_single_lookups(self) -> None:
        records = [
            _make_record(id=1, start_year=1990, end_year=2010),
            _make_record(id=2, start_year=2011, end_year=2025),
            _make_record(id=3, outs=2, runners_code="1_3", score_diff=-1),
        ]
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo(records))
        states = [canonicalize(1, False, 2, "101", -1), canonicalize(1, False, 0), canonicalize(4, True, 1)]
        for era in (None, Era.for_season(1995), Era.for_season(2019)):
            singles = [resolver.resolve(s, era) for s in states]
            expected = [r.value if isinstance(r, Ok) else None for r in singles]
            assert resolver.resolve_batch(states, era) == expected
            assert resolver.resolve_batch(list(reversed(states)), era) == list(reversed(expected))

    def test_batch_or_default_fills_misses(self) -> None:
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo([_make_record(id=1)]))
        results = resolver.resolve_batch_or_default([canonicalize(1, False, 0), canonicalize(2, False, 0)])
        assert [r.win_probability for r in results] == [0.54, 0.5]


class TestBuildTable:
    def test_delegates_to_repo(self) -> None:
        repo = FakeWinExpectancyRepo()
        resolver = WinExpectancyResolver(repo)
        resolver.build_table(25, Era(2011, 2025))
        assert repo.built == [(25, Era(2011, 2025))]

    def test_rejects_non_positive_min_sample(self) -> None:
        resolver = WinExpectancyResolver(FakeWinExpectancyRepo())
        with pytest.raises(ValueError):
            resolver.build_table(0)
