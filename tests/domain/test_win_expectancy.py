from baseball_analytics.domain.win_expectancy import Era, WinExpectancy, best_match, rank_key


def _make_record(**overrides: object) -> WinExpectancy:
    defaults: dict[str, object] = {
        "inning": 9,
        "is_bottom": True,
        "outs": 2,
        "runners_code": "12_",
        "score_diff": -1,
        "win_probability": 0.32,
        "sample_size": 1200,
    }
    defaults.update(overrides)
    return WinExpectancy(**defaults)  # type: ignore[arg-type]


class TestEraLabel:
    def test_all_time(self) -> None:
        assert Era().label == "All Time"

    def test_single_season(self) -> None:
        assert Era.for_season(2019).label == "2019 Season"

    def test_range(self) -> None:
        assert Era(1990, 2010).label == "1990-2010 Era"

    def test_open_ended(self) -> None:
        assert Era(start_year=2011).label == "2011- Era"


class TestCovers:
    def test_unbounded_record_covers_everything(self) -> None:
        record = _make_record()
        assert record.covers(Era.for_season(1950))
        assert record.covers(Era())

    def test_record_must_contain_era(self) -> None:
        record = _make_record(start_year=1990, end_year=2010)
        assert record.covers(Era.for_season(2000))
        assert record.covers(Era(1990, 2010))
        assert not record.covers(Era(1985, 2000))
        assert not record.covers(Era.for_season(2011))

    def test_bounded_record_does_not_cover_unbounded_era(self) -> None:
        record = _make_record(start_year=1990, end_year=2010)
        assert not record.covers(Era())


class TestBestMatch:
    def test_prefers_latest_end_year(self) -> None:
        older = _make_record(id=1, start_year=1990, end_year=2010)
        newer = _make_record(id=2, start_year=2011, end_year=2025)
        assert best_match([older, newer]) == newer

    def test_unbounded_end_year_sorts_last(self) -> None:
        all_time = _make_record(id=1)
        bounded = _make_record(id=2, start_year=2011, end_year=2025)
        assert best_match([all_time, bounded]) == bounded

    def test_ties_broken_by_start_year_then_id(self) -> None:
        a = _make_record(id=5, start_year=2000, end_year=2020)
        b = _make_record(id=3, start_year=2010, end_year=2020)
        c = _make_record(id=4, start_year=2010, end_year=2020)
        assert best_match([a, c, b]) == b
        assert sorted([a, c, b], key=rank_key) == [b, c, a]

    def test_era_filters_candidates(self) -> None:
        steroid = _make_record(id=1, start_year=1990, end_year=2010)
        modern = _make_record(id=2, start_year=2011, end_year=2025)
        assert best_match([steroid, modern], Era.for_season(1998)) == steroid

    def test_no_match(self) -> None:
        assert best_match([]) is None
        assert best_match([_make_record(start_year=1990, end_year=2010)], Era.for_season(2019)) is None
