import pytest

from airspot.breakpoints import CO, NO2, O3, PM25, TABLES
from airspot.calculator import (
    CATEGORY_TIPS,
    DEFAULT_TIP,
    UNKNOWN,
    aggregate,
    category_for,
    interpolate,
    round_half_up,
    sub_index,
    tip_for,
)


def test_tables_are_ordered_and_span_the_scale():
    for table in TABLES.values():
        assert table[0].concentration_low == 0
        assert table[0].index_low == 0
        assert table[-1].index_high == 500
        assert [bp.index_high for bp in table] == [50, 100, 150, 200, 300, 500]
        for prev, nxt in zip(table, table[1:]):
            assert prev.concentration_high < nxt.concentration_low
            assert prev.index_high < nxt.index_low


def test_segment_edges_hit_index_bounds():
    for table in TABLES.values():
        for bp in table:
            assert interpolate(bp.concentration_low, table) == pytest.approx(bp.index_low)
            assert interpolate(bp.concentration_high, table) == pytest.approx(bp.index_high)


def test_interpolate_is_monotonic():
    for table in TABLES.values():
        values = []
        for bp in table:
            step = (bp.concentration_high - bp.concentration_low) / 10
            values.extend(
                interpolate(bp.concentration_low + i * step, table) for i in range(10)
            )
            values.append(interpolate(bp.concentration_high, table))
        assert all(v is not None for v in values)
        assert values == sorted(values)


@pytest.mark.parametrize("pollutant", [PM25, O3, NO2, CO])
def test_out_of_range_is_undefined(pollutant):
    table = TABLES[pollutant]
    assert interpolate(-0.1, table) is None
    assert interpolate(table[-1].concentration_high + 1, table) is None


def test_non_finite_or_missing_concentration():
    table = TABLES[PM25]
    assert interpolate(None, table) is None
    assert interpolate(float("nan"), table) is None
    assert interpolate(float("inf"), table) is None


def test_published_examples():
    assert sub_index(PM25, 35.4) == 100
    assert sub_index(CO, 9.4) == 100
    assert sub_index(O3, 0) == 0
    assert sub_index(PM25, 6.0) == 25


def test_round_half_up():
    assert round_half_up(50.5) == 51
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_aggregate_takes_maximum():
    result = aggregate({"pm25": 40, "o3": 60})
    assert result.overall == 60
    assert result.category == "Moderate"
    assert result.tip == CATEGORY_TIPS["Moderate"]


def test_aggregate_without_values_is_unknown():
    result = aggregate({"pm25": None, "o3": None, "no2": None, "co": None})
    assert result.overall is None
    assert result.category == UNKNOWN
    assert result.tip


def test_zero_is_not_absence():
    result = aggregate({"pm25": 0, "o3": None})
    assert result.overall == 0
    assert result.category == "Good"


@pytest.mark.parametrize(
    "overall, expected",
    [
        (0, "Good"),
        (50, "Good"),
        (51, "Moderate"),
        (100, "Moderate"),
        (101, "Unhealthy for Sensitive Groups"),
        (150, "Unhealthy for Sensitive Groups"),
        (151, "Unhealthy"),
        (200, "Unhealthy"),
        (201, "Very Unhealthy"),
        (300, "Very Unhealthy"),
        (301, "Hazardous"),
        (500, "Hazardous"),
        (50.4, "Good"),
        (50.5, "Moderate"),
    ],
)
def test_category_thresholds(overall, expected):
    assert category_for(overall) == expected


def test_tip_fallback():
    assert tip_for("Something new") == DEFAULT_TIP
    assert tip_for(None) == CATEGORY_TIPS[UNKNOWN]


@pytest.mark.parametrize(
    "pollutant, concentration",
    [(PM25, 12.05), (PM25, 35.45), (O3, 54.5), (NO2, 100.5), (CO, 4.45)],
)
def test_gap_between_segments_is_undefined(pollutant, concentration):
    assert interpolate(concentration, TABLES[pollutant]) is None
    assert sub_index(pollutant, concentration) is None
