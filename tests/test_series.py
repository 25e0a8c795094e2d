import pytest

pd = pytest.importorskip("pandas")

from airspot import series, sources
from airspot.schemas import OpenMeteoHourly
from airspot.upstream import UpstreamError


def _payload(n, pm25=10.0):
    return {
        "hourly": {
            "time": [f"2026-03-0{1 + h // 24}T{h % 24:02d}:00" for h in range(n)],
            "pm2_5": [pm25] * n,
            "ozone": [60.0] * n,
            "nitrogen_dioxide": [20.0] * n,
            "carbon_monoxide": [0.2] * n,
        }
    }


def test_clamp_hours():
    assert series.clamp_hours(None) == 48
    assert series.clamp_hours("") == 48
    assert series.clamp_hours("abc") == 48
    assert series.clamp_hours("1") == 6
    assert series.clamp_hours("500") == 120
    assert series.clamp_hours("24") == 24


def test_window_keeps_latest_hours_in_order():
    hourly = OpenMeteoHourly.from_json(_payload(30))
    out = series.build_series(hourly, hours=6)
    assert len(out) == 6
    assert [e["t"] for e in out] == hourly.time[-6:]


def test_entry_values():
    hourly = OpenMeteoHourly.from_json(_payload(2))
    entry = series.build_series(hourly, hours=6)[0]
    assert entry["pm25"] == 42
    assert entry["o3"] == 28
    assert entry["overall"] == max(entry["pm25"], entry["o3"], entry["no2"], entry["co"])
    assert all(isinstance(entry[k], int) for k in ("pm25", "o3", "no2", "co", "overall"))


def test_missing_values_become_null():
    payload = _payload(3)
    payload["hourly"]["pm2_5"] = [None, None, None]
    payload["hourly"]["ozone"] = [None, 60.0, None]
    payload["hourly"]["nitrogen_dioxide"] = [None, None, None]
    payload["hourly"]["carbon_monoxide"] = [None, None, None]
    out = series.build_series(OpenMeteoHourly.from_json(payload), hours=6)
    assert out[0] == {"t": payload["hourly"]["time"][0], "pm25": None, "o3": None, "no2": None, "co": None, "overall": None}
    assert out[1]["overall"] == out[1]["o3"] == 28


def test_shortest_array_bounds_the_series():
    payload = _payload(10)
    payload["hourly"]["carbon_monoxide"] = [0.2] * 4
    out = series.build_series(OpenMeteoHourly.from_json(payload), hours=48)
    assert len(out) == 4


def test_out_of_table_concentration_is_null():
    out = series.build_series(OpenMeteoHourly.from_json(_payload(1, pm25=900.0)), hours=6)
    assert out[0]["pm25"] is None


def test_fetch_series_requests_past_days(monkeypatch):
    calls = []

    def fake_fetch(lat, lng, past_days=0):
        calls.append(past_days)
        return OpenMeteoHourly.from_json(_payload(8))

    monkeypatch.setattr(sources, "fetch_open_meteo", fake_fetch)

    result = series.fetch_series(1.0, 2.0, hours=6)

    assert calls == [2]
    assert result["source"] == "openmeteo"
    assert len(result["series"]) == 6


def test_fetch_series_propagates_upstream_errors(monkeypatch):
    def boom(lat, lng, past_days=0):
        raise UpstreamError("OpenMeteo HTTP 502")

    monkeypatch.setattr(sources, "fetch_open_meteo", boom)

    with pytest.raises(UpstreamError):
        series.fetch_series(1.0, 2.0)
