import pytest

from airspot.breakpoints import CO, NO2, O3, PM25
from airspot.units import MOLAR_MASS, R_MOLAR_VOLUME, normalize, to_mass_concentration


def test_pm25_accepts_mass_units_only():
    assert normalize(PM25, 12.0, "µg/m³") == 12.0
    assert normalize(PM25, 12.0, "ug/m3") == 12.0
    assert normalize(PM25, 12.0, "UG/M3") == 12.0
    assert normalize(PM25, 12.0, "ppb") is None
    assert normalize(PM25, 12.0, "") is None


@pytest.mark.parametrize("pollutant", [O3, NO2])
def test_ozone_and_no2(pollutant):
    assert normalize(pollutant, 40, "ppb") == 40
    assert normalize(pollutant, 40, "PPB") == 40
    expected = 100 * R_MOLAR_VOLUME / MOLAR_MASS[pollutant]
    assert normalize(pollutant, 100, "µg/m³") == pytest.approx(expected)
    assert normalize(pollutant, 1, "ppm") is None


def test_ozone_molar_mass():
    assert normalize(O3, 48.0, "µg/m³") == pytest.approx(24.45)


def test_carbon_monoxide():
    assert normalize(CO, 2.0, "ppm") == 2.0
    assert normalize(CO, 28.01, "mg/m³") == pytest.approx(24.45)
    assert normalize(CO, 28.01, "mg/m3") == pytest.approx(24.45)
    assert normalize(CO, 28010, "µg/m³") == pytest.approx(24.45)
    assert normalize(CO, 1, "ppb") is None


def test_unknown_pollutant_or_bad_value():
    assert normalize("so2", 1, "ppb") is None
    assert normalize(PM25, float("nan"), "µg/m³") is None


@pytest.mark.parametrize(
    "pollutant, unit, value",
    [(PM25, "µg/m³", 17.3), (O3, "µg/m³", 90.0), (NO2, "µg/m³", 33.3), (CO, "mg/m³", 0.4)],
)
def test_mass_round_trip(pollutant, unit, value):
    canonical = normalize(pollutant, value, unit)
    assert to_mass_concentration(pollutant, canonical) == pytest.approx(value)
