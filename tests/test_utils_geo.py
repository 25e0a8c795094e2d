import pytest

from airspot.utils_geo import bbox_center, parse_point, validate_bounds


def test_parse_point():
    assert parse_point("40.5", "-73.25") == (40.5, -73.25)
    with pytest.raises(ValueError, match="lat/lng required"):
        parse_point(None, "1")


def test_validate_bounds_accepts_antimeridian_box():
    bounds = validate_bounds("-10", "10", "170", "-170")
    assert (bounds.min_lng, bounds.max_lng) == (170.0, -170.0)


@pytest.mark.parametrize(
    "args, message",
    [
        (("10", "5", "0", "1"), "minLat"),
        (("-95", "5", "0", "1"), "latitudes"),
        (("0", "91", "0", "1"), "latitudes"),
        (("0", "5", "0", "181"), "longitudes"),
        (("0", "5", "", "1"), "minLng"),
    ],
)
def test_validate_bounds_rejects(args, message):
    with pytest.raises(ValueError, match=message):
        validate_bounds(*args)


def test_bbox_center():
    bounds = validate_bounds("10", "20", "30", "50")
    assert bbox_center(bounds) == (15.0, 40.0)


@pytest.mark.parametrize("min_lng, max_lng", [("190", "170"), ("10", "-190"), ("-200", "0")])
def test_validate_bounds_checks_every_longitude(min_lng, max_lng):
    with pytest.raises(ValueError, match="longitudes"):
        validate_bounds("0", "5", min_lng, max_lng)


def test_bbox_center_across_antimeridian():
    lat, lng = bbox_center(validate_bounds("-10", "10", "170", "-170"))
    assert lat == 0.0
    assert abs(lng) == pytest.approx(180.0)

    _, lng = bbox_center(validate_bounds("0", "2", "160", "-170"))
    assert lng == pytest.approx(175.0)
