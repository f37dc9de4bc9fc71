import math

import pytest

from geotrack.cleaning import clean_points
from geotrack.errors import InvalidInputShape, NoValidData
from geotrack.models import Point


def _raw(rid, lat=51.1, lng=71.4, alt=350, spd=5, azm=90):
    return {"randomized_id": rid, "lat": lat, "lng": lng, "alt": alt, "spd": spd, "azm": azm}


def test_speed_converted_to_kmh():
    cleaned = clean_points([_raw("a", spd=10)])
    assert cleaned[0].speed == pytest.approx(36.0)


def test_string_fields_are_coerced():
    cleaned = clean_points([_raw(7, lat="51.1", lng=" 71.4 ", alt="300.5", spd="2.5", azm="180")])
    point = cleaned[0]
    assert point.id == "7"
    assert point.lat == pytest.approx(51.1)
    assert point.lng == pytest.approx(71.4)
    assert point.alt == pytest.approx(300.5)
    assert point.speed == pytest.approx(9.0)
    assert point.heading == pytest.approx(180.0)


def test_non_numeric_speed_is_dropped_and_order_kept():
    raw = [_raw("a"), _raw("b", spd="fast"), _raw("c"), _raw("d")]
    assert [p.id for p in clean_points(raw)] == ["a", "c", "d"]


def test_missing_lat_or_lng_is_dropped():
    raw = [_raw("a", lat=None), _raw("b", lng=""), _raw("c")]
    assert [p.id for p in clean_points(raw)] == ["c"]


def test_alt_and_heading_default_to_zero():
    raw = [_raw("a", alt="", azm=None), {"randomized_id": "b", "lat": 1, "lng": 2, "spd": 1}]
    cleaned = clean_points(raw)
    assert [(p.alt, p.heading) for p in cleaned] == [(0.0, 0.0), (0.0, 0.0)]


def test_unparseable_alt_defaults_to_zero():
    assert clean_points([_raw("a", alt="n/a")])[0].alt == 0.0


def test_non_finite_values_are_dropped():
    raw = [_raw("a", lat=float("inf")), _raw("b", alt=float("-inf")), _raw("c", spd=float("nan")), _raw("d")]
    assert [p.id for p in clean_points(raw)] == ["d"]


def test_speed_range_filter():
    raw = [_raw("neg", spd=-1), _raw("zero", spd=0), _raw("fast", spd=60), _raw("ok", spd=50)]
    cleaned = clean_points(raw)
    assert [p.id for p in cleaned] == ["zero", "ok"]
    assert all(0 <= p.speed <= 200 for p in cleaned)


def test_non_mapping_records_are_dropped():
    raw = [_raw("a"), "garbage", 42, None, _raw("b")]
    assert [p.id for p in clean_points(raw)] == ["a", "b"]


def test_all_fields_finite_after_cleaning():
    raw = [_raw(i, lat=i * 0.1, spd=i) for i in range(20)] + [_raw("x", lng="?")]
    for p in clean_points(raw):
        assert all(math.isfinite(v) for v in (p.lat, p.lng, p.alt, p.speed, p.heading))


def test_cleaning_is_idempotent():
    raw = [_raw("a", spd=3.3), _raw("b", spd="bad"), _raw("c", spd=12.7, alt="")]
    once = clean_points(raw)
    twice = clean_points(once)
    assert twice == once


def test_points_are_not_converted_twice():
    point = Point(id="p", lat=1.0, lng=2.0, alt=0.0, speed=150.0, heading=0.0)
    assert clean_points([point]) == [point]


def test_empty_result_raises_no_valid_data():
    with pytest.raises(NoValidData):
        clean_points([_raw("a", spd="x"), _raw("b", lat="y")])


def test_empty_input_raises_no_valid_data():
    with pytest.raises(NoValidData):
        clean_points([])


@pytest.mark.parametrize("raw", [{"lat": 1}, "points", None, 3])
def test_non_sequence_input_raises_invalid_shape(raw):
    with pytest.raises(InvalidInputShape):
        clean_points(raw)
