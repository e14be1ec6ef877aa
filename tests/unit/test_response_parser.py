"""レスポンスパーサーのテスト"""

import json

import pytest

from conftest import make_body, make_result
from gmaps_geocoder.features.geocoding.domain.models import RESULT_NOT_FOUND, LocationRecord
from gmaps_geocoder.features.geocoding.domain.responses import RawGeocodeResult, Viewport
from gmaps_geocoder.features.geocoding.parsers.response_parser import GeocodeResponseParser
from gmaps_geocoder.shared.exceptions.errors import GeocodingResponseError


@pytest.fixture
def parser() -> GeocodeResponseParser:
    return GeocodeResponseParser()


def test_normalize_full_result(parser: GeocodeResponseParser) -> None:
    """全項目が正規化される"""
    raw = RawGeocodeResult.model_validate(make_result())

    record = parser.normalize(raw)

    assert record.lat == 37.3318
    assert record.lng == -122.0312
    assert record.accuracy == "ROOFTOP"
    assert record.formatted_address == "1 Infinite Loop, Cupertino, CA 95014, USA"
    assert isinstance(record.viewport, Viewport)
    assert record.viewport.northeast.lat == pytest.approx(37.3328)
    assert record.place_id == "ChIJHTRqF7e1j4ARzZ_Fv8VA4Eo"
    assert record.types == frozenset({"street_address"})
    assert record.partial_match is False
    assert [c.short_name for c in record.address_components] == [
        "1",
        "Infinite Loop",
        "Cupertino",
        "CA",
        "95014",
    ]
    assert record.street_number == "1"
    assert record.street_name == "Infinite Loop"
    assert record.state == "CA"
    assert record.city == "95014"


def test_normalize_partial_match(parser: GeocodeResponseParser) -> None:
    """partial_match があればそのまま反映"""
    raw = RawGeocodeResult.model_validate(make_result(partial_match=True))

    assert parser.normalize(raw).partial_match is True


def test_normalize_route_and_state_only(parser: GeocodeResponseParser) -> None:
    """route と州のみの場合、番地はNone"""
    raw = RawGeocodeResult.model_validate(
        make_result(
            address_components=[
                {"types": ["route"], "short_name": "Main St", "long_name": "Main Street"},
                {"types": ["administrative_area_level_1"], "short_name": "CA", "long_name": "California"},
            ]
        )
    )

    record = parser.normalize(raw)

    assert record.street_name == "Main St"
    assert record.state == "CA"
    assert record.street_number is None
    assert record.city is None


def test_normalize_minimal_result(parser: GeocodeResponseParser) -> None:
    """任意項目が無くても失敗しない"""
    raw = RawGeocodeResult.model_validate({"geometry": {"location": {"lat": 1.5, "lng": 2.5}}})

    record = parser.normalize(raw)

    assert record.to_tuple() == (1.5, 2.5)
    assert record.accuracy is None
    assert record.viewport is None
    assert record.address_components == ()
    assert record.types == frozenset()
    assert record.partial_match is False


def test_decode_response(parser: GeocodeResponseParser) -> None:
    """レスポンス全体のデコード"""
    response = parser.decode(make_body([make_result(), make_result(lat=1.0, lng=2.0)]))

    assert response.error_message is None
    results = parser.parse_results(response)
    assert len(results) == 2

    records = parser.normalize_all(results)
    assert [r.to_tuple() for r in records] == [(37.3318, -122.0312), (1.0, 2.0)]


def test_decode_ignores_unknown_fields(parser: GeocodeResponseParser) -> None:
    """未知のキーは無視する"""
    body = make_body([make_result(plus_code={"global_code": "849VCWC8+R9"})], html_attributions=[])

    assert len(parser.decode(body).results) == 1


@pytest.mark.parametrize("body", [b"not json", b"[]", b"\"results\""])
def test_decode_malformed_body(parser: GeocodeResponseParser, body: bytes) -> None:
    """JSONオブジェクトでないレスポンスは例外にする"""
    with pytest.raises(GeocodingResponseError):
        parser.decode(body)


@pytest.mark.parametrize(
    "results",
    [
        None,
        {"geometry": {}},
        [{"formatted_address": "no geometry"}],
        [{"geometry": {"location": {"lat": "north", "lng": 0}}}],
    ],
)
def test_parse_malformed_results(parser: GeocodeResponseParser, results: object) -> None:
    """results が想定外の構造なら例外にする"""
    response = parser.decode(json.dumps({"results": results}).encode())

    with pytest.raises(GeocodingResponseError):
        parser.parse_results(response)


def test_decode_keeps_error_message_with_malformed_results(parser: GeocodeResponseParser) -> None:
    """results が不正でも error_message は取り出せる"""
    response = parser.decode(b'{"error_message": "X", "results": null}')

    assert response.error_message == "X"


def test_not_found_record() -> None:
    """番兵レコード"""
    record = LocationRecord.not_found()

    assert record.is_not_found
    assert record.to_dict() == {
        "lat": 0.0,
        "lng": 0.0,
        "accuracy": RESULT_NOT_FOUND,
        "formatted_address": RESULT_NOT_FOUND,
        "viewport": RESULT_NOT_FOUND,
    }


def test_to_dict(parser: GeocodeResponseParser) -> None:
    """APIと同じsnake_caseの辞書に変換"""
    record = parser.normalize(RawGeocodeResult.model_validate(make_result()))

    data = record.to_dict()

    assert data["viewport"]["northeast"]["lat"] == pytest.approx(37.3328)
    assert data["address_components"][1] == {
        "long_name": "Infinite Loop",
        "short_name": "Infinite Loop",
        "types": ["route"],
    }
    assert data["types"] == ["street_address"]
    assert data["street_name"] == "Infinite Loop"
    assert data["partial_match"] is False
    json.dumps(data)
