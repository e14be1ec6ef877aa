"""テスト共通フィクスチャ"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

import pytest

from gmaps_geocoder.features.geocoding.domain.models import GeocodeConfig
from gmaps_geocoder.features.geocoding.providers.google_maps_geocoder import GoogleMapsGeocoder


@dataclass
class FakeResponse:
    """HTTPレスポンスのテストダブル"""

    status_code: int = 200
    content: bytes = b'{"results": []}'


@dataclass
class FakeHTTPClient:
    """呼び出し回数と引数を記録するHTTPクライアントのテストダブル"""

    response: FakeResponse = field(default_factory=FakeResponse)
    error: Optional[Exception] = None
    calls: list[tuple[str, str, dict[str, Any]]] = field(default_factory=list)

    def request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> FakeResponse:
        self.calls.append((method, url, dict(params or {})))
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_params(self) -> dict[str, Any]:
        return self.calls[-1][2]

    def close(self) -> None:
        pass


def make_result(
    lat: float = 37.3318,
    lng: float = -122.0312,
    formatted_address: str = "1 Infinite Loop, Cupertino, CA 95014, USA",
    address_components: Optional[list[dict[str, Any]]] = None,
    **overrides: Any,
) -> dict[str, Any]:
    """APIの結果1件を模した辞書を生成"""
    result: dict[str, Any] = {
        "geometry": {
            "location": {"lat": lat, "lng": lng},
            "location_type": "ROOFTOP",
            "viewport": {
                "northeast": {"lat": lat + 0.001, "lng": lng + 0.001},
                "southwest": {"lat": lat - 0.001, "lng": lng - 0.001},
            },
        },
        "formatted_address": formatted_address,
        "address_components": address_components
        if address_components is not None
        else [
            {"long_name": "1", "short_name": "1", "types": ["street_number"]},
            {"long_name": "Infinite Loop", "short_name": "Infinite Loop", "types": ["route"]},
            {"long_name": "Cupertino", "short_name": "Cupertino", "types": ["locality", "political"]},
            {
                "long_name": "California",
                "short_name": "CA",
                "types": ["administrative_area_level_1", "political"],
            },
            {"long_name": "95014", "short_name": "95014", "types": ["postal_code"]},
        ],
        "place_id": "ChIJHTRqF7e1j4ARzZ_Fv8VA4Eo",
        "types": ["street_address"],
    }
    result.update(overrides)
    return result


def make_body(results: Optional[list[dict[str, Any]]] = None, **extra: Any) -> bytes:
    """APIレスポンスボディを生成"""
    body: dict[str, Any] = {"results": results or [], "status": "OK" if results else "ZERO_RESULTS"}
    body.update(extra)
    return json.dumps(body).encode("utf-8")


@pytest.fixture
def http_client() -> FakeHTTPClient:
    return FakeHTTPClient()


@pytest.fixture
def geocoder(http_client: FakeHTTPClient) -> GoogleMapsGeocoder:
    return GoogleMapsGeocoder(GeocodeConfig(api_key="test-key"), http_client=http_client)
