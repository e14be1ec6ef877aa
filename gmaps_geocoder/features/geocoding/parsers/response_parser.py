"""Geocoding APIレスポンスのパーサー"""

from pydantic import TypeAdapter, ValidationError

from ....shared.exceptions.errors import GeocodingResponseError
from ....shared.logging.config import get_logger
from ..domain.models import LocationRecord
from ..domain.responses import GeocodeResponse, RawGeocodeResult
from .address_components import get_city, get_state, get_street_name, get_street_number

logger = get_logger(__name__)

_RESULTS_ADAPTER = TypeAdapter(list[RawGeocodeResult])


class GeocodeResponseParser:
    """APIレスポンスをデコードし、LocationRecordへ正規化する"""

    def decode(self, body: bytes) -> GeocodeResponse:
        """
        レスポンスボディの外枠（error_message, status）をデコード

        results はまだ検証しない。

        Args:
            body: レスポンスボディ（JSON）

        Returns:
            GeocodeResponse: デコード済みレスポンス

        Raises:
            GeocodingResponseError: JSONオブジェクトとして不正な場合
        """
        try:
            return GeocodeResponse.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"Unexpected geocoding response: {e.error_count()} validation error(s)")
            raise GeocodingResponseError(f"Invalid geocoding response: {e}") from e

    def parse_results(self, response: GeocodeResponse) -> list[RawGeocodeResult]:
        """
        results を型付きの結果リストとして検証

        Args:
            response: decode 済みのレスポンス

        Returns:
            list[RawGeocodeResult]: APIの返却順の結果

        Raises:
            GeocodingResponseError: results が想定外の構造の場合
        """
        try:
            return _RESULTS_ADAPTER.validate_python(response.results)
        except ValidationError as e:
            logger.error(f"Unexpected geocoding results: {e.error_count()} validation error(s)")
            raise GeocodingResponseError(f"Invalid geocoding results: {e}") from e

    def normalize(self, raw: RawGeocodeResult) -> LocationRecord:
        """
        結果1件をLocationRecordに変換

        Args:
            raw: APIの結果1件

        Returns:
            LocationRecord: 正規化済みレコード
        """
        geometry = raw.geometry
        components = tuple(raw.address_components)

        return LocationRecord(
            lat=geometry.location.lat,
            lng=geometry.location.lng,
            accuracy=geometry.location_type,
            formatted_address=raw.formatted_address,
            viewport=geometry.viewport,
            address_components=components,
            partial_match=raw.partial_match,
            place_id=raw.place_id,
            types=frozenset(raw.types),
            city=get_city(components),
            state=get_state(components),
            street_number=get_street_number(components),
            street_name=get_street_name(components),
        )

    def normalize_all(self, results: list[RawGeocodeResult]) -> list[LocationRecord]:
        """全結果をAPIの返却順のまま正規化"""
        return [self.normalize(result) for result in results]
