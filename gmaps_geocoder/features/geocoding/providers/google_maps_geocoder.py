"""Google Maps Geocoding API実装"""
from collections.abc import Mapping
from typing import Optional

from ..domain.models import GEOCODE_ENDPOINT, GeocodeConfig, LocationRecord, empty_response
from ..parsers.response_parser import GeocodeResponseParser
from .request_payload import build_payload, format_latlng
from ....infrastructure.config.settings import Settings
from ....shared.exceptions.errors import GeocodingError, HTTPError
from ....shared.http.client import HTTPClient, HTTPTransport
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class GoogleMapsGeocoder:
    """
    Google Maps Geocoding API実装

    1回の呼び出しにつき1回だけHTTPリクエストを送る。
    キャッシュ・リトライは行わない（リトライはHTTPクライアント側の責務）。
    設定は不変のため、インスタンスは複数スレッドから共有できる
    （注入したHTTPクライアントがスレッドセーフである限り）。
    """

    def __init__(
        self,
        config: GeocodeConfig,
        http_client: Optional[HTTPTransport] = None,
        endpoint: str = GEOCODE_ENDPOINT,
    ) -> None:
        """
        Args:
            config: ジオコーディング設定
            http_client: HTTPクライアント（Noneの場合は新規作成）
            endpoint: Geocoding APIのエンドポイント
        """
        self.config = config
        self.http_client: HTTPTransport = http_client or HTTPClient()
        self.endpoint = endpoint
        self.parser = GeocodeResponseParser()

        logger.debug(f"GoogleMapsGeocoder initialized: {config!r}")

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: Optional[HTTPTransport] = None
    ) -> "GoogleMapsGeocoder":
        """
        アプリケーション設定から生成

        Args:
            settings: アプリケーション設定
            http_client: HTTPクライアント（Noneの場合は設定値から作成）
        """
        if http_client is None:
            http_client = HTTPClient(
                timeout=settings.http_timeout,
                max_retries=settings.http_max_retries,
                backoff_factor=settings.http_backoff_factor,
            )

        return cls(
            settings.to_geocode_config(),
            http_client=http_client,
            endpoint=settings.geocoding_endpoint,
        )

    # 設定変更（同じHTTPクライアントを共有する新しいインスタンスを返す）

    def with_api_key(self, api_key: str) -> "GoogleMapsGeocoder":
        return self._with_config(self.config.with_api_key(api_key))

    def with_language(self, language: str) -> "GoogleMapsGeocoder":
        return self._with_config(self.config.with_language(language))

    def with_region(self, region: str) -> "GoogleMapsGeocoder":
        return self._with_config(self.config.with_region(region))

    def with_bounds(self, bounds: str) -> "GoogleMapsGeocoder":
        return self._with_config(self.config.with_bounds(bounds))

    def with_country(self, country: str) -> "GoogleMapsGeocoder":
        return self._with_config(self.config.with_country(country))

    def _with_config(self, config: GeocodeConfig) -> "GoogleMapsGeocoder":
        return type(self)(config, http_client=self.http_client, endpoint=self.endpoint)

    def geocode_address(self, address: str) -> LocationRecord:
        """
        住所をジオコーディングし、最初の結果を返す

        Args:
            address: 住所文字列

        Returns:
            LocationRecord: 最初の結果（見つからない場合は番兵レコード）

        Raises:
            GeocodingError: 接続失敗、またはサービスがエラーを返した場合
        """
        return self.geocode_address_all(address)[0]

    def geocode_address_all(self, address: str) -> list[LocationRecord]:
        """
        住所をジオコーディングし、全ての結果を返す

        住所が空の場合はリクエストを送らずに番兵レコードを返す。

        Args:
            address: 住所文字列

        Returns:
            list[LocationRecord]: APIの返却順の結果（1件以上）

        Raises:
            GeocodingError: 接続失敗、またはサービスがエラーを返した場合
        """
        if not address:
            logger.warning("Empty address provided for geocoding")
            return empty_response()

        logger.debug(f"Geocoding address: {address}")

        payload = build_payload(self.config, {"address": address})
        return self._request(payload, f"address: {address}")

    def reverse_geocode(self, lat: float, lng: float) -> LocationRecord:
        """
        座標から住所を取得し、最初の結果を返す（逆ジオコーディング）

        Args:
            lat: 緯度
            lng: 経度

        Returns:
            LocationRecord: 最初の結果（見つからない場合は番兵レコード）

        Raises:
            GeocodingError: 接続失敗、またはサービスがエラーを返した場合
        """
        return self.reverse_geocode_all(lat, lng)[0]

    def reverse_geocode_all(self, lat: float, lng: float) -> list[LocationRecord]:
        """
        座標から住所を取得し、全ての結果を返す（逆ジオコーディング）

        Args:
            lat: 緯度
            lng: 経度

        Returns:
            list[LocationRecord]: APIの返却順の結果（1件以上）

        Raises:
            GeocodingError: 接続失敗、またはサービスがエラーを返した場合
        """
        logger.debug(f"Reverse geocoding: ({lat}, {lng})")

        payload = build_payload(self.config, {"latlng": format_latlng(lat, lng)})
        return self._request(payload, f"coordinates: ({lat}, {lng})")

    def _request(self, payload: Mapping[str, str], description: str) -> list[LocationRecord]:
        """
        APIを呼び出し、ステータスとエラーを検証して結果を正規化

        Args:
            payload: クエリパラメータ
            description: ログ用の検索条件

        Returns:
            list[LocationRecord]: 正規化済みの結果（0件の場合は番兵レコード）
        """
        try:
            response = self.http_client.request("GET", self.endpoint, params=dict(payload))
        except HTTPError as e:
            raise GeocodingError.could_not_connect() from e

        if response.status_code != 200:
            logger.error(
                f"Geocoding request failed with status {response.status_code} for {description}"
            )
            raise GeocodingError.could_not_connect()

        geocoding_response = self.parser.decode(response.content)

        if geocoding_response.error_message:
            logger.error(f"Geocoding service error for {description}: {geocoding_response.error_message}")
            raise GeocodingError.service_returned_error(geocoding_response.error_message)

        # error_message を優先し、results の検証はその後
        results = self.parser.parse_results(geocoding_response)

        if not results:
            logger.warning(f"No geocoding results for {description}")
            return empty_response()

        locations = self.parser.normalize_all(results)
        logger.debug(f"Geocoded {description} -> {len(locations)} result(s)")

        return locations
