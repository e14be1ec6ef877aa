"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...features.geocoding.domain.models import GEOCODE_ENDPOINT, GeocodeConfig

class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="gmaps-geocoder",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # Geocoding
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps API Key",
    )
    geocoding_language: Optional[str] = Field(
        default=None,
        description="結果の言語（例: ja, en）",
    )
    geocoding_region: Optional[str] = Field(
        default=None,
        description="地域バイアス（ccTLD、例: jp）",
    )
    geocoding_bounds: Optional[str] = Field(
        default=None,
        description="ビューポートバイアス（例: 34.17,-118.60|34.23,-118.50）",
    )
    geocoding_country: Optional[str] = Field(
        default=None,
        description="国フィルタ（components=country:XX として送信）",
    )
    geocoding_endpoint: str = Field(
        default=GEOCODE_ENDPOINT,
        description="Geocoding APIのエンドポイント",
    )

    # HTTP
    http_timeout: float = Field(
        default=10,
        description="HTTPリクエストのタイムアウト（秒）",
    )
    http_max_retries: int = Field(
        default=3,
        description="HTTPリクエストのリトライ回数",
    )
    http_backoff_factor: float = Field(
        default=0.5,
        description="リトライ時のバックオフ係数",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Server
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )

    def to_geocode_config(self) -> GeocodeConfig:
        """ジオコーディング設定値に変換"""
        return GeocodeConfig(
            api_key=self.google_maps_api_key or "",
            language=self.geocoding_language,
            region=self.geocoding_region,
            bounds=self.geocoding_bounds,
            country=self.geocoding_country,
        )
