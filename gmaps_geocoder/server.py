"""ジオコーディングHTTPサーバー（FastAPI）"""
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Union

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .features.geocoding.providers.google_maps_geocoder import GoogleMapsGeocoder
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import ConfigurationError, GeocodingError
from .shared.http.client import HTTPClient
from .shared.logging.config import get_logger, setup_logging

# 設定を読み込み
settings = Settings()

# ロギングを設定
setup_logging(level=settings.log_level)
logger = get_logger(__name__)

JSONRecord = dict[str, Any]


@lru_cache(maxsize=1)
def get_geocoder() -> GoogleMapsGeocoder:
    """
    共有ジオコーダーを取得（初回呼び出し時に生成）

    Raises:
        ConfigurationError: APIキーが設定されていない場合
    """
    if not settings.google_maps_api_key:
        raise ConfigurationError("Google Maps API key is required for geocoding")

    return GoogleMapsGeocoder.from_settings(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """起動・終了時の処理"""
    logger.info("Application starting up")
    logger.info(f"Environment: {settings.environment}")
    yield
    if get_geocoder.cache_info().currsize:
        http_client = get_geocoder().http_client
        if isinstance(http_client, HTTPClient):
            http_client.close()
    logger.info("Application shutting down")


# FastAPIアプリケーションを作成
app = FastAPI(
    title="Google Maps ジオコーディングサービス",
    description="住所と座標を相互変換するGoogle Maps Geocoding APIのラッパー",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/")
def root() -> dict[str, Any]:
    """ルートエンドポイント"""
    return {
        "service": settings.project_name,
        "version": "1.0.0",
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.get("/geocode")
def geocode(
    address: str = Query(..., description="ジオコーディングする住所"),
    all_results: bool = Query(False, alias="all", description="全ての結果を返すか"),
    geocoder: GoogleMapsGeocoder = Depends(get_geocoder),
) -> Union[JSONRecord, list[JSONRecord]]:
    """住所から座標を取得"""
    logger.info(f"Received geocoding request: {address}")

    locations = geocoder.geocode_address_all(address)

    if all_results:
        return [location.to_dict() for location in locations]
    return locations[0].to_dict()


@app.get("/reverse")
def reverse(
    lat: float = Query(..., ge=-90, le=90, description="緯度"),
    lng: float = Query(..., ge=-180, le=180, description="経度"),
    all_results: bool = Query(False, alias="all", description="全ての結果を返すか"),
    geocoder: GoogleMapsGeocoder = Depends(get_geocoder),
) -> Union[JSONRecord, list[JSONRecord]]:
    """座標から住所を取得"""
    logger.info(f"Received reverse geocoding request: ({lat}, {lng})")

    locations = geocoder.reverse_geocode_all(lat, lng)

    if all_results:
        return [location.to_dict() for location in locations]
    return locations[0].to_dict()


@app.exception_handler(GeocodingError)
async def geocoding_exception_handler(request: Request, exc: GeocodingError) -> JSONResponse:
    """ジオコーディングエラーは上流の失敗として502を返す"""
    logger.error(f"Geocoding failed: {exc}")
    return JSONResponse(
        status_code=502,
        content={"message": "Geocoding failed", "detail": str(exc)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_exception_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    """設定エラー"""
    logger.error(f"Configuration error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": "Service is not configured", "detail": str(exc)},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
