"""Geocoding APIレスポンスの型定義（境界で一度だけデコードする）"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """レスポンス用の基底モデル（未知のキーは無視）"""

    model_config = ConfigDict(extra="ignore", frozen=True)


class LatLng(_WireModel):
    """緯度・経度"""

    lat: float
    lng: float


class Viewport(_WireModel):
    """推奨表示領域"""

    northeast: LatLng
    southwest: LatLng


class Geometry(_WireModel):
    """位置情報"""

    location: LatLng
    location_type: Optional[str] = None  # ROOFTOP, APPROXIMATE など
    viewport: Optional[Viewport] = None
    bounds: Optional[Viewport] = None


class AddressComponent(_WireModel):
    """住所コンポーネント（route, locality などの型付き断片）"""

    long_name: str = ""
    short_name: str = ""
    types: list[str] = Field(default_factory=list)


class RawGeocodeResult(_WireModel):
    """APIが返す結果1件"""

    geometry: Geometry
    formatted_address: Optional[str] = None
    address_components: list[AddressComponent] = Field(default_factory=list)
    partial_match: bool = False
    place_id: Optional[str] = None
    types: list[str] = Field(default_factory=list)


class GeocodeResponse(_WireModel):
    """
    APIレスポンス全体

    results は error_message の確認後に検証するため、ここでは未検証のまま保持する。
    """

    results: Any = Field(default_factory=list)
    status: Optional[str] = None
    error_message: Optional[str] = None
