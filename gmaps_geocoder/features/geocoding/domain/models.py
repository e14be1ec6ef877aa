"""ジオコーディング機能のドメインモデル"""
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

from .responses import AddressComponent, Viewport

GEOCODE_ENDPOINT = "https://maps.googleapis.com/maps/api/geocode/json"

# 結果が見つからない場合の番兵値
RESULT_NOT_FOUND = "result_not_found"


@dataclass(frozen=True)
class GeocodeConfig:
    """
    ジオコーディング設定（生成後は不変）

    api_key 以外は省略可能。省略された項目はリクエストに含めない。
    """

    api_key: str = ""
    language: Optional[str] = None
    region: Optional[str] = None
    bounds: Optional[str] = None  # "lat,lng|lat,lng"
    country: Optional[str] = None  # components=country:XX

    def with_api_key(self, api_key: str) -> "GeocodeConfig":
        return replace(self, api_key=api_key)

    def with_language(self, language: str) -> "GeocodeConfig":
        return replace(self, language=language)

    def with_region(self, region: str) -> "GeocodeConfig":
        return replace(self, region=region)

    def with_bounds(self, bounds: str) -> "GeocodeConfig":
        return replace(self, bounds=bounds)

    def with_country(self, country: str) -> "GeocodeConfig":
        return replace(self, country=country)

    def __repr__(self) -> str:
        # APIキーはログに出さない
        masked_key = "***" if self.api_key else ""
        return (
            f"GeocodeConfig(api_key={masked_key!r}, "
            f"language={self.language!r}, region={self.region!r}, "
            f"bounds={self.bounds!r}, country={self.country!r})"
        )


@dataclass(frozen=True)
class LocationRecord:
    """正規化済みの位置情報（結果1件につき1つ）"""

    lat: float  # 緯度
    lng: float  # 経度
    accuracy: Optional[str]  # location_type または RESULT_NOT_FOUND
    formatted_address: Optional[str]
    viewport: Union[Viewport, str, None]  # 番兵レコードでは RESULT_NOT_FOUND
    address_components: tuple[AddressComponent, ...] = ()
    partial_match: bool = False
    place_id: Optional[str] = None
    types: frozenset[str] = field(default_factory=frozenset)

    # address_components から抽出
    city: Optional[str] = None
    state: Optional[str] = None
    street_number: Optional[str] = None
    street_name: Optional[str] = None

    @classmethod
    def not_found(cls) -> "LocationRecord":
        """結果なしを表す番兵レコードを生成"""
        return cls(
            lat=0.0,
            lng=0.0,
            accuracy=RESULT_NOT_FOUND,
            formatted_address=RESULT_NOT_FOUND,
            viewport=RESULT_NOT_FOUND,
        )

    @property
    def is_not_found(self) -> bool:
        """番兵レコードかどうか"""
        return self.accuracy == RESULT_NOT_FOUND

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.lat, self.lng)

    def to_dict(self) -> dict[str, Any]:
        """
        APIと同じsnake_caseの辞書に変換

        番兵レコードは定義済みの5項目のみを返す。
        """
        viewport = self.viewport
        if isinstance(viewport, Viewport):
            viewport = viewport.model_dump()

        data: dict[str, Any] = {
            "lat": self.lat,
            "lng": self.lng,
            "accuracy": self.accuracy,
            "formatted_address": self.formatted_address,
            "viewport": viewport,
        }
        if self.is_not_found:
            return data

        data.update(
            {
                "address_components": [c.model_dump() for c in self.address_components],
                "partial_match": self.partial_match,
                "place_id": self.place_id,
                "types": sorted(self.types),
                "city": self.city,
                "state": self.state,
                "street_number": self.street_number,
                "street_name": self.street_name,
            }
        )
        return data


def empty_response() -> list[LocationRecord]:
    """
    結果なし時の共通レスポンス

    空リストは返さず、常に番兵レコード1件を含むリストを返す。
    """
    return [LocationRecord.not_found()]
