"""リクエストパラメータの組み立て"""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Optional

from ..domain.models import GeocodeConfig


def format_coordinate(value: float) -> str:
    """
    座標を10進表記の文字列にする（APIは指数表記を受け付けない）

    repr による最短表記の桁をそのまま使う（例: 1e-05 -> "0.00001"）。
    """
    return format(Decimal(repr(float(value))), "f")


def format_latlng(lat: float, lng: float) -> str:
    """latlng パラメータの値（"<lat>,<lng>"）"""
    return f"{format_coordinate(lat)},{format_coordinate(lng)}"


def build_payload(
    config: GeocodeConfig, extra: Mapping[str, Optional[str]]
) -> Mapping[str, str]:
    """
    設定と呼び出し固有のパラメータからクエリパラメータを組み立てる

    - extra は設定値より優先する
    - 空文字・None など偽の値は送信しない
    - country が設定されていれば components=country:XX を付与（上書き）

    Args:
        config: ジオコーディング設定
        extra: 呼び出し固有のパラメータ（address または latlng）

    Returns:
        Mapping[str, str]: 読み取り専用のクエリパラメータ
    """
    merged: dict[str, Optional[str]] = {
        "key": config.api_key,
        "language": config.language,
        "region": config.region,
        "bounds": config.bounds,
    }
    merged.update(extra)

    params = {name: value for name, value in merged.items() if value}

    if config.country:
        params["components"] = f"country:{config.country}"

    return MappingProxyType(params)
