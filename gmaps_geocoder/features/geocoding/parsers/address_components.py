"""住所コンポーネント抽出ユーティリティ"""

from collections.abc import Sequence
from typing import Optional

from ..domain.responses import AddressComponent


def get_address_component_by_type(
    address_components: Sequence[AddressComponent], component_type: str
) -> Optional[str]:
    """
    指定タイプを持つ最初のコンポーネントの short_name を返す

    Args:
        address_components: 住所コンポーネント（APIの返却順）
        component_type: 探すタイプ（例: "route"）

    Returns:
        Optional[str]: short_name（該当なしの場合はNone）
    """
    for component in address_components:
        if component_type in component.types:
            return component.short_name
    return None


def get_city(address_components: Sequence[AddressComponent]) -> Optional[str]:
    # NOTE: locality ではなく postal_code を引いている（既存の挙動を維持）
    return get_address_component_by_type(address_components, "postal_code")


def get_state(address_components: Sequence[AddressComponent]) -> Optional[str]:
    return get_address_component_by_type(address_components, "administrative_area_level_1")


def get_street_number(address_components: Sequence[AddressComponent]) -> Optional[str]:
    return get_address_component_by_type(address_components, "street_number")


def get_street_name(address_components: Sequence[AddressComponent]) -> Optional[str]:
    return get_address_component_by_type(address_components, "route")


def get_postal_code(address_components: Sequence[AddressComponent]) -> Optional[str]:
    """郵便番号（LocationRecordには含めない）"""
    return get_address_component_by_type(address_components, "postal_code")


def get_postal_code_suffix(address_components: Sequence[AddressComponent]) -> Optional[str]:
    """郵便番号サフィックス（米国ZIP+4の下4桁）"""
    return get_address_component_by_type(address_components, "postal_code_suffix")
