"""カスタム例外定義"""


class GeocoderError(Exception):
    """ジオコーダー基底例外"""

    pass


class HTTPError(GeocoderError):
    """HTTP関連のエラー"""

    pass


class GeocodingError(GeocoderError):
    """ジオコーディングエラー（呼び出し単位で終端）"""

    @classmethod
    def could_not_connect(cls) -> "GeocodingConnectionError":
        """サービスに接続できなかった場合の例外を生成"""
        return GeocodingConnectionError("Could not connect to the geocoding service")

    @classmethod
    def service_returned_error(cls, error_message: str) -> "GeocodingServiceError":
        """サービスがエラーメッセージを返した場合の例外を生成"""
        return GeocodingServiceError(error_message)


class GeocodingConnectionError(GeocodingError):
    """接続エラー（200以外のステータス、または通信失敗）"""

    pass


class GeocodingServiceError(GeocodingError):
    """サービスが error_message を返した"""

    def __init__(self, error_message: str) -> None:
        """
        Args:
            error_message: サービスが返したエラーメッセージ（そのまま保持）
        """
        super().__init__(f"The geocoding service returned an error: {error_message}")
        self.error_message = error_message


class GeocodingResponseError(GeocodingError):
    """レスポンスの解析エラー（JSON不正・想定外の構造）"""

    pass


class ConfigurationError(GeocoderError):
    """設定エラー"""

    pass
