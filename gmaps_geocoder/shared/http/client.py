"""HTTPクライアント（リトライ機能付き）"""

from typing import Any, Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions.errors import HTTPError
from ..logging.config import get_logger

logger = get_logger(__name__)


class HTTPResponse(Protocol):
    """トランスポートが返すレスポンス"""

    @property
    def status_code(self) -> int: ...

    @property
    def content(self) -> bytes: ...


class HTTPTransport(Protocol):
    """ジオコーダーに注入するトランスポート（リトライ・TLS・タイムアウトは実装側の責務）"""

    def request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> HTTPResponse: ...


class HTTPClient:
    """
    リトライ機能付きHTTPクライアント

    ジオコーダーに注入されるトランスポート。
    ステータスコードの判定は呼び出し側が行うため、非2xxでも例外にしない。

    Features:
    - 自動リトライ（指数バックオフ）
    - タイムアウト設定
    - セッション管理
    """

    def __init__(
        self,
        timeout: float = 10,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
        status_forcelist: tuple[int, ...] = (500, 502, 503, 504),
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            timeout: リクエストタイムアウト（秒）
            max_retries: 最大リトライ回数
            backoff_factor: バックオフ係数
            status_forcelist: リトライ対象のステータスコード
            user_agent: User-Agentヘッダー
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.status_forcelist = status_forcelist
        self.user_agent = user_agent or "gmaps-geocoder/1.0"

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """セッションを作成"""
        session = requests.Session()

        # リトライ設定（リトライ枯渇時は最後のレスポンスをそのまま返す）
        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=self.status_forcelist,
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        # デフォルトヘッダー
        session.headers.update({"User-Agent": self.user_agent})

        return session

    def request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        """
        HTTPリクエストを送信

        Args:
            method: HTTPメソッド（例: "GET"）
            url: リクエストURL
            params: クエリパラメータ
            headers: 追加ヘッダー

        Returns:
            レスポンスオブジェクト（status_code / content を参照）

        Raises:
            HTTPError: 通信そのものに失敗した場合
        """
        try:
            logger.debug(f"{method} request to {url}")
            response = self.session.request(
                method,
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
            logger.debug(f"{method} request finished: {url} (status={response.status_code})")
            return response

        except requests.RequestException as e:
            logger.error(f"{method} request failed: {url} - {e}")
            raise HTTPError(f"Failed to {method} {url}: {e}") from e

    def close(self) -> None:
        """セッションをクローズ"""
        if self.session:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
