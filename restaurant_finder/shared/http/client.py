"""外部API呼び出し用HTTPクライアント"""

from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions.errors import HTTPError
from ..logging.config import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; RestaurantFinder/1.0)"


class HTTPClient:
    """
    JSON APIを呼び出すためのHTTPクライアント

    Features:
    - タイムアウト設定（上流が応答しない場合にリクエスト全体が止まらないように）
    - リトライ回数の設定（デフォルトはリトライなし）
    - セッション管理（コネクションプーリング）
    """

    def __init__(
        self,
        timeout: float = 10,
        max_retries: int = 0,
        backoff_factor: float = 0.5,
        status_forcelist: tuple[int, ...] = (500, 502, 503, 504),
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            timeout: リクエストタイムアウト（秒）
            max_retries: 最大リトライ回数（0でリトライなし）
            backoff_factor: バックオフ係数
            status_forcelist: リトライ対象のステータスコード
            user_agent: User-Agentヘッダー
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.status_forcelist = status_forcelist
        self.user_agent = user_agent or DEFAULT_USER_AGENT

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """セッションを作成"""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=self.status_forcelist,
            allowed_methods=["GET", "POST"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        # Nominatim / Overpass はUser-Agentを必須とする
        session.headers.update({"User-Agent": self.user_agent})

        return session

    def get_json(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        GETリクエストを送り、レスポンスをJSONとして返す

        Args:
            url: リクエストURL
            params: クエリパラメータ
            headers: 追加ヘッダー

        Returns:
            デコード済みのJSON

        Raises:
            HTTPError: 通信失敗、2xx以外のステータス、JSONでないレスポンスの場合
        """
        try:
            logger.debug(f"GET request to {url} params={params}")
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            logger.debug(f"GET request successful: {url} (status={response.status_code})")
        except requests.RequestException as e:
            logger.error(f"GET request failed: {url} - {e}")
            raise HTTPError(f"Failed to GET {url}: {e}") from e

        return self._decode(response)

    def post_json(
        self,
        url: str,
        data: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        POSTリクエスト（フォーム送信）を送り、レスポンスをJSONとして返す

        Args:
            url: リクエストURL
            data: フォームデータ
            headers: 追加ヘッダー

        Returns:
            デコード済みのJSON

        Raises:
            HTTPError: 通信失敗、2xx以外のステータス、JSONでないレスポンスの場合
        """
        try:
            logger.debug(f"POST request to {url}")
            response = self.session.post(
                url,
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            logger.debug(f"POST request successful: {url} (status={response.status_code})")
        except requests.RequestException as e:
            logger.error(f"POST request failed: {url} - {e}")
            raise HTTPError(f"Failed to POST {url}: {e}") from e

        return self._decode(response)

    def _decode(self, response: requests.Response) -> Any:
        """レスポンス本文をJSONとしてデコード"""
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {response.url}: {e}")
            raise HTTPError(f"Invalid JSON response from {response.url}: {e}") from e

    def close(self) -> None:
        """セッションをクローズ"""
        if self.session:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
