"""
コンテキストモジュール

リモートAPIに対してリクエストを実行するための情報を保持し、
リトライ付きのPOSTループと3種類の公開操作を提供します。
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar
from urllib.parse import urlsplit

import requests

from chain_sdk.exceptions import ChainError, ProtocolError, TransportError
from chain_sdk.http.base.endpoint import APIRequest, build_request
from chain_sdk.http.base.response_classifier import check_error
from chain_sdk.http.base.retry_handler import (
    RetryConfig,
    check_cancelled,
    is_retryable,
    wait_before_retry,
)
from chain_sdk.http.decoders import (
    BaseDecoder,
    BatchDecoder,
    BatchResponse,
    SingleDecoder,
    SingletonBatchDecoder,
)
from chain_sdk.utils.constants import DEFAULT_URL, REQUEST_ID_HEADER, USER_AGENT

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_PORTS = {'http': 80, 'https': 443}


class Context:
    """APIへのHTTPリクエストに必要な情報を保持するクラス"""

    def __init__(self, url: Optional[str] = None, access_token: Optional[str] = None,
                 session: Optional[requests.Session] = None,
                 retry_config: Optional[RetryConfig] = None,
                 timeout: Optional[Tuple[Optional[float], Optional[float]]] = None,
                 user_agent: str = USER_AGENT,
                 request_id_header: str = REQUEST_ID_HEADER):
        """
        Args:
            url: APIのベースURL（省略時は開発用ホスト）
            access_token: "user:pass" 形式のアクセストークン
            session: リクエストセッション
            retry_config: リトライ設定
            timeout: タイムアウト設定 (接続, 読み取り)、Noneはタイムアウトなし
            user_agent: User-Agentヘッダー
            request_id_header: リクエストIDヘッダー名
        """
        self.url = (url or DEFAULT_URL).rstrip('/')
        self.access_token = access_token
        self.session = session or requests.Session()
        self.retry_config = retry_config or RetryConfig()
        self.timeout = timeout
        self.user_agent = user_agent
        self.request_id_header = request_id_header

    @classmethod
    def from_config(cls, config, url: Optional[str] = None,
                    access_token: Optional[str] = None,
                    session: Optional[requests.Session] = None) -> "Context":
        """ClientConfig からコンテキストを生成"""
        client = config.get_client_config()
        return cls(
            url=url or client['url'],
            access_token=access_token,
            session=session,
            retry_config=config.build_retry_config(),
            timeout=config.get_timeout(),
            user_agent=client['user_agent'],
            request_id_header=client['request_id_header'],
        )

    def has_access_token(self) -> bool:
        return bool(self.access_token)

    def set_connect_timeout(self, seconds: Optional[float]):
        """接続タイムアウトを設定（0またはNoneでタイムアウトなし）"""
        _, read = self.timeout or (None, None)
        self.timeout = (seconds or None, read)

    def set_read_timeout(self, seconds: Optional[float]):
        """読み取りタイムアウトを設定（0またはNoneでタイムアウトなし）"""
        connect, _ = self.timeout or (None, None)
        self.timeout = (connect, seconds or None)

    def set_proxy(self, proxies: Dict[str, str]):
        """
        プロキシを設定

        Args:
            proxies: スキームごとのプロキシURL（例: {"https": "http://proxy:8080"}）
        """
        self.session.proxies.update(proxies)

    def identity(self) -> Tuple[str, Optional[str], str, int]:
        """同一性判定に使うキー (スキーム, トークン, ホスト, ポート)"""
        parts = urlsplit(self.url)
        port = parts.port or DEFAULT_PORTS.get(parts.scheme, 0)
        token = self.access_token if self.has_access_token() else None
        return (parts.scheme, token, parts.hostname or "", port)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def __repr__(self) -> str:
        return f"Context(url={self.url!r}, has_access_token={self.has_access_token()})"

    def request(self, action: str, body: Any,
                response_type: Optional[Callable[[Any], T]] = None,
                cancel_event: Optional[threading.Event] = None) -> T:
        """
        アクションに対して1回のPOSTリクエストを実行

        Args:
            action: APIアクション
            body: JSONとして送信するペイロード
            response_type: レスポンスJSONから結果を生成する型
            cancel_event: キャンセル通知

        Returns:
            デコードされた結果
        """
        return self.post(action, body, SingleDecoder(response_type), cancel_event)

    def batch_request(self, action: str, body: Any,
                      response_type: Optional[Callable[[Any], T]] = None,
                      cancel_event: Optional[threading.Event] = None) -> BatchResponse[T]:
        """
        バッチとしてPOSTリクエストを実行

        レスポンスは入力要素ごとに成功オブジェクトかエラーオブジェクトを持つ配列。
        """
        return self.post(action, body, BatchDecoder(response_type), cancel_event)

    def singleton_batch_request(self, action: str, body: Any,
                                response_type: Optional[Callable[[Any], T]] = None,
                                cancel_event: Optional[threading.Event] = None) -> T:
        """
        バッチとして実装されたエンドポイントを1要素で呼び出す

        リクエストボディの配列化は行わないため、呼び出し側で配列にすること。
        """
        return self.post(action, body, SingletonBatchDecoder(response_type), cancel_event)

    def build_request(self, action: str, body: Any) -> APIRequest:
        return build_request(self.url, action, body,
                             access_token=self.access_token,
                             user_agent=self.user_agent)

    def post(self, action: str, body: Any, decoder: BaseDecoder,
             cancel_event: Optional[threading.Event] = None) -> Any:
        """
        リトライ付きでPOSTリクエストを実行

        Args:
            action: APIアクション
            body: JSONとして送信するペイロード
            decoder: 正常レスポンスのデコーダー
            cancel_event: キャンセル通知

        Returns:
            デコーダーが生成した結果

        Raises:
            ChainError: リトライ不可のエラー、またはリトライ回数を使い切った場合の最後のエラー
        """
        req = self.build_request(action, body)
        rng = self.retry_config.new_rng()
        max_attempts = self.retry_config.max_attempts
        last_error: Optional[ChainError] = None

        for attempt in range(1, max_attempts + 1):
            # 初回は待機しない
            if attempt > 1:
                delay_ms = self.retry_config.get_delay(attempt - 1, rng)
                logger.warning(
                    f"{last_error}。{delay_ms}ms後にリトライします "
                    f"(試行回数: {attempt}/{max_attempts}, action: {action})"
                )
                wait_before_retry(delay_ms, cancel_event)

            check_cancelled(cancel_event)

            response = self._send(req)
            error = check_error(response, self.request_id_header)
            if error is None:
                result = decoder.decode(response, response.headers.get(self.request_id_header))
                if result.is_ok:
                    return result.value
                error = result.error

            if not is_retryable(error):
                if isinstance(error, ProtocolError):
                    logger.error(f"レスポンスの形式エラー: {error}")
                else:
                    logger.error(f"リトライ対象外のエラー: {error}")
                raise error

            last_error = error

        logger.error(f"最大リトライ回数到達 (action: {action}): {last_error}")
        raise last_error

    def _send(self, req: APIRequest) -> requests.Response:
        """
        トランスポートでリクエストを送信

        I/Oエラーはトランスポート側のリトライに任せ、ここではリトライしない。
        """
        try:
            return self.session.post(
                req.url,
                data=req.body,
                headers=dict(req.headers),
                timeout=self.timeout,
                allow_redirects=False,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"通信エラー: {e}")
            raise TransportError(str(e)) from e
