"""
例外モジュール

リクエスト実行時に発生するエラーの分類を提供します。
リトライループが吸収するのは ConnectivityError とリトライ可能な APIError のみです。
"""

from typing import Any, Dict, Optional

import requests

from chain_sdk.utils.constants import REQUEST_ID_HEADER


class ChainError(Exception):
    """SDKの基底例外"""

    def __init__(self, message: str, request_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.request_id = request_id

    def __str__(self) -> str:
        if self.request_id:
            return f"{self.message} (request ID: {self.request_id})"
        return self.message


class BadURLError(ChainError):
    """エンドポイントURLを組み立てられない"""


class TransportError(ChainError):
    """ネットワーク/IOエラー（このレイヤーではリトライしない）"""


class ConnectivityError(ChainError):
    """レスポンスは届いたがAPIサーバーからのものではない（ゲートウェイ/プロキシ）"""

    def __init__(self, response: requests.Response, header: str = REQUEST_ID_HEADER):
        self.response = response
        self.status_code = response.status_code
        super().__init__(
            f"Response HTTP header field {header} is unset. "
            f"There may be network issues. Status code: {response.status_code}"
        )


class APIError(ChainError):
    """APIサーバーが返したアプリケーションエラー"""

    def __init__(self, code: str, message: str = "", detail: Optional[str] = None,
                 data: Optional[Dict[str, Any]] = None, temporary: bool = False,
                 request_id: Optional[str] = None, status_code: Optional[int] = None):
        """
        Args:
            code: エラーコード
            message: エラーメッセージ
            detail: 詳細情報
            data: 付加データ
            temporary: サーバーが一時的なエラーと宣言しているか
            request_id: リクエストID（分類時に付与）
            status_code: HTTPステータスコード（分類時に付与）
        """
        self.code = code
        self.detail = detail
        self.data = data
        self.temporary = temporary
        self.status_code = status_code
        super().__init__(message, request_id)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], request_id: Optional[str] = None,
                  status_code: Optional[int] = None) -> "APIError":
        """
        エラーオブジェクトからAPIErrorを生成

        ワイヤー上の requestId/statusCode は信用せず、引数の値を使用します。
        """
        data = payload.get('data')
        return cls(
            code=str(payload['code']),
            message=payload.get('message') or "",
            detail=payload.get('detail'),
            data=data if isinstance(data, dict) else None,
            temporary=payload.get('temporary') is True,
            request_id=request_id,
            status_code=status_code,
        )

    def __str__(self) -> str:
        parts = [f"Code: {self.code}", f"Message: {self.message}"]
        if self.detail:
            parts.append(f"Detail: {self.detail}")
        if self.request_id:
            parts.append(f"Request-ID: {self.request_id}")
        return " ".join(parts)


class ProtocolError(ChainError):
    """レスポンスボディが期待されるスキーマに違反している"""


class InvariantViolationError(ProtocolError):
    """単一要素バッチの要素数が1でない"""


class RequestCancelledError(ChainError):
    """呼び出し元によってリクエストがキャンセルされた"""
