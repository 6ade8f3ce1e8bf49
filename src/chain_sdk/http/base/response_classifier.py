"""
レスポンス分類モジュール

生のレスポンスを「正常」「APIエラー」「API以外からの応答」に分類します。
"""

import json
import logging
from typing import Optional

import requests

from chain_sdk.exceptions import APIError, ChainError, ConnectivityError, ProtocolError
from chain_sdk.utils.constants import REQUEST_ID_HEADER

logger = logging.getLogger(__name__)


def get_request_id(response: requests.Response,
                   header: str = REQUEST_ID_HEADER) -> Optional[str]:
    """リクエストIDヘッダーを取得（空文字列はNone扱い）"""
    request_id = response.headers.get(header)
    return request_id or None


def parse_json(response: requests.Response, request_id: Optional[str] = None):
    """
    レスポンスボディをJSONとしてパース

    Raises:
        ProtocolError: ボディが不正なJSONの場合
    """
    data = response.text
    try:
        return json.loads(data)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"JSONデコードエラー: {e}")
        logger.debug(f"受信したレスポンスデータ: {str(data)[:200]}...")
        raise ProtocolError(f"Unable to read body. {e}", request_id) from e


def check_error(response: requests.Response,
                header: str = REQUEST_ID_HEADER) -> Optional[ChainError]:
    """
    レスポンスを分類する

    Args:
        response: HTTPレスポンス
        header: リクエストIDヘッダー名

    Returns:
        正常なレスポンスならNone、それ以外は分類済みのエラー
    """
    request_id = get_request_id(response, header)
    if request_id is None:
        # リクエストIDヘッダーはAPIサーバーが付与する。
        # 無い場合はゲートウェイかプロキシと通信している。
        return ConnectivityError(response, header)

    if response.status_code // 100 == 2:
        return None

    try:
        payload = parse_json(response, request_id)
    except ProtocolError as e:
        return e

    if not isinstance(payload, dict) or not payload.get('code'):
        logger.error(f"エラーコードのないエラーレスポンス: status={response.status_code}")
        return ProtocolError(
            f"Error response without error code, status code {response.status_code}",
            request_id,
        )

    return APIError.from_dict(payload, request_id=request_id,
                              status_code=response.status_code)
