"""
バッチデコーダーモジュール

配列形式のレスポンスを、要素ごとの成功/エラーの結果列に変換します。
"""

from dataclasses import dataclass
from typing import Dict, Generic, Iterator, List, Optional

import requests

from chain_sdk.exceptions import APIError, ProtocolError
from chain_sdk.http.base.response_classifier import get_request_id, parse_json
from chain_sdk.http.decoders.base_decoder import BaseDecoder, DecodeResult, T


@dataclass(frozen=True)
class BatchItem(Generic[T]):
    """バッチの1要素の結果"""
    index: int
    value: Optional[T] = None
    error: Optional[APIError] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class BatchResponse(Generic[T]):
    """バッチレスポンス（ワイヤー上の順序を保持）"""

    def __init__(self, items: List[BatchItem[T]], response: requests.Response,
                 request_id: Optional[str] = None):
        """
        Args:
            items: 要素ごとの結果
            response: 元のHTTPレスポンス
            request_id: リクエストID
        """
        self.items = items
        self.response = response
        self.request_id = request_id

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[BatchItem[T]]:
        return iter(self.items)

    def successes(self) -> List[T]:
        """成功した要素（順序保持）"""
        return [item.value for item in self.items if not item.is_error]

    def errors(self) -> List[APIError]:
        """エラー要素（順序保持）"""
        return [item.error for item in self.items if item.is_error]

    def successes_by_index(self) -> Dict[int, T]:
        """元の位置をキーにした成功要素"""
        return {item.index: item.value for item in self.items if not item.is_error}

    def errors_by_index(self) -> Dict[int, APIError]:
        """元の位置をキーにしたエラー要素"""
        return {item.index: item.error for item in self.items if item.is_error}


class BatchDecoder(BaseDecoder[T]):
    """バッチデコーダー"""

    def decode_batch(self, response: requests.Response,
                     request_id: Optional[str] = None) -> BatchResponse[T]:
        """
        配列ボディを BatchResponse に変換

        エラーコード "code" を持つ要素をエラー、それ以外を成功として扱う。
        request_id 省略時はレスポンスのリクエストIDヘッダーを使う。

        Raises:
            ProtocolError: ボディが配列でない、または要素が変換できない場合
        """
        request_id = request_id or get_request_id(response)
        data = parse_json(response, request_id)
        if not isinstance(data, list):
            raise ProtocolError("Batch response body is not a JSON array", request_id)

        items = []
        for index, element in enumerate(data):
            if isinstance(element, dict) and element.get('code'):
                error = APIError.from_dict(element, request_id=request_id,
                                           status_code=response.status_code)
                items.append(BatchItem(index=index, error=error))
            else:
                items.append(BatchItem(index=index, value=self.convert(element, request_id)))

        return BatchResponse(items, response, request_id)

    def decode(self, response: requests.Response,
               request_id: Optional[str] = None) -> DecodeResult[BatchResponse[T]]:
        try:
            return DecodeResult.ok(self.decode_batch(response, request_id))
        except ProtocolError as e:
            return DecodeResult.fail(e)
