"""
単一要素バッチデコーダー

バッチとして実装されたエンドポイントを1要素で呼び出した結果を取り出します。
"""

from typing import Optional

import requests

from chain_sdk.exceptions import InvariantViolationError, ProtocolError
from chain_sdk.http.decoders.base_decoder import DecodeResult, T
from chain_sdk.http.decoders.batch_decoder import BatchDecoder


class SingletonBatchDecoder(BatchDecoder[T]):
    """単一要素バッチデコーダー"""

    def decode(self, response: requests.Response,
               request_id: Optional[str] = None) -> DecodeResult[T]:
        try:
            batch = self.decode_batch(response, request_id)
        except ProtocolError as e:
            return DecodeResult.fail(e)

        if len(batch) != 1:
            # SDKかAPIのどちらかのバグでしか起こらない
            return DecodeResult.fail(InvariantViolationError(
                f"Invalid singleton response, {len(batch)} elements", batch.request_id
            ))

        item = batch.items[0]
        if item.is_error:
            # 通常のAPIエラーと同じリトライ判定を受けさせる
            return DecodeResult.fail(item.error)
        return DecodeResult.ok(item.value)
