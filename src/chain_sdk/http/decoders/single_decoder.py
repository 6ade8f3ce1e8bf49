"""
単一オブジェクトデコーダー

ボディ全体を1つの結果として変換します。
"""

from typing import Optional

import requests

from chain_sdk.exceptions import ProtocolError
from chain_sdk.http.base.response_classifier import parse_json
from chain_sdk.http.decoders.base_decoder import BaseDecoder, DecodeResult, T


class SingleDecoder(BaseDecoder[T]):
    """単一オブジェクトデコーダー"""

    def decode(self, response: requests.Response, request_id: Optional[str] = None) -> DecodeResult[T]:
        try:
            data = parse_json(response, request_id)
            return DecodeResult.ok(self.convert(data, request_id))
        except ProtocolError as e:
            return DecodeResult.fail(e)
