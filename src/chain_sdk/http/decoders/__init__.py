"""
デコーダーパッケージ

単一オブジェクト、バッチ、単一要素バッチの3種類のデコーダーを提供します。
"""

from chain_sdk.http.decoders.base_decoder import BaseDecoder, DecodeResult
from chain_sdk.http.decoders.single_decoder import SingleDecoder
from chain_sdk.http.decoders.batch_decoder import BatchDecoder, BatchItem, BatchResponse
from chain_sdk.http.decoders.singleton_batch_decoder import SingletonBatchDecoder

__all__ = [
    'BaseDecoder',
    'DecodeResult',
    'SingleDecoder',
    'BatchDecoder',
    'BatchItem',
    'BatchResponse',
    'SingletonBatchDecoder',
]
