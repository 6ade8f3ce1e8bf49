"""
HTTPパッケージ

リクエスト実行コンテキストとデコーダーを提供します。
"""

from chain_sdk.http.context import Context
from chain_sdk.http.decoders import BatchResponse

__all__ = ['Context', 'BatchResponse']
