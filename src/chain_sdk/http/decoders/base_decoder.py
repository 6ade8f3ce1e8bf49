"""
基底デコーダーモジュール

分類済みの正常レスポンスを呼び出し元の型に変換するデコーダーの基底クラスを提供します。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

import requests

from chain_sdk.exceptions import ChainError, ProtocolError

T = TypeVar('T')


@dataclass
class DecodeResult(Generic[T]):
    """デコード結果（値かエラーのどちらか一方）"""
    value: Optional[T] = None
    error: Optional[ChainError] = None

    @classmethod
    def ok(cls, value: T) -> "DecodeResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: ChainError) -> "DecodeResult[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None


class BaseDecoder(ABC, Generic[T]):
    """デコーダー基底クラス"""

    def __init__(self, response_type: Optional[Callable[[Any], T]] = None):
        """
        Args:
            response_type: JSON値から結果を生成する呼び出し可能オブジェクト
                           （省略時はJSON値をそのまま返す）
        """
        self.response_type = response_type

    def convert(self, value: Any, request_id: Optional[str] = None) -> T:
        """
        JSON値を結果の型に変換

        Raises:
            ProtocolError: スキーマが一致しない場合
        """
        if self.response_type is None:
            return value
        try:
            if isinstance(value, dict) and isinstance(self.response_type, type):
                return self.response_type(**value)
            return self.response_type(value)
        except (TypeError, ValueError, KeyError) as e:
            raise ProtocolError(f"Response does not match expected schema: {e}", request_id) from e

    @abstractmethod
    def decode(self, response: requests.Response, request_id: Optional[str] = None) -> DecodeResult[T]:
        """
        正常レスポンスをデコードする

        Args:
            response: 分類済みの正常レスポンス
            request_id: リクエストID

        Returns:
            DecodeResult
        """
        pass
