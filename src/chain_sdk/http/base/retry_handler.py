"""
リトライハンドラーモジュール

フルジッター付き指数バックオフの待機時間計算と、
エラーごとのリトライ可否判定を提供します。
"""

import logging
import random
import threading
import time
from typing import Optional

from chain_sdk.exceptions import APIError, ChainError, ConnectivityError, RequestCancelledError
from chain_sdk.utils.constants import (
    MAX_RETRIES,
    RETRIABLE_STATUS_CODES,
    RETRY_BASE_DELAY_MILLIS,
    RETRY_MAX_DELAY_MILLIS,
)

logger = logging.getLogger(__name__)


class RetryConfig:
    """リトライ設定クラス"""

    def __init__(self, max_retries: int = MAX_RETRIES,
                 base_delay_ms: int = RETRY_BASE_DELAY_MILLIS,
                 max_delay_ms: int = RETRY_MAX_DELAY_MILLIS,
                 rng: Optional[random.Random] = None):
        """
        Args:
            max_retries: 最大リトライ回数（総試行回数は1 + max_retries）
            base_delay_ms: 初回リトライの待機上限（ミリ秒）
            max_delay_ms: 待機上限の最大値（ミリ秒）
            rng: ジッター用の乱数生成器（省略時は呼び出しごとに生成）
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if base_delay_ms < 1 or max_delay_ms < 1:
            raise ValueError("delays must be >= 1 ms")

        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.rng = rng

    @property
    def max_attempts(self) -> int:
        return 1 + self.max_retries

    def get_delay_cap(self, retry_attempt: int) -> int:
        """n回目のリトライの待機上限 min(base * 2^(n-1), max) を返す"""
        if retry_attempt < 1:
            raise ValueError("retry_attempt starts at 1")
        # シフト量を抑えて巨大な整数を作らない
        shift = min(retry_attempt - 1, self.max_delay_ms.bit_length())
        return min(self.base_delay_ms << shift, self.max_delay_ms)

    def get_delay(self, retry_attempt: int, rng: Optional[random.Random] = None) -> int:
        """
        リトライ回数に基づいて待機時間を計算

        Args:
            retry_attempt: リトライ回数（1から開始）
            rng: 乱数生成器（省略時は設定値、それも無ければ新規生成）

        Returns:
            [1, 上限] から一様に選んだ待機時間（ミリ秒）
        """
        cap = self.get_delay_cap(retry_attempt)
        generator = rng or self.rng or random.Random()
        return generator.randint(1, cap)

    def new_rng(self) -> random.Random:
        """1回の呼び出しで使う乱数生成器を返す"""
        return self.rng or random.Random()


def is_retriable_status_code(status_code: Optional[int]) -> bool:
    """常にリトライ対象となるステータスコードか"""
    return status_code in RETRIABLE_STATUS_CODES


def is_retryable(error: ChainError) -> bool:
    """
    分類済みエラーをリトライすべきか判定

    ConnectivityErrorは常にリトライ、APIErrorはステータスコードが
    リトライ対象か一時的エラーと宣言されている場合のみリトライする。
    """
    if isinstance(error, ConnectivityError):
        return True
    if isinstance(error, APIError):
        return is_retriable_status_code(error.status_code) or error.temporary
    return False


def check_cancelled(cancel_event: Optional[threading.Event]):
    """キャンセルされていれば RequestCancelledError を送出"""
    if cancel_event is not None and cancel_event.is_set():
        raise RequestCancelledError("request cancelled")


def wait_before_retry(delay_ms: int, cancel_event: Optional[threading.Event] = None):
    """
    リトライ前に待機する

    待機中にキャンセルされた場合は RequestCancelledError を送出する。
    """
    seconds = delay_ms / 1000.0
    if cancel_event is None:
        time.sleep(seconds)
        return
    if cancel_event.wait(seconds):
        logger.info("バックオフ待機中にキャンセルされました")
        raise RequestCancelledError("request cancelled during retry backoff")
