"""
基底パッケージ

リクエスト組み立て、レスポンス分類、リトライ制御を提供します。
"""

from chain_sdk.http.base.endpoint import APIRequest, build_credentials, build_request, create_endpoint
from chain_sdk.http.base.response_classifier import check_error, get_request_id, parse_json
from chain_sdk.http.base.retry_handler import RetryConfig, is_retriable_status_code, is_retryable

__all__ = [
    'APIRequest',
    'build_credentials',
    'build_request',
    'create_endpoint',
    'check_error',
    'get_request_id',
    'parse_json',
    'RetryConfig',
    'is_retriable_status_code',
    'is_retryable',
]
