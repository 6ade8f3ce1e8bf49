"""
Chain SDK

リモートJSON APIに対するリクエスト実行コアを提供します。
"""

from chain_sdk.exceptions import (
    ChainError,
    BadURLError,
    TransportError,
    ConnectivityError,
    APIError,
    ProtocolError,
    InvariantViolationError,
    RequestCancelledError,
)
from chain_sdk.http.context import Context
from chain_sdk.http.decoders import BatchResponse

__version__ = "0.1.0"

__all__ = [
    'Context',
    'BatchResponse',
    'ChainError',
    'BadURLError',
    'TransportError',
    'ConnectivityError',
    'APIError',
    'ProtocolError',
    'InvariantViolationError',
    'RequestCancelledError',
]
