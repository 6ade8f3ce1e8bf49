"""
エンドポイント/認証情報モジュール

ベースURLとアクションパスからリクエストURLを組み立て、
アクセストークンからBasic認証ヘッダーを生成します。
"""

import base64
import json
import posixpath
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

from chain_sdk.exceptions import BadURLError
from chain_sdk.utils.constants import JSON_CONTENT_TYPE, USER_AGENT


@dataclass(frozen=True)
class APIRequest:
    """組み立て済みのリクエスト（生成後は変更不可）"""
    action: str
    url: str
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))


def create_endpoint(base_url: str, action: str) -> str:
    """
    ベースURLとアクションを連結し正規化したURLを返す

    Args:
        base_url: APIのベースURL
        action: アクションパス

    Returns:
        正規化されたURL
    """
    parts = urlsplit(f"{base_url}/{action}")
    if parts.scheme not in ('http', 'https') or not parts.netloc:
        raise BadURLError(f"invalid endpoint URL: {base_url}/{action}")

    # "a//b" や "a/./b/../c" を正規化する
    path = posixpath.normpath(parts.path)
    if path == '.':
        path = '/'
    elif path.startswith('//'):
        path = '/' + path.lstrip('/')
    if parts.path.endswith('/') and not path.endswith('/'):
        path += '/'

    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def build_credentials(access_token: Optional[str]) -> str:
    """
    アクセストークン "user:pass" からBasic認証ヘッダー値を生成

    最初のコロンで分割し、欠けている部分は空文字列とする。
    """
    user, _, password = (access_token or "").partition(':')
    encoded = base64.b64encode(f"{user}:{password}".encode('utf-8')).decode('ascii')
    return f"Basic {encoded}"


def build_request(base_url: str, action: str, body: Any,
                  access_token: Optional[str] = None,
                  user_agent: str = USER_AGENT) -> APIRequest:
    """
    POSTリクエストを組み立てる

    Args:
        base_url: APIのベースURL
        action: アクションパス
        body: JSONとして送信するペイロード
        access_token: アクセストークン（省略時は認証ヘッダーなし）
        user_agent: User-Agentヘッダー

    Returns:
        APIRequest
    """
    headers = {
        'User-Agent': user_agent,
        'Content-Type': JSON_CONTENT_TYPE,
    }
    if access_token:
        headers['Authorization'] = build_credentials(access_token)

    return APIRequest(
        action=action,
        url=create_endpoint(base_url, action),
        body=json.dumps(body).encode('utf-8'),
        headers=headers,
    )
