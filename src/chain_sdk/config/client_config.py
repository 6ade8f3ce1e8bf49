"""
クライアント設定管理モジュール

クライアント設定ファイルを読み込み、管理します。
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

from chain_sdk.http.base.retry_handler import RetryConfig
from chain_sdk.utils.constants import (
    DEFAULT_URL,
    MAX_RETRIES,
    REQUEST_ID_HEADER,
    RETRY_BASE_DELAY_MILLIS,
    RETRY_MAX_DELAY_MILLIS,
    USER_AGENT,
)


class ClientConfig:
    """クライアント設定管理クラス"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: 設定ファイルパス（省略時はデフォルト）
        """
        if config_path is None:
            config_path = Path(__file__).parent / "client_config.yaml"

        self.config_path = Path(config_path)
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """設定ファイルを読み込み"""
        with open(self.config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}

        client = config.setdefault('client', {}) or {}
        timeouts = config.setdefault('timeouts', {}) or {}
        retry = config.setdefault('retry', {}) or {}
        config.update(client=client, timeouts=timeouts, retry=retry)

        # constants.pyからデフォルト値を読み込み
        if client.get('url') is None:
            client['url'] = DEFAULT_URL
        if client.get('user_agent') is None:
            client['user_agent'] = USER_AGENT
        if client.get('request_id_header') is None:
            client['request_id_header'] = REQUEST_ID_HEADER

        timeouts.setdefault('connect', None)
        timeouts.setdefault('read', None)

        if retry.get('max_retries') is None:
            retry['max_retries'] = MAX_RETRIES
        if retry.get('base_delay_ms') is None:
            retry['base_delay_ms'] = RETRY_BASE_DELAY_MILLIS
        if retry.get('max_delay_ms') is None:
            retry['max_delay_ms'] = RETRY_MAX_DELAY_MILLIS

        return config

    def get_client_config(self) -> Dict[str, Any]:
        """クライアント設定を取得"""
        return self.config['client']

    def get_timeout_config(self) -> Dict[str, Any]:
        """タイムアウト設定を取得"""
        return self.config['timeouts']

    def get_retry_config(self) -> Dict[str, Any]:
        """リトライ設定を取得"""
        return self.config['retry']

    def get_timeout(self) -> Tuple[Optional[float], Optional[float]]:
        """requests に渡す (接続, 読み取り) タイムアウト"""
        timeouts = self.get_timeout_config()
        return (timeouts['connect'] or None, timeouts['read'] or None)

    def build_retry_config(self) -> RetryConfig:
        """設定値から RetryConfig を生成"""
        retry = self.get_retry_config()
        return RetryConfig(
            max_retries=int(retry['max_retries']),
            base_delay_ms=int(retry['base_delay_ms']),
            max_delay_ms=int(retry['max_delay_ms']),
        )
