"""
ClientConfigのテスト
"""
import pytest

from chain_sdk.config.client_config import ClientConfig
from chain_sdk.http.base.retry_handler import RetryConfig
from chain_sdk.http.context import Context


class TestClientConfig:
    """ClientConfigのテスト"""

    def test_initialization(self):
        """初期化のテスト"""
        config = ClientConfig()
        assert config.config is not None
        assert isinstance(config.config, dict)

    def test_default_client_config(self):
        """null の項目は定数で補完される"""
        client = ClientConfig().get_client_config()

        assert client["url"] == "http://localhost:1999"
        assert client["user_agent"] == "chain-sdk-python"
        assert client["request_id_header"] == "Chain-Request-ID"

    def test_default_retry_config(self):
        retry = ClientConfig().get_retry_config()

        assert retry["max_retries"] == 10
        assert retry["base_delay_ms"] == 40
        assert retry["max_delay_ms"] == 4000

    def test_default_timeout(self):
        assert ClientConfig().get_timeout() == (30, 120)

    def test_build_retry_config(self):
        retry_config = ClientConfig().build_retry_config()

        assert isinstance(retry_config, RetryConfig)
        assert retry_config.max_attempts == 11

    def test_custom_config_file(self, tmp_path):
        """カスタム設定ファイルの読み込み"""
        path = tmp_path / "client.yaml"
        path.write_text(
            "client:\n"
            "  url: https://core.example.com\n"
            "timeouts:\n"
            "  connect: 0\n"
            "  read: 15\n"
            "retry:\n"
            "  max_retries: 3\n"
            "  base_delay_ms: 10\n",
            encoding="utf-8",
        )

        config = ClientConfig(path)

        assert config.get_client_config()["url"] == "https://core.example.com"
        assert config.get_client_config()["user_agent"] == "chain-sdk-python"
        assert config.get_timeout() == (None, 15)
        retry_config = config.build_retry_config()
        assert retry_config.max_retries == 3
        assert retry_config.base_delay_ms == 10
        assert retry_config.max_delay_ms == 4000

    def test_empty_config_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        config = ClientConfig(path)

        assert config.get_timeout() == (None, None)
        assert config.get_retry_config()["max_retries"] == 10

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ClientConfig(tmp_path / "missing.yaml")

    def test_context_from_config(self, tmp_path):
        path = tmp_path / "client.yaml"
        path.write_text(
            "client:\n"
            "  url: https://core.example.com\n"
            "  request_id_header: X-Request-ID\n"
            "retry:\n"
            "  max_retries: 2\n",
            encoding="utf-8",
        )

        context = Context.from_config(ClientConfig(path), access_token="a:b")

        assert context.url == "https://core.example.com"
        assert context.access_token == "a:b"
        assert context.request_id_header == "X-Request-ID"
        assert context.retry_config.max_attempts == 3

    def test_context_from_config_url_override(self):
        context = Context.from_config(ClientConfig(), url="http://other:2000")

        assert context.url == "http://other:2000"
