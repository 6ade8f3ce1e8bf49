"""
エンドポイント/認証情報のテスト
"""
import base64
import json
import pytest

from chain_sdk.exceptions import BadURLError
from chain_sdk.http.base.endpoint import (
    APIRequest,
    build_credentials,
    build_request,
    create_endpoint,
)


def decode_basic(header: str) -> str:
    assert header.startswith("Basic ")
    return base64.b64decode(header[len("Basic "):]).decode('utf-8')


class TestCreateEndpoint:
    """create_endpointのテスト"""

    def test_basic_join(self):
        assert create_endpoint("http://localhost:1999", "list-keys") == \
            "http://localhost:1999/list-keys"

    def test_base_with_path(self):
        assert create_endpoint("https://api.example.com/v1", "create-asset") == \
            "https://api.example.com/v1/create-asset"

    def test_duplicate_slashes_are_normalized(self):
        assert create_endpoint("http://localhost:1999/", "/list-keys") == \
            "http://localhost:1999/list-keys"

    def test_dot_segments_are_normalized(self):
        assert create_endpoint("http://localhost:1999/a/b", "../c/./d") == \
            "http://localhost:1999/a/c/d"

    def test_trailing_slash_is_kept(self):
        assert create_endpoint("http://localhost:1999", "hsm/") == \
            "http://localhost:1999/hsm/"

    @pytest.mark.parametrize("base_url", [
        "localhost:1999",
        "ftp://example.com",
        "http://",
    ])
    def test_invalid_base_url(self, base_url):
        with pytest.raises(BadURLError):
            create_endpoint(base_url, "list-keys")


class TestBuildCredentials:
    """build_credentialsのテスト"""

    def test_user_and_password(self):
        assert decode_basic(build_credentials("alice:secret")) == "alice:secret"

    def test_split_on_first_colon(self):
        """最初のコロンで分割する"""
        assert decode_basic(build_credentials("alice:sec:ret")) == "alice:sec:ret"

    def test_missing_password(self):
        assert decode_basic(build_credentials("alice")) == "alice:"

    def test_missing_user(self):
        assert decode_basic(build_credentials(":secret")) == ":secret"

    def test_none_token(self):
        assert decode_basic(build_credentials(None)) == ":"


class TestBuildRequest:
    """build_requestのテスト"""

    def test_headers_without_token(self):
        req = build_request("http://localhost:1999", "list-keys", {"alias": "a"})

        assert isinstance(req, APIRequest)
        assert req.action == "list-keys"
        assert req.url == "http://localhost:1999/list-keys"
        assert req.headers["User-Agent"] == "chain-sdk-python"
        assert req.headers["Content-Type"].startswith("application/json")
        assert "Authorization" not in req.headers
        assert json.loads(req.body) == {"alias": "a"}

    def test_headers_with_token(self):
        req = build_request("http://localhost:1999", "list-keys", {},
                            access_token="user:pass")

        assert decode_basic(req.headers["Authorization"]) == "user:pass"

    def test_custom_user_agent(self):
        req = build_request("http://localhost:1999", "list-keys", {},
                            user_agent="my-agent")

        assert req.headers["User-Agent"] == "my-agent"

    def test_request_is_immutable(self):
        """生成後のリクエストは変更できない"""
        req = build_request("http://localhost:1999", "list-keys", {})

        with pytest.raises(AttributeError):
            req.url = "http://other"
        with pytest.raises(TypeError):
            req.headers["X-Extra"] = "1"
