"""
BatchDecoderのテスト
"""
import json
import pytest
from unittest.mock import Mock

from chain_sdk.exceptions import APIError, ProtocolError
from chain_sdk.http.decoders import BatchDecoder, BatchResponse


def make_response(body, status_code=200, request_id="req-1"):
    response = Mock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body)
    response.headers = {"Chain-Request-ID": request_id}
    return response


def success(n):
    return {"id": f"asset-{n}"}


def error(code="CH202"):
    return {"code": code, "message": "Invalid request body", "temporary": False}


class TestBatchDecoder:
    """BatchDecoderクラスのテスト"""

    @pytest.mark.parametrize("body", [
        [],
        [success(0)],
        [success(0), error(), success(2), error("CH735"), success(4)],
    ])
    def test_partition_covers_every_element(self, body):
        """成功数 + エラー数 == 要素数"""
        batch = BatchDecoder().decode_batch(make_response(body), "req-1")

        assert len(batch.successes()) + len(batch.errors()) == len(batch) == len(body)

    def test_order_is_preserved(self):
        body = [success(0), error("CH1"), success(2), error("CH3")]

        batch = BatchDecoder().decode_batch(make_response(body), "req-1")

        assert batch.successes() == [{"id": "asset-0"}, {"id": "asset-2"}]
        assert [e.code for e in batch.errors()] == ["CH1", "CH3"]
        assert [item.is_error for item in batch] == [False, True, False, True]
        assert list(batch.successes_by_index()) == [0, 2]
        assert list(batch.errors_by_index()) == [1, 3]

    def test_error_elements_carry_request_context(self):
        """エラー要素にはリクエストIDとステータスコードが付与される"""
        body = [{"code": "CH761", "message": "m", "temporary": True, "requestId": "forged"}]

        batch = BatchDecoder().decode_batch(make_response(body, request_id="real"), "real")
        err = batch.errors()[0]

        assert isinstance(err, APIError)
        assert err.request_id == "real"
        assert err.status_code == 200
        assert err.temporary is True

    def test_exposes_response(self):
        response = make_response([success(0)])

        batch = BatchDecoder().decode_batch(response, "req-1")

        assert batch.response is response
        assert batch.request_id == "req-1"

    def test_response_type_applied_to_successes_only(self):
        body = [success(0), error()]

        batch = BatchDecoder(lambda data: data["id"]).decode_batch(make_response(body))

        assert batch.successes() == ["asset-0"]
        assert len(batch.errors()) == 1
        assert batch.errors()[0].request_id == "req-1"

    def test_decode_wraps_result(self):
        result = BatchDecoder().decode(make_response([success(0)]), "req-1")

        assert result.is_ok
        assert isinstance(result.value, BatchResponse)

    @pytest.mark.parametrize("body", ['{"id": "x"}', "not json"])
    def test_non_array_body(self, body):
        result = BatchDecoder().decode(make_response(body), "req-1")

        assert isinstance(result.error, ProtocolError)
        assert result.error.request_id == "req-1"

    def test_request_id_falls_back_to_header(self):
        """request_id 省略時はヘッダーのリクエストIDをエラー要素に付与する"""
        batch = BatchDecoder().decode_batch(make_response([error()], request_id="hdr-7"))

        assert batch.request_id == "hdr-7"
        assert batch.errors()[0].request_id == "hdr-7"
