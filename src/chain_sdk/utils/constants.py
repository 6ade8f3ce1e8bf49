# 開発用のデフォルト接続先
DEFAULT_URL = "http://localhost:1999"

# User-Agentヘッダー
# TODO: バージョン文字列をUser-Agentに含める
USER_AGENT = "chain-sdk-python"

# APIサーバーが付与するリクエストIDヘッダー
REQUEST_ID_HEADER = "Chain-Request-ID"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# リトライ設定
MAX_RETRIES = 10
RETRY_BASE_DELAY_MILLIS = 40
RETRY_MAX_DELAY_MILLIS = 4000

# 常にリトライ対象となるステータスコード
RETRIABLE_STATUS_CODES = frozenset([
    408,  # Request Timeout
    429,  # Too Many Requests
    500,  # Internal Server Error
    502,  # Bad Gateway
    503,  # Service Unavailable
    504,  # Gateway Timeout
    509,  # Bandwidth Limit Exceeded
])
