#!/usr/bin/env python3
"""
Chain SDK - コマンドラインエントリーポイント

APIアクションに対してJSONリクエストを送信し、結果を表示する

使用方法:
    python main.py request list-keys --body '{}'          # 単一オブジェクト
    python main.py batch create-assets --body '[...]'     # バッチ
    python main.py singleton create-asset --body '[...]'  # 単一要素バッチ
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

# パッケージをパスに追加
sys.path.insert(0, str(Path(__file__).parent / "src"))

import yaml
from dotenv import load_dotenv

from chain_sdk.config.client_config import ClientConfig
from chain_sdk.exceptions import ChainError
from chain_sdk.http.context import Context

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """ロギング設定"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_context(url=None, token=None, config_path=None) -> Context:
    """引数・環境変数・設定ファイルからコンテキストを生成"""
    load_dotenv()

    config = ClientConfig(Path(config_path) if config_path else None)
    return Context.from_config(
        config,
        url=url or os.getenv("CHAIN_URL"),
        access_token=token or os.getenv("CHAIN_ACCESS_TOKEN"),
    )


def format_batch(batch) -> dict:
    """バッチ結果を表示用に変換"""
    return {
        "request_id": batch.request_id,
        "successes": batch.successes(),
        "errors": [
            {"code": e.code, "message": e.message, "detail": e.detail,
             "temporary": e.temporary}
            for e in batch.errors()
        ],
    }


def run_command(context: Context, command: str, action: str, body):
    """コマンドを実行して表示用の結果を返す"""
    if command == 'request':
        return context.request(action, body)
    if command == 'batch':
        return format_batch(context.batch_request(action, body))
    if command == 'singleton':
        return context.singleton_batch_request(action, body)
    raise ValueError(f"unknown command: {command}")


def main(argv=None) -> int:
    """メイン関数"""
    parser = argparse.ArgumentParser(
        description="Chain SDK - APIアクション呼び出しツール",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  python main.py request list-keys                            # 単一オブジェクト
  python main.py batch create-assets --body '[{"alias": "a"}]'  # バッチ
  python main.py singleton create-asset --body '[{"alias": "a"}]'
        """
    )

    parser.add_argument(
        'command',
        choices=['request', 'batch', 'singleton'],
        help='実行するコマンド'
    )
    parser.add_argument('action', help='APIアクション (例: list-keys)')
    parser.add_argument('--body', default='{}', help='リクエストボディ (JSON)')
    parser.add_argument('--url', help='APIのベースURL (環境変数 CHAIN_URL)')
    parser.add_argument('--token', help='アクセストークン user:pass (環境変数 CHAIN_ACCESS_TOKEN)')
    parser.add_argument('--config', help='設定ファイルパス')
    parser.add_argument('--verbose', action='store_true', help='デバッグログを表示')

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        body = json.loads(args.body)
    except json.JSONDecodeError as e:
        logger.error(f"リクエストボディが不正なJSONです: {e}")
        return 2

    logger.info(f"リクエスト開始: {args.command} {args.action}")

    try:
        context = build_context(args.url, args.token, args.config)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"設定ファイルを読み込めません: {e}")
        return 1

    try:
        result = run_command(context, args.command, args.action, body)
    except ChainError as e:
        logger.error(f"リクエスト失敗: {e}")
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
