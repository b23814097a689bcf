"""
ロギング設定モジュール

ファイルにはlog_level以上を、コンソールにはconsole_level以上を出力する。
CLIの標準出力（一覧表示など）とログが混ざらないよう、コンソールはstderrのみ。
"""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    log_level: str = "INFO",
    log_file: str = "logs/todo_app.log",
    console_level: str = "WARNING",
) -> None:
    """
    ロガーのセットアップ

    Args:
        log_level: ファイルに出力するログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: ログファイルのパス
        console_level: コンソール(stderr)に出力するログレベル
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(getattr(logging, log_level.upper()))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, console_level.upper()))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT,
        handlers=[file_handler, console_handler],
    )

    # requests配下の接続ログは抑制
    logging.getLogger("urllib3").setLevel(logging.WARNING)
