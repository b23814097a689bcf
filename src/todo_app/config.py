"""
設定管理モジュール

関連クラス:
  - todo_client.TodoApiClient: api_url / timeout_seconds / send_bearer_token を使用
  - session.SessionStore: session_path を使用
  - todo_list.TodoListController: refetch_after_mutation を使用
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from src.todo_client import DEFAULT_API_URL

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    """アプリケーション設定クラス"""

    # API設定
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = 10.0
    send_bearer_token: bool = False

    # セッション保存先（Noneの場合はSessionStoreのデフォルト）
    session_path: Optional[str] = None

    # 追加・削除成功後に一覧を再取得するか
    refetch_after_mutation: bool = False

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/todo_app.log"

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "AppConfig":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            AppConfig: 設定インスタンス
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        api_data = yaml_data.get("api", {})
        session_data = yaml_data.get("session", {})
        todos_data = yaml_data.get("todos", {})
        log_data = yaml_data.get("log", {})

        return cls(
            api_url=api_data.get("url", DEFAULT_API_URL),
            timeout_seconds=float(api_data.get("timeout_seconds", 10.0)),
            send_bearer_token=_as_bool(api_data.get("send_bearer_token", False)),
            session_path=session_data.get("path"),
            refetch_after_mutation=_as_bool(todos_data.get("refetch_after_mutation", False)),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/todo_app.log"),
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """環境変数から設定を読み込む"""
        return cls(
            api_url=os.getenv("TODO_APP_API_URL", DEFAULT_API_URL),
            timeout_seconds=float(os.getenv("TODO_APP_TIMEOUT", "10")),
            send_bearer_token=_as_bool(os.getenv("TODO_APP_SEND_BEARER", "false")),
            session_path=os.getenv("TODO_APP_SESSION_PATH"),
            refetch_after_mutation=_as_bool(os.getenv("TODO_APP_REFETCH", "false")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/todo_app.log"),
        )


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """設定ファイルがあればYAML、なければ環境変数から読み込む

    TODO_APP_API_URL が設定されている場合は常にベースURLを上書きする。
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    config = AppConfig.from_yaml(path) if path.exists() else AppConfig.from_env()

    env_url = os.getenv("TODO_APP_API_URL")
    if env_url:
        config.api_url = env_url
    return config
