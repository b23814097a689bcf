"""Session Store

ページ読み込み（CLI起動）をまたいでセッションを保持する
JSONファイルベースのキー・バリューストレージ。
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .models import Session

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"
COOKIES_KEY = "cookies"


class SessionStoreError(Exception):
    """セッションファイルの書き込みエラー"""

    pass


class SessionStore:
    """JSONファイルベースのセッションストレージ"""

    def __init__(self, path: Optional[Path] = None):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "session.json"
        env_path = os.getenv("TODO_APP_SESSION_PATH")
        if path:
            self.path = Path(path)
        elif env_path:
            self.path = Path(env_path)
        else:
            self.path = default_path

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"セッションファイルを読み込めません: {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise SessionStoreError(f"セッションファイルの書き込みに失敗しました: {self.path}") from e

    def get_item(self, key: str) -> Any:
        """キーに対応する値を取得（存在しない場合はNone）"""
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        """キーに値を保存"""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        """キーを削除"""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def save(self, session: Session) -> None:
        """ログイン成功時にセッションを保存"""
        data = self._read()
        data.update(session.to_storage())
        self._write(data)
        logger.info(f"セッションを保存しました: {session.user.email}")

    def load(self) -> Optional[Session]:
        """保存済みセッションを取得

        Returns:
            Session、未ログインまたは破損している場合はNone
        """
        data = self._read()
        if not data.get(TOKEN_KEY) or not data.get(USER_KEY):
            return None
        try:
            return Session.from_storage(data)
        except (KeyError, TypeError, ValidationError) as e:
            logger.warning(f"保存済みセッションが不正です: {e}")
            return None

    def clear(self) -> None:
        """ログアウト時にセッションを削除"""
        data = self._read()
        for key in (TOKEN_KEY, USER_KEY, COOKIES_KEY):
            data.pop(key, None)
        self._write(data)
        logger.info("セッションを削除しました")
