"""Session Models

ログイン後にクライアントが保持する認証済みセッションの表現。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from src.todo_client.schemas import User


@dataclass(slots=True)
class Session:
    """認証済みセッション

    token: バックエンドが発行した不透明なトークン
    user: ログイン時点のユーザー情報（読み取り専用キャッシュ）
    cookies: 認証クッキー（ブラウザのクッキー保存に相当）
    """

    token: str
    user: User
    cookies: Dict[str, str] = field(default_factory=dict)

    def to_storage(self) -> Dict[str, Any]:
        """ストレージ保存用の辞書に変換"""
        return {
            "token": self.token,
            "user": self.user.model_dump(),
            "cookies": dict(self.cookies),
        }

    @classmethod
    def from_storage(cls, data: Dict[str, Any]) -> "Session":
        """ストレージの辞書から復元"""
        return cls(
            token=data["token"],
            user=User.model_validate(data["user"]),
            cookies=dict(data.get("cookies") or {}),
        )
