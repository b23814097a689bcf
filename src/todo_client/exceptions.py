"""Todo API クライアントの例外定義

HTTPステータスのみから導出される失敗を表します。
バックエンドのレスポンスボディに構造化エラーコードは期待しません。
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Optional


class TodoClientError(Exception):
    """Todo APIクライアント基底例外"""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body

    @property
    def is_unauthorized(self) -> bool:
        """401応答による失敗かどうか"""
        return self.status == HTTPStatus.UNAUTHORIZED

    def __str__(self) -> str:
        return self.message


class AuthError(TodoClientError):
    """ログイン・登録・ログアウトの失敗"""

    pass


class FetchError(TodoClientError):
    """Todo CRUDの失敗"""

    pass
