"""HTTP client for the todo backend REST API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type

import requests
from pydantic import ValidationError

from .exceptions import AuthError, FetchError, TodoClientError
from .schemas import ApiEnvelope, AuthResponse, Todo, TodoCreateRequest

if TYPE_CHECKING:
    from src.session.models import Session

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000/api/v1"


class TodoApiClient:
    """
    Todo APIクライアント

    アプリケーションとネットワークの唯一の境界。
    認証はrequests.Sessionのクッキーで運ばれる。
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        timeout: Optional[float] = 10.0,
        send_bearer_token: bool = False,
    ) -> None:
        """
        Args:
            api_url: バックエンドのベースURL（例: http://localhost:3000/api/v1）
            timeout: リクエストタイムアウト秒数
            send_bearer_token: Trueの場合、セッションのトークンをAuthorizationヘッダーにも付与
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.send_bearer_token = send_bearer_token
        self.http = requests.Session()
        self._token: Optional[str] = None

    # --- session lifecycle -------------------------------------------------

    def use_session(self, session: "Session") -> None:
        """永続化済みセッションをクライアントに適用する"""
        self._token = session.token
        self.http.cookies.clear()
        for name, value in session.cookies.items():
            self.http.cookies.set(name, value)
        logger.debug(f"セッションを適用しました: user={session.user.id}")

    def clear_session(self) -> None:
        """クッキーとトークンを破棄する"""
        self._token = None
        self.http.cookies.clear()

    def export_cookies(self) -> Dict[str, str]:
        """クッキージャーを永続化用の辞書として返す"""
        return requests.utils.dict_from_cookiejar(self.http.cookies)

    # --- transport ---------------------------------------------------------

    def _headers(self, json_body: bool) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        if self.send_bearer_token and self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        error_cls: Type[TodoClientError],
        error_message: str,
        payload: Optional[Dict[str, Any]] = None,
        json_headers: bool = False,
    ) -> requests.Response:
        url = f"{self.api_url}{path}"
        try:
            response = self.http.request(
                method,
                url,
                headers=self._headers(json_headers or payload is not None),
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} の通信に失敗: {e}")
            raise error_cls(error_message) from e

        if not response.ok:
            logger.warning(f"{method} {path} が失敗しました: status={response.status_code}")
            raise error_cls(error_message, response.status_code, _response_body(response))
        return response

    @staticmethod
    def _parse(
        response: requests.Response,
        error_cls: Type[TodoClientError],
        error_message: str,
        model: Any,
    ) -> Any:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"レスポンスの解析に失敗: {e}")
            raise error_cls(error_message, response.status_code, _response_body(response)) from e

    # --- auth --------------------------------------------------------------

    def login(self, email: str, password: str) -> AuthResponse:
        """メールアドレスとパスワードでログインする"""
        response = self._request(
            "POST",
            "/users/login",
            error_cls=AuthError,
            error_message="Login failed",
            payload={"email": email, "password": password},
        )
        result = self._parse(response, AuthError, "Login failed", AuthResponse)
        logger.info(f"ログインしました: {result.user.email}")
        return result

    def register(self, email: str, password: str, name: str) -> AuthResponse:
        """
        ユーザー登録

        成功してもセッションは確立しない。呼び出し側が改めてloginする。
        """
        response = self._request(
            "POST",
            "/users/register",
            error_cls=AuthError,
            error_message="Registration failed",
            payload={"email": email, "password": password, "name": name},
        )
        return self._parse(response, AuthError, "Registration failed", AuthResponse)

    def logout(self) -> None:
        """サーバー側のセッションを無効化する"""
        self._request("POST", "/users/logout", error_cls=AuthError, error_message="Logout failed")
        logger.info("ログアウトしました")

    # --- todos -------------------------------------------------------------

    def get_todos(self) -> List[Todo]:
        """Todo一覧を取得してエンベロープから取り出す"""
        response = self._request(
            "GET",
            "/todos",
            error_cls=FetchError,
            error_message="Failed to fetch todos",
            json_headers=True,
        )
        envelope = self._parse(response, FetchError, "Failed to fetch todos", ApiEnvelope[List[Todo]])
        logger.debug(f"Raw todos response: {envelope}")
        return envelope.data

    def add_todo(self, title: str, description: str = "") -> Todo:
        """
        Todoを追加する

        Args:
            title: タイトル（空文字不可）
            description: 詳細

        Returns:
            サーバーが採番したidを含むTodo
        """
        if not title or not title.strip():
            raise ValueError("title must not be empty")

        body = TodoCreateRequest(title=title, description=description)
        response = self._request(
            "POST",
            "/todos/addTodo",
            error_cls=FetchError,
            error_message="Failed to add todo",
            payload=body.model_dump(),
        )
        envelope = self._parse(response, FetchError, "Failed to add todo", ApiEnvelope[Todo])
        logger.debug(f"Added todo response: {envelope}")
        return envelope.data

    def remove_todo(self, todo_id: str) -> None:
        """idを指定してTodoを削除する"""
        if not todo_id:
            raise ValueError("todo_id must not be empty")

        self._request(
            "DELETE",
            f"/todos/removeTodo/{todo_id}",
            error_cls=FetchError,
            error_message="Failed to delete todo",
        )


def _response_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
