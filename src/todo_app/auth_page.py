"""Login / register page controller."""

from __future__ import annotations

import logging

from src.session import Session, SessionStore, SessionStoreError
from src.todo_client import TodoApiClient, TodoClientError

from .navigation import TODOS_ROUTE, Navigator

logger = logging.getLogger(__name__)

REGISTRATION_SUCCESS_MESSAGE = "Registration successful! Please login with your credentials."


class AuthPage:
    """ログイン・登録の2モードフォーム"""

    def __init__(self, client: TodoApiClient, navigator: Navigator, session_store: SessionStore) -> None:
        self.client = client
        self.navigator = navigator
        self.session_store = session_store

        self.is_login = True
        self.email = ""
        self.password = ""
        self.name = ""
        self.error = ""
        self.success_message = ""

    def _clear_inputs(self) -> None:
        self.email = ""
        self.password = ""
        self.name = ""

    def toggle_mode(self) -> None:
        """ログイン/登録モードを切り替え、入力とメッセージをクリア"""
        self.is_login = not self.is_login
        self.error = ""
        self.success_message = ""
        self._clear_inputs()

    def _missing_field(self) -> str:
        if not self.is_login and not self.name.strip():
            return "Name is required"
        if not self.email.strip():
            return "Email is required"
        if not self.password:
            return "Password is required"
        return ""

    def submit(self) -> bool:
        """フォーム送信

        Returns:
            ログインまたは登録に成功した場合True
        """
        self.error = ""
        self.success_message = ""

        missing = self._missing_field()
        if missing:
            self.error = missing
            return False

        try:
            if self.is_login:
                result = self.client.login(self.email, self.password)
                session = Session(
                    token=result.token,
                    user=result.user,
                    cookies=self.client.export_cookies(),
                )
                self.session_store.save(session)
                self.client.use_session(session)
                self.navigator.push(TODOS_ROUTE)
            else:
                self.client.register(self.email, self.password, self.name)
                self.success_message = REGISTRATION_SUCCESS_MESSAGE
                self._clear_inputs()
                self.is_login = True
        except TodoClientError as exc:
            logger.warning(f"認証に失敗しました: {exc}")
            self.error = str(exc) or "An error occurred"
            return False
        except SessionStoreError as exc:
            logger.error(f"セッションを保存できません: {exc}")
            self.error = "Failed to save session"
            return False
        return True

    def render(self) -> str:
        if self.is_login:
            lines = ["Welcome Back!", "Enter your credentials to access your account"]
        else:
            lines = ["Create Account", "Sign up to start managing your tasks"]
        if self.error:
            lines.append(f"[error] {self.error}")
        if self.success_message:
            lines.append(f"[ok] {self.success_message}")
        return "\n".join(lines)
