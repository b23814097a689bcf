"""Todo list page controller.

Keeps the displayed list consistent with the last known server state:
append on add, filter on delete, or a full reload when
``refetch_after_mutation`` is enabled. A 401 from the backend sends the
user back to the login page and discards local state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from src.session import SessionStore
from src.todo_client import Todo, TodoApiClient, TodoClientError

from .navigation import LOGIN_ROUTE, Navigator
from .todo_view import TodoItemView

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    LOADING = "loading"
    READY = "ready"


class TodoListController:
    """Todo一覧ページの状態と操作"""

    def __init__(
        self,
        client: TodoApiClient,
        navigator: Navigator,
        session_store: Optional[SessionStore] = None,
        *,
        refetch_after_mutation: bool = False,
    ) -> None:
        self.client = client
        self.navigator = navigator
        self.session_store = session_store
        self.refetch_after_mutation = refetch_after_mutation

        self.view_state = ViewState.LOADING
        self.todos: List[Todo] = []
        self.title = ""
        self.description = ""
        self.error = ""
        self.is_adding = False

    def _fail(self, message: str, exc: TodoClientError) -> None:
        logger.error(f"{message}: {exc}")
        self.error = message
        if exc.is_unauthorized:
            self._reset()
            self.navigator.push(LOGIN_ROUTE)

    def _reset(self) -> None:
        self.todos = []
        self.title = ""
        self.description = ""
        self.is_adding = False

    def load_todos(self) -> bool:
        """ページ表示時の一覧取得

        Returns:
            取得に成功した場合True
        """
        self.error = ""
        self.view_state = ViewState.LOADING
        try:
            self.todos = list(self.client.get_todos())
            logger.debug(f"Processed todos: {self.todos}")
        except TodoClientError as exc:
            self._fail("Failed to load todos", exc)
            return False
        finally:
            self.view_state = ViewState.READY
        return True

    def open_add_form(self) -> None:
        self.is_adding = True

    def cancel_add_form(self) -> None:
        self.is_adding = False

    def add_todo(self) -> bool:
        """追加フォームの送信

        Returns:
            追加に成功した場合True
        """
        if not self.title.strip():
            return False

        self.error = ""
        try:
            todo = self.client.add_todo(self.title, self.description)
        except TodoClientError as exc:
            self._fail("Failed to add todo", exc)
            return False

        self.title = ""
        self.description = ""
        self.is_adding = False
        if self.refetch_after_mutation:
            return self.load_todos()
        self.todos = [*self.todos, todo]
        return True

    def delete_todo(self, todo_id: str) -> bool:
        """Todoの削除

        Returns:
            削除に成功した場合True
        """
        if not todo_id:
            logger.error(f"Cannot delete todo without id: {todo_id!r}")
            return False

        self.error = ""
        try:
            self.client.remove_todo(todo_id)
        except TodoClientError as exc:
            self._fail("Failed to delete todo", exc)
            return False

        if self.refetch_after_mutation:
            return self.load_todos()
        self.todos = [todo for todo in self.todos if todo.id != todo_id]
        return True

    def logout(self) -> bool:
        """ログアウトしてログインページへ戻る"""
        self.error = ""
        try:
            self.client.logout()
        except TodoClientError as exc:
            logger.error(f"Error logging out: {exc}")
            self.error = "Failed to logout"
            return False

        self.client.clear_session()
        if self.session_store is not None:
            self.session_store.clear()
        self.navigator.push(LOGIN_ROUTE)
        return True

    def item_views(self) -> List[TodoItemView]:
        return [TodoItemView(todo, self.delete_todo) for todo in self.todos]

    def render(self) -> str:
        if self.view_state is ViewState.LOADING:
            return "Loading..."

        lines = ["My Tasks", "=" * 40]
        if self.error:
            lines.append(f"[error] {self.error}")
        if self.is_adding:
            lines.append("(adding a new task)")

        views = self.item_views()
        for view in views:
            lines.append(view.render())
        if not views and not self.is_adding:
            lines.append("No tasks yet")
            lines.append("Get started by adding a new task")
        return "\n".join(lines)
