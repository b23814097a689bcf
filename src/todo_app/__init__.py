"""Todo client pages: login/register, todo list and item views."""

from .auth_page import AuthPage
from .config import AppConfig, load_config
from .navigation import LOGIN_ROUTE, TODOS_ROUTE, Navigator
from .todo_list import TodoListController, ViewState
from .todo_view import TodoItemView

__all__ = [
    "AuthPage",
    "AppConfig",
    "load_config",
    "LOGIN_ROUTE",
    "TODOS_ROUTE",
    "Navigator",
    "TodoListController",
    "ViewState",
    "TodoItemView",
]
