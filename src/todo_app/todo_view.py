"""Single todo rendering."""

from __future__ import annotations

import logging
from typing import Callable

from src.todo_client import Todo

logger = logging.getLogger(__name__)


class TodoItemView:
    """1件のTodoを表示し、削除要求を親に委譲する"""

    def __init__(self, todo: Todo, on_delete: Callable[[str], None]) -> None:
        self.todo = todo
        self.on_delete = on_delete

    def render(self) -> str:
        lines = [f"- {self.todo.title}"]
        if self.todo.description:
            lines.append(f"    {self.todo.description}")
        return "\n".join(lines)

    def request_delete(self) -> bool:
        """削除ボタン押下

        Returns:
            コールバックを呼び出した場合True、idがなく破棄した場合False
        """
        todo_id = self.todo.id
        if not todo_id:
            logger.error(f"Cannot delete todo without id: {self.todo}")
            return False
        self.on_delete(todo_id)
        return True
