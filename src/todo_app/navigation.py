"""Page navigation."""

from __future__ import annotations

import logging
from typing import List

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/"
TODOS_ROUTE = "/todos"


class Navigator:
    """現在のページと遷移履歴を保持する"""

    def __init__(self, initial_route: str = LOGIN_ROUTE) -> None:
        self.current = initial_route
        self.history: List[str] = [initial_route]

    def push(self, route: str) -> None:
        logger.info(f"navigate: {self.current} -> {route}")
        self.current = route
        self.history.append(route)
