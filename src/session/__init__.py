"""Session Management

ログインセッションの永続化を提供します。
"""

from .models import Session
from .store import SessionStore, SessionStoreError

__all__ = [
    "Session",
    "SessionStore",
    "SessionStoreError",
]
