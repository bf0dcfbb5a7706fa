"""API routers."""

from crola.api import auth, chats, models

__all__ = [
    "auth",
    "chats",
    "models",
]
