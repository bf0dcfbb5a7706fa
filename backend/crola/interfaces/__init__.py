"""Abstract interfaces for infrastructure abstraction."""

from crola.interfaces.chat_repository import IChatRepository
from crola.interfaces.llm_provider import ILLMProvider
from crola.interfaces.token_service import AuthUser, ITokenService
from crola.interfaces.user_repository import IUserRepository

__all__ = [
    "AuthUser",
    "IChatRepository",
    "ILLMProvider",
    "ITokenService",
    "IUserRepository",
]
