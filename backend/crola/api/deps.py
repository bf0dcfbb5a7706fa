"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the configured
infrastructure implementations.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from crola.core.config import get_settings
from crola.interfaces.chat_repository import IChatRepository
from crola.interfaces.llm_provider import ILLMProvider
from crola.interfaces.token_service import AuthUser, ITokenService
from crola.interfaces.user_repository import IUserRepository


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_user_repository() -> IUserRepository:
    """Get user repository instance."""
    from crola.infrastructure.local.user_repository import SqliteUserRepository

    return SqliteUserRepository()


@lru_cache()
def get_chat_repository() -> IChatRepository:
    """Get chat repository instance."""
    from crola.infrastructure.local.chat_repository import SqliteChatRepository

    return SqliteChatRepository()


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_llm_provider() -> ILLMProvider:
    """
    Get the completion gateway for the LLM_PROVIDER profile.

    Supports:
    - requesty: Requesty router
    - deepseek: DeepSeek API
    - custom: any OpenAI-compatible endpoint (AI_API_ENDPOINT)
    """
    settings = get_settings()

    from crola.core.providers import resolve_profile
    from crola.infrastructure.llm.chat_completion_provider import ChatCompletionProvider

    return ChatCompletionProvider(
        profile=resolve_profile(settings),
        api_key=settings.AI_API_KEY,
        timeout=settings.AI_TIMEOUT_SECONDS,
    )


@lru_cache()
def get_token_service() -> ITokenService:
    """Get token service instance."""
    settings = get_settings()
    if not settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="JWT_SECRET is not configured",
        )
    from crola.infrastructure.auth.jwt_token_service import JwtTokenService

    return JwtTokenService(settings)


# ===========================================
# User Authentication
# ===========================================


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    token_service: ITokenService = Depends(get_token_service),
) -> AuthUser:
    """
    Get current authenticated user from the bearer token.

    Raises 401 when the header is missing or malformed, or the token does not
    verify.
    """
    if not authorization:
        raise _unauthorized("Authorization header required")

    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise _unauthorized("Invalid authorization header format")

    user = token_service.verify(parts[1].strip())
    if user is None:
        raise _unauthorized("Invalid or expired token")
    return user


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

UserRepo = Annotated[IUserRepository, Depends(get_user_repository)]
ChatRepo = Annotated[IChatRepository, Depends(get_chat_repository)]
LLMProvider = Annotated[ILLMProvider, Depends(get_llm_provider)]
TokenService = Annotated[ITokenService, Depends(get_token_service)]
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
