"""
Local authentication endpoints (signup/login).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from crola.api.deps import CurrentUser, TokenService, UserRepo
from crola.core.exceptions import DuplicateError
from crola.core.logger import logger
from crola.core.security import hash_password, verify_password
from crola.models.user import PublicUser, UserCreate

router = APIRouter()

_INVALID_CREDENTIALS = "Invalid email or password"


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return _normalize_email(value)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return _normalize_email(value)


class SignupResponse(BaseModel):
    message: str
    user: PublicUser


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: PublicUser


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: SignupRequest,
    user_repo: UserRepo,
) -> SignupResponse:
    """Register a new user with email and password."""
    try:
        user = await user_repo.create(
            UserCreate(email=data.email, password_hash=hash_password(data.password))
        )
    except DuplicateError as e:
        logger.info(f"Signup rejected, email already registered: {data.email}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        ) from e

    logger.info(f"User created: {user.id}")
    return SignupResponse(message="User created successfully", user=user.to_public())


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    user_repo: UserRepo,
    token_service: TokenService,
) -> LoginResponse:
    """Exchange email and password for an identity token."""
    user = await user_repo.get_by_email(data.email)
    # Same response for unknown email and wrong password
    if not user or not verify_password(data.password, user.password_hash):
        logger.info(f"Failed login for {data.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_INVALID_CREDENTIALS,
        )

    token = token_service.issue(str(user.id), user.email)
    return LoginResponse(token=token, user=user.to_public())


@router.get("/me", response_model=PublicUser)
async def me(
    user: CurrentUser,
    user_repo: UserRepo,
) -> PublicUser:
    """Return the authenticated user."""
    account = await user_repo.get(UUID(user.id))
    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account.to_public()
