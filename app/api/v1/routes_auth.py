# File: app/api/v1/routes_auth.py

"""
Auth API routes: register, login, current user.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db, get_password_hasher, get_token_codec
from app.core.security import PasswordHasher, TokenCodec
from app.models.user import User
from app.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserRead,
    UserResponse,
)
from app.services import auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    user = auth_service.register_user(
        db,
        hasher,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return UserResponse(message="User registered successfully", user=UserRead.model_validate(user))


@router.post("/login", response_model=LoginResponse, summary="Log in and receive a bearer token")
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: TokenCodec = Depends(get_token_codec),
):
    user = auth_service.authenticate_user(db, hasher, email=payload.email, password=payload.password)
    return LoginResponse(
        token=auth_service.issue_token(codec, user),
        expires_in=codec.expires_in,
        user=UserRead.model_validate(user),
    )


@router.get("/me", response_model=UserResponse, summary="Current user")
def me(user: User = Depends(get_current_user)):
    return UserResponse(user=UserRead.model_validate(user))
