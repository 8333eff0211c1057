"""Authentication routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from app.core.deps import DbSession
from app.models.user import User
from app.schemas.auth import Token, UserRegister
from app.schemas.user import UserResponse
from app.services import user_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, db: DbSession) -> User:
    """
    Register a new user.

    Raises:
        ConflictError: 409 if the email is already registered
    """
    return await user_service.register_user(db, user_data)


@router.post("/login", response_model=Token)
async def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DbSession,
) -> Token:
    """
    OAuth2 compatible token login; the form's ``username`` is the email.

    Raises:
        AuthenticationError: 401 if credentials are invalid
    """
    access_token = await user_service.create_user_token(db, form_data.username, form_data.password)
    return Token(access_token=access_token)
