from fastapi import APIRouter, Depends, HTTPException, Body
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import time
import jwt

from memo_resources.database.database import get_db
from memo_resources.database.models.user import User
from memo_resources.core.dependencies import get_current_user, get_token
from memo_resources.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
    blacklist_token
)
from memo_resources.core.dtos.user import UserCreate, UserLogin, UserResponse
from memo_resources.core.dtos.common import AuthResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse)
async def register_user(
    user_data: UserCreate = Body(...),
    session: AsyncSession = Depends(get_db)
):
    if user_data.password != user_data.again_password:
        return AuthResponse(
            success=False,
            error="Passwords do not match"
        )

    existing_user = await session.scalar(
        select(User).where(User.username == user_data.username)
    )
    if existing_user:
        return AuthResponse(
            success=False,
            error="Username already registered"
        )

    session.add(User(
        username=user_data.username,
        email=user_data.email,
        nickname=user_data.nickname or user_data.username,
        password_hash=hash_password(user_data.password)
    ))
    await session.commit()

    return AuthResponse(
        success=True,
        message="User registered successfully"
    )


@router.post("/login", response_model=AuthResponse)
async def login_user(
    credentials: UserLogin = Body(...),
    session: AsyncSession = Depends(get_db)
):
    user = await session.scalar(
        select(User).where(User.username == credentials.username)
    )

    if not user or not user.is_active:
        return AuthResponse(
            success=False,
            error="Invalid credentials"
        )

    if not verify_password(credentials.password, user.password_hash):
        return AuthResponse(
            success=False,
            error="Invalid credentials"
        )

    return AuthResponse(
        success=True,
        message="Login successful",
        token=create_access_token({"sub": str(user.id)})
    )


@router.post("/logout", response_model=AuthResponse)
async def logout_user(token: str = Depends(get_token)):
    try:
        payload = decode_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    jti = payload.get("jti")
    exp = payload.get("exp")

    if not jti or not exp:
        raise HTTPException(status_code=400, detail="Invalid token payload")

    ttl = int(exp - time.time())
    if ttl <= 0:
        return AuthResponse(
            success=True,
            message="Token already expired"
        )

    await blacklist_token(jti, ttl)

    return AuthResponse(
        success=True,
        message="Logout successful"
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    return UserResponse.model_validate(current_user)
