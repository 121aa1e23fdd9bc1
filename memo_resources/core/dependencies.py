from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
import jwt

from memo_resources.core.security import decode_token, is_token_blacklisted
from memo_resources.core.services.resource_service import ResourceService
from memo_resources.database.database import get_db
from memo_resources.database.models.user import User
from memo_resources.database.store import Store


def extract_bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing"
        )

    token = auth_header.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing"
        )
    return token


async def resolve_current_user(request: Request, db: AsyncSession) -> User:
    token = extract_bearer_token(request)

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired"
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )

    user_id = payload.get("sub")
    jti = payload.get("jti")

    if not user_id or not jti:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload"
        )

    if await is_token_blacklisted(jti):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has been revoked"
        )

    try:
        user_pk = int(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user identifier"
        )

    user = await db.get(User, user_pk)

    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User inactive or not found"
        )

    return user


class RequestPrincipal:
    """Resolves the user behind the bearer token of one request."""

    def __init__(self, request: Request, db: AsyncSession):
        self.request = request
        self.db = db

    async def __call__(self) -> User:
        return await resolve_current_user(self.request, self.db)


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> User:
    return await resolve_current_user(request, db)


async def get_token(request: Request) -> str:
    return extract_bearer_token(request)


async def get_resource_service(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> ResourceService:
    return ResourceService(Store(db), RequestPrincipal(request, db))
