"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from stockroom.database import get_db
from stockroom.models.user import User
from stockroom.services.assistant import AssistantService
from stockroom.services.auth import decode_access_token
from stockroom.services.llm import LLMService
from stockroom.services.product_service import ProductService

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid authentication credentials")

    user_id = payload.get("sub")
    if user_id is None:
        raise _unauthorized("Invalid authentication credentials")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_llm_service() -> LLMService:
    """Get LLM service instance."""
    return LLMService()


def get_assistant_service(
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
) -> AssistantService:
    """Get assistant service with dependencies."""
    return AssistantService(llm_service)


def get_product_service(
    db: Annotated[Session, Depends(get_db)],
) -> ProductService:
    """Get product service with dependencies."""
    return ProductService(db)
