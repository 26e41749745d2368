"""FastAPI dependencies: database-bound services and the session guard."""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from inkwell.core.config import get_settings
from inkwell.core.database import get_db
from inkwell.core.guard import resolve_session
from inkwell.core.security import SESSION_COOKIE_NAME, SessionAuthority
from inkwell.schemas.auth import CurrentUser
from inkwell.services.mutations import MutationCoordinator
from inkwell.services.post_repository import PostRepository
from inkwell.services.storage import CoverStorage
from inkwell.services.users import UserService


@lru_cache
def get_session_authority() -> SessionAuthority:
    """Session authority built once from settings (secret injected here, nowhere else)."""
    settings = get_settings()
    return SessionAuthority(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        lifetime=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )


@lru_cache
def get_cover_storage() -> CoverStorage:
    return CoverStorage.from_settings(get_settings())


def get_user_service(db: Annotated[Session, Depends(get_db)]) -> UserService:
    return UserService(db, bcrypt_rounds=get_settings().BCRYPT_ROUNDS)


def get_post_repository(db: Annotated[Session, Depends(get_db)]) -> PostRepository:
    return PostRepository(db)


def get_mutation_coordinator(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[CoverStorage, Depends(get_cover_storage)],
) -> MutationCoordinator:
    return MutationCoordinator(db, storage)


def require_session(
    request: Request,
    authority: Annotated[SessionAuthority, Depends(get_session_authority)],
) -> CurrentUser:
    """Dependency: resolve the caller from the session cookie. Raises 401 if missing, invalid or expired."""
    return resolve_session(request.cookies.get(SESSION_COOKIE_NAME), authority)


SessionUser = Annotated[CurrentUser, Depends(require_session)]
Users = Annotated[UserService, Depends(get_user_service)]
Posts = Annotated[PostRepository, Depends(get_post_repository)]
Mutations = Annotated[MutationCoordinator, Depends(get_mutation_coordinator)]
Authority = Annotated[SessionAuthority, Depends(get_session_authority)]
