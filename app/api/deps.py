"""
FastAPI dependencies wiring repositories, services and authentication
"""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.repositories.base import UserRecord
from app.repositories.sql import (
    SqlCatalogRepository,
    SqlProgressRepository,
    SqlSubmissionRepository,
    SqlUserRepository,
)
from app.services.auth_service import AuthService
from app.services.catalog_service import CatalogService
from app.services.evaluation_service import EvaluationService
from app.services.llm_service import llm_client
from app.services.progress_service import ProgressService


def _bearer_token(request: Request) -> Optional[str]:
    """Token from 'Authorization: Bearer <token>', if present"""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(SqlUserRepository(db))


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(SqlCatalogRepository(db))


def get_progress_service(db: Session = Depends(get_db)) -> ProgressService:
    return ProgressService(SqlProgressRepository(db), SqlCatalogRepository(db))


def get_evaluation_service(db: Session = Depends(get_db)) -> EvaluationService:
    return EvaluationService(
        catalog=SqlCatalogRepository(db),
        llm_client=llm_client,
        submissions=SqlSubmissionRepository(db)
    )


async def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
) -> UserRecord:
    """Authenticated user; 403 when the token is missing or invalid"""
    user = auth_service.authenticate(_bearer_token(request))
    request.state.user_id = user.id
    return user


async def get_optional_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[UserRecord]:
    """Authenticated user or None for anonymous requests"""
    user = auth_service.authenticate_optional(_bearer_token(request))
    if user is not None:
        request.state.user_id = user.id
    return user
