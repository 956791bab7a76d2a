# facereader/dependencies.py
from typing import Optional
from fastapi import Depends, Request
from sqlmodel import Session

from .database import get_session
from .application.ports.ai_provider import AIProvider
from .application.ports.analysis_repo import AnalysisRepository
from .application.ports.blob_store import BlobStore
from .application.services.analysis_service import AnalysisService
from .infrastructure.persistence.sqlalchemy.repositories.analysis_repository_sql import SqlAnalysisRepository


def get_ai_provider(request: Request) -> AIProvider:
    return request.app.state.ai_provider


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


def get_analysis_repository(session: Optional[Session] = Depends(get_session)) -> Optional[AnalysisRepository]:
    if session is None:
        return None
    return SqlAnalysisRepository(session)


def get_analysis_service(
    ai_provider: AIProvider = Depends(get_ai_provider),
    blob_store: BlobStore = Depends(get_blob_store),
    analysis_repo: Optional[AnalysisRepository] = Depends(get_analysis_repository),
) -> AnalysisService:
    return AnalysisService(ai_provider=ai_provider, blob_store=blob_store, analysis_repo=analysis_repo)
