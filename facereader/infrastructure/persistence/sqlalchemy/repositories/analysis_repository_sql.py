from typing import Optional
from sqlmodel import Session

from .....models import ImageAnalysis, utcnow
from .....application.ports.analysis_repo import AnalysisRepository, AnalysisRecord


class SqlAnalysisRepository(AnalysisRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_record(self, row: ImageAnalysis) -> AnalysisRecord:
        return AnalysisRecord(
            id=row.id,
            image_name=row.image_name,
            mime_type=row.mime_type,
            storage_url=row.storage_url,
            ai_comment=row.ai_comment,
            style_prompt=row.style_prompt,
            language=row.language,
            style=row.style,
            analysis_type=row.analysis_type,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def insert(self, image_data: str, image_name: str, mime_type: str, storage_url: Optional[str]) -> AnalysisRecord:
        row = ImageAnalysis(
            image_data=image_data,
            image_name=image_name,
            mime_type=mime_type,
            storage_url=storage_url,
        )
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return self._to_record(row)

    def update(self, analysis_id: int, ai_comment: str, style_prompt: str, language: str, style: str, analysis_type: str) -> Optional[AnalysisRecord]:
        row = self.session.get(ImageAnalysis, analysis_id)
        if not row:
            return None
        row.ai_comment = ai_comment
        row.style_prompt = style_prompt
        row.language = language
        row.style = style
        row.analysis_type = analysis_type
        row.updated_at = utcnow()
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return self._to_record(row)

    def get(self, analysis_id: int) -> Optional[AnalysisRecord]:
        row = self.session.get(ImageAnalysis, analysis_id)
        return self._to_record(row) if row else None
