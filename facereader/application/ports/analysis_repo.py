from typing import Optional
from dataclasses import dataclass
from datetime import datetime


@dataclass
class AnalysisRecord:
    id: int
    image_name: str
    mime_type: str
    storage_url: Optional[str]
    ai_comment: Optional[str]
    style_prompt: Optional[str]
    language: str
    style: str
    analysis_type: str
    created_at: datetime
    updated_at: datetime


class AnalysisRepository:
    def insert(self, image_data: str, image_name: str, mime_type: str, storage_url: Optional[str]) -> AnalysisRecord:
        ...

    def update(self, analysis_id: int, ai_comment: str, style_prompt: str, language: str, style: str, analysis_type: str) -> Optional[AnalysisRecord]:
        ...

    def get(self, analysis_id: int) -> Optional[AnalysisRecord]:
        ...
