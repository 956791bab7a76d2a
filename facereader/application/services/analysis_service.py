import base64
import logging
from dataclasses import dataclass
from typing import Optional
from fastapi import HTTPException
from fastapi.concurrency import run_in_threadpool

from ..ports.ai_provider import AIProvider
from ..ports.analysis_repo import AnalysisRepository
from ..ports.blob_store import BlobStore
from ...prompts import (
    DEFAULT_ANALYSIS_TYPE,
    DEFAULT_LANGUAGE,
    DEFAULT_STYLE,
    DEFAULT_STYLE_PROMPT,
    build_prompt,
    normalize_analysis_type,
    normalize_language,
)
from ...uploads import ImageUpload, make_storage_key

logger = logging.getLogger(__name__)

_TRUTHY = {"true", "1", "yes", "on"}


def parse_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


@dataclass
class AnalyzeRequest:
    style_prompt: str = DEFAULT_STYLE_PROMPT
    language: str = DEFAULT_LANGUAGE
    style: str = DEFAULT_STYLE
    is_reanalysis: bool = False
    analysis_id: Optional[str] = None
    analysis_type: str = DEFAULT_ANALYSIS_TYPE

    @classmethod
    def from_form(
        cls,
        style_prompt: Optional[str] = None,
        language: Optional[str] = None,
        style: Optional[str] = None,
        is_reanalysis: Optional[str] = None,
        analysis_id: Optional[str] = None,
        analysis_type: Optional[str] = None,
    ) -> "AnalyzeRequest":
        # empty form values count as absent
        return cls(
            style_prompt=style_prompt or DEFAULT_STYLE_PROMPT,
            language=normalize_language(language or DEFAULT_LANGUAGE),
            style=style or DEFAULT_STYLE,
            is_reanalysis=parse_bool(is_reanalysis),
            analysis_id=(analysis_id or "").strip() or None,
            analysis_type=normalize_analysis_type(analysis_type or DEFAULT_ANALYSIS_TYPE),
        )


@dataclass
class AnalyzeResult:
    message: str
    ai_comment: str
    analysis_id: Optional[int]
    storage_url: Optional[str]
    image_data_url: str
    storage_backend: str


@dataclass
class AnalysisService:
    ai_provider: AIProvider
    blob_store: BlobStore
    analysis_repo: Optional[AnalysisRepository] = None

    def _parse_analysis_id(self, raw: Optional[str]) -> int:
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise HTTPException(status_code=400, detail="analysisId must be an integer.")

    async def handle(self, req: AnalyzeRequest, upload: Optional[ImageUpload]) -> AnalyzeResult:
        """Run one upload -> store -> AI -> persist cycle.

        Validation problems raise HTTPException. Storage, database and AI
        failures propagate unchanged; any row inserted before the failure
        is left in place.
        """
        if upload is None:
            raise HTTPException(status_code=400, detail="No image file uploaded.")
        if req.is_reanalysis and not req.analysis_id:
            raise HTTPException(status_code=400, detail="analysisId is required for reanalysis.")

        analysis_id: Optional[int] = None
        storage_url: Optional[str] = None

        if req.is_reanalysis:
            analysis_id = self._parse_analysis_id(req.analysis_id)
            if self.analysis_repo is not None:
                existing = await run_in_threadpool(self.analysis_repo.get, analysis_id)
                if existing is None:
                    raise HTTPException(status_code=404, detail=f"Analysis {analysis_id} not found.")
                storage_url = existing.storage_url
            logger.info(f"[Reanalysis] analysisId={analysis_id}, type={req.analysis_type}, language={req.language}")
        else:
            key = make_storage_key(upload.filename)
            storage_url = await run_in_threadpool(self.blob_store.put, upload.data, key, upload.content_type)
            if self.analysis_repo is not None:
                record = await run_in_threadpool(
                    self.analysis_repo.insert,
                    base64.b64encode(upload.data).decode("ascii"),
                    upload.filename,
                    upload.content_type,
                    storage_url,
                )
                analysis_id = record.id
                logger.info(f"[DB] Inserted analysis record {analysis_id}")

        prompt = build_prompt(req.analysis_type, req.language, req.style_prompt)
        ai_comment = await run_in_threadpool(
            self.ai_provider.generate_text, prompt, upload.data, upload.content_type
        )
        logger.info(f"[AI Comment] Generated {len(ai_comment or '')} characters")

        if self.analysis_repo is not None and analysis_id is not None:
            await run_in_threadpool(
                self.analysis_repo.update,
                analysis_id,
                ai_comment,
                req.style_prompt,
                req.language,
                req.style,
                req.analysis_type,
            )

        encoded = base64.b64encode(upload.data).decode("ascii")
        return AnalyzeResult(
            message="Image reanalyzed successfully!" if req.is_reanalysis else "Image processed and saved successfully!",
            ai_comment=ai_comment,
            analysis_id=analysis_id,
            storage_url=storage_url,
            image_data_url=f"data:{upload.content_type};base64,{encoded}",
            storage_backend=self.blob_store.backend,
        )
