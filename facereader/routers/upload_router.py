from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import FileResponse
from typing import Optional
import os
import logging

from ..application.services.analysis_service import AnalysisService, AnalyzeRequest
from ..dependencies import get_analysis_service
from ..exceptions import error_response_for
from ..schemas import ErrorResponse, UploadResponse
from ..uploads import ImageUpload, read_image_upload

logger = logging.getLogger(__name__)

STATIC_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "static")

router = APIRouter(tags=["Upload"])


@router.get("/", include_in_schema=False)
def index():
    return FileResponse(os.path.join(STATIC_DIR, "index.html"))


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_image(
    upload: Optional[ImageUpload] = Depends(read_image_upload),
    style_prompt: Optional[str] = Form(None, alias="stylePrompt"),
    language: Optional[str] = Form(None),
    style: Optional[str] = Form(None),
    is_reanalysis: Optional[str] = Form(None, alias="isReanalysis"),
    analysis_id: Optional[str] = Form(None, alias="analysisId"),
    analysis_type: Optional[str] = Form(None, alias="analysisType"),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Store an uploaded portrait and ask the AI service to read it.

    First upload: the image is written to the blob store and a record is
    created. With ``isReanalysis=true`` the record named by ``analysisId``
    is updated with a fresh reading and the image is not stored again.
    """
    req = AnalyzeRequest.from_form(
        style_prompt=style_prompt,
        language=language,
        style=style,
        is_reanalysis=is_reanalysis,
        analysis_id=analysis_id,
        analysis_type=analysis_type,
    )
    try:
        result = await service.handle(req, upload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[Upload] Error: {str(e)}", exc_info=True)
        return error_response_for(e)

    return UploadResponse.from_result(result)
