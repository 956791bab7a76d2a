# facereader/schemas.py
from pydantic import BaseModel, Field
from typing import Optional

from .application.services.analysis_service import AnalyzeResult


class UploadResponse(BaseModel):
    message: str
    aiComment: str
    analysisId: Optional[int] = None
    uploadedImageUrl: Optional[str] = Field(None, description="Location of the image in the blob store")
    imageData: Optional[str] = Field(None, description="data: URL of the uploaded image")
    gcsUrl: Optional[str] = Field(None, description="Same as uploadedImageUrl when stored in Google Cloud Storage")

    @classmethod
    def from_result(cls, result: AnalyzeResult) -> "UploadResponse":
        return cls(
            message=result.message,
            aiComment=result.ai_comment,
            analysisId=result.analysis_id,
            uploadedImageUrl=result.storage_url,
            imageData=result.image_data_url,
            gcsUrl=result.storage_url if result.storage_backend == "gcs" else None,
        )


class ErrorResponse(BaseModel):
    success: bool = False
    data: None = None
    error: str
    quotaExceeded: Optional[bool] = None
