# facereader/models.py
from typing import Optional
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, Text


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ImageAnalysis(SQLModel, table=True):
    __tablename__ = "image_analyses"

    id: Optional[int] = Field(default=None, primary_key=True)
    image_data: str = Field(sa_column=Column(Text, nullable=False))  # base64
    image_name: str = Field(max_length=255)
    mime_type: str = Field(max_length=50)
    storage_url: Optional[str] = Field(default=None, sa_column=Column(Text))
    ai_comment: Optional[str] = Field(default=None, sa_column=Column(Text))
    style_prompt: Optional[str] = Field(default=None, sa_column=Column(Text))
    language: str = Field(default="zh", max_length=10)
    style: str = Field(default="mild", max_length=50)
    analysis_type: str = Field(default="normal", max_length=20)  # normal, fortune
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))
