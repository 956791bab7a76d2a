import os
import tempfile
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

# Settings are read at import time; pin them before the app is imported.
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ["STORAGE_BACKEND"] = "local"
os.environ["DATABASE_URL"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="facereader-uploads-")


@dataclass
class FakeRecord:
    id: int
    image_data: str
    image_name: str
    mime_type: str
    storage_url: Optional[str]
    ai_comment: Optional[str] = None
    style_prompt: Optional[str] = None
    language: str = "zh"
    style: str = "mild"
    analysis_type: str = "normal"
    created_at: datetime = None
    updated_at: datetime = None


class FakeAnalysisRepo:
    def __init__(self):
        self.rows: Dict[int, FakeRecord] = {}
        self.inserts: List[int] = []
        self.updates: List[int] = []
        self._id = 1

    def insert(self, image_data, image_name, mime_type, storage_url):
        now = datetime.now(timezone.utc)
        rec = FakeRecord(self._id, image_data, image_name, mime_type, storage_url, created_at=now, updated_at=now)
        self.rows[rec.id] = rec
        self.inserts.append(rec.id)
        self._id += 1
        return replace(rec)

    def update(self, analysis_id, ai_comment, style_prompt, language, style, analysis_type):
        rec = self.rows.get(analysis_id)
        if not rec:
            return None
        rec.ai_comment = ai_comment
        rec.style_prompt = style_prompt
        rec.language = language
        rec.style = style
        rec.analysis_type = analysis_type
        rec.updated_at = datetime.now(timezone.utc)
        self.updates.append(analysis_id)
        return replace(rec)

    def get(self, analysis_id):
        rec = self.rows.get(analysis_id)
        return replace(rec) if rec else None


class FakeAI:
    def __init__(self, reply: str = "A calm, thoughtful face.", error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate_text(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        self.calls.append((prompt, image_bytes, mime_type))
        if self.error:
            raise self.error
        return self.reply


class MemoryBlobStore:
    backend = "memory"

    def __init__(self):
        self.objects: Dict[str, bytes] = {}

    def put(self, data: bytes, key: str, content_type: str) -> str:
        self.objects[key] = data
        return f"memory://{key}"

    def get(self, key: str) -> bytes:
        return self.objects[key]


@pytest.fixture
def fake_ai():
    return FakeAI()


@pytest.fixture
def fake_repo():
    return FakeAnalysisRepo()


@pytest.fixture
def memory_store():
    return MemoryBlobStore()
