import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from facereader import database
from facereader.main import app
from facereader.models import ImageAnalysis
from facereader.infrastructure.ai import gemini_provider

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-payload\xff\xd9"


@pytest.fixture
def db_engine(tmp_path, monkeypatch):
    eng = database.build_engine(f"sqlite:///{tmp_path / 'faces.db'}")
    monkeypatch.setattr(database, "engine", eng)
    yield eng
    eng.dispose()


@pytest.fixture
def client(db_engine, fake_ai, monkeypatch):
    # The app builds its provider during startup; hand it the fake instead.
    monkeypatch.setattr(gemini_provider, "GeminiProvider", lambda **kwargs: fake_ai)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def all_rows(engine):
    with Session(engine) as session:
        return session.exec(select(ImageAnalysis)).all()


def test_startup_creates_the_table(client, db_engine):
    assert all_rows(db_engine) == []
    assert client.get("/health").json()["database"]["ok"] is True


def test_upload_stores_row_with_comment(client, db_engine, fake_ai):
    res = client.post(
        "/upload",
        files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")},
        data={"language": "en", "style": "humorous", "stylePrompt": "Be kind."},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["aiComment"] == fake_ai.reply

    rows = all_rows(db_engine)
    assert len(rows) == 1
    row = rows[0]
    assert row.id == body["analysisId"]
    assert row.ai_comment == fake_ai.reply
    assert row.style_prompt == "Be kind."
    assert row.language == "en"
    assert row.style == "humorous"
    assert row.storage_url == body["uploadedImageUrl"]
    assert row.created_at is not None and row.updated_at is not None


def test_reanalysis_updates_the_same_row(client, db_engine, fake_ai):
    first = client.post("/upload", files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")}).json()

    fake_ai.reply = "Your fortune looks bright."
    res = client.post(
        "/upload",
        files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")},
        data={"isReanalysis": "true", "analysisId": str(first["analysisId"]), "analysisType": "fortune"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["analysisId"] == first["analysisId"]
    assert body["uploadedImageUrl"] == first["uploadedImageUrl"]

    rows = all_rows(db_engine)
    assert len(rows) == 1
    assert rows[0].ai_comment == "Your fortune looks bright."
    assert rows[0].analysis_type == "fortune"
    assert len(fake_ai.calls) == 2


def test_reanalysis_of_unknown_row_returns_404(client, db_engine, fake_ai):
    res = client.post(
        "/upload",
        files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")},
        data={"isReanalysis": "true", "analysisId": "42"},
    )

    assert res.status_code == 404
    assert res.json()["success"] is False
    assert fake_ai.calls == []
    assert all_rows(db_engine) == []
