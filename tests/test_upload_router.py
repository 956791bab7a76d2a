import pytest
from fastapi.testclient import TestClient

from facereader.main import app
from facereader.config import settings
from facereader.dependencies import get_analysis_service
from facereader.application.services.analysis_service import AnalysisService
from facereader.infrastructure.storage.local_storage import LocalBlobStore

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-payload\xff\xd9"


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_service(ai, store, repo=None):
    app.dependency_overrides[get_analysis_service] = lambda: AnalysisService(
        ai_provider=ai, blob_store=store, analysis_repo=repo
    )


def test_index_page_is_served(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]


def test_successful_upload_response_shape(client, fake_ai, fake_repo, memory_store):
    use_service(fake_ai, memory_store, fake_repo)

    res = client.post(
        "/upload",
        files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")},
        data={"language": "en", "stylePrompt": "Be kind."},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["aiComment"] == "A calm, thoughtful face."
    assert body["analysisId"] == 1
    assert body["uploadedImageUrl"].startswith("memory://")
    assert body["imageData"].startswith("data:image/jpeg;base64,")
    assert body["gcsUrl"] is None
    assert fake_repo.inserts == [1] and fake_repo.updates == [1]
    assert "Be kind." in fake_ai.calls[0][0]


def test_gif_is_rejected_before_handler_runs(client, fake_ai, memory_store):
    use_service(fake_ai, memory_store)

    res = client.post("/upload", files={"image": ("anim.gif", b"GIF89a", "image/gif")})

    assert res.status_code == 415
    assert res.json()["success"] is False
    assert fake_ai.calls == []
    assert memory_store.objects == {}


def test_extension_must_match_allowed_types(client, fake_ai, memory_store):
    use_service(fake_ai, memory_store)

    res = client.post("/upload", files={"image": ("anim.gif", JPEG_BYTES, "image/jpeg")})

    assert res.status_code == 415
    assert fake_ai.calls == []


def test_oversized_file_is_rejected(client, fake_ai, memory_store, monkeypatch):
    use_service(fake_ai, memory_store)
    monkeypatch.setattr(settings, "MAX_FILE_SIZE", 8)

    res = client.post("/upload", files={"image": ("me.png", b"0123456789", "image/png")})

    assert res.status_code == 413
    assert fake_ai.calls == []


def test_missing_file_returns_400(client, fake_ai, fake_repo, memory_store):
    use_service(fake_ai, memory_store, fake_repo)

    res = client.post("/upload", data={"language": "zh"})

    assert res.status_code == 400
    assert res.json()["error"] == "No image file uploaded."
    assert fake_ai.calls == []
    assert memory_store.objects == {}
    assert fake_repo.inserts == []


def test_reanalysis_without_id_returns_400(client, fake_ai, memory_store):
    use_service(fake_ai, memory_store)

    res = client.post(
        "/upload",
        files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")},
        data={"isReanalysis": "true"},
    )

    assert res.status_code == 400
    assert "error" in res.json()
    assert fake_ai.calls == []


def test_quota_failure_returns_429(client, fake_ai, memory_store):
    fake_ai.error = RuntimeError("429 Resource has been exhausted (e.g. check quota).")
    use_service(fake_ai, memory_store)

    res = client.post("/upload", files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")})

    assert res.status_code == 429
    body = res.json()
    assert body["quotaExceeded"] is True
    assert body["error"]


def test_other_ai_failure_returns_500(client, fake_ai, memory_store):
    fake_ai.error = RuntimeError("model overloaded")
    use_service(fake_ai, memory_store)

    res = client.post("/upload", files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")})

    assert res.status_code == 500
    body = res.json()
    assert "quotaExceeded" not in body
    assert body["error"].endswith("model overloaded")


def test_storage_failure_returns_500(client, fake_ai):
    class BrokenStore:
        backend = "broken"

        def put(self, data, key, content_type):
            raise OSError("disk full")

        def get(self, key):
            raise OSError("disk full")

    use_service(fake_ai, BrokenStore())

    res = client.post("/upload", files={"image": ("me.jpg", JPEG_BYTES, "image/jpeg")})

    assert res.status_code == 500
    assert "disk full" in res.json()["error"]
    assert fake_ai.calls == []


def test_local_upload_round_trip(client, fake_ai):
    store = LocalBlobStore(directory=settings.UPLOAD_DIR, public_prefix=settings.UPLOAD_URL_PREFIX)
    use_service(fake_ai, store)

    res = client.post("/upload", files={"image": ("round trip.png", JPEG_BYTES, "image/png")})
    assert res.status_code == 200
    url = res.json()["uploadedImageUrl"]
    assert url.startswith(settings.UPLOAD_URL_PREFIX + "/")

    fetched = client.get(url)
    assert fetched.status_code == 200
    assert fetched.content == JPEG_BYTES


def test_health_reports_storage_backend(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["storage"] == "local"
    assert res.json()["database"]["enabled"] is False
