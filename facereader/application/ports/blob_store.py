from typing import Protocol


class BlobStore(Protocol):
    backend: str

    def put(self, data: bytes, key: str, content_type: str) -> str:
        """Store bytes under ``key`` and return the URL the object is reachable at."""
        ...

    def get(self, key: str) -> bytes:
        ...
