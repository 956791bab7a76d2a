# Routers package
from . import upload_router

__all__ = [
    "upload_router",
]
