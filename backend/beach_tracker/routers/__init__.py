from .profile import router as profile_router
from .pdf_import import router as pdf_import_router
from .activities import router as activities_router
from .recommendations import router as recommendations_router

__all__ = [
    "profile_router", "pdf_import_router", "activities_router", "recommendations_router"
]
