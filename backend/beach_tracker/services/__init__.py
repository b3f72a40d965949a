from .auth import (
    AuthenticationError,
    TokenVerifier,
    get_current_user_id
)
from .document_store import (
    DocumentStore,
    USERS,
    user_collection
)
from .pdf_extractor import (
    ExtractionError,
    extract_text
)
from .profile_parser import (
    ParsedDocument,
    ProfileType,
    InvalidProfileType,
    parse_by_type,
    parse_auto,
    parse_pdf
)
from .profile_summary import (
    GeneratedProfile,
    summarize,
    consolidate_me_now,
    consolidate_me_next
)
from .profile_import import (
    ProfileImportService,
    ProfileNotFound,
    SourceProfile
)
from .recommendations import (
    GeminiClient,
    Recommendation,
    RecommendationService
)

__all__ = [
    # Auth
    "AuthenticationError",
    "TokenVerifier",
    "get_current_user_id",
    # Storage
    "DocumentStore",
    "USERS",
    "user_collection",
    # PDF parsing
    "ExtractionError",
    "extract_text",
    "ParsedDocument",
    "ProfileType",
    "InvalidProfileType",
    "parse_by_type",
    "parse_auto",
    "parse_pdf",
    # Profile generation
    "GeneratedProfile",
    "summarize",
    "consolidate_me_now",
    "consolidate_me_next",
    "ProfileImportService",
    "ProfileNotFound",
    "SourceProfile",
    # Recommendations
    "GeminiClient",
    "Recommendation",
    "RecommendationService"
]
