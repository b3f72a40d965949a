"""
Profile Import Service - PDF import orchestration and per-source profile reads.

One import: extract -> classify -> summarize -> read the user document ->
recompute the consolidated fields -> one merged write. Nothing is written if
any earlier step raises. There is no locking, so two concurrent imports of
different profile types for the same user race on the consolidated fields
(last write wins).
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from fastapi import Request
from pydantic import BaseModel, Field

from .document_store import DocumentStore, USERS
from .pdf_extractor import extract_text
from .profile_parser import ParsedDocument, ProfileType, parse_by_type
from .profile_summary import (
    GeneratedProfile,
    consolidate_me_next,
    consolidate_me_now,
    summarize,
)

logger = logging.getLogger(__name__)


class ProfileNotFound(LookupError):
    """No user document, or no stored SourceProfile of the requested type."""


class SourceProfile(BaseModel):
    """Derived artifact of the latest import of one profile type."""
    me_now: str = ""
    me_next: str = ""
    imported_data: ParsedDocument = Field(default_factory=ParsedDocument)
    last_imported: Optional[datetime] = None
    import_source: Optional[str] = None


class ImportResult(BaseModel):
    profile_type: ProfileType
    parsed_data: ParsedDocument
    generated_profile: GeneratedProfile
    consolidated_profile: GeneratedProfile


class ImportHistoryEntry(BaseModel):
    last_imported: Optional[datetime] = None
    import_source: Optional[str] = None
    has_imported_data: bool = False


def source_profile_field(profile_type: ProfileType) -> str:
    """User-document key holding one profile type's SourceProfile."""
    return f"{ProfileType(profile_type).value}_profile"


def stored_source_profiles(user_data: Optional[dict]) -> Dict[ProfileType, SourceProfile]:
    """SourceProfiles present on a user document, keyed by profile type."""
    profiles = {}
    for profile_type in ProfileType:
        raw = (user_data or {}).get(source_profile_field(profile_type))
        if raw:
            profiles[profile_type] = SourceProfile.model_validate(raw)
    return profiles


def consolidate(sources: Dict[ProfileType, SourceProfile]) -> GeneratedProfile:
    """Consolidated "Me Now" / "Me Next" across every stored source."""
    me_now_fields = [
        sources[profile_type].me_now if profile_type in sources else ""
        for profile_type in ProfileType
    ]
    documents = {profile_type: source.imported_data for profile_type, source in sources.items()}
    return GeneratedProfile(
        me_now=consolidate_me_now(me_now_fields),
        me_next=consolidate_me_next(documents),
    )


class ProfileImportService:
    """
    Coordinates single-document imports for a user.

    Args:
        store: Document store holding the "users" collection
        extractor: PDF bytes -> text; runs in a worker thread
        clock: Returns the import timestamp
    """

    def __init__(
        self,
        store: DocumentStore,
        extractor: Callable[[bytes], str] = extract_text,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.store = store
        self.extractor = extractor
        self.clock = clock

    async def import_pdf(
        self,
        user_id: str,
        profile_type: str,
        pdf_bytes: bytes,
        filename: Optional[str] = None,
    ) -> ImportResult:
        """
        Import one PDF as ``profile_type`` and refresh the consolidated profile.

        Raises:
            InvalidProfileType: before any extraction work
            ExtractionError: unreadable PDF; nothing is stored
        """
        profile_type = ProfileType.parse(profile_type)

        text = await asyncio.to_thread(self.extractor, pdf_bytes)
        parsed = parse_by_type(text, profile_type)
        generated = summarize(parsed)

        source = SourceProfile(
            me_now=generated.me_now,
            me_next=generated.me_next,
            imported_data=parsed,
            last_imported=self.clock(),
            import_source=filename,
        )

        existing = await self.store.get(USERS, user_id)
        sources = stored_source_profiles(existing)
        sources[profile_type] = source
        consolidated = consolidate(sources)

        await self.store.set(
            USERS,
            user_id,
            {
                source_profile_field(profile_type): source.model_dump(mode="json"),
                "me_now": consolidated.me_now,
                "me_next": consolidated.me_next,
            },
            merge=True,
        )

        if parsed.is_empty():
            logger.info(f"{profile_type.value} import for user {user_id} matched no sections")
        logger.info(
            f"✅ {profile_type.value} PDF imported for user {user_id}: "
            f"{len(parsed.skills)} skills, {len(parsed.experience)} exp, "
            f"{len(parsed.aspirations)} aspirations"
        )

        return ImportResult(
            profile_type=profile_type,
            parsed_data=parsed,
            generated_profile=generated,
            consolidated_profile=consolidated,
        )

    async def get_history(self, user_id: str) -> Dict[str, Optional[ImportHistoryEntry]]:
        """Last import per profile type, None for types never imported."""
        user_data = await self.store.get(USERS, user_id)
        if user_data is None:
            raise ProfileNotFound("User profile not found.")

        history: Dict[str, Optional[ImportHistoryEntry]] = {}
        for profile_type in ProfileType:
            raw = user_data.get(source_profile_field(profile_type))
            if not raw:
                history[profile_type.value] = None
                continue
            history[profile_type.value] = ImportHistoryEntry(
                last_imported=raw.get("last_imported"),
                import_source=raw.get("import_source"),
                has_imported_data=bool(raw.get("imported_data")),
            )
        return history

    async def get_source_profile(self, user_id: str, profile_type: str) -> SourceProfile:
        profile_type = ProfileType.parse(profile_type)
        user_data = await self.store.get(USERS, user_id)
        if user_data is None:
            raise ProfileNotFound("User profile not found.")

        source = stored_source_profiles(user_data).get(profile_type)
        if source is None:
            raise ProfileNotFound(f"{profile_type.value} profile not found.")
        return source

    async def auto_generate_me_next(self, user_id: str) -> str:
        """Re-run the consolidated "Me Next" rules on stored data. Nothing is saved."""
        user_data = await self.store.get(USERS, user_id)
        sources = stored_source_profiles(user_data)
        documents = {profile_type: source.imported_data for profile_type, source in sources.items()}
        return consolidate_me_next(documents)


def get_import_service(request: Request) -> ProfileImportService:
    return request.app.state.import_service
