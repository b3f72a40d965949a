"""
Profile Summary - narrative "Me Now" / "Me Next" strings from parsed documents.

Per-source summaries are short fixed-cap digests of one ParsedDocument. The
consolidated fields combine all three sources: "Me Now" pools and
de-duplicates sentences from every source, while "Me Next" takes career goals
from Pathways and Workday and only falls back to Jigsaw when both are empty.
"""
import re
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from .profile_parser import ParsedDocument, ProfileType

# (label, ParsedDocument field, max items, separator)
Section = Tuple[str, str, int, str]

ME_NOW_SECTIONS: Sequence[Section] = (
    ("Skills", "skills", 5, ", "),
    ("Experience", "experience", 3, "; "),
    ("Strengths", "strengths", 3, ", "),
)

ME_NEXT_SECTIONS: Sequence[Section] = (
    ("Aspirations", "aspirations", 3, "; "),
    ("Areas for Growth", "areas_for_growth", 3, ", "),
)

# Consolidated "Me Next", highest priority first
PRIORITY_SECTIONS: Sequence[Tuple[ProfileType, Section]] = (
    (ProfileType.PATHWAYS, ("Career Aspirations", "aspirations", 3, "; ")),
    (ProfileType.WORKDAY, ("Development Focus", "areas_for_growth", 2, ", ")),
    (ProfileType.WORKDAY, ("Workday Goals", "aspirations", 2, "; ")),
)
FALLBACK_SECTION: Tuple[ProfileType, Section] = (
    ProfileType.JIGSAW, ("Career Goals", "aspirations", 2, "; "),
)

MAX_CONSOLIDATED_SENTENCES = 5
SENTENCE_BREAK = re.compile(r"[.!?]+")


class GeneratedProfile(BaseModel):
    me_now: str = ""
    me_next: str = ""


def _render(document: ParsedDocument, section: Section) -> Optional[str]:
    label, field, limit, separator = section
    items = getattr(document, field)[:limit]
    if not items:
        return None
    return f"{label}: {separator.join(items)}"


def _render_all(document: ParsedDocument, sections: Iterable[Section]) -> str:
    parts = [_render(document, section) for section in sections]
    return ". ".join(part for part in parts if part)


def build_me_now(document: ParsedDocument) -> str:
    return _render_all(document, ME_NOW_SECTIONS)


def build_me_next(document: ParsedDocument) -> str:
    return _render_all(document, ME_NEXT_SECTIONS)


def summarize(document: ParsedDocument) -> GeneratedProfile:
    """Per-source "Me Now" / "Me Next" for one imported document."""
    return GeneratedProfile(me_now=build_me_now(document), me_next=build_me_next(document))


def consolidate_me_now(fields: Iterable[Optional[str]]) -> str:
    """
    Merge per-source "Me Now" strings into at most five unique sentences.

    Only sentences that are identical after trimming collapse; the cap keeps
    the first five in source order.
    """
    valid_fields = [field for field in fields if field and field.strip()]
    if not valid_fields:
        return ""

    all_content = " ".join(valid_fields)
    sentences: List[str] = []
    for fragment in SENTENCE_BREAK.split(all_content):
        sentence = fragment.strip()
        if sentence and sentence not in sentences:
            sentences.append(sentence)

    unique_sentences = sentences[:MAX_CONSOLIDATED_SENTENCES]
    return ". ".join(unique_sentences) + "."


def consolidate_me_next(documents: Mapping[ProfileType, ParsedDocument]) -> str:
    """
    "Me Next" from the prioritised sources.

    Pathways aspirations, then Workday growth areas and goals. Jigsaw
    aspirations are used only when none of those produced anything. Missing
    profile types count as empty documents.
    """
    def document_for(profile_type: ProfileType) -> ParsedDocument:
        return documents.get(profile_type) or ParsedDocument()

    parts = [
        _render(document_for(profile_type), section)
        for profile_type, section in PRIORITY_SECTIONS
    ]
    parts = [part for part in parts if part]

    if not parts:
        profile_type, section = FALLBACK_SECTION
        fallback = _render(document_for(profile_type), section)
        if fallback:
            parts.append(fallback)

    return ". ".join(parts)
