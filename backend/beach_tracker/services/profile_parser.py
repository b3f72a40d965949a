"""
Profile Parser - classify extracted PDF text into profile buckets.

Jigsaw, Pathways and Workday exports share one section-header state machine
and differ only in their keyword tables. Documents from unknown sources fall
back to a per-line keyword classifier.
"""
import enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .pdf_extractor import extract_text


class ProfileType(str, enum.Enum):
    JIGSAW = "jigsaw"
    PATHWAYS = "pathways"
    WORKDAY = "workday"

    @classmethod
    def parse(cls, value: str) -> "ProfileType":
        """Validate a user-supplied selector."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidProfileType(value) from None


class InvalidProfileType(ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__("Invalid profile type. Must be jigsaw, pathways, or workday.")


class Bucket(str, enum.Enum):
    SKILLS = "skills"
    EXPERIENCE = "experience"
    ASPIRATIONS = "aspirations"
    STRENGTHS = "strengths"
    GROWTH = "growth"


# Bucket -> ParsedDocument field
BUCKET_FIELDS = {
    Bucket.SKILLS: "skills",
    Bucket.EXPERIENCE: "experience",
    Bucket.ASPIRATIONS: "aspirations",
    Bucket.STRENGTHS: "strengths",
    Bucket.GROWTH: "areas_for_growth",
}


class ParsedDocument(BaseModel):
    """Lines of one source PDF, grouped by bucket in document order."""
    skills: List[str] = Field(default_factory=list)
    experience: List[str] = Field(default_factory=list)
    aspirations: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    areas_for_growth: List[str] = Field(default_factory=list)
    raw_text: str = ""

    def is_empty(self) -> bool:
        return not any(getattr(self, field) for field in BUCKET_FIELDS.values())


KeywordTable = Dict[Bucket, Tuple[str, ...]]

# Section headers per source. Buckets are tested in this order; the first
# bucket with a keyword contained in the lowercased line wins.
SECTION_KEYWORDS: Dict[ProfileType, KeywordTable] = {
    ProfileType.JIGSAW: {
        Bucket.SKILLS: ("skills", "competencies"),
        Bucket.EXPERIENCE: ("experience", "background"),
        Bucket.ASPIRATIONS: ("aspirations", "goals", "next"),
        Bucket.STRENGTHS: ("strengths", "strength"),
        Bucket.GROWTH: ("growth", "development", "improve"),
    },
    ProfileType.PATHWAYS: {
        Bucket.SKILLS: ("skills", "capabilities"),
        Bucket.EXPERIENCE: ("experience", "work history"),
        Bucket.ASPIRATIONS: ("aspirations", "career goals"),
        Bucket.STRENGTHS: ("strengths", "key strengths"),
        Bucket.GROWTH: ("development", "growth areas"),
    },
    ProfileType.WORKDAY: {
        Bucket.SKILLS: ("skills", "competencies", "capabilities"),
        Bucket.EXPERIENCE: ("experience", "work history", "employment"),
        Bucket.ASPIRATIONS: ("aspirations", "career goals", "objectives"),
        Bucket.STRENGTHS: ("strengths", "key strengths", "achievements"),
        Bucket.GROWTH: ("development", "growth areas", "improvement"),
    },
}

# Per-line keywords for documents of unknown origin
GENERIC_KEYWORDS: KeywordTable = {
    Bucket.SKILLS: ("skill", "technology", "language"),
    Bucket.EXPERIENCE: ("experience", "worked", "project"),
    Bucket.ASPIRATIONS: ("goal", "aspiration", "want to"),
    Bucket.STRENGTHS: ("strength", "good at", "excel"),
    Bucket.GROWTH: ("improve", "learn", "develop"),
}

# Markers that identify which tool exported a document, checked in order
SOURCE_MARKERS: Tuple[Tuple[ProfileType, Tuple[str, ...]], ...] = (
    (ProfileType.JIGSAW, ("jigsaw", "thoughtworks")),
    (ProfileType.PATHWAYS, ("pathways", "career path")),
    (ProfileType.WORKDAY, ("workday", "hr system")),
)


def split_lines(text: str) -> List[str]:
    """Trimmed, non-empty lines of the extracted text."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def match_bucket(line: str, table: KeywordTable) -> Optional[Bucket]:
    lower_line = line.lower()
    for bucket, keywords in table.items():
        if any(keyword in lower_line for keyword in keywords):
            return bucket
    return None


def is_content_line(line: str) -> bool:
    # Short fragments and "Label: value" lines are not section content
    return len(line) > 3 and ":" not in line


def _build_document(text: str, buckets: Dict[Bucket, List[str]]) -> ParsedDocument:
    fields = {BUCKET_FIELDS[bucket]: lines for bucket, lines in buckets.items()}
    return ParsedDocument(**fields, raw_text=text)


def classify_sections(text: str, keywords: KeywordTable) -> ParsedDocument:
    """
    Single pass over the lines with a "current section" state.

    A line matching a header keyword switches the section and is dropped.
    Any other line is appended to the current section if it looks like
    content; lines before the first header are ignored.
    """
    buckets: Dict[Bucket, List[str]] = {bucket: [] for bucket in Bucket}
    current: Optional[Bucket] = None

    for line in split_lines(text):
        header = match_bucket(line, keywords)
        if header is not None:
            current = header
            continue
        if current is not None and is_content_line(line):
            buckets[current].append(line)

    return _build_document(text, buckets)


def classify_generic(text: str) -> ParsedDocument:
    """Classify every line on its own against GENERIC_KEYWORDS."""
    buckets: Dict[Bucket, List[str]] = {bucket: [] for bucket in Bucket}

    for line in split_lines(text):
        bucket = match_bucket(line, GENERIC_KEYWORDS)
        if bucket is not None:
            buckets[bucket].append(line)

    return _build_document(text, buckets)


def parse_by_type(text: str, profile_type: ProfileType) -> ParsedDocument:
    return classify_sections(text, SECTION_KEYWORDS[ProfileType.parse(profile_type)])


def detect_profile_type(text: str) -> Optional[ProfileType]:
    """Guess the exporting tool from the document text."""
    lower_text = text.lower()
    for profile_type, markers in SOURCE_MARKERS:
        if any(marker in lower_text for marker in markers):
            return profile_type
    return None


def parse_auto(text: str) -> ParsedDocument:
    """Parse with the detected source's table, or the generic classifier."""
    profile_type = detect_profile_type(text)
    if profile_type is None:
        return classify_generic(text)
    return parse_by_type(text, profile_type)


def parse_pdf(pdf_bytes: bytes, profile_type: Optional[ProfileType] = None) -> ParsedDocument:
    """Extract a PDF and parse it as ``profile_type``, auto-detecting when None."""
    text = extract_text(pdf_bytes)
    if profile_type is None:
        return parse_auto(text)
    return parse_by_type(text, profile_type)
