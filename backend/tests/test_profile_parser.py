"""
Unit tests for section classification of exported profile PDFs
"""
import pytest

from beach_tracker.services.profile_parser import (
    ParsedDocument,
    ProfileType,
    InvalidProfileType,
    SECTION_KEYWORDS,
    classify_generic,
    detect_profile_type,
    parse_auto,
    parse_by_type,
    split_lines,
)


JIGSAW_TEXT = """
Skills
Java, Python
Aspirations
Become a lead
"""


def test_split_lines_trims_and_drops_blank_lines():
    assert split_lines("  one \n\n\t\n two\n") == ["one", "two"]


def test_jigsaw_end_to_end_example():
    parsed = parse_by_type(JIGSAW_TEXT, ProfileType.JIGSAW)

    assert parsed.skills == ["Java, Python"]
    assert parsed.aspirations == ["Become a lead"]
    assert parsed.experience == []
    assert parsed.strengths == []
    assert parsed.areas_for_growth == []
    assert parsed.raw_text == JIGSAW_TEXT


def test_lines_before_first_header_are_ignored():
    parsed = parse_by_type("Alex Morgan\nConsultant\nSkills\nTypeScript", ProfileType.JIGSAW)

    assert parsed.skills == ["TypeScript"]
    assert parsed.experience == []


def test_short_and_labelled_lines_are_not_content():
    text = "Skills\nGo\nLevel: Senior\nDomain driven design"
    parsed = parse_by_type(text, ProfileType.JIGSAW)

    assert parsed.skills == ["Domain driven design"]


def test_header_lines_are_consumed_not_stored():
    text = "Core Competencies\nRefactoring legacy code\nProfessional Background\nRetail banking platform"
    parsed = parse_by_type(text, ProfileType.JIGSAW)

    assert parsed.skills == ["Refactoring legacy code"]
    assert parsed.experience == ["Retail banking platform"]


def test_first_matching_bucket_wins_for_headers():
    # "skills" is tested before "experience"
    parsed = parse_by_type("Skills and Experience\nPair programming", ProfileType.JIGSAW)

    assert parsed.skills == ["Pair programming"]
    assert parsed.experience == []


def test_sources_differ_only_by_keyword_table():
    text = "Employment\nAcme Corp consultant"

    assert parse_by_type(text, ProfileType.PATHWAYS).experience == []
    assert parse_by_type(text, ProfileType.WORKDAY).experience == ["Acme Corp consultant"]


def test_jigsaw_next_keyword_starts_aspirations():
    parsed = parse_by_type("Me Next\nMove into platform engineering", ProfileType.JIGSAW)

    assert parsed.aspirations == ["Move into platform engineering"]


@pytest.mark.parametrize("profile_type", list(ProfileType))
def test_every_profile_type_has_all_buckets_configured(profile_type):
    assert len(SECTION_KEYWORDS[profile_type]) == 5


@pytest.mark.parametrize("profile_type", list(ProfileType))
def test_classification_is_deterministic(profile_type):
    text = "Skills\nKotlin\nKey Strengths\nFacilitation\nGrowth Areas\nPublic speaking"

    assert parse_by_type(text, profile_type) == parse_by_type(text, profile_type)


@pytest.mark.parametrize("profile_type", list(ProfileType))
def test_each_line_lands_in_at_most_one_bucket(profile_type):
    text = "Skills\nKotlin\nExperience\nPayments team\nStrengths\nFacilitation"
    parsed = parse_by_type(text, profile_type)

    stored = (
        parsed.skills + parsed.experience + parsed.aspirations
        + parsed.strengths + parsed.areas_for_growth
    )
    assert len(stored) == len(set(stored)) == 3


def test_empty_text_yields_empty_document():
    parsed = parse_by_type("", ProfileType.WORKDAY)

    assert parsed == ParsedDocument()
    assert parsed.is_empty()


def test_invalid_profile_type_is_rejected():
    with pytest.raises(InvalidProfileType):
        parse_by_type("Skills\nJava", "linkedin")


def test_profile_type_parse_accepts_strings_and_members():
    assert ProfileType.parse("pathways") is ProfileType.PATHWAYS
    assert ProfileType.parse(ProfileType.WORKDAY) is ProfileType.WORKDAY


# ============================================================================
# Generic classifier
# ============================================================================

def test_generic_classifier_assigns_each_line_independently():
    text = "\n".join([
        "Python is my main language",
        "I worked on a payments project",
        "I want to lead teams",
        "I am good at mentoring",
        "I need to learn Rust",
        "Nothing relevant here",
    ])
    parsed = classify_generic(text)

    assert parsed.skills == ["Python is my main language"]
    assert parsed.experience == ["I worked on a payments project"]
    assert parsed.aspirations == ["I want to lead teams"]
    assert parsed.strengths == ["I am good at mentoring"]
    assert parsed.areas_for_growth == ["I need to learn Rust"]


def test_generic_classifier_uses_first_matching_rule():
    parsed = classify_generic("Skill goals: improve testing")

    assert parsed.skills == ["Skill goals: improve testing"]
    assert parsed.aspirations == []
    assert parsed.areas_for_growth == []


# ============================================================================
# Auto-detection
# ============================================================================

@pytest.mark.parametrize("text, expected", [
    ("Thoughtworks Jigsaw export", ProfileType.JIGSAW),
    ("My Career Path overview", ProfileType.PATHWAYS),
    ("Exported from Workday", ProfileType.WORKDAY),
    ("HR System report", ProfileType.WORKDAY),
    ("Workday and Jigsaw", ProfileType.JIGSAW),
    ("Plain resume", None),
])
def test_detect_profile_type(text, expected):
    assert detect_profile_type(text) is expected


def test_parse_auto_uses_detected_source_table():
    parsed = parse_auto("Career Pathways\nCareer Goals\nBecome an architect")

    assert parsed.aspirations == ["Become an architect"]


def test_parse_auto_falls_back_to_generic_classifier():
    parsed = parse_auto("I want to lead teams\nSkills\nKotlin")

    assert parsed.aspirations == ["I want to lead teams"]
    # Generic classification has no section state, so "Kotlin" is unassigned
    assert parsed.skills == ["Skills"]
