"""
Recommendation Service using Gemini to suggest development goals.

The model is asked for a JSON array but the reply is treated as free text:
fences and surrounding prose are stripped, invalid items dropped, and any
failure falls back to a fixed set of general recommendations.
"""
import asyncio
import json
import logging
from typing import List, Optional

from fastapi import Request
from google import genai
from google.genai import types
from pydantic import AliasChoices, BaseModel, Field, ValidationError

from ..config import Settings

logger = logging.getLogger(__name__)


# ============================================================================
# Pydantic Schemas for Validated Output
# ============================================================================

class LearningResource(BaseModel):
    title: str
    link: str


class LearningResources(BaseModel):
    udemy_courses: List[LearningResource] = Field(
        default_factory=list, validation_alias=AliasChoices("udemy_courses", "udemyCourses")
    )
    youtube_videos: List[LearningResource] = Field(
        default_factory=list, validation_alias=AliasChoices("youtube_videos", "youtubeVideos")
    )
    books: List[LearningResource] = Field(default_factory=list)
    papers: List[LearningResource] = Field(default_factory=list)


class Recommendation(BaseModel):
    goal: str
    activities: List[str] = Field(default_factory=list)
    learning_resources: Optional[LearningResources] = Field(
        default=None, validation_alias=AliasChoices("learning_resources", "learningResources")
    )


# ============================================================================
# Prompt
# ============================================================================

BEACH_EXPECTATIONS = """
- Support demand and other required efforts: client proposals, internal projects, interviews.
- Hone current skills and learn new and emerging ones.
- Actively seek to be staffed on projects.
- Respond to staffing team communications within a few hours.
- Keep Pathways ("Me Now" and "Me Next") and Jigsaw profiles up to date.
- Be open to available project work, even when it is not a perfect match.
- Manage time sensibly and avoid unauthorized overtime.
- Take part in operational activities and internal contributions.
"""

STAFFING_GUIDANCE = """
- Share skills and aspirations through Pathways ("Me Now" and "Me Next").
- Keep the Jigsaw profile (resume, industry and domain knowledge, preferences) current.
- Staffing looks at skills, archetypes and time spent on the beach.
- Consider growth ambitions holistically.
"""

RECOMMENDATION_PROMPT = """
You are an AI career coach for a consultant who is currently "on the beach"
(not allocated to a project). Help them use this time to grow and get staffed.

Consultant profile:
- Me Now (current skills and experience): {me_now}
- Me Next (career aspirations and desired skills): {me_next}

Expectations while on the beach:
{expectations}

How consultants get staffed:
{guidance}

Suggest 3-5 SMART goals. For each goal give 2-3 specific activities and, where
relevant, learning resources with real links (Udemy courses, YouTube videos,
books on Amazon, freely available papers).

Return ONLY a JSON array, no markdown and no text before or after it:
[
  {{
    "goal": "Improve proficiency in AWS cloud architecture.",
    "activities": ["Complete the AWS Solutions Architect Associate course.", "Support a pre-sales pursuit that needs AWS input."],
    "learning_resources": {{
      "udemy_courses": [{{"title": "...", "link": "https://www.udemy.com/course/..."}}],
      "youtube_videos": [{{"title": "...", "link": "https://www.youtube.com/watch?v=..."}}],
      "books": [{{"title": "...", "link": "https://www.amazon.com/..."}}],
      "papers": [{{"title": "...", "link": "https://..."}}]
    }}
  }}
]
"""


def build_prompt(me_now: str, me_next: str) -> str:
    return RECOMMENDATION_PROMPT.format(
        me_now=me_now or "Not provided",
        me_next=me_next or "Not provided",
        expectations=BEACH_EXPECTATIONS.strip(),
        guidance=STAFFING_GUIDANCE.strip(),
    )


FALLBACK_RECOMMENDATIONS = [
    {
        "goal": "Enhance current technical skills and stay updated with industry trends",
        "activities": [
            "Complete online courses in your current technology stack",
            "Participate in internal knowledge sharing sessions",
            "Contribute to open source projects or internal tools",
        ],
        "learning_resources": {
            "books": [
                {
                    "title": "Clean Code by Robert C. Martin",
                    "link": "https://www.amazon.com/Clean-Code-Handbook-Software-Craftsmanship/dp/0132350884/",
                }
            ],
            "papers": [
                {"title": "The Twelve-Factor App Methodology", "link": "https://12factor.net/"}
            ],
        },
    },
    {
        "goal": "Develop consulting and communication skills",
        "activities": [
            "Practice presenting technical concepts to non-technical audiences",
            "Participate in client proposal development",
            "Mentor junior team members",
        ],
        "learning_resources": {
            "books": [
                {
                    "title": "The McKinsey Way by Ethan M. Rasiel",
                    "link": "https://www.amazon.com/McKinsey-Way-Ethan-M-Rasiel/dp/0070534489/",
                }
            ],
        },
    },
]


def fallback_recommendations() -> List[Recommendation]:
    return [Recommendation.model_validate(item) for item in FALLBACK_RECOMMENDATIONS]


# ============================================================================
# Response parsing
# ============================================================================

def parse_recommendations(response_text: str) -> List[Recommendation]:
    """
    Pull the JSON array out of a model reply.

    Raises:
        ValueError: no JSON array could be decoded
    """
    text = response_text.strip()

    # Clean up response if it has markdown code blocks
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]

    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        raise ValueError("No JSON array in model response")

    data = json.loads(text[start:end + 1])
    if not isinstance(data, list):
        raise ValueError("Model response is not a JSON array")

    recommendations = []
    for item in data:
        try:
            recommendations.append(Recommendation.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Dropping malformed recommendation: {e.errors()[:1]}")
    return recommendations


# ============================================================================
# Clients
# ============================================================================

class GeminiClient:
    """Prompt in, text out. Built once at startup."""

    def __init__(self, api_key: str, model: str, timeout_seconds: float = 30.0):
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = None
        if api_key:
            self._client = genai.Client(api_key=api_key)
        else:
            logger.warning("GEMINI_API_KEY not set - recommendations will use fallback content")

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout_seconds=settings.gemini_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def complete(self, prompt: str) -> str:
        if self._client is None:
            raise RuntimeError("Gemini API not configured. Please set GEMINI_API_KEY.")

        response = await asyncio.wait_for(
            self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(temperature=0.4),
            ),
            timeout=self.timeout_seconds,
        )
        return response.text or ""


class RecommendationService:
    def __init__(self, client: GeminiClient):
        self.client = client

    async def generate(self, me_now: str, me_next: str) -> List[Recommendation]:
        """
        Recommendations for a profile.

        Returns an empty list when the model answers with nothing, and the
        fallback set when the call fails or the answer cannot be decoded.
        """
        try:
            response_text = await self.client.complete(build_prompt(me_now, me_next))
        except Exception as e:
            logger.warning(f"Using fallback recommendations due to API error: {e!r}")
            return fallback_recommendations()

        if not response_text.strip():
            logger.warning("Empty response from Gemini API")
            return []

        try:
            return parse_recommendations(response_text)
        except ValueError as e:
            logger.warning(f"Using fallback recommendations, unparsable response: {e}")
            logger.debug(f"Raw response: {response_text[:500]}...")
            return fallback_recommendations()


def get_recommendation_service(request: Request) -> RecommendationService:
    return request.app.state.recommendation_service
