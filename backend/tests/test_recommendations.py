"""
Unit tests for recommendation generation and model reply parsing
"""
import json
from unittest.mock import AsyncMock

import pytest

from beach_tracker.services.recommendations import (
    FALLBACK_RECOMMENDATIONS,
    GeminiClient,
    RecommendationService,
    build_prompt,
    parse_recommendations,
)

RECOMMENDATIONS_JSON = json.dumps([
    {
        "goal": "Get AWS certified",
        "activities": ["Finish the Solutions Architect course", "Pair on a cloud pursuit"],
        "learningResources": {
            "udemyCourses": [{"title": "AWS SAA", "link": "https://www.udemy.com/course/aws"}],
            "books": [{"title": "Cloud Patterns", "link": "https://www.amazon.com/dp/1"}],
        },
    },
    {"goal": "Mentor juniors", "activities": ["Run a weekly kata"]},
])


def test_parse_plain_json_array():
    recommendations = parse_recommendations(RECOMMENDATIONS_JSON)

    assert [r.goal for r in recommendations] == ["Get AWS certified", "Mentor juniors"]
    resources = recommendations[0].learning_resources
    assert resources.udemy_courses[0].title == "AWS SAA"
    assert resources.books[0].link == "https://www.amazon.com/dp/1"
    assert recommendations[1].learning_resources is None


def test_parse_strips_markdown_fences_and_prose():
    wrapped = f"Here you go:\n```json\n{RECOMMENDATIONS_JSON}\n```\nGood luck!"

    assert len(parse_recommendations(wrapped)) == 2
    assert len(parse_recommendations(f"```json\n{RECOMMENDATIONS_JSON}\n```")) == 2


def test_parse_drops_malformed_items():
    text = json.dumps([{"goal": "Valid goal"}, {"activities": ["no goal"]}, "just text"])

    recommendations = parse_recommendations(text)

    assert [r.goal for r in recommendations] == ["Valid goal"]


@pytest.mark.parametrize("text", ["No recommendations today", "[not json]", "{\"goal\": \"x\"}"])
def test_parse_rejects_responses_without_a_json_array(text):
    with pytest.raises(ValueError):
        parse_recommendations(text)


def test_prompt_contains_profile():
    prompt = build_prompt("Skills: Java", "")

    assert "Skills: Java" in prompt
    assert "Not provided" in prompt


@pytest.mark.asyncio
async def test_generate_uses_model_response():
    client = AsyncMock()
    client.complete.return_value = RECOMMENDATIONS_JSON
    service = RecommendationService(client)

    recommendations = await service.generate("Skills: Java", "Career Goals: Lead")

    assert len(recommendations) == 2
    prompt = client.complete.await_args.args[0]
    assert "Career Goals: Lead" in prompt


@pytest.mark.asyncio
async def test_generate_returns_empty_list_for_empty_response():
    client = AsyncMock()
    client.complete.return_value = "   "

    assert await RecommendationService(client).generate("a", "b") == []


@pytest.mark.asyncio
async def test_generate_falls_back_on_api_error():
    client = AsyncMock()
    client.complete.side_effect = TimeoutError()

    recommendations = await RecommendationService(client).generate("a", "b")

    assert [r.goal for r in recommendations] == [item["goal"] for item in FALLBACK_RECOMMENDATIONS]


@pytest.mark.asyncio
async def test_generate_falls_back_on_unparsable_response():
    client = AsyncMock()
    client.complete.return_value = "I cannot help with that."

    recommendations = await RecommendationService(client).generate("a", "b")

    assert len(recommendations) == len(FALLBACK_RECOMMENDATIONS)


@pytest.mark.asyncio
async def test_unconfigured_gemini_client_falls_back():
    client = GeminiClient(api_key="", model="gemini-2.0-flash")

    assert client.is_configured is False
    recommendations = await RecommendationService(client).generate("a", "b")

    assert len(recommendations) == len(FALLBACK_RECOMMENDATIONS)
