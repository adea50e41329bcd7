"""
Tests for the story-generation prompt.
"""
from story_drafter.agent.prompt import (
    NO_CONTEXT_TEXT,
    NO_EXISTING_STORIES_TEXT,
    build_generation_prompt,
)
from story_drafter.models.story import UserStory
from story_drafter.services import response_parser


def test_prompt_includes_requirement_and_defaults():
    prompt = build_generation_prompt("Users can export invoices as CSV")

    assert "NEW REQUIREMENT:\nUsers can export invoices as CSV" in prompt
    assert NO_CONTEXT_TEXT in prompt
    assert NO_EXISTING_STORIES_TEXT in prompt
    assert prompt.rstrip().endswith("Generate the response now:")


def test_prompt_includes_context_and_existing_stories():
    existing = [
        UserStory(id="a", title="Login", description="As a user I want to log in"),
        UserStory(id="b", title="Logout", description=""),
    ]
    prompt = build_generation_prompt("Add SSO", context="Company uses Okta.", existing_stories=existing)

    assert "CONTEXT DOCUMENTS:\nCompany uses Okta." in prompt
    assert "- Login: As a user I want to log in\n- Logout: " in prompt
    assert NO_CONTEXT_TEXT not in prompt
    assert NO_EXISTING_STORIES_TEXT not in prompt


def test_prompt_guidelines_are_numbered():
    prompt = build_generation_prompt("Anything")
    assert "1. Generate 2-5 user stories per requirement" in prompt
    assert "9. Acceptance criteria should be specific and measurable" in prompt


def test_prompt_requests_markers_the_parser_understands():
    prompt = build_generation_prompt("Anything")
    for marker in [
        response_parser.FEATURE_HEADER,
        response_parser.STORY_HEADER,
        response_parser.DESCRIPTION_LABEL,
        response_parser.PRIORITY_LABEL,
        response_parser.STORY_POINTS_LABEL,
        response_parser.CHECKLIST_ITEM,
        response_parser.ROLE_LABEL,
        response_parser.WANT_LABEL,
        response_parser.BENEFIT_LABEL,
    ]:
        assert marker in prompt, marker
