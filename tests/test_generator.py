"""
Tests for the story generation pipeline with a mocked model client.
"""
import pytest
from unittest.mock import Mock
from story_drafter.agent.generator import GenerationError, StoryGenerator
from story_drafter.config import settings
from story_drafter.models.story import UserStory
from story_drafter.services.activity import ActivityLogger, collecting_publisher
from story_drafter.services.llm_client import LLMClientError
from story_drafter.services.response_parser import PLACEHOLDER_TITLE


MODEL_RESPONSE = """<think>reasoning the model should not leak</think>
## Features

### Feature 1: Invoice Export
**Description:** Export invoices for accounting

## User Stories

### Story 1: Export invoices to CSV
**As a** accountant
**I want** to export invoices to CSV
**So that** I can import them into my ledger

**Acceptance Criteria:**
- [ ] CSV contains one row per invoice
- [ ] Export respects the selected date range

**Priority:** High
**Story Points:** 5

### Story 2: Dark mode
**Description:** Switch the UI to a dark theme
**Priority:** Low
**Story Points:** 2
"""


@pytest.fixture
def activity():
    events, publish = collecting_publisher()
    return events, ActivityLogger(project_id="proj-1", publish=publish)


def test_generate_parses_and_organizes(activity):
    events, logger = activity
    llm = Mock()
    llm.generate_completion.return_value = MODEL_RESPONSE

    result = StoryGenerator(llm=llm, activity=logger).generate(
        "Accountants need invoice exports",
        context="Invoices live in the billing service.",
        model_name="llama3:8b",
    )

    model, prompt = llm.generate_completion.call_args[0]
    assert model == "llama3:8b"
    assert "Accountants need invoice exports" in prompt
    assert "Invoices live in the billing service." in prompt

    assert [s.title for s in result.parsed.user_stories] == ["Export invoices to CSV", "Dark mode"]
    assert [f.title for f in result.parsed.features] == ["Invoice Export"]

    feature = result.organized.features[0]
    assert [s.title for s in feature.user_stories] == ["Export invoices to CSV"]
    assert [s.title for s in result.organized.standalone_stories] == ["Dark mode"]
    # Parse-time features stay unassociated
    assert result.parsed.features[0].user_stories == []


def test_generate_emits_activity_events(activity):
    events, logger = activity
    llm = Mock()
    llm.generate_completion.return_value = MODEL_RESPONSE

    StoryGenerator(llm=llm, activity=logger).generate("Accountants need invoice exports")

    assert [e.type for e in events] == ["processing", "prompt", "response", "processing", "info"]
    assert all(e.project_id == "proj-1" for e in events)
    assert events[2].data == {"response": MODEL_RESPONSE}
    organized = events[-1].data["organizedContent"]
    assert len(organized["features"][0]["userStories"]) == 1
    assert len(organized["standaloneStories"]) == 1


def test_generate_uses_default_model(activity):
    _, logger = activity
    llm = Mock()
    llm.generate_completion.return_value = ""

    StoryGenerator(llm=llm, activity=logger).generate("Anything")

    assert llm.generate_completion.call_args[0][0] == settings.default_model


def test_generate_passes_existing_stories_to_prompt(activity):
    _, logger = activity
    llm = Mock()
    llm.generate_completion.return_value = ""
    existing = [UserStory(id="x", title="Existing login", description="Already built")]

    StoryGenerator(llm=llm, activity=logger).generate("Anything", existing_stories=existing)

    prompt = llm.generate_completion.call_args[0][1]
    assert "- Existing login: Already built" in prompt


def test_unusable_response_yields_placeholder(activity):
    _, logger = activity
    llm = Mock()
    llm.generate_completion.return_value = "I cannot help with that."

    result = StoryGenerator(llm=llm, activity=logger).generate("Anything")

    assert [s.title for s in result.organized.standalone_stories] == [PLACEHOLDER_TITLE]
    assert result.organized.features == []


def test_model_failure_raises_generation_error(activity):
    events, logger = activity
    llm = Mock()
    llm.generate_completion.side_effect = LLMClientError("connection refused")

    with pytest.raises(GenerationError) as exc_info:
        StoryGenerator(llm=llm, activity=logger).generate("Anything")

    assert "connection refused" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, LLMClientError)
    assert events[-1].type == "error"


@pytest.mark.parametrize("requirement", ["", "   ", None])
def test_empty_requirement_rejected_before_model_call(activity, requirement):
    _, logger = activity
    llm = Mock()

    with pytest.raises(GenerationError):
        StoryGenerator(llm=llm, activity=logger).generate(requirement)

    llm.generate_completion.assert_not_called()
