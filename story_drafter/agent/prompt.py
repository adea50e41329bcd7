"""
Prompt for story generation.

The response format requested here is the one response_parser understands;
keep the two in sync when changing either.
"""
from typing import Sequence
from story_drafter.models.story import UserStory

NO_CONTEXT_TEXT = "No context documents provided."
NO_EXISTING_STORIES_TEXT = "No existing user stories found."

RESPONSE_FORMAT = """## Features

### Feature 1: [Feature Title]
**Description:** [Feature description]

## User Stories

### Story 1: [User Story Title]
**As a** [user type]
**I want** [functionality]
**So that** [benefit/value]

**Description:** [Detailed description]

**Acceptance Criteria:**
- [ ] [Criteria 1]
- [ ] [Criteria 2]
- [ ] [Criteria 3]

**Priority:** [Low/Medium/High/Critical]
**Story Points:** [1-13]

---

### Story 2: [User Story Title]
[Continue with same format...]"""

GUIDELINES = [
    "Generate 2-5 user stories per requirement",
    "Include relevant features that group related stories",
    "Make stories independent and testable",
    "Use clear, concise language",
    "Avoid duplicating existing stories",
    "Include realistic story point estimates",
    "Set appropriate priorities based on business value",
    'Each story should follow the "As a... I want... So that..." format',
    "Acceptance criteria should be specific and measurable",
]


def format_existing_stories(existing_stories: Sequence[UserStory]) -> str:
    """Render existing stories as '- title: description' lines."""
    if not existing_stories:
        return NO_EXISTING_STORIES_TEXT
    return "\n".join(f"- {story.title}: {story.description}" for story in existing_stories)


def build_generation_prompt(
    requirement: str,
    context: str = "",
    existing_stories: Sequence[UserStory] = (),
) -> str:
    """
    Build the story-generation prompt.

    Args:
        requirement: New requirement text from the user
        context: Extracted text of the project's context documents
        existing_stories: Stories the model should avoid duplicating

    Returns:
        Prompt text
    """
    guidelines = "\n".join(f"{index}. {line}" for index, line in enumerate(GUIDELINES, start=1))

    return f"""You are an expert product manager and user story writer. Your task is to generate well-structured user stories and features based on the given requirement.

CONTEXT DOCUMENTS:
{context or NO_CONTEXT_TEXT}

EXISTING USER STORIES:
{format_existing_stories(existing_stories)}

NEW REQUIREMENT:
{requirement}

Please generate user stories and features based on this requirement. Format your response as markdown with the following structure:

{RESPONSE_FORMAT}

IMPORTANT GUIDELINES:
{guidelines}

Generate the response now:"""
