"""
Tolerant parser for free-text model responses.

Reconstructs features and user stories from the markdown-like text a language
model returns for a story-generation prompt. The model does not guarantee
well-formed output, so parsing is line-oriented and never raises:
- Each stripped line is matched against literal, case-sensitive prefixes
- Unrecognized lines are ignored
- Partial records are emitted only when they acquired a title
- At least one user story is always returned (placeholder if none parsed)

Features and stories come out of the same scan but are NOT associated here;
see story_organizer.organize_stories for grouping.
"""
import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from story_drafter.models.enums import Priority
from story_drafter.models.story import Feature, ParseResult, UserStory


FEATURE_HEADER = "### Feature"
STORY_HEADER = "### Story"
DESCRIPTION_LABEL = "**Description:**"
PRIORITY_LABEL = "**Priority:**"
STORY_POINTS_LABEL = "**Story Points:**"
CHECKLIST_ITEM = "- [ ]"
ROLE_LABEL = "**As a**"
WANT_LABEL = "**I want**"
BENEFIT_LABEL = "**So that**"

# "1: Title" -> "Title"
HEADER_ORDINAL_PATTERN = re.compile(r"^\d+:\s*")
LEADING_INTEGER_PATTERN = re.compile(r"^[+-]?\d+")
# CPython's default int-from-str digit limit
MAX_STORY_POINT_DIGITS = 4300

PLACEHOLDER_TITLE = "Generated User Story"
PLACEHOLDER_DESCRIPTION = "Based on the provided requirement, implement the requested functionality."
PLACEHOLDER_CRITERIA = [
    "Functionality works as expected",
    "User interface is intuitive",
    "Performance meets requirements",
]
PLACEHOLDER_STORY_POINTS = 5


class Section(Enum):
    """Which kind of block the scan is currently inside."""

    NONE = "none"
    IN_FEATURE = "feature"
    IN_STORY = "story"


@dataclass
class _FeatureBuilder:
    title: Optional[str] = None
    description: Optional[str] = None

    def build(self) -> Optional[Feature]:
        if not self.title:
            return None
        return Feature(
            id=generate_id(),
            title=self.title,
            description=self.description or "",
            user_stories=[],
        )


@dataclass
class _StoryBuilder:
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    story_points: Optional[int] = None
    acceptance_criteria: List[str] = field(default_factory=list)

    def build(self) -> Optional[UserStory]:
        if not self.title:
            return None
        return UserStory(
            id=generate_id(),
            title=self.title,
            description=self.description or "",
            acceptance_criteria=list(self.acceptance_criteria),
            priority=self.priority or Priority.MEDIUM.value,
            story_points=self.story_points,
        )


def generate_id() -> str:
    """Return a fresh opaque identifier for a parsed record."""
    return uuid.uuid4().hex


def _remainder(line: str, marker: str) -> str:
    return line[len(marker):].strip()


def _header_title(line: str, marker: str) -> str:
    """Strip the header marker and a leading 'N:' ordinal."""
    return HEADER_ORDINAL_PATTERN.sub("", _remainder(line, marker)).strip()


def _parse_story_points(raw: str) -> Optional[int]:
    """
    Parse a story point value, returning None instead of raising.

    Takes the leading integer ("8 points" -> 8). Zero, or a digit run too long
    to convert, counts as no value.
    """
    match = LEADING_INTEGER_PATTERN.match(raw.strip())
    if not match or len(match.group(0).lstrip("+-")) > MAX_STORY_POINT_DIGITS:
        return None
    try:
        return int(match.group(0)) or None
    except ValueError:
        # Interpreter configured with a lower digit limit
        return None


def placeholder_story() -> UserStory:
    """Build the generic story used when nothing could be parsed."""
    return UserStory(
        id=generate_id(),
        title=PLACEHOLDER_TITLE,
        description=PLACEHOLDER_DESCRIPTION,
        acceptance_criteria=list(PLACEHOLDER_CRITERIA),
        priority=Priority.MEDIUM.value,
        story_points=PLACEHOLDER_STORY_POINTS,
    )


def parse_response(raw_text: Optional[str]) -> ParseResult:
    """
    Parse a model response into features and user stories.

    Never raises on malformed input. Always returns at least one user story.

    Args:
        raw_text: Full text of a model completion (None is treated as empty)

    Returns:
        ParseResult with features (no stories attached) and user stories
    """
    features: List[Feature] = []
    stories: List[UserStory] = []
    section = Section.NONE
    feature = _FeatureBuilder()
    story = _StoryBuilder()

    def flush_feature() -> None:
        built = feature.build()
        if built is not None:
            features.append(built)

    def flush_story() -> None:
        built = story.build()
        if built is not None:
            stories.append(built)

    for line in (raw_text or "").split("\n"):
        trimmed = line.strip()

        if trimmed.startswith(FEATURE_HEADER):
            flush_feature()
            section = Section.IN_FEATURE
            feature = _FeatureBuilder(title=_header_title(trimmed, FEATURE_HEADER))
        elif trimmed.startswith(STORY_HEADER):
            flush_story()
            section = Section.IN_STORY
            story = _StoryBuilder(title=_header_title(trimmed, STORY_HEADER))
        elif trimmed.startswith(DESCRIPTION_LABEL):
            description = _remainder(trimmed, DESCRIPTION_LABEL)
            if section is Section.IN_FEATURE:
                feature.description = description
            elif section is Section.IN_STORY:
                story.description = description
        elif trimmed.startswith(PRIORITY_LABEL):
            story.priority = _remainder(trimmed, PRIORITY_LABEL)
        elif trimmed.startswith(STORY_POINTS_LABEL):
            story.story_points = _parse_story_points(_remainder(trimmed, STORY_POINTS_LABEL))
        elif trimmed.startswith(CHECKLIST_ITEM):
            story.acceptance_criteria.append(_remainder(trimmed, CHECKLIST_ITEM))
        elif trimmed.startswith(ROLE_LABEL):
            if not story.description:
                story.description = f"As a {_remainder(trimmed, ROLE_LABEL)}"
        elif trimmed.startswith(WANT_LABEL):
            if story.description:
                story.description += f" I want {_remainder(trimmed, WANT_LABEL)}"
        elif trimmed.startswith(BENEFIT_LABEL):
            if story.description:
                story.description += f" So that {_remainder(trimmed, BENEFIT_LABEL)}"

    flush_feature()
    flush_story()

    if not stories:
        stories.append(placeholder_story())

    return ParseResult(features=features, user_stories=stories)
