"""
Core orchestration for story generation.

This module runs one generation request end to end:
1. Build the prompt from the requirement, context documents and existing stories
2. Call the local model
3. Parse the free-text response into features and stories
4. Group stories under features

Parsing and grouping are side-effect free; all progress reporting happens here
through the injected ActivityLogger.
"""
import logging
from typing import Optional, Sequence
from pydantic import BaseModel
from story_drafter.agent.prompt import build_generation_prompt
from story_drafter.config import settings
from story_drafter.models.story import OrganizedResult, ParseResult, UserStory
from story_drafter.services.activity import ActivityLogger
from story_drafter.services.llm_client import LLMClient, LLMClientError
from story_drafter.services.response_parser import parse_response
from story_drafter.services.story_organizer import organize_stories

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when story generation fails."""
    pass


class GenerationResult(BaseModel):
    """Parsed and organized output of one generation request."""

    parsed: ParseResult
    organized: OrganizedResult


class StoryGenerator:
    """
    Orchestrates prompt building, the model call, parsing and grouping.

    Holds no per-request state, so one instance can serve concurrent requests.
    """

    def __init__(self, llm: Optional[LLMClient] = None, activity: Optional[ActivityLogger] = None):
        """
        Args:
            llm: Model client (default: LLMClient() with configured server)
            activity: Activity reporter (default: log-only, no publisher)
        """
        self.llm = llm or LLMClient()
        self.activity = activity or ActivityLogger()

    def generate(
        self,
        requirement: str,
        context: str = "",
        existing_stories: Sequence[UserStory] = (),
        model_name: Optional[str] = None,
    ) -> GenerationResult:
        """
        Generate features and user stories for a requirement.

        Args:
            requirement: Requirement text (required)
            context: Extracted text of context documents
            existing_stories: Stories already tracked for the project
            model_name: Model to use (default: settings.default_model)

        Returns:
            GenerationResult with parsed and organized content

        Raises:
            GenerationError: If the requirement is empty or the model call fails
        """
        if not requirement or not requirement.strip():
            raise GenerationError("Requirement text is required")

        model = model_name or settings.default_model

        self.activity.processing("Building prompt", {
            "contextLength": len(context or ""),
            "existingStories": len(existing_stories),
        })
        prompt = build_generation_prompt(requirement, context, existing_stories)
        self.activity.prompt(f"Sending prompt to {model}", {"prompt": prompt})

        try:
            response = self.llm.generate_completion(model, prompt)
        except LLMClientError as e:
            self.activity.error("Model call failed", {"error": str(e)})
            raise GenerationError(f"Story generation failed: {str(e)}") from e

        self.activity.response(f"Received {len(response)} characters from {model}", {"response": response})

        self.activity.processing("Parsing model response")
        parsed = parse_response(response)
        organized = organize_stories(parsed.user_stories, parsed.features)

        self.activity.info(
            f"Generated {len(parsed.user_stories)} stories and {len(parsed.features)} features",
            {"organizedContent": organized.model_dump(by_alias=True)},
        )

        return GenerationResult(parsed=parsed, organized=organized)
