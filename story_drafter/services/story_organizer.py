"""
Groups parsed user stories under parsed features.

Matching is a keyword-overlap heuristic meant as advisory grouping for human
review, not an authoritative classification:
- A feature's significant words are the lowercase whitespace-separated tokens
  of its title and description longer than 3 characters
- A story matches when at least one significant word occurs as a substring of
  its lowercase title + description
- Features claim stories in parse order; first match wins

Every input story lands in exactly one place: under one feature or standalone.
"""
from typing import List, Sequence, Set
from story_drafter.models.story import Feature, OrganizedResult, UserStory

MIN_SIGNIFICANT_WORD_LENGTH = 4


def significant_words(text: str) -> Set[str]:
    """
    Return the lowercase tokens of text long enough to be discriminative.

    Args:
        text: Free text (feature title and description)

    Returns:
        Set of tokens with more than 3 characters
    """
    return {word for word in text.lower().split() if len(word) >= MIN_SIGNIFICANT_WORD_LENGTH}


def match_score(words: Set[str], story: UserStory) -> int:
    """Count how many of words appear anywhere in the story's title or description."""
    haystack = f"{story.title} {story.description}".lower()
    return sum(1 for word in words if word in haystack)


def _copy_story(story: UserStory) -> UserStory:
    return story.model_copy(deep=True)


def organize_stories(stories: Sequence[UserStory], features: Sequence[Feature]) -> OrganizedResult:
    """
    Attach stories to the first feature they share a significant word with.

    Inputs are not modified; output features and stories are copies that keep
    the original ids.

    Args:
        stories: Parsed user stories, in parse order
        features: Parsed features, in parse order

    Returns:
        OrganizedResult with per-feature stories and the unclaimed remainder
    """
    pool: List[UserStory] = list(stories)
    organized: List[Feature] = []

    for feature in features:
        words = significant_words(f"{feature.title} {feature.description}")
        matched: List[UserStory] = []
        remaining: List[UserStory] = []
        for story in pool:
            if words and match_score(words, story) >= 1:
                matched.append(story)
            else:
                remaining.append(story)
        pool = remaining

        organized_feature = feature.model_copy(deep=True)
        organized_feature.user_stories = [_copy_story(story) for story in matched]
        organized.append(organized_feature)

    return OrganizedResult(
        features=organized,
        standalone_stories=[_copy_story(story) for story in pool],
    )
