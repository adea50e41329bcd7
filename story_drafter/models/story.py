"""
Feature and user story records produced from model output.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from story_drafter.models.enums import Priority


class UserStory(BaseModel):
    """A single user story reconstructed from model output."""
    
    id: str = Field(..., description="Opaque, system-generated identifier")
    title: str = Field(..., min_length=1, description="Story title")
    description: str = Field(default="", description="Narrative assembled from description and As a/I want/So that lines")
    acceptance_criteria: List[str] = Field(
        default_factory=list,
        alias="acceptanceCriteria",
        description="Acceptance criteria in source order"
    )
    # Kept as the raw string the model produced; see normalize_priority()
    priority: str = Field(default=Priority.MEDIUM.value, description="Low | Medium | High | Critical")
    story_points: Optional[int] = Field(default=None, alias="storyPoints", description="Story point estimate")
    
    class Config:
        populate_by_name = True


class Feature(BaseModel):
    """A feature grouping related user stories."""
    
    id: str = Field(..., description="Opaque, system-generated identifier")
    title: str = Field(..., min_length=1, description="Feature title")
    description: str = Field(default="", description="Feature description")
    user_stories: List[UserStory] = Field(
        default_factory=list,
        alias="userStories",
        description="Stories attached by the organizer (empty at parse time)"
    )
    
    class Config:
        populate_by_name = True


class ParseResult(BaseModel):
    """Features and stories from one linear scan, not yet associated."""
    
    features: List[Feature] = Field(default_factory=list)
    user_stories: List[UserStory] = Field(default_factory=list, alias="userStories")
    
    class Config:
        populate_by_name = True


class OrganizedResult(BaseModel):
    """Features carrying their matched stories plus unclaimed stories."""
    
    features: List[Feature] = Field(default_factory=list)
    standalone_stories: List[UserStory] = Field(default_factory=list, alias="standaloneStories")
    
    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "features": [
                    {
                        "id": "3f1c0d8e9a7b4c21",
                        "title": "User Authentication",
                        "description": "Secure login for registered users",
                        "userStories": []
                    }
                ],
                "standaloneStories": []
            }
        }
