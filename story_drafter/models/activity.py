"""
Activity events streamed to observers during story generation.
"""
from pydantic import BaseModel, Field
from typing import Any, Optional
from story_drafter.models.enums import ActivityType


class ActivityEvent(BaseModel):
    """One progress event for a generation request."""
    
    type: ActivityType
    message: str
    data: Optional[Any] = None
    timestamp: str = Field(..., description="ISO-8601 UTC timestamp")
    project_id: Optional[str] = Field(default=None, alias="projectId")
    
    class Config:
        populate_by_name = True
        use_enum_values = True
