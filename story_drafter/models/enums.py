"""
Status and type enums for the application.
"""
from enum import Enum


class Priority(str, Enum):
    """Priority levels for user stories."""
    
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ActivityType(str, Enum):
    """Kinds of activity events emitted while generating stories."""
    
    INFO = "info"
    PROMPT = "prompt"
    RESPONSE = "response"
    PROCESSING = "processing"
    ERROR = "error"


def normalize_priority(value) -> Priority:
    """
    Map a raw priority string onto the Priority enum.
    
    The parser keeps whatever the model wrote; callers that need a valid
    enum value (e.g. work-tracking sync) normalize here.
    
    Args:
        value: Raw priority value (any case), a Priority, or None
        
    Returns:
        Matching Priority, or Priority.MEDIUM when the value is unrecognized
    """
    if isinstance(value, Priority):
        return value
    if not value or not isinstance(value, str):
        return Priority.MEDIUM
    lowered = value.strip().lower()
    for priority in Priority:
        if priority.value.lower() == lowered:
            return priority
    return Priority.MEDIUM
