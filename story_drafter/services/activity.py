"""
Activity reporting for story generation.

Events are handed to an explicit publish callback supplied by the caller
(e.g. a websocket room broadcaster) instead of a process-wide emitter.
Every event is also written to the standard logger.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple
from story_drafter.models.activity import ActivityEvent
from story_drafter.models.enums import ActivityType

logger = logging.getLogger(__name__)

Publisher = Callable[[ActivityEvent], None]


class ActivityLogger:
    """Builds activity events for one project and publishes them."""

    def __init__(self, project_id: Optional[str] = None, publish: Optional[Publisher] = None):
        """
        Args:
            project_id: Project the events belong to
            publish: Observer called with every event; None disables publishing
        """
        self.project_id = project_id
        self._publish = publish

    def log(self, event_type: ActivityType, message: str, data: Any = None) -> ActivityEvent:
        """
        Record an activity event and hand it to the publisher.

        A failing publisher is logged and otherwise ignored so reporting can
        never break generation.
        """
        event = ActivityEvent(
            type=event_type,
            message=message,
            data=data,
            timestamp=datetime.now(timezone.utc).isoformat(),
            project_id=self.project_id,
        )

        logger.info("[%s] %s: %s", self.project_id or "-", ActivityType(event_type).value.upper(), message)

        if self._publish is not None:
            try:
                self._publish(event)
            except Exception as e:
                logger.error("Activity publisher failed for project %s: %s", self.project_id, str(e))

        return event

    def info(self, message: str, data: Any = None) -> ActivityEvent:
        return self.log(ActivityType.INFO, message, data)

    def prompt(self, message: str, data: Any = None) -> ActivityEvent:
        return self.log(ActivityType.PROMPT, message, data)

    def response(self, message: str, data: Any = None) -> ActivityEvent:
        return self.log(ActivityType.RESPONSE, message, data)

    def processing(self, message: str, data: Any = None) -> ActivityEvent:
        return self.log(ActivityType.PROCESSING, message, data)

    def error(self, message: str, data: Any = None) -> ActivityEvent:
        return self.log(ActivityType.ERROR, message, data)


def collecting_publisher() -> Tuple[List[ActivityEvent], Publisher]:
    """Return a list and a publisher that appends every event to it."""
    events: List[ActivityEvent] = []
    return events, events.append
