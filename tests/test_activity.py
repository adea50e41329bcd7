"""
Tests for activity reporting through an injected publisher.
"""
from datetime import datetime
from story_drafter.models.enums import ActivityType
from story_drafter.services.activity import ActivityLogger, collecting_publisher


def test_events_are_published_with_project_and_type():
    events, publish = collecting_publisher()
    activity = ActivityLogger(project_id="proj-9", publish=publish)

    activity.info("hello", {"count": 1})
    activity.prompt("prompt")
    activity.response("response")
    activity.processing("processing")
    activity.error("error")

    assert [e.type for e in events] == ["info", "prompt", "response", "processing", "error"]
    assert all(e.project_id == "proj-9" for e in events)
    assert events[0].data == {"count": 1}
    assert events[1].data is None


def test_log_returns_event_with_iso_timestamp():
    event = ActivityLogger(project_id="p").log(ActivityType.INFO, "message")

    assert event.message == "message"
    assert datetime.fromisoformat(event.timestamp).tzinfo is not None


def test_without_publisher_events_are_still_returned():
    event = ActivityLogger().processing("working")
    assert event.type == "processing"
    assert event.project_id is None


def test_failing_publisher_does_not_break_caller():
    def broken(event):
        raise RuntimeError("socket closed")

    activity = ActivityLogger(project_id="p", publish=broken)
    event = activity.info("still fine")

    assert event.message == "still fine"


def test_event_serializes_with_original_field_names():
    event = ActivityLogger(project_id="p").info("m")
    dumped = event.model_dump(by_alias=True)
    assert dumped["projectId"] == "p"
    assert dumped["type"] == "info"


def test_log_accepts_event_type_keyword():
    events, publish = collecting_publisher()
    event = ActivityLogger(project_id="p", publish=publish).log(event_type=ActivityType.ERROR, message="boom")

    assert event.type == "error"
    assert events == [event]
