"""Tests for Event framing."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from fanout.api.sse.events import HEARTBEAT_FRAME, Event, format_event
from fanout.core.exceptions import InvalidEventNameError


class TitleUpdated(BaseModel):
    conversation_id: str
    title: str


def test_unnamed_event_has_only_data_line() -> None:
    assert format_event({"message": "Hello"}) == 'data: {"message":"Hello"}\n\n'


def test_named_event_prefixes_event_line() -> None:
    frame = format_event({"message": "Hi"}, "greeting")
    assert frame == 'event: greeting\ndata: {"message":"Hi"}\n\n'


def test_empty_event_name_treated_as_absent() -> None:
    assert format_event([1, 2], "") == "data: [1,2]\n\n"


def test_scalar_payloads() -> None:
    assert format_event("Hi") == 'data: "Hi"\n\n'
    assert format_event(None) == "data: null\n\n"
    assert format_event(3.5) == "data: 3.5\n\n"


def test_pydantic_payload_is_dumped() -> None:
    frame = format_event(TitleUpdated(conversation_id="c1", title="New"), "title")
    assert frame == 'event: title\ndata: {"conversation_id":"c1","title":"New"}\n\n'


def test_multiline_strings_stay_on_one_data_line() -> None:
    frame = format_event({"text": "line one\nline two"})
    assert frame == 'data: {"text":"line one\\nline two"}\n\n'
    assert frame.count("\n") == 2


@pytest.mark.parametrize("name", ["a\nb", "a\rb", "\n"])
def test_event_name_with_line_break_rejected(name: str) -> None:
    with pytest.raises(InvalidEventNameError):
        Event(data={}, name=name)


def test_event_is_immutable() -> None:
    event = Event(data={"a": 1}, name="x")
    with pytest.raises(AttributeError):
        event.name = "y"  # type: ignore[misc]


def test_heartbeat_frame_is_comment() -> None:
    assert HEARTBEAT_FRAME == ":heartbeat\n\n"


def test_non_finite_floats_become_null() -> None:
    frame = format_event({"ratio": float("nan"), "limits": [float("inf"), -float("inf"), 1.5]})
    assert frame == 'data: {"ratio":null,"limits":[null,null,1.5]}\n\n'
