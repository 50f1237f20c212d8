"""Event model and text/event-stream wire framing.

A pushed event is serialised as::

    event: <name>\\n        (only when a name is given)
    data: <compact json>\\n
    \\n
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from fanout.core.exceptions import InvalidEventNameError

HEARTBEAT_FRAME = ":heartbeat\n\n"


def _finite(value: Any) -> Any:
    """Replace NaN and infinities with None, as browsers cannot parse them."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


def _to_json(data: Any) -> str:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return json.dumps(_finite(data), separators=(",", ":"), ensure_ascii=False, allow_nan=False)


@dataclass(frozen=True, slots=True)
class Event:
    """Immutable payload with an optional event name."""

    data: Any
    name: str | None = None

    def __post_init__(self) -> None:
        if self.name is not None and ("\n" in self.name or "\r" in self.name):
            raise InvalidEventNameError(detail={"event": self.name})

    def encode(self) -> str:
        """Render the event as a single SSE frame."""
        frame = f"event: {self.name}\n" if self.name else ""
        return f"{frame}data: {_to_json(self.data)}\n\n"


def format_event(data: Any, event_name: str | None = None) -> str:
    return Event(data=data, name=event_name).encode()
