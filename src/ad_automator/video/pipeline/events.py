"""Progress events and the bounded channel that carries them.

Wire format is newline-delimited JSON, one object per event:
    {"type": "log", "message": "...", "timestamp": "HH:MM:SS"}
    {"type": "result", "date": "YYYY-MM-DD", "status": "success", "file": "19.mp4"}
    {"type": "done"}
    {"type": "error", "message": "..."}
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Annotated, AsyncIterator, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from ...constants import EVENT_BUFFER_SIZE
from .base import DayResult


class _Event(BaseModel):
    def to_json(self) -> str:
        """Serialize to a single NDJSON line (without the newline)."""
        return self.model_dump_json(exclude_none=True)


class LogEvent(_Event):
    type: Literal["log"] = "log"
    message: str
    timestamp: str

    @classmethod
    def now(cls, message: str) -> "LogEvent":
        return cls(message=message, timestamp=datetime.now().strftime("%H:%M:%S"))


class ResultEvent(_Event):
    type: Literal["result"] = "result"
    date: str
    status: Literal["success", "skipped", "error"]
    file: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_day_result(cls, result: DayResult) -> "ResultEvent":
        # Skip and error messages both travel in the `error` field
        return cls(
            date=result.date.isoformat(),
            status=result.status,
            file=result.file,
            error=result.message,
        )


class DoneEvent(_Event):
    type: Literal["done"] = "done"


class ErrorEvent(_Event):
    type: Literal["error"] = "error"
    message: str


ProgressEvent = Annotated[
    Union[LogEvent, ResultEvent, DoneEvent, ErrorEvent],
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter[ProgressEvent] = TypeAdapter(ProgressEvent)


def parse_event(line: str) -> ProgressEvent:
    """Parse one NDJSON line back into an event."""
    return _event_adapter.validate_json(line)


class EventChannel:
    """Bounded, ordered queue of progress events.

    Producers await when the channel is full, so no event is ever dropped.
    Closing the channel ends iteration once the queued events are drained.
    """

    _CLOSED = object()

    def __init__(self, maxsize: int = EVENT_BUFFER_SIZE):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def emit(self, event: ProgressEvent) -> None:
        if self._closed:
            raise RuntimeError("Event channel is closed")
        await self._queue.put(event)

    async def log(self, message: str) -> None:
        """Emit a timestamped log event."""
        await self.emit(LogEvent.now(message))

    async def close(self) -> None:
        if not self._closed:
            self._closed = True
            await self._queue.put(self._CLOSED)

    async def __aiter__(self) -> AsyncIterator[ProgressEvent]:
        while True:
            item = await self._queue.get()
            if item is self._CLOSED:
                return
            yield item
