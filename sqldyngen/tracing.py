"""Minimal tracing helper that reports how long a query took."""

from __future__ import annotations

import time
from dataclasses import dataclass
from types import TracebackType


@dataclass
class Tracer:
    """Tracks the start of a traced operation, in whole seconds."""

    start_time: int
    name: str = ""

    def end(self) -> int:
        """Print and return the elapsed time in seconds."""
        duration = int(time.time()) - self.start_time
        print(f"Tracing ended. Duration: {duration} seconds")
        return duration

    def __enter__(self) -> Tracer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.end()


def start_tracing(name: str) -> Tracer:
    """Start tracing an operation with the given name."""
    return Tracer(start_time=int(time.time()), name=name)