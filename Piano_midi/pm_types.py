from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

class Origin(Enum):
    REFERENCE = 0   # from the score
    OBSERVED = 1    # played live

class Outcome(Enum):
    MATCHED = "matched"
    MISSED = "missed"
    SPURIOUS = "spurious"

@dataclass(eq=False)
class Event:
    origin: Origin
    time: int       # ms since session start
    value: int      # pitch / key id
    intensity: int  # velocity, display only
    match: Optional["Event"] = field(default=None, repr=False)

    @property
    def matched(self) -> bool:
        return self.match is not None

    def link(self, other: "Event") -> None:
        """Pair two events, both ways. A link is set once and never cleared."""
        if self.match is not None or other.match is not None:
            raise ValueError("event already matched")
        if self.origin == other.origin:
            raise ValueError("cannot match two events of the same origin")
        if self.value != other.value:
            raise ValueError(f"value mismatch: {self.value} != {other.value}")
        self.match = other
        other.match = self

def reference(time: int, value: int, intensity: int = 0) -> Event:
    return Event(Origin.REFERENCE, time, value, intensity)

def observed(time: int, value: int, intensity: int = 0) -> Event:
    return Event(Origin.OBSERVED, time, value, intensity)

@dataclass(frozen=True)
class Classification:
    outcome: Outcome
    event: Event
    counterpart: Optional[Event] = None   # observed partner, MATCHED only

    @property
    def reference_event(self) -> Optional[Event]:
        if self.event.origin is Origin.REFERENCE:
            return self.event
        return None

    @property
    def observed_event(self) -> Optional[Event]:
        if self.outcome is Outcome.MATCHED:
            return self.counterpart
        if self.event.origin is Origin.OBSERVED:
            return self.event
        return None

    @property
    def dt_ms(self) -> Optional[int]:
        if self.outcome is not Outcome.MATCHED:
            return None
        return self.counterpart.time - self.event.time

class Sink(Protocol):
    def report(self, result: Classification) -> None: ...
    def close(self) -> None: ...
