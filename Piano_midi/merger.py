from collections import deque
from typing import Iterable, Optional
from pm_types import Event, Origin

class StreamOrderError(ValueError):
    """An input stream broke the time-ordering the merge relies on."""

def check_sorted(events: list[Event], what: str):
    for prev, cur in zip(events, events[1:]):
        if cur.time < prev.time:
            raise StreamOrderError(f"{what} not sorted: t={cur.time} after t={prev.time}")

class StreamMerger:
    """Folds the reference queue and each tick's observed batch into the
    pending sequence, keeping it in time order.

    Reference events are drip-fed: one is admitted only once
    current_time has reached its timestamp. On equal timestamps the
    reference event goes first.
    """
    def __init__(self, reference: Iterable[Event]):
        refs = list(reference)
        for e in refs:
            if e.origin is not Origin.REFERENCE:
                raise StreamOrderError(f"non-reference event in reference stream: {e!r}")
        check_sorted(refs, "reference stream")
        self.queue = deque(refs)
        self.watermark = 0   # time of the last admitted event

    @property
    def remaining(self) -> int:
        return len(self.queue)

    @property
    def exhausted(self) -> bool:
        return not self.queue

    @property
    def next_time(self) -> Optional[int]:
        return self.queue[0].time if self.queue else None

    def validate(self, current_time: int, observed: list[Event]):
        for e in observed:
            if e.origin is not Origin.OBSERVED:
                raise StreamOrderError(f"non-observed event in observed batch: {e!r}")
            if e.time > current_time:
                raise StreamOrderError(f"observed event at t={e.time} is ahead of current time {current_time}")
            if e.time < self.watermark:
                raise StreamOrderError(f"observed event at t={e.time} arrived after t={self.watermark} was admitted")
        check_sorted(observed, "observed batch")

    def admit(self, pending: list[Event], current_time: int, observed: Iterable[Event] = ()) -> int:
        """Append newly eligible events to `pending`. Returns how many were added."""
        batch = deque(observed)
        self.validate(current_time, list(batch))
        queue = self.queue
        added = 0

        while queue and batch:
            if queue[0].time <= batch[0].time:
                pending.append(queue.popleft())
            else:
                pending.append(batch.popleft())
            added += 1

        while batch:
            pending.append(batch.popleft())
            added += 1

        while queue and queue[0].time <= current_time:
            pending.append(queue.popleft())
            added += 1

        if added:
            self.watermark = pending[-1].time
        return added
