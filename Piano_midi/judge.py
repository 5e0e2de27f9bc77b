from typing import Iterable, Optional
from pm_types import Event, Origin, Outcome, Classification, Sink
from merger import StreamMerger
from matcher import match_pending, window_closed
from config import PERFECT_MS, GREAT_MS, TIME_EPSILON_MS

class ClockError(ValueError):
    """current_time went backwards."""

def grade_for_dt(dt_ms: float) -> str:
    a = abs(dt_ms)
    if a <= PERFECT_MS: return "Perfect"
    if a <= GREAT_MS:   return "Great"
    return "Good"

def classify(pending: list[Event], current_time: int, tolerance: int) -> list[Classification]:
    # Only the reference side of a pair is reported; the observed partner
    # leaves silently with it.
    out = []
    for e in pending:
        if e.match is not None:
            if e.origin is Origin.REFERENCE:
                out.append(Classification(Outcome.MATCHED, e, e.match))
        elif window_closed(e, current_time, tolerance):
            kind = Outcome.MISSED if e.origin is Origin.REFERENCE else Outcome.SPURIOUS
            out.append(Classification(kind, e))
    return out

def evict(pending: list[Event], current_time: int, tolerance: int) -> int:
    keep = [e for e in pending
            if e.match is None and not window_closed(e, current_time, tolerance)]
    removed = len(pending) - len(keep)
    pending[:] = keep
    return removed

class Judge:
    """
    Tick-driven matching engine.

    Each tick folds new observed notes and newly due reference notes into
    the pending sequence, pairs events whose window has closed, reports
    every event whose outcome is final and drops it.
    """
    def __init__(self, reference: Iterable[Event], tol_ms: int = TIME_EPSILON_MS,
                 sinks: Iterable[Sink] = ()):
        if tol_ms <= 0:
            raise ValueError(f"tolerance must be positive, got {tol_ms}")
        self.tol = tol_ms
        self.merger = StreamMerger(reference)
        self.notes_in_chart = self.merger.remaining
        self._pending: list[Event] = []
        self.sinks = list(sinks)
        self.current_time: Optional[int] = None

        self.counts = {o: 0 for o in Outcome}
        self.dts: list[int] = []
        self.perfects = 0
        self.combo = 0
        self.max_combo = 0

    @property
    def pending(self) -> tuple[Event, ...]:
        return tuple(self._pending)

    @property
    def done(self) -> bool:
        return self.merger.exhausted and not self._pending

    def tick(self, current_time: int, observed: Iterable[Event] = ()) -> list[Classification]:
        if self.current_time is not None and current_time < self.current_time:
            raise ClockError(f"time went backwards: {current_time} < {self.current_time}")
        self.merger.admit(self._pending, current_time, observed)
        self.current_time = current_time

        match_pending(self._pending, current_time, self.tol)
        results = classify(self._pending, current_time, self.tol)
        evict(self._pending, current_time, self.tol)

        # stats first, then the sinks
        for r in results:
            self._score(r)
        for sink in self.sinks:
            for r in results:
                sink.report(r)
        return results

    def _score(self, r: Classification):
        self.counts[r.outcome] += 1
        if r.outcome is Outcome.MATCHED:
            self.dts.append(r.dt_ms)
            if grade_for_dt(r.dt_ms) == "Perfect":
                self.perfects += 1
            self.combo += 1
            self.max_combo = max(self.max_combo, self.combo)
        else:
            self.combo = 0

    def finalize(self) -> dict:
        """Run time forward until every event has an outcome; return the stats."""
        last = [e.time for e in self._pending]
        if self.merger.queue:
            last.append(self.merger.queue[-1].time)
        if last:
            end = max(max(last) + self.tol + 1, self.current_time or 0)
            self.tick(end)
        return self.stats()

    def stats(self) -> dict:
        matched = self.counts[Outcome.MATCHED]
        return {
            "notes_in_chart": self.notes_in_chart,
            "matched": matched,
            "missed": self.counts[Outcome.MISSED],
            "spurious": self.counts[Outcome.SPURIOUS],
            "perfects": self.perfects,
            "accuracy": (matched / self.notes_in_chart) if self.notes_in_chart else 0.0,
            "avg_abs_dt_ms": (sum(abs(d) for d in self.dts) / len(self.dts)) if self.dts else 0.0,
            "max_combo": self.max_combo,
        }
