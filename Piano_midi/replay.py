from itertools import groupby
from typing import Iterable
from pm_types import Event
from judge import Judge

def replay(judge: Judge, performance: Iterable[Event]) -> dict:
    """Score a recorded take: one tick per distinct onset, then finalize."""
    for t, batch in groupby(performance, key=lambda e: e.time):
        judge.tick(t, list(batch))
    return judge.finalize()
