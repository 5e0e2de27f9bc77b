from pm_types import Event

def window_closed(e: Event, current_time: int, tolerance: int) -> bool:
    return e.time < current_time - tolerance

def qualifies(e: Event, cand: Event) -> bool:
    return (cand.value == e.value
            and cand.origin != e.origin
            and e.match is None
            and cand.match is None)

def match_pending(pending: list[Event], current_time: int, tolerance: int) -> int:
    """
    Greedy pairing pass over the time-ordered pending sequence.

    Only events whose window has closed are paired; each one takes the
    first qualifying candidate after it in time order (not the closest).
    The scan stops at the first candidate `tolerance` ms or more away.
    Pairs are never undone. Returns the number of new pairs.
    """
    pairs = 0
    for i, e in enumerate(pending):
        if e.match is not None or not window_closed(e, current_time, tolerance):
            continue
        for j in range(i + 1, len(pending)):
            cand = pending[j]
            if cand.time - e.time >= tolerance:
                break
            if qualifies(e, cand):
                e.link(cand)
                pairs += 1
                break
    return pairs
