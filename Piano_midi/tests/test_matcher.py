import pytest
from pm_types import reference, observed
from matcher import match_pending, window_closed

TOL = 100

def test_greedy_takes_first_candidate_in_order_not_closest():
    r = reference(1000, 60)
    o1 = observed(1040, 60)
    o2 = observed(1010, 60)
    # o1 ahead of o2 in pending order
    pending = [r, o1, o2]
    assert match_pending(pending, 1101, TOL) == 1
    assert r.match is o1 and o1.match is r
    assert o2.match is None

def test_open_window_is_left_alone():
    r = reference(1000, 60)
    o = observed(1020, 60)
    pending = [r, o]
    assert match_pending(pending, 1100, TOL) == 0   # 1000 < 1000 is false
    assert r.match is None
    assert match_pending(pending, 1101, TOL) == 1
    assert r.match is o

def test_candidate_at_exact_tolerance_is_not_matched():
    r = reference(1000, 60)
    o = observed(1100, 60)
    match_pending([r, o], 2000, TOL)
    assert r.match is None and o.match is None

def test_observed_can_be_the_older_side():
    o = observed(990, 60)
    r = reference(1000, 60)
    match_pending([o, r], 1091, TOL)
    assert o.match is r and r.match is o

def test_needs_same_value_and_other_origin():
    r1 = reference(1000, 60)
    r2 = reference(1010, 60)
    o = observed(1020, 61)
    assert match_pending([r1, r2, o], 1500, TOL) == 0

def test_matched_candidates_are_skipped():
    r1 = reference(1000, 60)
    r2 = reference(1005, 60)
    o1 = observed(1010, 60)
    o2 = observed(1050, 60)
    match_pending([r1, r2, o1, o2], 1200, TOL)
    assert r1.match is o1
    assert r2.match is o2

def test_pairs_are_never_undone():
    r = reference(1000, 60)
    o = observed(1090, 60)
    better = observed(1001, 60)
    pending = [r, better, o]
    match_pending(pending, 1101, TOL)
    assert r.match is better
    match_pending(pending, 1500, TOL)
    assert r.match is better and o.match is None

def test_window_closed_is_strict():
    e = reference(500, 60)
    assert not window_closed(e, 600, TOL)
    assert window_closed(e, 601, TOL)

def test_link_is_mutual_and_set_once():
    r = reference(0, 60)
    o = observed(10, 60)
    r.link(o)
    assert r.match is o and o.match is r
    with pytest.raises(ValueError):
        r.link(observed(20, 60))

def test_link_refuses_same_origin_or_value():
    with pytest.raises(ValueError):
        reference(0, 60).link(reference(10, 60))
    with pytest.raises(ValueError):
        reference(0, 60).link(observed(10, 61))

class NoSliceList(list):
    def __getitem__(self, key):
        assert not isinstance(key, slice), "pending tail was copied"
        return super().__getitem__(key)

def test_scan_walks_pending_in_place():
    pending = NoSliceList()
    for t in range(0, 5000, 10):
        pending.append(reference(t, 60))
        pending.append(observed(t + 5, 60))
    assert match_pending(pending, 10_000, TOL) == 500
    assert all(e.match is not None for e in pending)
