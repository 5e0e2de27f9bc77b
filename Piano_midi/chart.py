from typing import Optional
from mido import MidiFile
from pm_types import Event, Origin
from midi_time import build_tempo_map, ticks_to_ms

def _note_ons(mid: MidiFile, origin: Origin, channel: Optional[int]) -> tuple[list[Event], list[tuple[int,int]]]:
    tpq = mid.ticks_per_beat
    tempo_map = build_tempo_map(mid)
    out: list[Event] = []

    for track in mid.tracks:
        abs_ticks = 0
        for msg in track:
            abs_ticks += msg.time
            if msg.is_meta:
                continue
            if channel is not None and getattr(msg, "channel", None) != channel:
                continue
            if msg.type == "note_on" and msg.velocity > 0:
                t = ticks_to_ms(abs_ticks, tpq, tempo_map)
                out.append(Event(origin, t, msg.note, msg.velocity))
    out.sort(key=lambda e: e.time)   # stable: track order kept on ties
    return out, tempo_map

def extract_reference(mid: MidiFile, channel: Optional[int] = None):
    """Score notes as REFERENCE events, sorted by onset (ms)."""
    return _note_ons(mid, Origin.REFERENCE, channel)

def extract_performance(mid: MidiFile, channel: Optional[int] = None):
    """A recorded take as OBSERVED events, for offline scoring."""
    return _note_ons(mid, Origin.OBSERVED, channel)
