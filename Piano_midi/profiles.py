# Per-device overrides to translate incoming notes -> score notes.
# Only include diffs. Add/fix here as you discover mismaps.

from typing import Callable, Iterable, Optional

# 25-key controller whose lowest key reports 48 while the score is written
# from middle C; the octave buttons don't send anything we can see.
MINI_25 = {n: n + 12 for n in range(48, 73)}

# Notes the same controller sends from its pads -> ignore.
MINI_25_PADS = frozenset({0, 1, 2, 3})

def build_active_map(device_overrides: Optional[dict[int, Optional[int]]] = None,
                     transpose: int = 0,
                     ignored: Iterable[int] = ()) -> Callable[[int], Optional[int]]:
    """
    Returns a function that translates a device note -> reference value or None.
    Ignored notes are dropped first; an override wins over transpose; an
    override to None drops the note.
    """
    ignored = frozenset(ignored)
    def note_to_value(note: int) -> Optional[int]:
        if note in ignored:
            return None
        if device_overrides and note in device_overrides:
            return device_overrides[note]
        value = note + transpose
        if not 0 <= value <= 127:
            return None
        return value
    return note_to_value
