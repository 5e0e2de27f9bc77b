import pytest
from mido import MidiFile, MidiTrack, MetaMessage, Message

# 500 ticks per beat at 120 BPM -> one tick is exactly 1 ms
TPQ = 500
TEMPO = 500000


def write_midi(path, notes, channel=0):
    """notes: list of (t_ms, note, vel). Each note is released 10 ms after its onset."""
    mid = MidiFile(ticks_per_beat=TPQ)
    track = MidiTrack()
    mid.tracks.append(track)
    track.append(MetaMessage('set_tempo', tempo=TEMPO, time=0))

    timeline = []
    for t, note, vel in notes:
        timeline.append((t, Message('note_on', channel=channel, note=note, velocity=vel)))
        timeline.append((t + 10, Message('note_off', channel=channel, note=note, velocity=0)))
    timeline.sort(key=lambda x: x[0])

    last = 0
    for t, msg in timeline:
        track.append(msg.copy(time=t - last))
        last = t
    mid.save(str(path))
    return str(path)


@pytest.fixture
def simple_piano_midi(tmp_path):
    """
    A tiny score. Returns path to file and the list of (t_ms, note, vel).
    """
    events = [
        (500, 60, 100),   # C4
        (750, 64, 90),    # E4
        (1000, 67, 80),   # G4
        (1000, 72, 80),   # C5 (chord with G4)
        (1500, 60, 100),  # C4
    ]
    return write_midi(tmp_path / "score.mid", events), events


@pytest.fixture
def played_take_midi(tmp_path):
    """A recorded take of the score above: C5 left out, one wrong note."""
    events = [
        (520, 60, 95),    # 20 ms late
        (780, 64, 90),    # 30 ms late
        (1000, 67, 70),   # on time
        (1250, 61, 60),   # wrong note
        (1550, 60, 100),  # 50 ms late
    ]
    return write_midi(tmp_path / "take.mid", events), events
