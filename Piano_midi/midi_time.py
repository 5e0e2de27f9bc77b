from mido import MidiFile, MetaMessage
from config import DEFAULT_TEMPO_USPQN

def build_tempo_map(mid: MidiFile):
    acc = 0
    tempos = [(0, DEFAULT_TEMPO_USPQN)]
    if not mid.tracks:
        return tempos
    for msg in mid.tracks[0]:
        acc += msg.time
        if isinstance(msg, MetaMessage) and msg.type == "set_tempo":
            if acc == 0:
                tempos[0] = (0, msg.tempo)
            else:
                tempos.append((acc, msg.tempo))
    tempos.sort(key=lambda x: x[0])
    return tempos

def ticks_to_ms(abs_ticks: int, tpq: int, tempo_map: list[tuple[int,int]]) -> int:
    # integer math so onsets don't drift by float rounding; truncated, not rounded
    acc = 0   # ticks * us-per-quarter
    prev_tick = 0
    prev_tempo = tempo_map[0][1]
    for tick, tempo in tempo_map[1:]:
        if abs_ticks <= tick:
            break
        acc += (tick - prev_tick) * prev_tempo
        prev_tick, prev_tempo = tick, tempo
    acc += (abs_ticks - prev_tick) * prev_tempo
    return acc // (tpq * 1000)

def estimate_bpm(tempo_map: list[tuple[int,int]]) -> float:
    us = tempo_map[0][1] if tempo_map else DEFAULT_TEMPO_USPQN
    return 60_000_000.0 / us
