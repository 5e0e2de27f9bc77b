import time, threading
import mido
from pm_types import Event
from audio import CLICK, play_mono, audio_available
from midi_time import estimate_bpm
from config import COUNT_IN_BARS, GUIDE_CHANNEL, START_DELAY_S

def schedule_clicks(bpm: float, bars: int, start_time: float):
    """Count-in clicks ending on start_time."""
    sec_per_beat = 60.0 / bpm
    total_beats = int(bars * 4)
    return [("click", start_time - (total_beats - i) * sec_per_beat) for i in range(total_beats)]

def build_schedule(reference: list[Event], bpm: float, start_at: float, play_click=True):
    events = schedule_clicks(bpm, COUNT_IN_BARS, start_at) if play_click else []
    for e in reference:
        events.append(("note", start_at + e.time / 1000.0, e.value, e.intensity))
    events.sort(key=lambda x: x[1])
    return events

class PlayScheduler:
    def __init__(self, channel: int = GUIDE_CHANNEL):
        self.channel = channel
        self._stop = threading.Event()
        self._thread: threading.Thread|None = None
        self.play_click = False

    def stop(self):
        self._stop.set()

    def _open_out(self, name):
        if not name:
            return None
        try:
            port = mido.open_output(name)
            print(f"Sending MIDI to: {name}")
            return port
        except (OSError, ImportError) as e:   # unknown port / no rtmidi backend
            print(f"[WARN] Could not open MIDI out '{name}': {e}")
            return None

    def start(self, reference, tempo_map, play_click=True, midi_out_name=None, start_delay=START_DELAY_S):
        if play_click and not audio_available():
            print("[WARN] simpleaudio not installed (pip install piano-match[audio]). Count-in click disabled.")
            play_click = False
        self.play_click = play_click
        bpm = estimate_bpm(tempo_map)
        start_at = time.monotonic() + start_delay
        events = build_schedule(reference, bpm, start_at, play_click)
        port_out = self._open_out(midi_out_name)

        def worker():
            try:
                for ev in events:
                    # wait() returns True once stop() is called
                    if self._stop.wait(max(0.0, ev[1] - time.monotonic())):
                        break
                    if ev[0] == "click":
                        play_mono(CLICK)
                    elif port_out is not None:
                        port_out.send(mido.Message('note_on', channel=self.channel, note=ev[2], velocity=ev[3]))
                        port_out.send(mido.Message('note_off', channel=self.channel, note=ev[2], velocity=0))
            finally:
                if port_out:
                    port_out.close()

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()
        return start_at

    def join(self, timeout=None):
        if self._thread:
            self._thread.join(timeout)
