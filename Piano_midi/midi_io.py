import time
import mido
from typing import Callable
from pm_types import Event, observed
from config import TICK_SLEEP_S

def ms_since(start_at: float, now: Callable[[], float] = time.monotonic) -> int:
    # clamped: the count-in runs before start_at
    return max(0, int((now() - start_at) * 1000))

class MidiInputLoop:
    def __init__(self, input_name: str, note_to_value=lambda n: n):
        self.input_name = input_name
        self.note_to_value = note_to_value
        self.running = False

    def collect(self, messages, current_ms: int) -> list[Event]:
        """Turn this tick's messages into OBSERVED events stamped at current_ms."""
        batch = []
        for msg in messages:
            if msg.type == 'note_on' and msg.velocity > 0:
                value = self.note_to_value(msg.note)
                if value is None:
                    continue
                batch.append(observed(current_ms, value, msg.velocity))
        return batch

    def stop(self):
        self.running = False

    def run(self, start_at: float, on_tick):
        # on_tick(current_ms, batch) once per poll
        self.running = True
        with mido.open_input(self.input_name) as port:
            print(f"Listening to: {self.input_name}  (press Ctrl-C to stop)")
            while self.running:
                now_ms = ms_since(start_at)
                on_tick(now_ms, self.collect(port.iter_pending(), now_ms))
                time.sleep(TICK_SLEEP_S)
