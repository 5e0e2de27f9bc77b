import importlib.util
import numpy as np
from pm_types import Classification, Outcome
from config import SR, MASTER_GAIN, CLICK_HZ, CLICK_MS, HIT_HZ, MISS_HZ, WRONG_HZ, FEEDBACK_MS

def sine_tone(duration_ms=CLICK_MS, freq=CLICK_HZ):
    n = int(SR * (duration_ms/1000.0))
    t = np.arange(n)/SR
    wave = np.sin(2*np.pi*freq*t)
    env = np.linspace(1.0, 0.0, n)
    return (wave * env * 0.6).astype(np.float32)

def to_pcm(mono: np.ndarray) -> np.ndarray:
    stereo = np.stack([mono, mono], axis=1)
    return (stereo * 32767 * MASTER_GAIN).astype(np.int16)

def audio_available() -> bool:
    # simpleaudio is an optional extra; callers check once before playing
    return importlib.util.find_spec("simpleaudio") is not None

def play_mono(mono: np.ndarray):
    import simpleaudio as sa
    return sa.play_buffer(to_pcm(mono), 2, 2, SR)

CLICK = sine_tone()

FEEDBACK = {
    Outcome.MATCHED: sine_tone(FEEDBACK_MS, HIT_HZ),
    Outcome.MISSED: sine_tone(FEEDBACK_MS, MISS_HZ),
    Outcome.SPURIOUS: sine_tone(FEEDBACK_MS, WRONG_HZ),
}

class ToneSink:
    """Short beep per outcome."""
    def __init__(self, play=play_mono):
        self.play = play

    def report(self, r: Classification):
        self.play(FEEDBACK[r.outcome])

    def close(self):
        pass
