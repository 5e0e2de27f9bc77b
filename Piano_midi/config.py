SR = 44100
MASTER_GAIN = 0.8

# Metronome / count-in
CLICK_HZ = 1000
CLICK_MS = 35
COUNT_IN_BARS = 1

# Feedback tones (ToneSink)
HIT_HZ = 1320
MISS_HZ = 220
WRONG_HZ = 330
FEEDBACK_MS = 60

# Match window (ms): max distance for a pairing, and the delay before
# an event's outcome becomes final
TIME_EPSILON_MS = 100

# Grading of matched notes (ms); anything matched beyond GREAT_MS is "Good"
PERFECT_MS = 30
GREAT_MS   = 60

# Default tempo if none in MIDI
DEFAULT_TEMPO_USPQN = 500_000  # 120 BPM

# Live loop
TICK_SLEEP_S = 0.001
START_DELAY_S = 2.0

# Console history (newest first)
CONSOLE_LINES = 12

# Guide notes go out on this channel (0-based)
GUIDE_CHANNEL = 0
