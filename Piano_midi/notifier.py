import time
import serial, serial.tools.list_ports
from typing import Optional
from pm_types import Classification, Outcome

# one byte per outcome
OUTCOME_BYTES = {
    Outcome.MATCHED: b'G',
    Outcome.MISSED: b'R',
    Outcome.SPURIOUS: b'Y',
}

def find_serial(name_like: Optional[str]) -> Optional[str]:
    if not name_like:
        return None
    s = name_like.lower()
    for p in serial.tools.list_ports.comports():
        combo = (p.device + " " + (p.description or "")).lower()
        if s in combo:
            return p.device
    if name_like.startswith("/dev/") or name_like.upper().startswith("COM"):
        return name_like
    return None

class ArduinoNotifier:
    def __init__(self, port: Optional[str], baud: int = 115200, reset_wait: float = 2.0):
        self.ser = None
        if port:
            try:
                self.ser = serial.Serial(port, baudrate=baud, timeout=0)
                time.sleep(reset_wait)   # board resets on open
                print(f"Arduino connected on {port} @ {baud} baud")
            except serial.SerialException as e:
                print(f"[WARN] Could not open Arduino serial '{port}': {e}")

    def report(self, r: Classification):
        if not self.ser: return
        try:
            self.ser.write(OUTCOME_BYTES[r.outcome])
        except serial.SerialException as e:
            print(f"[WARN] Serial write failed: {e}")

    def close(self):
        if self.ser:
            self.ser.close()
            self.ser = None
