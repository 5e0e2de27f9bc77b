from collections import deque
from pm_types import Classification, Outcome
from judge import grade_for_dt
from config import CONSOLE_LINES

def format_result(r: Classification) -> str:
    e = r.event
    if r.outcome is Outcome.MATCHED:
        return f"= {e.time:04d}(gt) matched {r.counterpart.time:04d}  {grade_for_dt(r.dt_ms)}"
    if r.outcome is Outcome.MISSED:
        return f"+ {e.time:04d} miss {e.value}"
    return f"- {e.time:04d} wrong {e.value}"

class ConsoleLog:
    """Prints each outcome and keeps the last few lines, newest first."""
    def __init__(self, max_lines: int = CONSOLE_LINES, echo: bool = True):
        self.lines = deque(maxlen=max_lines)
        self.echo = echo

    def report(self, r: Classification):
        line = format_result(r)
        self.lines.appendleft(line)
        if self.echo:
            print(line)

    def close(self):
        pass
