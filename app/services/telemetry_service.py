"""Simulated raw bottle telemetry for the developer options panel."""
import datetime
import random
import threading
from collections import deque
from typing import Dict, List, Optional

from app import mock_data

EVENT_LOG_SIZE = 50


class TelemetrySimulator:
    """Produces the sensor readings a real bottle would stream: water level,
    accelerometer position and a rolling log of firmware events.

    Readings are random on every call; the event log keeps the newest
    ``EVENT_LOG_SIZE`` entries, newest first.
    """

    def __init__(self, capacity_ml: int = 750, rng: Optional[random.Random] = None,
                 events: Optional[List[str]] = None) -> None:
        self._capacity = capacity_ml
        self._rng = rng or random.Random()
        self._events = events if events is not None else mock_data.BOTTLE_EVENTS
        self._log: deque = deque(maxlen=EVENT_LOG_SIZE)
        self._lock = threading.Lock()

    def water_level(self) -> float:
        return self._rng.random() * self._capacity

    def position(self) -> Dict[str, float]:
        return {axis: self._rng.random() * 2 - 1 for axis in ('x', 'y', 'z')}

    def log_event(self, now: Optional[datetime.datetime] = None) -> str:
        """Append one random firmware event to the log and return the line."""
        now = now or datetime.datetime.now()
        line = f"[{now:%H:%M:%S}] {self._rng.choice(self._events)}"
        with self._lock:
            self._log.appendleft(line)
        return line

    def event_log(self) -> List[str]:
        with self._lock:
            return list(self._log)

    def snapshot(self) -> Dict:
        """Fresh readings plus the current event log."""
        return {
            'water_level_ml': round(self.water_level(), 2),
            'position': {k: round(v, 4) for k, v in self.position().items()},
            'event_log': self.event_log(),
        }
