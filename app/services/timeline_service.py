"""Business logic for the day-by-day hydration timeline."""
import datetime
from typing import Dict, List, Optional

from app import mock_data

EVENT_ICONS = {
    'drink': 'droplet',
    'refill': 'plus',
    'achievement': 'trophy',
    'quest': 'star',
    'challenge': 'zap',
}

EVENT_COLORS = {
    'drink': 'text-primary',
    'refill': 'text-green-500',
    'achievement': 'text-yellow-500',
    'quest': 'text-accent',
    'challenge': 'text-red-500',
}


class TimelineService:
    """Filters the event log to a single calendar day and renders the
    one-line description shown for each event."""

    def __init__(self, events: Optional[List[Dict]] = None) -> None:
        self._events = events if events is not None else mock_data.TIMELINE_EVENTS

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def events_for(self, day: datetime.date,
                   today: Optional[datetime.date] = None) -> List[Dict]:
        """Return the events that happened on *day*, earliest first.

        Event dates are relative to *today* (defaults to the current date),
        so the demo log always covers the last few days.
        """
        today = today or datetime.date.today()
        matches = []
        for event in self._events:
            event_day = today - datetime.timedelta(days=event['day_offset'])
            if event_day == day:
                matches.append(dict(event, date=event_day.isoformat(),
                                    icon=self.icon_for(event['type']),
                                    color=self.color_for(event['type']),
                                    label=self.describe(event)))
        matches.sort(key=lambda e: self._parse_time(e['time']))
        return matches

    @staticmethod
    def shift_day(day: datetime.date, offset: int) -> datetime.date:
        """Return the date *offset* days after *day* (negative goes back)."""
        return day + datetime.timedelta(days=offset)

    @staticmethod
    def format_heading(day: datetime.date) -> str:
        """Format *day* for the timeline header, e.g. ``Monday, Jul 28``."""
        return f"{day:%A, %b} {day.day}"

    @staticmethod
    def icon_for(event_type: str) -> str:
        return EVENT_ICONS.get(event_type, EVENT_ICONS['drink'])

    @staticmethod
    def color_for(event_type: str) -> str:
        return EVENT_COLORS.get(event_type, EVENT_COLORS['drink'])

    @staticmethod
    def describe(event: Dict) -> str:
        """Return the headline text for a timeline event."""
        kind = event.get('type')
        if kind == 'refill':
            return f"Refilled {event.get('amount', 0)} mL"
        if kind == 'achievement':
            return f"Unlocked: {event.get('title', '')}"
        if kind == 'quest':
            return f"Quest Complete: {event.get('title', '')}"
        if kind == 'challenge':
            return f"Challenge: {event.get('title', '')}"
        return f"Drank {event.get('amount', 0)} mL"

    @staticmethod
    def _parse_time(value: str) -> datetime.time:
        try:
            return datetime.datetime.strptime(value, '%I:%M %p').time()
        except ValueError:
            return datetime.time.max
