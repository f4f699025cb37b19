"""Dashboard state for a (simulated) connected NEPHRA bottle."""
import logging
import random
import threading
from typing import Dict, List, Optional

import nephra
from app import mock_data
from .toast_service import ToastService

DEFAULT_GOAL_ML = 2500
BOTTLE_CAPACITY_ML = 750
DEMO_STREAK = 5
SYNC_DELAY_SECONDS = 1.5
# Sip sizes the simulator picks from on every tick
SIP_SIZES_ML = (50, 100, 150)

logger = logging.getLogger('nephra.dashboard')


class HydrationSession:
    """Counters behind the dashboard: today's intake, the bottle level and
    the gamification stats (level, XP, drops, streak).

    A session starts disconnected; :meth:`connect` resets it to a fresh
    day.  Drinks only count while connected.
    """

    def __init__(self, toasts: ToastService,
                 daily_goal_ml: int = DEFAULT_GOAL_ML,
                 bottle_capacity_ml: int = BOTTLE_CAPACITY_ML,
                 quests: Optional[List[Dict]] = None) -> None:
        self._toasts = toasts
        self._goal = daily_goal_ml
        self._capacity = bottle_capacity_ml
        self._quests = quests if quests is not None else mock_data.WEEKLY_QUESTS
        self._lock = threading.Lock()
        self.motivation: Optional[Dict] = None
        self.connected = False
        self._reset(streak=0)

    def _reset(self, streak: int) -> None:
        self.current_ml = 0
        self.goal_ml = self._goal
        self.bottle_ml = self._capacity
        self.streak = streak
        self.level = 1
        self.xp = 0
        self.drops = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def xp_to_next_level(self) -> int:
        return self.level * 100

    def connect(self) -> Dict:
        """Pair with the bottle and start a fresh demo day."""
        with self._lock:
            self.connected = True
            self._reset(streak=DEMO_STREAK)
        logger.info("Bottle connected")
        self._toasts.toast("NEPHRA Connected", "Ready to track your hydration.")
        return self.snapshot()

    def disconnect(self) -> None:
        with self._lock:
            self.connected = False
        logger.info("Bottle disconnected")

    def record_drink(self, amount_ml: int) -> Optional[int]:
        """Apply a drink of *amount_ml* to the session.

        XP grows by the amount drunk; reaching ``level * 100`` XP raises the
        level by one and carries the excess over.  Intake is capped at the
        goal and the bottle never drops below empty.

        Returns:
            The new level if this drink levelled the user up, else ``None``.
        """
        if amount_ml <= 0:
            raise ValueError("amount_ml must be positive")
        with self._lock:
            if not self.connected:
                logger.debug("Ignoring %d mL drink while disconnected", amount_ml)
                return None
            levelled_up = None
            new_xp = self.xp + amount_ml
            if new_xp >= self.xp_to_next_level:
                new_xp -= self.xp_to_next_level
                self.level += 1
                levelled_up = self.level
            self.xp = new_xp
            self.current_ml = min(self.current_ml + amount_ml, self.goal_ml)
            self.bottle_ml = max(0, self.bottle_ml - amount_ml)
            self.drops += amount_ml // 10

        if levelled_up is not None:
            logger.info("Level up to %d", levelled_up)
            self._toasts.toast("Level Up!",
                               f"Congratulations, you've reached level {levelled_up}!")
        return levelled_up

    def tick(self, rng: Optional[random.Random] = None) -> int:
        """Simulate one timer interval: drink a random 50/100/150 mL sip.

        Returns the amount drunk.
        """
        rng = rng or random
        drank = rng.choice(SIP_SIZES_ML)
        self.record_drink(drank)
        return drank

    def sync(self, delay: float = SYNC_DELAY_SECONDS) -> threading.Timer:
        """Start a manual sync; the completion toast follows after *delay*."""
        self._toasts.toast("Syncing Data...", "Fetching latest events from your bottle.")
        timer = threading.Timer(
            delay, self._toasts.toast,
            args=("Sync Complete", "Your hydration data is up-to-date."))
        timer.daemon = True
        timer.start()
        return timer

    def snapshot(self) -> Dict:
        """Return everything the dashboard renders."""
        with self._lock:
            progress = self.current_ml / self.goal_ml * 100 if self.goal_ml else 0.0
            bottle_percent = round(self.bottle_ml / self._capacity * 100) if self._capacity else 0
            return {
                'connected': self.connected,
                'current_ml': self.current_ml,
                'goal_ml': self.goal_ml,
                'progress': progress,
                'water_remaining': self.goal_ml - self.current_ml,
                'bottle_ml': self.bottle_ml,
                'bottle_capacity_ml': self._capacity,
                'bottle_percent': bottle_percent,
                'streak': self.streak,
                'level': self.level,
                'xp': self.xp,
                'xp_to_next_level': self.xp_to_next_level,
                'xp_percent': self.xp / self.xp_to_next_level * 100,
                'drops': self.drops,
                'hydration_rank': nephra.get_hydration_rank(self.level),
                'weekly_quests': [dict(q) for q in self._quests],
                'motivation': self.motivation,
            }


class SimulationScheduler:
    """Background thread that drinks from the bottle every *interval*
    seconds while the session is connected."""

    def __init__(self, session: HydrationSession, interval: float = 2.0,
                 rng: Optional[random.Random] = None) -> None:
        self.session = session
        self.interval = interval
        self.rng = rng or random.Random()
        self.running = False
        self.thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    def run(self) -> None:
        """Background task that runs periodically"""
        while not self._stop.wait(self.interval):
            if not self.session.connected:
                continue
            try:
                self.session.tick(self.rng)
            except Exception as e:
                logger.error('Error in simulation tick: %s', e)

    def start(self) -> None:
        """Start the background simulation"""
        if self.running:
            return
        self.running = True
        self._stop.clear()
        self.thread = threading.Thread(target=self.run, daemon=True)
        self.thread.start()
        logger.info('Simulation scheduler started (every %.1fs)', self.interval)

    def stop(self) -> None:
        """Stop the background simulation"""
        self.running = False
        self._stop.set()
        if self.thread:
            self.thread.join(timeout=5)
        logger.info('Simulation scheduler stopped')
