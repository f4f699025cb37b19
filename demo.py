#!/usr/bin/env python3
"""
NEPHRA Interactive Demo
=======================
Showcases NEPHRA functionality without a bottle, a browser or a Gemini API
key.  Run it with:

    python3 demo.py            # full showcase
    python3 demo.py --quiet    # minimal output (good for CI)

The demo exercises:
  • Hydration rank lookup across levels
  • Leaderboard and public profile cards
  • Today's timeline
  • A simulated bottle session (drinks, level ups, toasts)
  • Raw sensor telemetry from the developer options
"""

import argparse
import datetime
import random
import time

from colorama import Fore, Style, init as _colorama_init

import nephra
from app.services import (
    HydrationSession, LeaderboardService, TelemetrySimulator, TimelineService, ToastService,
)

_colorama_init(autoreset=True)
_GREEN  = Fore.GREEN
_CYAN   = Fore.CYAN
_YELLOW = Fore.YELLOW
_BLUE   = Fore.BLUE
_RESET  = Style.RESET_ALL

# Levels shown in the rank table (one per rank plus the edges)
DEMO_LEVELS = [1, 4, 5, 12, 20, 28, 39, 50, 60]
# Drinks logged during the simulated session
DEMO_SESSION_SIPS = 8


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _sep(char: str = "─", width: int = 60) -> str:
    return char * width


def _header(text: str) -> None:
    print()
    print(_CYAN + _sep("═") + _RESET)
    print(_CYAN + f"  {text}" + _RESET)
    print(_CYAN + _sep("═") + _RESET)


def _section(text: str) -> None:
    print()
    print(_YELLOW + _sep("─") + _RESET)
    print(_YELLOW + f"  {text}" + _RESET)
    print(_YELLOW + _sep("─") + _RESET)


def _ok(msg: str) -> None:
    print(_GREEN + f"  ✓ {msg}" + _RESET)


def _info(msg: str) -> None:
    print(f"    {msg}")


def _pause(quiet: bool, seconds: float = 0.4) -> None:
    if not quiet:
        time.sleep(seconds)


# ---------------------------------------------------------------------------
# Demo sections
# ---------------------------------------------------------------------------

def demo_ranks(quiet: bool) -> None:
    _section("🎖️  Hydration Ranks")
    _pause(quiet)

    for level in DEMO_LEVELS:
        info = nephra.get_hydration_rank(level)
        _info(f"Level {level:>2}  {info['rank']:<18} → {info['next_rank']:<18} "
              f"{info['progress']:5.1f}%")


def demo_leaderboard(quiet: bool) -> None:
    _section("🏆 Leaderboard")
    _pause(quiet)

    service = LeaderboardService()
    for user in service.get_rankings(limit=5):
        colour = _BLUE if user['top_three'] else ''
        print(colour + f"  #{user['rank']:<3}{user['name']:<22}"
                       f"{nephra.format_drops(user['drops']):>8} drops  "
                       f"{user['hydration_rank']}" + _RESET)

    card = service.get_user_card(service.get_rankings(limit=1)[0]['id'])
    print()
    _ok(f"{card['user']['name']} has unlocked {card['achieved_count']}"
        f"/{len(card['achievements'])} achievements")


def demo_timeline(quiet: bool) -> None:
    _section("🕑 Today's Timeline")
    _pause(quiet)

    service = TimelineService()
    today = datetime.date.today()
    _info(service.format_heading(today))
    events = service.events_for(today)
    if not events:
        _info("No hydration events recorded for this day.")
    for event in events:
        _info(f"  {event['time']}  {event['label']}")


def demo_session(quiet: bool, rng: random.Random) -> None:
    _section("💧 Simulated Bottle Session")
    _pause(quiet)

    toasts = ToastService()
    notifications = []
    toasts.subscribe(lambda state: notifications.extend(
        t['title'] for t in state['toasts'] if t['title'] not in notifications))
    session = HydrationSession(toasts)
    try:
        session.connect()
        for _ in range(DEMO_SESSION_SIPS):
            drank = session.tick(rng)
            snap = session.snapshot()
            _info(f"+{drank:>3} mL  →  {snap['current_ml']:>4}/{snap['goal_ml']} mL  "
                  f"level {snap['level']}  xp {snap['xp']}/{snap['xp_to_next_level']}")
            _pause(quiet, 0.1)

        snap = session.snapshot()
        print()
        _ok(f"Progress {snap['progress']:.0f}%, bottle at {snap['bottle_percent']:.0f}%, "
            f"{snap['drops']} drops earned")
        _ok(f"Toasts raised: {', '.join(notifications)}")
        _info(f"On screen now: {toasts.toasts[0]['title']}")
    finally:
        toasts.shutdown()


def demo_telemetry(quiet: bool, rng: random.Random) -> None:
    _section("🛠️  Developer Options - Raw Telemetry")
    _pause(quiet)

    sim = TelemetrySimulator(rng=rng)
    for _ in range(3):
        sim.log_event()
    snap = sim.snapshot()
    pos = snap['position']
    _info(f"Water level : {snap['water_level_ml']} mL")
    _info(f"Position    : x={pos['x']} y={pos['y']} z={pos['z']}")
    for line in snap['event_log']:
        _info(f"  {line}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_demo(quiet: bool = False, seed: int = None) -> None:
    rng = random.Random(seed)
    _header("💧  NEPHRA - Interactive Demo")
    _info("Running in demo mode - no bottle or API key required.")

    demo_ranks(quiet)
    demo_leaderboard(quiet)
    demo_timeline(quiet)
    demo_session(quiet, rng)
    demo_telemetry(quiet, rng)

    print()
    print(_CYAN + _sep("═") + _RESET)
    print(_GREEN + "  ✅  Demo complete!  Ready to try the AI coach?" + _RESET)
    print(_CYAN + _sep("─") + _RESET)
    print("  1. Copy config_template.json → config.json")
    print("  2. Add your Gemini API key  (or set GEMINI_API_KEY)")
    print("  3. Run: python3 nephra_gui.py  →  http://127.0.0.1:5000")
    print(_CYAN + _sep("═") + _RESET)
    print()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="NEPHRA demo - showcase features without a bottle or API key."
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Skip artificial delays (useful for CI / automated runs)",
    )
    parser.add_argument("--seed", type=int, help="Seed for the simulated sips")
    args = parser.parse_args()
    run_demo(quiet=args.quiet, seed=args.seed)


if __name__ == "__main__":
    main()
