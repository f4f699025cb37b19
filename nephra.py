#!/usr/bin/env python3
"""
NEPHRA - HydrateAI companion for the NEPHRA smart water bottle.
Command-line entry point plus the shared helpers (logging, configuration,
hydration ranks) used by the web app and the services.
"""

import json
import logging
import os
import random
import sys
import argparse
import datetime
from typing import Dict, List, Optional

from colorama import init, Fore, Style

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root NEPHRA logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger('nephra')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


# Module-level logger used throughout nephra.py
logger = setup_logging()


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: Dict = {
    'gemini_api_key': '',
    'model': 'gemini-2.0-flash',
    'request_timeout': 30,
    'daily_goal_ml': 2500,
    'bottle_capacity_ml': 750,
    'tick_seconds': 2.0,
    'host': '127.0.0.1',
    'port': 5000,
}

# Sizes and intervals that the session and scheduler divide or wait by
_POSITIVE_KEYS = ('daily_goal_ml', 'bottle_capacity_ml', 'tick_seconds', 'request_timeout')

_PLACEHOLDER_VALUES = {'DEMO_MODE', 'DEMO_KEY', 'YOUR_GEMINI_API_KEY_HERE'}


class ConfigError(Exception):
    """Raised when the config file cannot be parsed or holds invalid values."""


def is_placeholder_value(value: str) -> bool:
    """Check if a value is a placeholder/demo sentinel that should not be used for real API calls."""
    if not value or not isinstance(value, str):
        return True
    return value.startswith('YOUR_') or value in _PLACEHOLDER_VALUES


def load_config(config_path: str = 'config.json') -> Dict:
    """Load configuration from JSON file with environment variable support

    Values are layered: built-in defaults, then the config file (if it
    exists), then environment variables:
    - GEMINI_API_KEY (or GOOGLE_API_KEY) overrides gemini_api_key
    - NEPHRA_MODEL overrides model

    Raises:
        ConfigError: The file exists but is not a JSON object, or a size or
            interval setting is not a positive number.
    """
    config = dict(DEFAULT_CONFIG)
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                file_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read config file '{config_path}': {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file '{config_path}' must contain a JSON object")
        config.update(file_config)
    else:
        logger.debug("No config file at %s, using defaults", config_path)

    api_key = os.getenv('GEMINI_API_KEY') or os.getenv('GOOGLE_API_KEY')
    if api_key:
        config['gemini_api_key'] = api_key
    if os.getenv('NEPHRA_MODEL'):
        config['model'] = os.getenv('NEPHRA_MODEL')

    for key in _POSITIVE_KEYS:
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigError(f"'{key}' must be a positive number, got {value!r}")
    return config


def build_genai_client(config: Dict):
    """Return a ``GeminiClient`` for *config*, or ``None`` when no real API
    key is configured (the app then runs on fallbacks only)."""
    from genai_client import GeminiClient

    api_key = config.get('gemini_api_key', '')
    if is_placeholder_value(api_key):
        logger.info("No Gemini API key configured; AI flows are disabled")
        return None
    return GeminiClient(
        api_key=api_key,
        model=config.get('model', DEFAULT_CONFIG['model']),
        timeout=config.get('request_timeout', DEFAULT_CONFIG['request_timeout']),
    )


# ---------------------------------------------------------------------------
# Hydration ranks
# ---------------------------------------------------------------------------

HYDRATION_RANKS: List[Dict] = [
    {'level': 1, 'name': 'Trainee'},
    {'level': 5, 'name': 'Scout'},
    {'level': 10, 'name': 'Adept'},
    {'level': 15, 'name': 'Hydrator'},
    {'level': 20, 'name': 'Hydro-Hero'},
    {'level': 25, 'name': 'Aqua-Knight'},
    {'level': 30, 'name': 'Master'},
    {'level': 40, 'name': 'Hydration Lord'},
    {'level': 50, 'name': "Poseidon's Chosen"},
]

MAX_RANK = 'Max Rank'


def get_hydration_rank(level: int) -> Dict:
    """Look up the hydration rank for *level*.

    Args:
        level: The user's current level.

    Returns:
        Dict with ``rank`` (current rank name), ``next_rank`` (name of the
        following rank, or ``'Max Rank'``) and ``progress`` (percentage of
        the way from the current rank threshold to the next one).
    """
    index = 0
    for i, entry in enumerate(HYDRATION_RANKS):
        if level >= entry['level']:
            index = i
        else:
            break

    current = HYDRATION_RANKS[index]
    if index + 1 >= len(HYDRATION_RANKS):
        return {'rank': current['name'], 'next_rank': MAX_RANK, 'progress': 100.0}

    following = HYDRATION_RANKS[index + 1]
    span = following['level'] - current['level']
    progress = (level - current['level']) / span * 100
    # Levels below the first threshold still report Trainee at 0%
    progress = max(0.0, min(100.0, progress))
    return {'rank': current['name'], 'next_rank': following['name'], 'progress': progress}


def format_drops(drops: int) -> str:
    """Format a drops balance with thousands separators (``12,500``)."""
    return f"{drops:,}"


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _print_rank(level: int) -> None:
    info = get_hydration_rank(level)
    print(f"{Fore.CYAN}Level {level}: {Style.BRIGHT}{info['rank']}")
    if info['next_rank'] == MAX_RANK:
        print(f"{Fore.YELLOW}Top rank reached!")
    else:
        print(f"{Fore.YELLOW}Next rank: {Fore.WHITE}{info['next_rank']} "
              f"({info['progress']:.0f}% of the way)")


def _print_leaderboard() -> None:
    from app.services import LeaderboardService

    service = LeaderboardService()
    print(f"\n{Fore.GREEN}{'='*60}")
    print(f"{Fore.CYAN}{Style.BRIGHT}🏆 Leaderboard")
    print(f"{Fore.GREEN}{'='*60}")
    for entry in service.get_rankings():
        crown = '👑' if entry['rank'] == 1 else '  '
        print(f"{crown} {Fore.YELLOW}#{entry['rank']:<3}{Fore.WHITE}{entry['name']:<22}"
              f"{Fore.CYAN}Lvl {entry['level']:<3} {entry['hydration_rank']:<14}"
              f"{Fore.BLUE}💧 {format_drops(entry['drops'])}")
    print(f"{Fore.GREEN}{'='*60}\n")


def _print_profile(user_id: int) -> bool:
    from app.services import LeaderboardService

    card = LeaderboardService().get_user_card(user_id)
    if card is None:
        print(f"{Fore.RED}No user with id {user_id}")
        return False
    user = card['user']
    print(f"\n{Fore.CYAN}{Style.BRIGHT}{user['name']}  {Fore.YELLOW}[{card['hydration_rank']['rank']}]")
    print(f"{Fore.WHITE}Level {user['level']}  |  🔥 {user['streak']} day streak  |  "
          f"💧 {format_drops(user['drops'])} drops")
    print(f"{Fore.GREEN}Achievements: {card['achieved_count']}/{len(card['achievements'])}")
    for ach in card['achievements']:
        mark = f"{Fore.GREEN}✓" if ach['achieved'] else f"{Fore.RED}✗"
        print(f"  {mark} {Fore.WHITE}{ach['title']:<24}{Style.DIM}{ach['description']}")
    print()
    return True


def _print_timeline(day: datetime.date) -> None:
    from app.services import TimelineService

    service = TimelineService()
    print(f"\n{Fore.CYAN}{Style.BRIGHT}{service.format_heading(day)}")
    events = service.events_for(day)
    if not events:
        print(f"{Fore.YELLOW}No hydration events recorded for this day.")
    for event in events:
        print(f"  {Fore.YELLOW}{event['time']:>8}  {Fore.WHITE}{service.describe(event)}")
    print()


def _print_simulation(ticks: int, config: Dict) -> None:
    from app.services import HydrationSession, ToastService

    toasts = ToastService()
    toasts.subscribe(lambda state: [
        print(f"{Fore.MAGENTA}🔔 {t['title']}: {t.get('description', '')}")
        for t in state['toasts'][:1] if t.get('open')
    ])
    session = HydrationSession(toasts, daily_goal_ml=config['daily_goal_ml'],
                               bottle_capacity_ml=config['bottle_capacity_ml'])
    session.connect()
    rng = random.Random()
    for _ in range(ticks):
        drank = session.tick(rng)
        snap = session.snapshot()
        print(f"{Fore.BLUE}+{drank} mL  {Fore.WHITE}{snap['current_ml']}/{snap['goal_ml']} mL "
              f"({snap['progress']:.0f}%)  Lvl {snap['level']} {snap['xp']}/{snap['xp_to_next_level']} XP  "
              f"💧 {snap['drops']}  bottle {snap['bottle_ml']} mL")


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='NEPHRA - HydrateAI companion for the NEPHRA smart bottle',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 nephra.py --leaderboard        # Show the leaderboard
  python3 nephra.py --rank 23            # Look up the hydration rank for level 23
  python3 nephra.py --profile 2          # Show a user's public profile
  python3 nephra.py --timeline           # Show today's hydration events
  python3 nephra.py --motivation         # Ask the AI coach for a pep talk
  python3 nephra.py --simulate 10        # Simulate ten drinking intervals
        """
    )

    parser.add_argument(
        '--config', '-c',
        default='config.json',
        help='Path to config file (default: config.json)'
    )
    parser.add_argument(
        '--log-level',
        default='WARNING',
        help='Log level (DEBUG, INFO, WARNING, ERROR)'
    )
    parser.add_argument(
        '--rank',
        type=int,
        metavar='LEVEL',
        help='Show the hydration rank for a level'
    )
    parser.add_argument(
        '--leaderboard', '-l',
        action='store_true',
        help='Show the leaderboard'
    )
    parser.add_argument(
        '--profile', '-p',
        type=int,
        metavar='ID',
        help='Show the public profile of a leaderboard user'
    )
    parser.add_argument(
        '--timeline', '-t',
        nargs='?',
        const='today',
        metavar='YYYY-MM-DD',
        help='Show hydration events for a day (default: today)'
    )
    parser.add_argument(
        '--motivation', '-m',
        action='store_true',
        help='Generate a motivational message with the AI coach'
    )
    parser.add_argument(
        '--recommend',
        action='store_true',
        help='Generate an AI hydration goal for the default profile'
    )
    parser.add_argument(
        '--insights',
        action='store_true',
        help='Generate an AI profile insight for the default user'
    )
    parser.add_argument(
        '--simulate',
        type=int,
        metavar='N',
        help='Simulate N drinking intervals on a connected bottle'
    )

    args = parser.parse_args()
    setup_logging(args.log_level)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"{Fore.RED}Error: {e}")
        sys.exit(1)

    did_something = False

    if args.rank is not None:
        _print_rank(args.rank)
        did_something = True

    if args.leaderboard:
        _print_leaderboard()
        did_something = True

    if args.profile is not None:
        if not _print_profile(args.profile):
            sys.exit(1)
        did_something = True

    if args.timeline is not None:
        if args.timeline == 'today':
            day = datetime.date.today()
        else:
            try:
                day = datetime.date.fromisoformat(args.timeline)
            except ValueError:
                print(f"{Fore.RED}Error: Invalid date '{args.timeline}' (expected YYYY-MM-DD)")
                sys.exit(1)
        _print_timeline(day)
        did_something = True

    if args.simulate:
        _print_simulation(args.simulate, config)
        did_something = True

    if args.motivation or args.recommend or args.insights:
        from app.services import ProfileService

        client = build_genai_client(config)
        if client is None and (args.recommend or args.insights):
            print(f"{Fore.RED}Error: Please configure your Gemini API key in config.json "
                  f"or set GEMINI_API_KEY environment variable")
            print(f"{Fore.YELLOW}Get a key at: https://aistudio.google.com/app/apikey")
            sys.exit(1)
        profiles = ProfileService(client)

        if args.motivation:
            result = profiles.get_initial_motivation()
            print(f"{Fore.CYAN}{Style.BRIGHT}🤖 {result['title']}")
            print(f"{Fore.WHITE}{result['message']}")

        if args.recommend:
            result = profiles.get_hydration_recommendation(profiles.default_profile())
            if result is None:
                print(f"{Fore.RED}Could not get a recommendation (see log for details)")
                sys.exit(1)
            print(f"{Fore.CYAN}Daily goal: {Fore.WHITE}{result['goal_ml']:.0f} mL")
            print(f"{Fore.CYAN}Reminder every: {Fore.WHITE}{result['alert_interval_minutes']:.0f} minutes")

        if args.insights:
            result = profiles.get_profile_insights(profiles.default_insights_request())
            if result is None:
                print(f"{Fore.RED}Could not get an insight (see log for details)")
                sys.exit(1)
            print(f"{Fore.CYAN}🤖 {Fore.WHITE}{result['insight']}")
        did_something = True

    if not did_something:
        parser.print_help()


if __name__ == "__main__":
    main()
