"""Static demo dataset.

There is no backend for the bottle or the community yet, so every page is
driven from the data below: ten leaderboard users (computer scientists plus a
few easter eggs), the achievement catalogue, weekly quests, a few days of
timeline events and the drinking history fed to the AI flows.
"""

LEADERBOARD_USERS = [
    {"id": 1,  "rank": 1,  "name": "Joan Clarke",       "drops": 13500, "avatar": "woman thinking",              "streak": 42,  "level": 28},
    {"id": 2,  "rank": 2,  "name": "Alan Turing",       "drops": 12800, "avatar": "man with glasses",            "streak": 35,  "level": 26},
    {"id": 3,  "rank": 3,  "name": "Grace Hopper",      "drops": 12000, "avatar": "woman in navy uniform",       "streak": 30,  "level": 24},
    {"id": 4,  "rank": 4,  "name": "David J. Malan",    "drops": 11500, "avatar": "man teaching computer science", "streak": 28, "level": 23},
    {"id": 5,  "rank": 5,  "name": "Ada Lovelace",      "drops": 11200, "avatar": "victorian woman writing",     "streak": 25,  "level": 22},
    {"id": 6,  "rank": 6,  "name": "Duo",               "drops": 10800, "avatar": "green owl mascot",            "streak": 200, "level": 21},
    {"id": 7,  "rank": 7,  "name": "Steve",             "drops": 10500, "avatar": "blocky character mining",     "streak": 18,  "level": 20},
    {"id": 8,  "rank": 8,  "name": "Rubber Ducky",      "drops": 10100, "avatar": "rubber duck with code",       "streak": 15,  "level": 19},
    {"id": 9,  "rank": 9,  "name": "Donald Knuth",      "drops": 9800,  "avatar": "man with organ pipes",        "streak": 12,  "level": 18},
    {"id": 10, "rank": 10, "name": "Margaret Hamilton", "drops": 9500,  "avatar": "woman with stack of books",   "streak": 10,  "level": 17},
]

# The signed-in demo user (dashboard header and /profile)
CURRENT_USER_ID = 1

ACHIEVEMENTS = [
    {"id": 1,  "icon": "droplet",      "title": "First Sip",             "description": "Log your first drink."},
    {"id": 2,  "icon": "award",        "title": "Half-Litre Hero",       "description": "Drink 500 mL in a day."},
    {"id": 3,  "icon": "target",       "title": "Daily Goal Crusher",    "description": "Hit your daily target once."},
    {"id": 4,  "icon": "star",         "title": "Hydration Rookie",      "description": "Drink 10 L total."},
    {"id": 5,  "icon": "trophy",       "title": "H2O Pro",               "description": "Drink 100 L total."},
    {"id": 6,  "icon": "shield",       "title": "Liquid Legend",         "description": "Drink 500 L total."},
    {"id": 7,  "icon": "gem",          "title": "HydraMaster",           "description": "Drink 1000 L total."},
    {"id": 8,  "icon": "calendar",     "title": "3-Day Streaker",        "description": "Hit your daily target 3 days in a row."},
    {"id": 9,  "icon": "calendar",     "title": "Weekly Winner",         "description": "Hit daily target for 7 consecutive days."},
    {"id": 10, "icon": "calendar",     "title": "Month of Flow",         "description": "30 days without missing a goal."},
    {"id": 11, "icon": "anchor",       "title": "Iron Will",             "description": "90-day streak."},
    {"id": 12, "icon": "git-commit",   "title": "365 Days of Clarity",   "description": "1 year without missing a day."},
    {"id": 13, "icon": "zap",          "title": "Perfect Pour",          "description": "Hit your goal exactly, no more no less."},
    {"id": 14, "icon": "clock",        "title": "Right on Time",         "description": "Meet all timed drinking reminders for a day."},
    {"id": 15, "icon": "wind",         "title": "Speed Sipper",          "description": "Log 200 mL within 60 seconds of a reminder."},
    {"id": 16, "icon": "heart",        "title": "Even Flow",             "description": "Keep each drinking session evenly distributed."},
    {"id": 17, "icon": "bot",          "title": "Adaptive Athlete",      "description": "Adjust goal and meet it perfectly 3 days."},
    {"id": 18, "icon": "sun",          "title": "Summer Survivor",       "description": "Meet goal every day in a heatwave week."},
    {"id": 19, "icon": "mountain",     "title": "Winter Warrior",        "description": "Stay hydrated for 14 days in winter."},
    {"id": 20, "icon": "gift",         "title": "Festival Flow",         "description": "Log water during a major festival day."},
    {"id": 21, "icon": "sword",        "title": "Boss Battle Victor",    "description": "Complete a high-goal challenge event."},
    {"id": 22, "icon": "trophy",       "title": "Hydration Marathoner",  "description": "Log every drink in a 24-hour event."},
    {"id": 23, "icon": "moon",         "title": "Midnight Mirage",       "description": "Log a drink between 12:00 AM and 3:00 AM."},
    {"id": 24, "icon": "shield-check", "title": "Double Hydra",          "description": "Drink double your daily goal."},
    {"id": 25, "icon": "droplet",      "title": "One-Sip Wonder",        "description": "Log 500 mL in a single sip."},
    {"id": 26, "icon": "sparkles",     "title": "Quantum Sip",           "description": "Log 42 mL. The answer to everything."},
    {"id": 27, "icon": "zap",          "title": "Dehydration Slayer",    "description": "Return after a 7-day break and crush your goal."},
    {"id": 28, "icon": "coffee",       "title": "Bottle Buddy",          "description": "Sync with a friend and both meet goals."},
]

WEEKLY_QUESTS = [
    {"id": 1, "title": "The 3-Day Streak", "description": "Maintain your streak for 3 days.", "progress": 100, "goal": 3,    "reward": 50},
    {"id": 2, "title": "Weekend Warrior",  "description": "Drink 5000ml over the weekend.",   "progress": 50,  "goal": 5000, "reward": 100},
    {"id": 3, "title": "Perfect Start",    "description": "Hit your goal before noon.",       "progress": 0,   "goal": 1,    "reward": 75},
]

# day_offset is relative to today (0 = today, 1 = yesterday, ...)
TIMELINE_EVENTS = [
    {"id": 1, "day_offset": 0, "time": "08:15 AM", "type": "drink",       "amount": 250, "total": 250},
    {"id": 2, "day_offset": 0, "time": "09:00 AM", "type": "achievement", "title": "Daily Goal Crusher"},
    {"id": 3, "day_offset": 0, "time": "09:30 AM", "type": "drink",       "amount": 150, "total": 400},
    {"id": 4, "day_offset": 1, "time": "11:00 AM", "type": "refill",      "amount": 500},
    {"id": 5, "day_offset": 1, "time": "11:05 AM", "type": "drink",       "amount": 300, "total": 300},
    {"id": 6, "day_offset": 2, "time": "01:20 PM", "type": "drink",       "amount": 200, "total": 200},
    {"id": 7, "day_offset": 2, "time": "03:00 PM", "type": "drink",       "amount": 150, "total": 350},
    {"id": 8, "day_offset": 2, "time": "05:00 PM", "type": "quest",       "title": "Weekend Warrior", "completed": True},
]

# Drinking history sent with a goal recommendation request
RECOMMENDATION_HISTORY = [
    {"timestamp": "2024-07-28T08:00:00Z", "amount": 250},
    {"timestamp": "2024-07-28T10:30:00Z", "amount": 300},
    {"timestamp": "2024-07-28T13:00:00Z", "amount": 200},
]

# Drinking history sent with a profile insight request
INSIGHTS_HISTORY = [
    {"timestamp": "2024-07-28T08:00:00Z", "amount": 250},
    {"timestamp": "2024-07-29T09:30:00Z", "amount": 300},
    {"timestamp": "2024-07-30T08:30:00Z", "amount": 200},
    {"timestamp": "2024-07-30T15:00:00Z", "amount": 150},
]

# Health note attached to the demo user's insight request
INSIGHTS_HEALTH_CONDITIONS = "menstruation"

DEFAULT_PROFILE = {
    "name": "Joan Clarke",
    "age": 16,
    "gender": "female",
    "weight": 55,
    "health_conditions": "",
}

# Raw event names the bottle firmware emits (developer options log)
BOTTLE_EVENTS = [
    "DRINK_DETECTED amount:150ml",
    "BOTTLE_STABLE",
    "SYNC_REQUEST",
    "ALERT_TRIGGERED id:3",
    "LOW_BATTERY level:15%",
    "BOTTLE_IDLE",
    "REFILL_DETECTED",
    "GOAL_REACHED",
]

NAV_ITEMS = [
    {"href": "/dashboard",   "label": "Dashboard",   "icon": "layout-dashboard"},
    {"href": "/timeline",    "label": "Timeline",    "icon": "history"},
    {"href": "/leaderboard", "label": "Leaderboard", "icon": "trophy"},
    {"href": "/profile",     "label": "Profile",     "icon": "user"},
]
