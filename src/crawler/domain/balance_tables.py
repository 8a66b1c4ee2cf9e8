from __future__ import annotations


BASE_PLAYER_HEALTH = 100.0
BASE_PLAYER_STRENGTH = 1.0
BASE_PLAYER_DEFENSE = 1.0

INVENTORY_SIZE = 10
CHESTS_PER_ROOM = 4

CHEAT_INPUT_NUMBER = 99

# (base health, min damage, max damage)
ENEMY_PROFILES = {
    "rat": (6.0, 2.0, 4.0),
    "goblin": (12.0, 3.0, 6.0),
    "skeleton": (18.0, 4.0, 7.0),
    "orc": (26.0, 5.0, 9.0),
    "troll": (40.0, 7.0, 12.0),
}

# (run-from threshold, run-to threshold); a sample below the threshold passes.
ROOM_ESCAPE_THRESHOLDS = {
    "hallway": (0.9, 0.9),
    "chamber": (0.75, 0.8),
    "armory": (0.6, 0.7),
    "treasury": (0.5, 0.6),
    "crypt": (0.4, 0.5),
    "lair": (0.3, 0.4),
}

ROOM_DISPLAY_NAMES = {
    "hallway": "Hallway",
    "chamber": "Chamber",
    "armory": "Armory",
    "treasury": "Treasury",
    "crypt": "Crypt",
    "lair": "Lair",
}

# (name, min damage, max damage, max cooldown)
STARTING_MOVESET = (
    ("Punch", 2.0, 4.0, 0),
    ("Kick", 3.0, 5.0, 0),
    ("Heavy Swing", 6.0, 10.0, 2),
    ("Whirlwind", 10.0, 16.0, 4),
)
