# config.py

import os

# -----------------------------
# Robot start-up
# -----------------------------
INITIAL_FACING = "SOUTH"

# Fallback order when the forward cell is blocked.
PRIORITY_NORMAL = ("SOUTH", "EAST", "NORTH", "WEST")
PRIORITY_INVERTED = ("WEST", "NORTH", "EAST", "SOUTH")

# -----------------------------
# Grid alphabet
# -----------------------------
TELEPORTER_SYMBOLS = "123456789"
EMPTY_SYMBOL = " "

# -----------------------------
# Output
# -----------------------------
LOOP_TOKEN = "LOOP"

# -----------------------------
# Logging / service
# -----------------------------
LOG_LEVEL = os.environ.get("BREAKBOT_LOG_LEVEL", "WARNING").upper()
MAX_SESSIONS = int(os.environ.get("BREAKBOT_MAX_SESSIONS", "256"))
