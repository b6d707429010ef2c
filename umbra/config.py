"""
Configuration constants.

Centralizes all magic numbers and configuration values used throughout the codebase.
Organized by functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED = "umbra1"

# =============================================================================
# DUNGEON
# =============================================================================

DEFAULT_DUNGEON_WIDTH = 256
DEFAULT_DUNGEON_HEIGHT = 256

# Chance that any given cell of a generated level is a wall.
DEFAULT_WALL_CHANCE = 0.02

# =============================================================================
# LIGHTING & VISIBILITY
# =============================================================================

# Run the eight octants of a single shadowcast as concurrent tasks. When False
# the octants are cast one after another on the calling thread.
PARALLEL_SHADOWCAST = True

# Upper bound on worker threads used by one lighting or visibility pass.
LIGHTING_MAX_WORKERS = 8

# =============================================================================
# ACTORS
# =============================================================================

PLAYER_NAME = "Player"
PLAYER_GLYPH = "@"
PLAYER_FACTION = "player"
PLAYER_VISION_RADIUS = 100
PLAYER_LIGHT_RADIUS = 2
PLAYER_MAX_HP = 30
PLAYER_BASE_STRENGTH = 3

MONSTER_FACTION = "monster"
DEFAULT_MONSTER_VISION_RADIUS = 8
DEFAULT_MONSTER_MAX_HP = 10
DEFAULT_MONSTER_STRENGTH = 2

CORPSE_GLYPH = "%"
CORPSE_WEIGHT = 50

# =============================================================================
# MESSAGES
# =============================================================================

WELCOME_MESSAGE = "Welcome to Umbra!"

# Number of messages returned by MessageLog.recent() when no count is given.
DEFAULT_MESSAGES_WANTED = 8

# Echo every message to stdout as it is logged.
PRINT_MESSAGES_TO_CONSOLE = False

# Prefix messages with their sequence number when rendered.
SHOW_MESSAGE_SEQUENCE_NUMBERS = False
