# Type alias for RGB colors
Color = tuple[int, int, int]

# Basic colors
WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)
RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
BLUE: Color = (0, 0, 255)
YELLOW: Color = (255, 255, 0)
CYAN: Color = (0, 255, 255)
ORANGE: Color = (255, 165, 0)
GREY: Color = (128, 128, 128)
LIGHT_GREY: Color = (200, 200, 200)
DARK_GREY: Color = (50, 50, 50)

# Terrain colors
FLOOR: Color = WHITE
WALL: Color = YELLOW
INVALID: Color = BLACK

# Entity colors
PLAYER_COLOR: Color = WHITE
MONSTER_COLOR: Color = (0, 200, 0)
ITEM_COLOR: Color = CYAN
WEAPON_COLOR: Color = LIGHT_GREY
LIGHT_SOURCE_COLOR: Color = ORANGE
CORPSE: Color = (160, 0, 0)

# Message colors
MESSAGE_DEFAULT: Color = WHITE
MESSAGE_FAILURE: Color = GREY
MESSAGE_COMBAT: Color = ORANGE
MESSAGE_DEATH: Color = RED
