"""Game constants for Arcoíris Táctico."""

# Colors
RED = "Red"
ORANGE = "Orange"
YELLOW = "Yellow"
GREEN = "Green"
BLUE = "Blue"
INDIGO = "Indigo"
VIOLET = "Violet"
WHITE = "White"
BLACK = "Black"
COLORS = [RED, ORANGE, YELLOW, GREEN, BLUE, INDIGO, VIOLET, WHITE, BLACK]
RAINBOW_COLORS = [RED, ORANGE, YELLOW, GREEN, BLUE, INDIGO, VIOLET]

# Color units in the deck; each card pairs two units as front/back
COLOR_COUNTS = {
    RED: 6,
    ORANGE: 6,
    YELLOW: 6,
    GREEN: 6,
    BLUE: 6,
    INDIGO: 6,
    VIOLET: 6,
    WHITE: 8,
    BLACK: 6,
}
TOTAL_CARDS = sum(COLOR_COUNTS.values())

# Spanish color names used in narration
COLOR_NAMES_ES = {
    RED: "Rojo",
    ORANGE: "Naranja",
    YELLOW: "Amarillo",
    GREEN: "Verde",
    BLUE: "Azul",
    INDIGO: "Índigo",
    VIOLET: "Violeta",
    WHITE: "Blanco",
    BLACK: "Negro",
}

# Game parameters
NUM_PLAYERS = 2
HAND_SIZE = 3
MAX_PLAYS_PER_TURN = 3
RAINBOW_SIZE = 6
TURN_TIME_SECONDS = 60

# Game phases
PHASE_LOBBY = "LOBBY"
PHASE_PLAYING = "PLAYING"
PHASE_GAME_OVER = "GAME_OVER"

# Turn states
TURN_PLAYING = "PLAYING"
TURN_ROUND_OVER = "ROUND_OVER"

# Row evaluation results
ROW_VALID = "VALID"
ROW_DUPLICATE_COLOR = "DUPLICATE_COLOR"
ROW_BLACK_CARD = "BLACK_CARD"

# Round end reasons
REASON_DUPLICATE_COLOR = "DUPLICATE_COLOR"
REASON_BLACK_CARD = "BLACK_CARD"
REASON_RAINBOW_COMPLETE = "RAINBOW_COMPLETE"
ROUND_END_REASONS = [
    REASON_DUPLICATE_COLOR,
    REASON_BLACK_CARD,
    REASON_RAINBOW_COMPLETE,
]

# Action types
ACTION_SET_GAME_STATE = "SET_GAME_STATE"
ACTION_PLAY_CARD = "PLAY_CARD"
ACTION_END_TURN = "END_TURN"
ACTION_START_NEXT_ROUND = "START_NEXT_ROUND"
ACTION_RESTART_GAME = "RESTART_GAME"
ACTION_TICK_TIMER = "TICK_TIMER"
