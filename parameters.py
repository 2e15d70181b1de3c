"""System parameters for d20 roll auditing.

All system-wide constants are defined here and imported by other modules.
"""

# Die configuration
NUM_FACES = 20  # Faces on the audited die (1-20)
EMPTY_SLOT = -1  # Sentinel for a table slot with no roll recorded
INVALID_ROLL_FALLBACK = 1  # Stored in place of a roll outside 1..NUM_FACES

# Table configuration
DEFAULT_TABLE_SIZE = 10  # Amount of recent rolls kept per player

# Cheat detection configuration
CHEAT_THRESHOLD = 1000.0  # Suspicion score at or above which a player is flagged

# Storage configuration
SAVE_FILE = "players.txt"

# Calibration configuration
NUM_CALIBRATION_PLAYERS = 500  # Simulated players per population
NUM_CALIBRATION_ROLLS = 60  # Rolls per simulated player
LOADED_FACE = 20  # Face favoured by simulated cheaters
LOADED_WEIGHT = 2.0  # Relative weight of the loaded face
