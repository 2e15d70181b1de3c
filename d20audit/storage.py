"""Save file format for the player registry.

The file starts with the global threshold, followed by one block per player:

    p:1000.0
    ---global---
    Vova
    [18, -1, -1, -1, -1, -1, -1, -1, -1, -1]
    1
    ---

Empty slots are written as -1.
"""

from d20audit.registry import PlayerRegistry

GLOBAL_SEPARATOR = "---global---"
PLAYER_SEPARATOR = "---"


class SaveFileError(ValueError):
    """Raised when a save file cannot be parsed."""

    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


def format_slots(slots: list[int]) -> str:
    """Render a table as "[1, 2, -1]"."""
    return "[" + ", ".join(str(value) for value in slots) + "]"


def parse_slots(line: str) -> list[int]:
    """Parse a table written by format_slots.

    Raises:
        ValueError: If an entry is not an integer
    """
    trimmed = line.strip().strip("[]").strip()
    if not trimmed:
        return []
    return [int(token.strip()) for token in trimmed.split(",")]


def save_registry(registry: PlayerRegistry, filepath: str):
    """Write the threshold and every player's table and cursor to a file."""
    lines = [f"p:{float(registry.threshold)}", GLOBAL_SEPARATOR]
    for player in registry.players:
        lines.append(player.name)
        lines.append(format_slots(player.slots))
        lines.append(str(player.write_cursor))
        lines.append(PLAYER_SEPARATOR)

    with open(filepath, "w") as f:
        f.write("\n".join(lines) + "\n")


def load_registry(
    filepath: str, registry: PlayerRegistry | None = None
) -> PlayerRegistry:
    """Read a save file written by save_registry.

    Players in the file replace any players already in the registry. If the
    first line is not a "p:" line the threshold is left unchanged. The
    registry is only changed once the whole file has been parsed.

    Args:
        filepath: Path to the save file
        registry: Registry to load into; a new one is created if omitted

    Returns:
        The loaded registry

    Raises:
        SaveFileError: If a player block is incomplete or malformed
    """
    if registry is None:
        registry = PlayerRegistry()
    parsed = PlayerRegistry(
        table_size=registry.table_size, threshold=registry.threshold
    )

    with open(filepath, "r") as f:
        lines = f.read().splitlines()

    index = 0
    if lines and lines[0].startswith("p:"):
        try:
            parsed.threshold = float(lines[0][2:].strip())
        except ValueError:
            raise SaveFileError(1, f"invalid threshold {lines[0][2:].strip()!r}")
        index = 1
    if index < len(lines) and lines[index] == GLOBAL_SEPARATOR:
        index += 1

    while index < len(lines):
        line = lines[index]
        if not line.strip() or line == PLAYER_SEPARATOR:
            index += 1
            continue

        name = line.strip()
        if index + 2 >= len(lines):
            raise SaveFileError(index + 1, f"incomplete block for player {name}")

        try:
            slots = parse_slots(lines[index + 1])
        except ValueError:
            raise SaveFileError(index + 2, f"invalid table {lines[index + 1]!r}")
        try:
            write_cursor = int(lines[index + 2].strip())
        except ValueError:
            raise SaveFileError(index + 3, f"invalid cursor {lines[index + 2]!r}")

        try:
            parsed.add_player_from_table(slots, write_cursor, name)
        except ValueError as e:
            raise SaveFileError(index + 1, str(e))

        index += 3

    registry.players = parsed.players
    registry.threshold = parsed.threshold
    return registry
