"""Registry of players and their roll tables."""

import sys

from parameters import CHEAT_THRESHOLD, DEFAULT_TABLE_SIZE
from d20audit.cheat_evaluator import CheatEvaluator, CheatVerdict
from d20audit.roll_history import RollHistory


class PlayerRegistry:
    """Players in insertion order, plus the shared table size and threshold.

    The registry is constructed and owned by the caller; nothing here is
    global. Names are unique within one registry.
    """

    def __init__(
        self,
        table_size: int = DEFAULT_TABLE_SIZE,
        threshold: float = CHEAT_THRESHOLD,
    ):
        """
        Args:
            table_size: Table size given to newly added players
            threshold: Suspicion score at which a player is flagged (p)
        """
        self.players: list[RollHistory] = []
        self.table_size = table_size
        self.threshold = threshold

    def __len__(self) -> int:
        return len(self.players)

    def add_player(self, name: str) -> RollHistory:
        """Add a player with an empty table of the current table size."""
        return self._append(RollHistory(self.table_size, name))

    def add_player_from_table(
        self, slots: list[int], write_cursor: int, name: str
    ) -> RollHistory:
        """Add a player with a saved table and cursor."""
        return self._append(RollHistory.from_table(slots, write_cursor, name))

    def _append(self, player: RollHistory) -> RollHistory:
        if self.find_player(player.name) is not None:
            raise ValueError(f"Player {player.name} already exists")
        self.players.append(player)
        return player

    def find_player(self, name: str) -> int | None:
        """Index of the player with this name, or None if there is none."""
        for i, player in enumerate(self.players):
            if player.name == name:
                return i
        return None

    def get_player(self, key: int | str) -> RollHistory | None:
        """Look up a player by index or by name.

        Returns:
            The player, or None if no player matches
        """
        if isinstance(key, str):
            index = self.find_player(key)
            return None if index is None else self.players[index]
        if 0 <= key < len(self.players):
            return self.players[key]
        return None

    def get_player_or_first(self, key: int | str) -> RollHistory:
        """Fail-soft lookup: warn and fall back to the first player.

        Raises:
            LookupError: If the registry has no players at all
        """
        player = self.get_player(key)
        if player is not None:
            return player

        if not self.players:
            raise LookupError("Registry has no players")
        if isinstance(key, str):
            print(f"Warning: Player {key} does not exist!", file=sys.stderr)
        else:
            print(f"Warning: Player with index {key} does not exist!", file=sys.stderr)
        return self.players[0]

    def rename_player(self, old_name: str, new_name: str):
        player = self.get_player(old_name)
        if player is None:
            raise KeyError(old_name)
        if old_name != new_name and self.find_player(new_name) is not None:
            raise ValueError(f"Player {new_name} already exists")
        player.name = new_name

    def set_table_size(self, table_size: int):
        """Set the table size for new players and resize every existing one."""
        for player in self.players:
            player.resize(table_size)
        self.table_size = table_size

    def evaluator(self) -> CheatEvaluator:
        return CheatEvaluator(self.threshold)

    def verdict(self, player: RollHistory) -> CheatVerdict:
        return self.evaluator().evaluate(player)

    def does_cheat(self, player: RollHistory) -> bool:
        return self.evaluator().is_cheating(player)

    def __str__(self) -> str:
        return "\n---\n".join(str(player) for player in self.players)
