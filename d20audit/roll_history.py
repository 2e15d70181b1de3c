"""Rolling history of a player's most recent d20 results."""

import sys

from parameters import EMPTY_SLOT, INVALID_ROLL_FALLBACK, NUM_FACES


class RollOutcome:
    """Result of recording a roll: (requested, stored, clamped)."""

    def __init__(self, requested: int, stored: int, clamped: bool):
        self.requested = requested
        self.stored = stored
        self.clamped = clamped

    def __str__(self) -> str:
        if self.clamped:
            return f"{self.requested} (stored as {self.stored})"
        return str(self.stored)


class RollHistory:
    """Fixed-capacity circular table of rolls for one player.

    Each slot holds a face value in 1..20 or EMPTY_SLOT. Rolls are written at
    the write cursor, which wraps around once the table is full, so the
    oldest roll is overwritten first.

    Before any resize the occupied slots form a prefix of the table:
    slots 0..write_cursor-1 are occupied and the rest are EMPTY, or every
    slot is occupied once the table has wrapped.
    """

    def __init__(self, capacity: int, name: str):
        """
        Args:
            capacity: Maximum number of rolls kept (table size)
            name: Player name
        """
        _check_capacity(capacity)
        self.name = name
        self.slots = [EMPTY_SLOT] * capacity
        self.write_cursor = 0

    @classmethod
    def from_table(
        cls, slots: list[int], write_cursor: int, name: str
    ) -> "RollHistory":
        """Rebuild a history from a saved table and cursor.

        Raises:
            ValueError: If a slot holds something other than a face value or
                EMPTY_SLOT, or the cursor is outside the table.
        """
        _check_capacity(len(slots))
        for index, value in enumerate(slots):
            if value != EMPTY_SLOT and not 1 <= value <= NUM_FACES:
                raise ValueError(f"Slot {index} holds invalid value {value}")
        if not 0 <= write_cursor < len(slots):
            raise ValueError(
                f"Cursor {write_cursor} outside table of size {len(slots)}"
            )

        history = cls(len(slots), name)
        history.slots = list(slots)
        history.write_cursor = write_cursor
        return history

    @property
    def capacity(self) -> int:
        return len(self.slots)

    def record_roll(self, value: int) -> RollOutcome:
        """Write a roll at the cursor and advance it.

        Values outside 1..20 follow the clamp policy: INVALID_ROLL_FALLBACK is
        stored instead, a warning goes to stderr and the returned outcome is
        marked as clamped. The table is never left holding an invalid value.

        Args:
            value: Face value reported by the player

        Returns:
            RollOutcome describing what was stored

        Raises:
            TypeError: If value is not an integer
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Roll value must be an int, got {value!r}")

        stored = value
        clamped = False
        if not 1 <= value <= NUM_FACES:
            print(
                f"Warning: Value {value} is outside d{NUM_FACES} bounds! "
                f"Recording {INVALID_ROLL_FALLBACK} for {self.name}.",
                file=sys.stderr,
            )
            stored = INVALID_ROLL_FALLBACK
            clamped = True

        self.slots[self.write_cursor] = stored
        self.write_cursor = (self.write_cursor + 1) % self.capacity
        return RollOutcome(requested=value, stored=stored, clamped=clamped)

    def find_last_occupied(self) -> int | None:
        """Index of the last occupied slot, or None if the table is empty.

        Once the table has wrapped the last slot is occupied, so the answer is
        always capacity - 1. Before that the occupied slots are a prefix and
        the boundary is found by binary search, probing the upper middle so
        the search moves on every step.
        """
        if self.slots[-1] != EMPTY_SLOT:
            return self.capacity - 1
        if self.slots[0] == EMPTY_SLOT:
            return None

        left = 0
        right = self.capacity - 1
        while left < right:
            m = left + (right - left + 1) // 2
            if self.slots[m] != EMPTY_SLOT:
                left = m
            else:
                right = m - 1
        return left

    def resize(self, new_capacity: int):
        """Change the table size in place.

        Slots are copied by storage position, not by recency: growing keeps
        every slot where it was and pads with EMPTY, shrinking keeps the first
        new_capacity slots. The cursor is placed after the last occupied slot
        of the old table (clipped to the new table when shrinking), or at 0
        when the table was empty.

        Args:
            new_capacity: New table size, a positive integer
        """
        _check_capacity(new_capacity)
        if new_capacity == self.capacity:
            return

        last = self.find_last_occupied()
        old_slots = self.slots

        if new_capacity > len(old_slots):
            self.slots = old_slots + [EMPTY_SLOT] * (new_capacity - len(old_slots))
            self.write_cursor = 0 if last is None else last + 1
        else:
            self.slots = old_slots[:new_capacity]
            self.write_cursor = 0 if last is None else min(last + 1, new_capacity - 1)

    def face_counts(self) -> list[int]:
        """Count of each face value, index 0 for face 1 through index 19 for face 20.

        Scans in storage order and stops at the first EMPTY slot, so anything
        stored after a gap is not counted.
        """
        counts = [0] * NUM_FACES
        for value in self.slots:
            if value == EMPTY_SLOT:
                break
            counts[value - 1] += 1
        return counts

    def total_rolls(self) -> int:
        return sum(self.face_counts())

    def __str__(self) -> str:
        return f"{self.name}\n{self.slots}"


def _check_capacity(capacity: int):
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
        raise ValueError(f"Table size must be a positive integer, got {capacity!r}")
